"""
Payment Tools

Send satoshis to Lightning addresses and LNURL pay requests.
"""

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..blink_wallet import BlinkWallet

logger = logging.getLogger("blink-wallet-mcp.tools.payments")


async def send_to_ln_address(
    wallet_id: str,
    ln_address: str,
    amount: int,
    memo: str | None = None,
    *,
    wallet: "BlinkWallet",
) -> str:
    """Send satoshis to a Lightning address (e.g. user@blink.sv)."""
    logger.info(
        f"Tool called: blink_send_to_lnaddress "
        f"(walletId: {wallet_id}, lnAddress: {ln_address}, amount: {amount})"
    )

    result = await wallet.send_to_ln_address(wallet_id, ln_address, amount, memo)

    return json.dumps({"success": True, **result.to_dict()}, indent=2)


async def send_to_lnurl(
    wallet_id: str,
    lnurl: str,
    amount: int,
    *,
    wallet: "BlinkWallet",
) -> str:
    """Send satoshis via an LNURL payRequest."""
    logger.info(f"Tool called: blink_send_to_lnurl (walletId: {wallet_id}, amount: {amount})")

    result = await wallet.send_to_lnurl(wallet_id, lnurl, amount)

    return json.dumps({"success": True, **result.to_dict()}, indent=2)
