"""
Invoice Tools

Create Lightning invoices to receive BTC and pay BOLT11 invoices.
"""

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..blink_wallet import BlinkWallet

logger = logging.getLogger("blink-wallet-mcp.tools.invoices")


async def create_btc_invoice(
    wallet_id: str,
    amount: int,
    memo: str | None = None,
    *,
    wallet: "BlinkWallet",
) -> str:
    """
    Create a Lightning invoice to receive BTC payments.

    Args:
        wallet_id: BTC wallet ID to receive payment
        amount: Amount in satoshis
        memo: Optional invoice description
        wallet: Blink wallet client

    Returns:
        JSON with the BOLT11 payment request, payment hash and secret
    """
    logger.info(
        f"Tool called: blink_create_btc_invoice (walletId: {wallet_id}, amount: {amount})"
    )

    invoice = await wallet.create_btc_invoice(wallet_id, amount, memo)

    return json.dumps({"success": True, "invoice": invoice.to_dict()}, indent=2)


async def pay_invoice(
    wallet_id: str,
    payment_request: str,
    memo: str | None = None,
    *,
    wallet: "BlinkWallet",
) -> str:
    """
    Pay a BOLT11 Lightning invoice from a Blink wallet.

    Args:
        wallet_id: Wallet ID to pay from
        payment_request: BOLT11 invoice string
        memo: Optional payment note
        wallet: Blink wallet client

    Returns:
        JSON with status: SUCCESS, PENDING, ALREADY_PAID or FAILURE
    """
    logger.info(f"Tool called: blink_pay_invoice (walletId: {wallet_id})")

    result = await wallet.pay_invoice(wallet_id, payment_request, memo)

    return json.dumps({"success": True, **result.to_dict()}, indent=2)
