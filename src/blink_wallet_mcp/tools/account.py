"""
Account Tools

Look up the Blink account's wallets, balances and registered webhooks.
"""

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..blink_wallet import BlinkWallet

logger = logging.getLogger("blink-wallet-mcp.tools.account")


async def get_account(wallet: "BlinkWallet") -> str:
    """
    Get account info including wallet IDs and balances.

    BTC balances are in satoshis, USD balances in cents.

    Returns:
        JSON with the account's default wallet ID and wallets
    """
    logger.info("Tool called: blink_get_account")

    account = await wallet.get_account()

    return json.dumps({"success": True, "account": account.to_dict()}, indent=2)


async def get_webhooks(wallet: "BlinkWallet") -> str:
    """
    List all registered webhook endpoints.

    Returns:
        JSON with the list of webhooks
    """
    logger.info("Tool called: blink_get_webhooks")

    webhooks = await wallet.get_webhooks()

    return json.dumps(
        {"success": True, "webhooks": [w.to_dict() for w in webhooks]},
        indent=2,
    )
