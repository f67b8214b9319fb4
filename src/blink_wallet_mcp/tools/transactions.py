"""
Transaction Tools

Page through a wallet's transaction history.
"""

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..blink_wallet import BlinkWallet

logger = logging.getLogger("blink-wallet-mcp.tools.transactions")

DEFAULT_PAGE_SIZE = 20


async def get_transactions(
    wallet_id: str,
    first: int = DEFAULT_PAGE_SIZE,
    after: str | None = None,
    *,
    wallet: "BlinkWallet",
) -> str:
    """
    Get transaction history for a wallet with cursor pagination.

    To fetch the next page, pass the previous result's pageInfo.endCursor
    as ``after`` while pageInfo.hasNextPage is true.

    Args:
        wallet_id: Wallet ID to get transactions for
        first: Number of transactions to return. Defaults to 20
        after: Cursor to continue from
        wallet: Blink wallet client

    Returns:
        JSON with the transactions and pageInfo
    """
    logger.info(f"Tool called: blink_get_transactions (walletId: {wallet_id})")

    page = await wallet.get_transactions(wallet_id, first, after)

    return json.dumps({"success": True, **page.to_dict()}, indent=2)
