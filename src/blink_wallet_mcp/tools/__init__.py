"""
Blink Wallet MCP Tools

Tool implementations for Blink wallet operations.
"""

from .account import get_account, get_webhooks
from .invoices import create_btc_invoice, pay_invoice
from .payments import send_to_ln_address, send_to_lnurl
from .transactions import DEFAULT_PAGE_SIZE, get_transactions

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "get_account",
    "get_webhooks",
    "get_transactions",
    "create_btc_invoice",
    "pay_invoice",
    "send_to_ln_address",
    "send_to_lnurl",
]
