"""
Blink Wallet MCP Server

An MCP server that exposes a Blink Bitcoin/Lightning wallet to AI agents
through its GraphQL API.

Available tools:
- blink_get_account - Wallet IDs and balances
- blink_get_transactions - Paged transaction history
- blink_get_webhooks - Registered webhook endpoints
- blink_create_btc_invoice - Create a Lightning invoice to receive BTC
- blink_pay_invoice - Pay a BOLT11 invoice
- blink_send_to_lnaddress - Send to a Lightning address
- blink_send_to_lnurl - Send via LNURL
"""

__version__ = "0.1.0"

from .blink_wallet import (
    BlinkAPIError,
    BlinkBusinessError,
    BlinkErrorKind,
    BlinkFormatError,
    BlinkMissingResultError,
    BlinkServiceError,
    BlinkTransportError,
    BlinkWallet,
    create_wallet,
)
from .config import (
    BlinkConfig,
    ConfigurationError,
    HttpsConfig,
    McpServerConfig,
    get_blink_config,
    get_mcp_server_config,
)
from .models import (
    Account,
    InitiationVia,
    InitiationViaIntraLedger,
    InitiationViaLightning,
    InitiationViaOnChain,
    Invoice,
    PageInfo,
    PaymentResult,
    PaymentStatus,
    Transaction,
    TransactionDirection,
    TransactionPage,
    TransactionStatus,
    Wallet,
    WalletCurrency,
    Webhook,
    parse_initiation_via,
)
from .server import BlinkWalletServer, ToolInputError, main

__all__ = [
    # Server
    "BlinkWalletServer",
    "ToolInputError",
    "main",
    # Blink client
    "BlinkWallet",
    "create_wallet",
    "BlinkErrorKind",
    "BlinkServiceError",
    "BlinkTransportError",
    "BlinkAPIError",
    "BlinkFormatError",
    "BlinkBusinessError",
    "BlinkMissingResultError",
    # Configuration
    "BlinkConfig",
    "ConfigurationError",
    "HttpsConfig",
    "McpServerConfig",
    "get_blink_config",
    "get_mcp_server_config",
    # Models
    "Account",
    "Wallet",
    "WalletCurrency",
    "Transaction",
    "TransactionStatus",
    "TransactionDirection",
    "TransactionPage",
    "PageInfo",
    "InitiationVia",
    "InitiationViaLightning",
    "InitiationViaOnChain",
    "InitiationViaIntraLedger",
    "parse_initiation_via",
    "Webhook",
    "Invoice",
    "PaymentResult",
    "PaymentStatus",
    # Version
    "__version__",
]
