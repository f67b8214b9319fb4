"""
Blink Wallet MCP Server

Main server module exposing a Blink Bitcoin/Lightning wallet to AI agents via MCP.
"""

import asyncio
import logging
import os
import sys
from typing import Any

import jsonschema
from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
)

from . import __version__
from .blink_wallet import BlinkWallet, create_wallet
from .config import (
    ConfigurationError,
    McpServerConfig,
    get_blink_config,
    get_mcp_server_config,
)
from .http_transport import serve_http
from .tools import (
    DEFAULT_PAGE_SIZE,
    create_btc_invoice,
    get_account,
    get_transactions,
    get_webhooks,
    pay_invoice,
    send_to_ln_address,
    send_to_lnurl,
)

logger = logging.getLogger("blink-wallet-mcp")

SERVER_NAME = "bitcoin-wallets-for-agents-mcp"


class ToolInputError(ValueError):
    """Exception for unknown tools or arguments that fail schema validation."""
    pass


TOOLS = [
    Tool(
        name="blink_get_account",
        description=(
            "Get Blink account info including wallet IDs and balances "
            "(BTC in satoshis, USD in cents)"
        ),
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="blink_get_transactions",
        description="Get transaction history for a Blink wallet with pagination",
        inputSchema={
            "type": "object",
            "properties": {
                "walletId": {
                    "type": "string",
                    "description": "Wallet ID to get transactions for",
                },
                "first": {
                    "type": "integer",
                    "description": "Number of transactions to return (default: 20)",
                    "minimum": 1,
                    "default": DEFAULT_PAGE_SIZE,
                },
                "after": {
                    "type": "string",
                    "description": "Cursor for pagination (from previous pageInfo.endCursor)",
                },
            },
            "required": ["walletId"],
        },
    ),
    Tool(
        name="blink_get_webhooks",
        description="List all registered Blink webhook endpoints",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    Tool(
        name="blink_create_btc_invoice",
        description="Create a Lightning invoice to receive BTC payments",
        inputSchema={
            "type": "object",
            "properties": {
                "walletId": {
                    "type": "string",
                    "description": "BTC wallet ID to receive payment",
                },
                "amount": {
                    "type": "integer",
                    "description": "Amount in satoshis",
                    "exclusiveMinimum": 0,
                },
                "memo": {
                    "type": "string",
                    "description": "Optional invoice description/memo",
                },
            },
            "required": ["walletId", "amount"],
        },
    ),
    Tool(
        name="blink_pay_invoice",
        description=(
            "Pay a BOLT11 Lightning invoice from your wallet. "
            "Returns status: SUCCESS, PENDING, ALREADY_PAID, or FAILURE"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "walletId": {
                    "type": "string",
                    "description": "Wallet ID to pay from",
                },
                "paymentRequest": {
                    "type": "string",
                    "description": "BOLT11 Lightning invoice (starts with lnbc...)",
                },
                "memo": {
                    "type": "string",
                    "description": "Optional payment memo/note",
                },
            },
            "required": ["walletId", "paymentRequest"],
        },
    ),
    Tool(
        name="blink_send_to_lnaddress",
        description=(
            "Send satoshis to a Lightning address (e.g., user@blink.sv). "
            "Returns status: SUCCESS, PENDING, or FAILURE"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "walletId": {
                    "type": "string",
                    "description": "Wallet ID to send from",
                },
                "lnAddress": {
                    "type": "string",
                    "description": "Lightning address (e.g., user@blink.sv)",
                },
                "amount": {
                    "type": "integer",
                    "description": "Amount in satoshis",
                    "exclusiveMinimum": 0,
                },
                "memo": {
                    "type": "string",
                    "description": "Optional payment memo/note",
                },
            },
            "required": ["walletId", "lnAddress", "amount"],
        },
    ),
    Tool(
        name="blink_send_to_lnurl",
        description=(
            "Send satoshis via LNURL payRequest. "
            "Returns status: SUCCESS, PENDING, or FAILURE"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "walletId": {
                    "type": "string",
                    "description": "Wallet ID to send from",
                },
                "lnurl": {
                    "type": "string",
                    "description": "LNURL payRequest string (starts with LNURL1...)",
                },
                "amount": {
                    "type": "integer",
                    "description": "Amount in satoshis",
                    "exclusiveMinimum": 0,
                },
            },
            "required": ["walletId", "lnurl", "amount"],
        },
    ),
]

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def validate_arguments(name: str, arguments: dict[str, Any]) -> None:
    """
    Check tool arguments against the tool's declared input schema.

    Raises:
        ToolInputError: If the tool is unknown or the arguments do not match
    """
    tool = TOOLS_BY_NAME.get(name)
    if tool is None:
        raise ToolInputError(f"Unknown tool: {name}")

    try:
        jsonschema.validate(instance=arguments, schema=tool.inputSchema)
    except jsonschema.ValidationError as e:
        raise ToolInputError(f"Invalid arguments for {name}: {e.message}") from e


class BlinkWalletServer:
    """MCP Server for a Blink Bitcoin/Lightning wallet."""

    def __init__(self, wallet: BlinkWallet) -> None:
        self.server = Server(SERVER_NAME, version=__version__)
        self.wallet = wallet

        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return the list of available tools."""
            return TOOLS

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool invocations. Failures propagate to the MCP runtime."""
            try:
                result = await self.dispatch(name, arguments or {})
            except Exception:
                logger.exception(f"Error in tool {name}")
                raise

            return [TextContent(type="text", text=result)]

    async def dispatch(self, name: str, arguments: dict[str, Any]) -> str:
        """
        Validate the arguments and route the call to its tool.

        Returns:
            JSON text with ``"success": true`` and the operation's data
        """
        validate_arguments(name, arguments)

        if name == "blink_get_account":
            return await get_account(self.wallet)

        elif name == "blink_get_transactions":
            return await get_transactions(
                wallet_id=arguments["walletId"],
                first=arguments.get("first", DEFAULT_PAGE_SIZE),
                after=arguments.get("after"),
                wallet=self.wallet,
            )

        elif name == "blink_get_webhooks":
            return await get_webhooks(self.wallet)

        elif name == "blink_create_btc_invoice":
            return await create_btc_invoice(
                wallet_id=arguments["walletId"],
                amount=arguments["amount"],
                memo=arguments.get("memo"),
                wallet=self.wallet,
            )

        elif name == "blink_pay_invoice":
            return await pay_invoice(
                wallet_id=arguments["walletId"],
                payment_request=arguments["paymentRequest"],
                memo=arguments.get("memo"),
                wallet=self.wallet,
            )

        elif name == "blink_send_to_lnaddress":
            return await send_to_ln_address(
                wallet_id=arguments["walletId"],
                ln_address=arguments["lnAddress"],
                amount=arguments["amount"],
                memo=arguments.get("memo"),
                wallet=self.wallet,
            )

        elif name == "blink_send_to_lnurl":
            return await send_to_lnurl(
                wallet_id=arguments["walletId"],
                lnurl=arguments["lnurl"],
                amount=arguments["amount"],
                wallet=self.wallet,
            )

        raise ToolInputError(f"Unknown tool: {name}")

    async def run(self, config: McpServerConfig) -> None:
        """Run the MCP server on the configured transport."""
        logger.info(f"Starting Blink wallet MCP server ({config.transport})...")

        try:
            if config.transport == "stdio":
                async with stdio_server() as (read_stream, write_stream):
                    await self.server.run(
                        read_stream,
                        write_stream,
                        self.server.create_initialization_options(),
                    )
            else:
                await serve_http(self.server, config)
        finally:
            await self.wallet.disconnect()


def main() -> None:
    """Entry point for the MCP server."""
    load_dotenv()

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        server_config = get_mcp_server_config()
        blink_config = get_blink_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    server = BlinkWalletServer(wallet=create_wallet(blink_config))

    try:
        asyncio.run(server.run(server_config))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
