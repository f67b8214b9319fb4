"""
Blink Wallet Client

Implements wallet operations against Blink's GraphQL API: account and
balance lookup, transaction history, webhook listing, invoice creation and
outgoing payments (BOLT11, Lightning address, LNURL).

Every operation is a single POST to the GraphQL endpoint. Nothing is retried
and nothing is cached between calls.

Configuration: Set BLINK_API_KEY (and optionally BLINK_ENDPOINT).
Get your API key from: https://dashboard.blink.sv/
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any

import httpx

from . import queries
from .config import BlinkConfig, DEFAULT_BLINK_ENDPOINT
from .models import (
    Account,
    Invoice,
    PaymentResult,
    PaymentStatus,
    TransactionPage,
    Webhook,
)

logger = logging.getLogger("blink-wallet-mcp.blink")


class BlinkErrorKind(Enum):
    """Where in the call a Blink failure happened."""

    TRANSPORT = "transport"
    API = "api"
    FORMAT = "format"
    BUSINESS = "business"
    MISSING_RESULT = "missing_result"


class BlinkServiceError(Exception):
    """Base exception for Blink-related errors."""

    kind: BlinkErrorKind = BlinkErrorKind.FORMAT

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class BlinkTransportError(BlinkServiceError):
    """Upstream request failed or returned a non-success HTTP status."""

    kind = BlinkErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.status_code = status_code


class BlinkAPIError(BlinkServiceError):
    """GraphQL envelope carried a top-level errors array."""

    kind = BlinkErrorKind.API

    def __init__(self, messages: list[str]) -> None:
        super().__init__(_join_messages(messages))
        self.messages = messages


class BlinkFormatError(BlinkServiceError):
    """Response did not have the expected shape."""

    kind = BlinkErrorKind.FORMAT


class BlinkBusinessError(BlinkServiceError):
    """A mutation succeeded at the GraphQL level but reported its own errors."""

    kind = BlinkErrorKind.BUSINESS

    def __init__(self, prefix: str, messages: list[str]) -> None:
        super().__init__(f"{prefix}: {_join_messages(messages)}")
        self.messages = messages


class BlinkMissingResultError(BlinkServiceError):
    """A mutation reported no errors but returned no result object."""

    kind = BlinkErrorKind.MISSING_RESULT


def _join_messages(messages: list[str]) -> str:
    return "; ".join(messages)


def _error_messages(errors: list[dict[str, Any]]) -> list[str]:
    return [str(e.get("message", "")) for e in errors]


def _raise_for_mutation_errors(result: dict[str, Any], prefix: str) -> None:
    errors = result.get("errors") or []
    if errors:
        raise BlinkBusinessError(prefix, _error_messages(errors))


@contextmanager
def _operation(failure_message: str) -> Iterator[None]:
    """
    Wrap an operation so unexpected response shapes surface as one error.

    BlinkServiceErrors pass through unchanged. Anything raised while reading
    the decoded payload is re-raised as a BlinkFormatError with a stable
    message naming the operation.
    """
    try:
        yield
    except BlinkServiceError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise BlinkFormatError(failure_message, cause=e) from e


class BlinkWallet:
    """
    Blink GraphQL client.

    One instance is built at startup from the resolved BlinkConfig and shared
    by every tool call. The underlying httpx client is created on first use
    and reused for connection pooling.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_BLINK_ENDPOINT,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Blink wallet.

        Args:
            api_key: Blink API key (blink_...)
            endpoint: GraphQL endpoint URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        self.config = BlinkConfig(api_key=api_key, endpoint=endpoint, timeout=timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._connected = False

    @classmethod
    def from_config(
        cls,
        config: BlinkConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BlinkWallet":
        return cls(
            api_key=config.api_key,
            endpoint=config.endpoint,
            timeout=config.timeout,
            transport=transport,
        )

    async def connect(self) -> None:
        """Initialize the HTTP client."""
        if self._connected:
            return

        self._client = httpx.AsyncClient(
            headers={
                "X-API-KEY": self.config.api_key,
                "Content-Type": "application/json",
            },
            timeout=self.config.timeout,
            transport=self._transport,
        )
        self._connected = True
        logger.info(f"Blink wallet connected to {self.config.endpoint}")

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
        self._client = None
        self._connected = False

    async def _graphql(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Execute one GraphQL document against Blink.

        Args:
            query: GraphQL query or mutation text
            variables: Variables for the document

        Returns:
            The ``data`` object of the response envelope

        Raises:
            BlinkTransportError: Network failure or non-success HTTP status
            BlinkAPIError: The envelope carries a non-empty errors array
            BlinkFormatError: The body is not a GraphQL envelope with data
        """
        if not self._connected or not self._client:
            await self.connect()

        try:
            response = await self._client.post(
                self.config.endpoint,
                json={"query": query, "variables": variables},
            )
        except httpx.RequestError as e:
            raise BlinkTransportError(f"Request failed: {e!s}", cause=e) from e

        if not response.is_success:
            raise BlinkTransportError(
                f"HTTP error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise BlinkFormatError("Unexpected response format from Blink API", cause=e) from e

        if not isinstance(result, dict):
            raise BlinkFormatError("Unexpected response format from Blink API")

        errors = result.get("errors")
        if errors:
            raise BlinkAPIError(_error_messages(errors))

        data = result.get("data")
        if not data:
            raise BlinkFormatError("Unexpected response format from Blink API")

        return data

    async def get_account(self) -> Account:
        """
        Get the default account with all of its wallets.

        Returns:
            Account with wallet ids, currencies and balances
        """
        with _operation("Failed to get account from Blink"):
            data = await self._graphql(queries.ME_QUERY)
            account = Account.from_graphql(data["me"]["defaultAccount"])

        logger.info(f"Retrieved account with {len(account.wallets)} wallets")
        return account

    async def get_transactions(
        self,
        wallet_id: str,
        first: int = 20,
        after: str | None = None,
    ) -> TransactionPage:
        """
        Get one page of a wallet's transaction history.

        Args:
            wallet_id: Wallet to read
            first: Page size
            after: Cursor from a previous page's end_cursor

        Returns:
            TransactionPage in upstream order with its page info
        """
        with _operation("Failed to get transactions from Blink"):
            data = await self._graphql(
                queries.TRANSACTIONS_QUERY,
                {"walletId": wallet_id, "first": first, "after": after},
            )
            connection = data["me"]["defaultAccount"]["walletById"]["transactions"]
            page = TransactionPage.from_graphql(connection)

        logger.info(f"Retrieved {len(page.transactions)} transactions for wallet {wallet_id}")
        return page

    async def get_webhooks(self) -> list[Webhook]:
        """List the callback endpoints registered on the account."""
        with _operation("Failed to get webhooks from Blink"):
            data = await self._graphql(queries.WEBHOOKS_QUERY)
            endpoints = data["me"]["defaultAccount"]["callbackEndpoints"]
            return [Webhook.from_graphql(e) for e in endpoints]

    async def create_btc_invoice(
        self,
        wallet_id: str,
        amount: int,
        memo: str | None = None,
    ) -> Invoice:
        """
        Create a Lightning invoice to receive BTC.

        Args:
            wallet_id: BTC wallet that receives the payment
            amount: Amount in satoshis
            memo: Optional invoice description

        Returns:
            The created Invoice

        Raises:
            BlinkBusinessError: Blink rejected the invoice
            BlinkMissingResultError: No invoice was returned
        """
        invoice_input: dict[str, Any] = {"walletId": wallet_id, "amount": amount}
        if memo:
            invoice_input["memo"] = memo

        logger.info(f"Creating invoice for {amount} sats on wallet {wallet_id}")

        with _operation("Failed to create BTC invoice"):
            data = await self._graphql(
                queries.LN_INVOICE_CREATE_MUTATION, {"input": invoice_input}
            )
            result = data["lnInvoiceCreate"]
            _raise_for_mutation_errors(result, "Invoice creation failed")

            if not result.get("invoice"):
                raise BlinkMissingResultError("Invoice creation returned no invoice")

            return Invoice.from_graphql(result["invoice"])

    async def pay_invoice(
        self,
        wallet_id: str,
        payment_request: str,
        memo: str | None = None,
    ) -> PaymentResult:
        """
        Pay a BOLT11 invoice.

        Args:
            wallet_id: Wallet to pay from
            payment_request: BOLT11 invoice string
            memo: Optional payment note

        Returns:
            PaymentResult with the reported status

        Raises:
            BlinkBusinessError: Blink reported payment errors
        """
        payment_input: dict[str, Any] = {"walletId": wallet_id, "paymentRequest": payment_request}
        if memo:
            payment_input["memo"] = memo

        logger.info(f"Paying invoice via Blink: {payment_request[:30]}...")

        with _operation("Failed to pay invoice"):
            data = await self._graphql(
                queries.LN_INVOICE_PAYMENT_SEND_MUTATION, {"input": payment_input}
            )
            result = data["lnInvoicePaymentSend"]
            _raise_for_mutation_errors(result, "Payment failed")
            payment = PaymentResult(status=PaymentStatus(result["status"]))

        logger.info(f"Invoice payment status: {payment.status.value}")
        return payment

    async def send_to_ln_address(
        self,
        wallet_id: str,
        ln_address: str,
        amount: int,
        memo: str | None = None,
    ) -> PaymentResult:
        """
        Send satoshis to a Lightning address such as user@blink.sv.

        Raises:
            BlinkBusinessError: Blink reported payment errors
        """
        payment_input: dict[str, Any] = {
            "walletId": wallet_id,
            "lnAddress": ln_address,
            "amount": amount,
        }
        if memo:
            payment_input["memo"] = memo

        logger.info(f"Sending {amount} sats to {ln_address}")

        with _operation("Failed to send to Lightning address"):
            data = await self._graphql(
                queries.LN_ADDRESS_PAYMENT_SEND_MUTATION, {"input": payment_input}
            )
            result = data["lnAddressPaymentSend"]
            _raise_for_mutation_errors(result, "Payment to Lightning address failed")
            payment = PaymentResult(status=PaymentStatus(result["status"]))

        logger.info(f"Lightning address payment status: {payment.status.value}")
        return payment

    async def send_to_lnurl(
        self,
        wallet_id: str,
        lnurl: str,
        amount: int,
    ) -> PaymentResult:
        """
        Send satoshis to an LNURL payRequest.

        Raises:
            BlinkBusinessError: Blink reported payment errors
        """
        logger.info(f"Sending {amount} sats via LNURL")

        with _operation("Failed to send via LNURL"):
            data = await self._graphql(
                queries.LNURL_PAYMENT_SEND_MUTATION,
                {"input": {"walletId": wallet_id, "lnurl": lnurl, "amount": amount}},
            )
            result = data["lnurlPaymentSend"]
            _raise_for_mutation_errors(result, "LNURL payment failed")
            payment = PaymentResult(status=PaymentStatus(result["status"]))

        logger.info(f"LNURL payment status: {payment.status.value}")
        return payment


def create_wallet(config: BlinkConfig) -> BlinkWallet:
    """Create the shared Blink wallet client from resolved configuration."""
    return BlinkWallet.from_config(config)
