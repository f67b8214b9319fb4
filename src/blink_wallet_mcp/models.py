"""
Blink Wallet Models

Immutable records for the Blink account, transaction, webhook and payment
data returned to agents, plus the adapters that build them from decoded
GraphQL payloads.

Amounts are integer minor units: satoshis for BTC wallets, cents for USD
wallets.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

logger = logging.getLogger("blink-wallet-mcp.models")


class WalletCurrency(Enum):
    """Currency a Blink wallet is denominated in."""

    BTC = "BTC"
    USD = "USD"


class TransactionStatus(Enum):
    SUCCESS = "SUCCESS"
    PENDING = "PENDING"
    FAILURE = "FAILURE"


class TransactionDirection(Enum):
    SEND = "SEND"
    RECEIVE = "RECEIVE"


class PaymentStatus(Enum):
    """Outcome reported by a payment mutation."""

    SUCCESS = "SUCCESS"
    PENDING = "PENDING"
    ALREADY_PAID = "ALREADY_PAID"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class Wallet:
    """A single BTC or USD wallet on the account."""

    id: str
    wallet_currency: WalletCurrency
    balance: int
    pending_incoming_balance: int

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "Wallet":
        return cls(
            id=data["id"],
            wallet_currency=WalletCurrency(data["walletCurrency"]),
            balance=data["balance"],
            pending_incoming_balance=data["pendingIncomingBalance"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "walletCurrency": self.wallet_currency.value,
            "balance": self.balance,
            "pendingIncomingBalance": self.pending_incoming_balance,
        }


@dataclass(frozen=True)
class Account:
    """Default account: its default wallet id and every wallet it holds."""

    default_wallet_id: str
    wallets: tuple[Wallet, ...] = field(default_factory=tuple)

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "Account":
        return cls(
            default_wallet_id=data["defaultWalletId"],
            wallets=tuple(Wallet.from_graphql(w) for w in data["wallets"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "defaultWalletId": self.default_wallet_id,
            "wallets": [w.to_dict() for w in self.wallets],
        }


@dataclass(frozen=True)
class InitiationViaLightning:
    payment_hash: str
    type: Literal["lightning"] = "lightning"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "paymentHash": self.payment_hash}


@dataclass(frozen=True)
class InitiationViaOnChain:
    address: str
    type: Literal["onchain"] = "onchain"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "address": self.address}


@dataclass(frozen=True)
class InitiationViaIntraLedger:
    counter_party_username: str | None = None
    type: Literal["intraledger"] = "intraledger"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "counterPartyUsername": self.counter_party_username}


InitiationVia = Union[InitiationViaLightning, InitiationViaOnChain, InitiationViaIntraLedger]


def parse_initiation_via(data: dict[str, Any]) -> InitiationVia:
    """
    Classify how a transaction was initiated.

    Upstream flattens the InitiationVia union, so only the matching case's
    fields are present. The checks run in a fixed order: a payment hash
    means Lightning, then an address means on-chain, and anything else is
    treated as intra-ledger.

    Args:
        data: The decoded ``initiationVia`` object of a transaction node

    Returns:
        The matching InitiationVia variant
    """
    if "paymentHash" in data:
        return InitiationViaLightning(payment_hash=data["paymentHash"])

    if "address" in data:
        return InitiationViaOnChain(address=data["address"])

    if "counterPartyUsername" not in data:
        logger.warning(f"Unrecognized initiationVia shape {sorted(data)}, assuming intra-ledger")

    return InitiationViaIntraLedger(counter_party_username=data.get("counterPartyUsername"))


@dataclass(frozen=True)
class Transaction:
    """One entry of a wallet's transaction history."""

    id: str
    status: TransactionStatus
    direction: TransactionDirection
    memo: str | None
    created_at: Any
    settlement_amount: int
    settlement_currency: WalletCurrency
    settlement_display_amount: str
    initiation_via: InitiationVia

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "Transaction":
        return cls(
            id=node["id"],
            status=TransactionStatus(node["status"]),
            direction=TransactionDirection(node["direction"]),
            memo=node.get("memo"),
            created_at=node["createdAt"],
            settlement_amount=node["settlementAmount"],
            settlement_currency=WalletCurrency(node["settlementCurrency"]),
            settlement_display_amount=node["settlementDisplayAmount"],
            initiation_via=parse_initiation_via(node["initiationVia"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "direction": self.direction.value,
            "memo": self.memo,
            "createdAt": self.created_at,
            "settlementAmount": self.settlement_amount,
            "settlementCurrency": self.settlement_currency.value,
            "settlementDisplayAmount": self.settlement_display_amount,
            "initiationVia": self.initiation_via.to_dict(),
        }


@dataclass(frozen=True)
class PageInfo:
    """Cursor pagination metadata. Cursors are opaque."""

    has_next_page: bool
    has_previous_page: bool
    start_cursor: str | None
    end_cursor: str | None

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "PageInfo":
        return cls(
            has_next_page=data["hasNextPage"],
            has_previous_page=data["hasPreviousPage"],
            start_cursor=data["startCursor"],
            end_cursor=data["endCursor"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
            "startCursor": self.start_cursor,
            "endCursor": self.end_cursor,
        }


@dataclass(frozen=True)
class TransactionPage:
    """A page of transactions in upstream order."""

    transactions: tuple[Transaction, ...]
    page_info: PageInfo

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "TransactionPage":
        return cls(
            transactions=tuple(Transaction.from_graphql(edge["node"]) for edge in data["edges"]),
            page_info=PageInfo.from_graphql(data["pageInfo"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "transactions": [t.to_dict() for t in self.transactions],
            "pageInfo": self.page_info.to_dict(),
        }


@dataclass(frozen=True)
class Webhook:
    """A callback endpoint registered on the account."""

    id: str
    url: str

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "Webhook":
        return cls(id=data["id"], url=data["url"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "url": self.url}


@dataclass(frozen=True)
class Invoice:
    """A BOLT11 invoice created to receive BTC."""

    payment_request: str
    payment_hash: str
    payment_secret: str
    satoshis: int

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "Invoice":
        return cls(
            payment_request=data["paymentRequest"],
            payment_hash=data["paymentHash"],
            payment_secret=data["paymentSecret"],
            satoshis=data["satoshis"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "paymentRequest": self.payment_request,
            "paymentHash": self.payment_hash,
            "paymentSecret": self.payment_secret,
            "satoshis": self.satoshis,
        }


@dataclass(frozen=True)
class PaymentResult:
    status: PaymentStatus

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value}
