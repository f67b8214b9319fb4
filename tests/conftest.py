"""
Shared fixtures for Blink wallet tests.

The Blink API is stubbed with httpx.MockTransport so no network is used.
"""

import json
from collections.abc import Callable

import httpx
import pytest

from blink_wallet_mcp.blink_wallet import BlinkWallet

API_KEY = "blink_test_key_123"
ENDPOINT = "https://api.blink.test/graphql"


def graphql_data(data: dict) -> httpx.Response:
    """A successful GraphQL envelope."""
    return httpx.Response(200, json={"data": data})


def graphql_errors(*messages: str) -> httpx.Response:
    """A GraphQL envelope carrying top-level errors."""
    return httpx.Response(200, json={"errors": [{"message": m} for m in messages]})


class StubBlinkAPI:
    """Records every request and answers with a fixed response or handler."""

    def __init__(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self.response):
            return self.response(request)
        return self.response

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_wallet():
    """Build a BlinkWallet wired to a StubBlinkAPI."""

    def _make(response) -> tuple[BlinkWallet, StubBlinkAPI]:
        api = StubBlinkAPI(response)
        wallet = BlinkWallet(
            api_key=API_KEY,
            endpoint=ENDPOINT,
            transport=httpx.MockTransport(api),
        )
        return wallet, api

    return _make


@pytest.fixture
def transactions_payload() -> dict:
    """Two-edge transaction page with a next page available."""
    return {
        "me": {
            "defaultAccount": {
                "walletById": {
                    "transactions": {
                        "pageInfo": {
                            "hasNextPage": True,
                            "hasPreviousPage": False,
                            "startCursor": "cursor-start",
                            "endCursor": "cursor-end",
                        },
                        "edges": [
                            {
                                "node": {
                                    "id": "tx-1",
                                    "status": "SUCCESS",
                                    "direction": "RECEIVE",
                                    "memo": "coffee",
                                    "createdAt": 1718000000,
                                    "settlementAmount": 2100,
                                    "settlementCurrency": "BTC",
                                    "settlementDisplayAmount": "1.40",
                                    "initiationVia": {"paymentHash": "hash-1"},
                                }
                            },
                            {
                                "node": {
                                    "id": "tx-2",
                                    "status": "PENDING",
                                    "direction": "SEND",
                                    "memo": None,
                                    "createdAt": 1718000100,
                                    "settlementAmount": -500,
                                    "settlementCurrency": "USD",
                                    "settlementDisplayAmount": "-5.00",
                                    "initiationVia": {"counterPartyUsername": None},
                                }
                            },
                        ],
                    }
                }
            }
        }
    }


@pytest.fixture
def account_payload() -> dict:
    return {
        "me": {
            "defaultAccount": {
                "defaultWalletId": "btc-wallet",
                "wallets": [
                    {
                        "id": "btc-wallet",
                        "walletCurrency": "BTC",
                        "balance": 150000,
                        "pendingIncomingBalance": 0,
                    },
                    {
                        "id": "usd-wallet",
                        "walletCurrency": "USD",
                        "balance": 2500,
                        "pendingIncomingBalance": 100,
                    },
                ],
            }
        }
    }
