"""Shared fakes: an in-memory market source and slot storage."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from packages.market_lib.interfaces import MarketDataSource
from packages.watchlist.storage import SlotStorage

DAY_MS = 86_400_000
JAN_1_2024_MS = int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)


def make_market(
    asset_id: str,
    name: str,
    symbol: str,
    price: float = 100.0,
    rank: int = 1,
    **extra: Any,
) -> Dict[str, Any]:
    row = {
        "id": asset_id,
        "name": name,
        "symbol": symbol,
        "image": f"https://assets.example/{asset_id}.png",
        "current_price": price,
        "price_change_percentage_24h": 1.5,
        "market_cap": price * 1_000_000_000,
        "market_cap_rank": rank,
        "high_24h": price * 1.05,
        "low_24h": price * 0.95,
    }
    row.update(extra)
    return row


def daily_pairs(prices: List[float], start_ms: int = JAN_1_2024_MS) -> List[List[float]]:
    return [[start_ms + i * DAY_MS, price] for i, price in enumerate(prices)]


class FakeMarketSource(MarketDataSource):
    """
    Canned responses. A per-asset asyncio.Event in `gates` holds that asset's
    history call open until the test sets it.
    """

    def __init__(
        self,
        markets: Optional[List[Dict[str, Any]]] = None,
        histories: Optional[Dict[str, List[List[float]]]] = None,
        markets_error: Optional[Exception] = None,
    ):
        self.markets = markets or []
        self.histories = histories or {}
        self.markets_error = markets_error
        self.history_errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.history_calls: List[str] = []
        self.closed = False

    async def get_markets(self, currency, per_page, page):
        if self.markets_error is not None:
            raise self.markets_error
        return self.markets

    async def get_price_history(self, asset_id, currency, days):
        self.history_calls.append(asset_id)
        gate = self.gates.get(asset_id)
        if gate is not None:
            await gate.wait()
        if asset_id in self.history_errors:
            raise self.history_errors[asset_id]
        return self.histories.get(asset_id, [])

    async def aclose(self):
        self.closed = True


class InMemorySlotStorage(SlotStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})
        self.writes: List[tuple] = []

    def read(self, slot):
        return self.slots.get(slot)

    def write(self, slot, payload):
        self.writes.append((slot, payload))
        self.slots[slot] = payload


@pytest.fixture
def three_markets() -> List[Dict[str, Any]]:
    return [
        make_market("bitcoin", "Bitcoin", "btc", price=42_000.0, rank=1),
        make_market("ethereum", "Ethereum", "eth", price=2_500.0, rank=2),
        make_market("solana", "Solana", "sol", price=150.0, rank=3),
    ]


@pytest.fixture
def histories() -> Dict[str, List[List[float]]]:
    return {
        # Exact line: 100 + 10x over 7 days -> next day 170
        "bitcoin": daily_pairs([100.0, 110.0, 120.0, 130.0, 140.0, 150.0, 160.0]),
        "ethereum": daily_pairs([50.0, 50.0, 50.0, 50.0]),
        "solana": daily_pairs([150.0]),
    }


@pytest.fixture
def fake_source(three_markets, histories) -> FakeMarketSource:
    return FakeMarketSource(markets=three_markets, histories=histories)


@pytest.fixture
def memory_storage() -> InMemorySlotStorage:
    return InMemorySlotStorage()
