"""
Pytest configuration and shared fixtures.
"""
import pytest
from httpx import AsyncClient, ASGITransport
from typing import Any, Dict, List, Optional

from pump_radar.api.main import app, get_dashboard_service
from pump_radar.core.interfaces.datasource import IMarketDataSource, IPriceQuoteSource
from pump_radar.core.services import DashboardService
from pump_radar.core.use_cases.strategy import BROAD_MARKET, ScoringStrategy, get_strategy


class FakeMarketSource(IMarketDataSource):
    def __init__(self, records: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.records = records or []
        self.error = error
        self.calls = 0

    async def fetch_market_records(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.records


class FakeQuoteSource(IPriceQuoteSource):
    def __init__(self, usd: float = 150.0, error: Optional[Exception] = None):
        self.usd = usd
        self.error = error
        self.requested: List[str] = []

    async def get_usd_price(self, coin_id: str) -> float:
        self.requested.append(coin_id)
        if self.error:
            raise self.error
        return self.usd


def coingecko_record(**overrides) -> Dict[str, Any]:
    record = {
        "id": "bonk",
        "symbol": "bonk",
        "price_change_percentage_24h": 12.0,
        "total_volume": 2_000_000,
        "market_cap": 5_000_000,
    }
    record.update(overrides)
    return record


def dexscreener_pair(**overrides) -> Dict[str, Any]:
    pair = {
        "chainId": "solana",
        "pairAddress": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
        "url": "https://dexscreener.com/solana/7xkxtg2cw87d97txjsdpbd5jbkhetqa83tzrujosgasu",
        "baseToken": {"symbol": "WIF"},
        "quoteToken": {"symbol": "SOL"},
        "priceChange": {"h24": 25.0},
        "volume": {"h24": 80_000},
        "liquidity": {"usd": 20_000},
    }
    pair.update(overrides)
    return pair


@pytest.fixture
def market_source():
    return FakeMarketSource


@pytest.fixture
def quote_source():
    return FakeQuoteSource


@pytest.fixture
def make_coin():
    return coingecko_record


@pytest.fixture
def make_pair():
    return dexscreener_pair


@pytest.fixture
async def client():
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def use_service():
    """
    Routes the dashboard endpoints to in-memory sources.
    """
    def _use(market: IMarketDataSource, quote: Optional[IPriceQuoteSource] = None, strategy=BROAD_MARKET):
        if not isinstance(strategy, ScoringStrategy):
            strategy = get_strategy(strategy)
        service = DashboardService(market, quote or FakeQuoteSource(), strategy)
        app.dependency_overrides[get_dashboard_service] = lambda: service
        return service

    yield _use
    app.dependency_overrides.clear()
