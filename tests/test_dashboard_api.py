"""
Tests for the dashboard endpoints.

Upstream sources are replaced through dependency overrides, so these
run without network access.
"""
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from pump_radar.core.exceptions import UpstreamRateLimited, UpstreamUnavailable
from pump_radar.core.services import USD_TO_PKR_RATE
from pump_radar.core.use_cases.normalizer import CoinGeckoNormalizer
from pump_radar.core.use_cases.scorer import BroadMarketScorer
from pump_radar.core.use_cases.strategy import PAIR_SEARCH, ScoringStrategy

TOKEN_FIELDS = {
    "pair", "chain", "priceChange24h", "volume24h", "liquidity",
    "ageDays", "confidence", "tradePlan", "url",
}


class MoonScorer(BroadMarketScorer):
    def score(self, candidate):
        record = super().score(candidate)
        record["tradePlan"] = "To the moon"
        return record


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_dashboard_structure(client: AsyncClient, use_service, market_source, quote_source, make_coin):
    market = market_source([make_coin(), make_coin(symbol="wif", market_cap=None)])
    quote = quote_source(usd=150.0)
    use_service(market, quote)

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 200

    data = resp.json()
    assert set(data) == {"tokens", "solPrice", "lastUpdate"}
    assert len(data["tokens"]) == 1
    assert set(data["tokens"][0]) == TOKEN_FIELDS
    assert data["solPrice"] == {"usd": 150.0, "pkr": 150.0 * USD_TO_PKR_RATE}
    assert data["lastUpdate"].endswith("Z")
    assert quote.requested == ["solana"]
    assert market.calls == 1


@pytest.mark.asyncio
async def test_broad_market_token_scored_end_to_end(client: AsyncClient, use_service, market_source, make_coin):
    record = make_coin(price_change_percentage_24h=60, total_volume=60_000_000, market_cap=5_000_000)
    use_service(market_source([record]))

    token = (await client.get("/api/dashboard")).json()["tokens"][0]
    assert token["pair"] == "BONK/USD"
    assert token["confidence"] == 100
    assert token["tradePlan"] == "Consider entry"


@pytest.mark.asyncio
async def test_pair_search_strategy_end_to_end(client: AsyncClient, use_service, market_source, make_pair):
    pair = make_pair(priceChange={"h24": 120.0}, volume={"h24": 1_500_000})
    use_service(market_source([pair, make_pair(liquidity={"usd": 900_000})]), strategy=PAIR_SEARCH)

    tokens = (await client.get("/api/dashboard")).json()["tokens"]
    assert len(tokens) == 1
    # price 40 + volume 30 + liquidity 20 + young 10
    assert tokens[0]["confidence"] == 100
    assert tokens[0]["chain"] == "Solana"
    assert tokens[0]["pair"] == "WIF/SOL"


@pytest.mark.asyncio
async def test_malformed_chain_id_does_not_fail_request(client: AsyncClient, use_service, market_source, make_pair):
    pairs = [make_pair(chainId=["solana"], baseToken={"symbol": "ODD"}), make_pair()]
    use_service(market_source(pairs), strategy=PAIR_SEARCH)

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 200

    tokens = resp.json()["tokens"]
    assert [t["pair"] for t in tokens] == ["ODD/SOL", "WIF/SOL"]
    assert tokens[0]["chain"] == "['solana']"
    assert tokens[1]["chain"] == "Solana"


@pytest.mark.asyncio
async def test_rate_limit_degrades_to_empty_tokens(client: AsyncClient, use_service, market_source, quote_source):
    use_service(market_source(error=UpstreamRateLimited("coingecko rate limit exceeded")), quote_source(usd=99.5))

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 200

    data = resp.json()
    assert data["tokens"] == []
    assert data["solPrice"]["usd"] == 99.5
    assert data["lastUpdate"]


@pytest.mark.asyncio
async def test_upstream_failure_is_server_error(client: AsyncClient, use_service, market_source):
    use_service(market_source(error=UpstreamUnavailable("coingecko request timed out")))

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Failed to fetch dashboard data",
        "message": "coingecko request timed out",
    }


@pytest.mark.asyncio
async def test_quote_failure_is_server_error(client: AsyncClient, use_service, market_source, quote_source, make_coin):
    use_service(market_source([make_coin()]), quote_source(error=UpstreamUnavailable("price feed down")))

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    assert resp.json()["message"] == "price feed down"


@pytest.mark.asyncio
async def test_invalid_trade_plan_never_served(client: AsyncClient, use_service, market_source, make_coin):
    strategy = ScoringStrategy("moon", CoinGeckoNormalizer(), MoonScorer())
    use_service(market_source([make_coin()]), strategy=strategy)

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    assert "tokens.0.tradePlan" in resp.json()["message"]


@pytest.mark.asyncio
async def test_negative_quote_fails_validation(client: AsyncClient, use_service, market_source, quote_source):
    use_service(market_source([]), quote_source(usd=-1.0))

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    assert "solPrice.usd" in resp.json()["message"]


@pytest.mark.asyncio
async def test_unknown_strategy_is_server_error(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("PUMP_RADAR_STRATEGY", "moonshot")

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to fetch dashboard data"
    assert "moonshot" in body["message"]


@pytest.mark.asyncio
async def test_invalid_timeout_setting_is_server_error(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "ten")

    resp = await client.get("/api/dashboard")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to fetch dashboard data"
    assert "upstream_timeout_seconds" in body["message"]


@pytest.mark.asyncio
async def test_summary_counts(client: AsyncClient, use_service, market_source, make_coin):
    records = [
        make_coin(symbol="a", price_change_percentage_24h=60, total_volume=60_000_000),  # 100
        make_coin(symbol="b", price_change_percentage_24h=25),  # 30 + 15 + 20 = 65
        make_coin(symbol="c", price_change_percentage_24h=1, market_cap=500_000_000),  # 0 + 15 + 0 = 15
    ]
    use_service(market_source(records))

    resp = await client.get("/api/dashboard/summary")
    assert resp.status_code == 200

    summary = resp.json()
    assert summary["tokenCount"] == 3
    assert summary["highConfidenceCount"] == 1
    assert summary["planCounts"] == {"Consider entry": 1, "Watch closely": 1, "Avoid": 1}
    assert summary["solPrice"]["usd"] == 150.0


@pytest.mark.asyncio
async def test_service_timestamp_uses_build_time(use_service, market_source):
    service = use_service(market_source([]))
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    data = await service.build_dashboard(now)
    assert data.lastUpdate == "2024-05-01T12:00:00.000Z"
    assert data.tokens == []


@pytest.mark.asyncio
async def test_service_rejects_naive_build_time(use_service, market_source):
    service = use_service(market_source([]))

    with pytest.raises(ValueError, match="timezone-aware"):
        await service.build_dashboard(datetime(2024, 5, 1, 12, 0))
