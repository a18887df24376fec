import logging
from typing import Any, Dict, List, Optional

import httpx

from pump_radar.core.interfaces.datasource import IMarketDataSource, IPriceQuoteSource
from pump_radar.core.use_cases.normalizer import to_number
from pump_radar.infrastructure.gateways.http_gateway import DEFAULT_TIMEOUT_SECONDS, HttpJsonGateway

logger = logging.getLogger(__name__)

COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"
COINGECKO_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"

# Top coins by 24h volume
MARKETS_PARAMS = {
    "vs_currency": "usd",
    "order": "volume_desc",
    "per_page": 100,
    "page": 1,
    "sparkline": "false",
    "price_change_percentage": "24h",
}


class CoinGeckoGateway(HttpJsonGateway, IMarketDataSource, IPriceQuoteSource):
    """
    CoinGecko public API (no key). Serves both the broad-market listing
    and the SOL quote.
    """
    source = "coingecko"

    def __init__(
        self,
        markets_url: str = COINGECKO_MARKETS_URL,
        price_url: str = COINGECKO_PRICE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.markets_url = markets_url
        self.price_url = price_url

    async def fetch_market_records(self) -> List[Dict[str, Any]]:
        return await self._get_records(self.markets_url, MARKETS_PARAMS)

    async def get_usd_price(self, coin_id: str) -> float:
        response = await self._get(self.price_url, {"ids": coin_id, "vs_currencies": "usd"})
        data = self._decode(response)

        quote = data.get(coin_id) if isinstance(data, dict) else None
        usd = to_number(quote.get("usd")) if isinstance(quote, dict) else None
        if usd is None:
            logger.warning(f"[coingecko] No usd quote for '{coin_id}' (HTTP {response.status_code}), using 0")
            return 0.0
        return usd
