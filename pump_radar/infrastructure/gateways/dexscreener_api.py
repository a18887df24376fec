from typing import Any, Dict, List, Optional

import httpx

from pump_radar.core.interfaces.datasource import IMarketDataSource
from pump_radar.infrastructure.gateways.http_gateway import DEFAULT_TIMEOUT_SECONDS, HttpJsonGateway

DEXSCREENER_SEARCH_URL = "https://api.dexscreener.com/latest/dex/search"


class DexScreenerGateway(HttpJsonGateway, IMarketDataSource):
    """
    DexScreener pair search (free, no API key). Pairs arrive under "pairs".
    """
    source = "dexscreener"

    def __init__(
        self,
        query: str = "solana",
        search_url: str = DEXSCREENER_SEARCH_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.query = query
        self.search_url = search_url

    async def fetch_market_records(self) -> List[Dict[str, Any]]:
        return await self._get_records(self.search_url, {"q": self.query}, records_key="pairs")
