from abc import ABC, abstractmethod
from typing import Any, Dict, List


class IMarketDataSource(ABC):
    @abstractmethod
    async def fetch_market_records(self) -> List[Dict[str, Any]]:
        """
        Returns the raw upstream records, in upstream order.
        Raises UpstreamRateLimited on a rate-limit answer and
        UpstreamUnavailable when the fetch fails or the body is not JSON.
        """
        pass


class IPriceQuoteSource(ABC):
    @abstractmethod
    async def get_usd_price(self, coin_id: str) -> float:
        """
        USD quote for `coin_id`; 0.0 when the upstream omits it.
        """
        pass
