import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pump_radar.core.entities.dashboard import DashboardData
from pump_radar.core.exceptions import UpstreamRateLimited
from pump_radar.core.interfaces.datasource import IMarketDataSource, IPriceQuoteSource
from pump_radar.core.use_cases.strategy import ScoringStrategy
from pump_radar.core.use_cases.validator import validate_dashboard

logger = logging.getLogger(__name__)

USD_TO_PKR_RATE = 278.5
QUOTE_COIN_ID = "solana"


def iso_timestamp(moment: datetime) -> str:
    # astimezone() would read a naive value as local time
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError("build time must be timezone-aware")
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DashboardService:
    """
    Builds one DashboardData per call. Nothing is cached between calls.
    """

    def __init__(
        self,
        market_source: IMarketDataSource,
        quote_source: IPriceQuoteSource,
        strategy: ScoringStrategy,
    ):
        self.market_source = market_source
        self.quote_source = quote_source
        self.strategy = strategy

    async def _fetch_records(self) -> List[Dict[str, Any]]:
        try:
            return await self.market_source.fetch_market_records()
        except UpstreamRateLimited as e:
            logger.warning(f"Market source rate limited, serving empty token list: {e}")
            return []

    async def build_dashboard(self, now: Optional[datetime] = None) -> DashboardData:
        """`now` must be timezone-aware; defaults to the current UTC time."""
        # Independent upstream calls: run them together
        records, sol_usd = await asyncio.gather(
            self._fetch_records(),
            self.quote_source.get_usd_price(QUOTE_COIN_ID),
        )

        now = now or datetime.now(timezone.utc)
        tokens = self.strategy.evaluate(records, now)
        logger.info(f"Scored {len(tokens)} tokens with strategy '{self.strategy.name}'")

        payload = {
            "tokens": tokens,
            "solPrice": {
                "usd": sol_usd,
                "pkr": sol_usd * USD_TO_PKR_RATE,
            },
            "lastUpdate": iso_timestamp(now),
        }
        return validate_dashboard(payload)
