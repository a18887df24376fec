import os

from pydantic import BaseModel, ValidationError

from pump_radar.core.exceptions import ConfigurationError
from pump_radar.core.use_cases.strategy import BROAD_MARKET
from pump_radar.infrastructure.gateways.coingecko_api import COINGECKO_MARKETS_URL, COINGECKO_PRICE_URL
from pump_radar.infrastructure.gateways.dexscreener_api import DEXSCREENER_SEARCH_URL
from pump_radar.infrastructure.gateways.http_gateway import DEFAULT_TIMEOUT_SECONDS


class Settings(BaseModel):
    strategy: str = BROAD_MARKET
    coingecko_markets_url: str = COINGECKO_MARKETS_URL
    coingecko_price_url: str = COINGECKO_PRICE_URL
    dexscreener_search_url: str = DEXSCREENER_SEARCH_URL
    dexscreener_query: str = "solana"
    upstream_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            return cls(
                strategy=os.getenv("PUMP_RADAR_STRATEGY", BROAD_MARKET),
                coingecko_markets_url=os.getenv("COINGECKO_MARKETS_URL", COINGECKO_MARKETS_URL),
                coingecko_price_url=os.getenv("COINGECKO_PRICE_URL", COINGECKO_PRICE_URL),
                dexscreener_search_url=os.getenv("DEXSCREENER_SEARCH_URL", DEXSCREENER_SEARCH_URL),
                dexscreener_query=os.getenv("DEXSCREENER_QUERY", "solana"),
                upstream_timeout_seconds=os.getenv("UPSTREAM_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            )
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ConfigurationError(f"Invalid setting '{field}': {first['msg']}") from e
