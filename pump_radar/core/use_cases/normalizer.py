import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from pump_radar.core.entities.token import TokenCandidate

logger = logging.getLogger(__name__)

MAX_TOKENS = 50  # Bounds rendering cost, not a relevance cut
MS_PER_DAY = 24 * 60 * 60 * 1000

CHAIN_NAMES = {
    "solana": "Solana",
    "ethereum": "Ethereum",
    "bsc": "BSC",
}


class AdmissionPolicy(BaseModel):
    """
    Minimum-signal gate a record must pass before it is scored.
    All bounds are exclusive.
    """
    name: str
    min_price_change: float
    min_volume: float
    min_liquidity: float
    max_liquidity: Optional[float] = None

    def admits(self, price_change: float, volume: float, liquidity: float) -> bool:
        if not (price_change > self.min_price_change and volume > self.min_volume):
            return False
        if not liquidity > self.min_liquidity:
            return False
        if self.max_liquidity is not None and not liquidity < self.max_liquidity:
            return False
        return True


BROAD_MARKET_POLICY = AdmissionPolicy(
    name="broad_market",
    min_price_change=0,
    min_volume=100_000,
    min_liquidity=1_000_000,
)

# Small-cap sweet spot: liquidity is bounded on both sides
PAIR_SEARCH_POLICY = AdmissionPolicy(
    name="pair_search",
    min_price_change=5,
    min_volume=10_000,
    min_liquidity=5_000,
    max_liquidity=50_000,
)


class NormalizationResult(BaseModel):
    candidates: List[TokenCandidate]
    considered: int


def to_number(value: Any) -> Optional[float]:
    """
    Reads an upstream numeric field. Returns None for anything that is not
    a finite number or a numeric string.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def chain_label(chain_id: Any) -> str:
    if not chain_id:
        return "Unknown"
    if not isinstance(chain_id, str):
        return str(chain_id)
    return CHAIN_NAMES.get(chain_id, chain_id)


def age_in_days(created_at_ms: Any, now: datetime) -> int:
    """Whole days elapsed since creation, floored. 0 when unknown."""
    created = to_number(created_at_ms)
    if created is None:
        return 0
    elapsed_ms = now.timestamp() * 1000 - created
    return max(int(elapsed_ms // MS_PER_DAY), 0)


class RecordNormalizer(ABC):
    """
    Maps one upstream record shape onto TokenCandidate and applies an
    admission policy. Malformed records are dropped, never raised.
    """
    source: str = ""

    def __init__(self, policy: AdmissionPolicy, limit: int = MAX_TOKENS):
        self.policy = policy
        self.limit = limit

    @abstractmethod
    def metrics(self, record: Dict[str, Any]) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        """(price change %, 24h volume, liquidity or market cap) as numbers or None."""
        pass

    @abstractmethod
    def normalize(self, record: Dict[str, Any], now: Optional[datetime] = None) -> TokenCandidate:
        pass

    def is_eligible(self, record: Any) -> bool:
        if not isinstance(record, dict):
            return False
        price_change, volume, liquidity = self.metrics(record)
        if price_change is None or volume is None or liquidity is None:
            return False
        return self.policy.admits(price_change, volume, liquidity)

    def run(self, records: List[Any], now: Optional[datetime] = None) -> NormalizationResult:
        now = now or datetime.now(timezone.utc)
        candidates: List[TokenCandidate] = []
        eligible = 0

        for record in records:
            if not self.is_eligible(record):
                continue
            try:
                candidate = self.normalize(record, now)
            except (TypeError, ValueError) as e:
                logger.warning(f"{self.source}: skipping malformed record: {e}")
                continue
            eligible += 1
            if len(candidates) < self.limit:
                candidates.append(candidate)

        logger.info(
            f"{self.source}: considered={len(records)} eligible={eligible} kept={len(candidates)} "
            f"(policy={self.policy.name})"
        )
        return NormalizationResult(candidates=candidates, considered=len(records))


class CoinGeckoNormalizer(RecordNormalizer):
    """
    /coins/markets records. Market cap stands in for liquidity and the
    endpoint discloses neither chain nor creation time.
    """
    source = "coingecko"

    def __init__(self, policy: AdmissionPolicy = BROAD_MARKET_POLICY, limit: int = MAX_TOKENS):
        super().__init__(policy, limit)

    def metrics(self, record):
        return (
            to_number(record.get("price_change_percentage_24h")),
            to_number(record.get("total_volume")),
            to_number(record.get("market_cap")),
        )

    def normalize(self, record, now=None):
        price_change, volume, market_cap = self.metrics(record)
        symbol = str(record.get("symbol") or "").upper()
        return TokenCandidate(
            pair=f"{symbol}/USD",
            chain="Multi-Chain",
            priceChange24h=price_change or 0.0,
            volume24h=volume or 0.0,
            liquidity=market_cap or 0.0,
            ageDays=0,
            url=f"https://coingecko.com/en/coins/{record.get('id')}",
        )


class DexScreenerNormalizer(RecordNormalizer):
    """
    /latest/dex/search pairs. Metrics live in nested objects:
    priceChange.h24, volume.h24, liquidity.usd.
    """
    source = "dexscreener"

    def __init__(self, policy: AdmissionPolicy = PAIR_SEARCH_POLICY, limit: int = MAX_TOKENS):
        super().__init__(policy, limit)

    @staticmethod
    def _nested(record: Dict[str, Any], key: str, field: str) -> Any:
        section = record.get(key)
        if not isinstance(section, dict):
            return None
        return section.get(field)

    def metrics(self, record):
        return (
            to_number(self._nested(record, "priceChange", "h24")),
            to_number(self._nested(record, "volume", "h24")),
            to_number(self._nested(record, "liquidity", "usd")),
        )

    @classmethod
    def pair_name(cls, record: Dict[str, Any]) -> str:
        base = cls._nested(record, "baseToken", "symbol")
        quote = cls._nested(record, "quoteToken", "symbol")
        if base and quote:
            return f"{base}/{quote}"
        address = str(record.get("pairAddress") or "")
        return f"{address[:8]}..."

    def normalize(self, record, now=None):
        now = now or datetime.now(timezone.utc)
        price_change, volume, liquidity = self.metrics(record)
        return TokenCandidate(
            pair=self.pair_name(record),
            chain=chain_label(record.get("chainId")),
            priceChange24h=price_change or 0.0,
            volume24h=volume or 0.0,
            liquidity=liquidity or 0.0,
            ageDays=age_in_days(record.get("pairCreatedAt"), now),
            url=str(record.get("url") or self.pair_url(record)),
        )

    @staticmethod
    def pair_url(record: Dict[str, Any]) -> str:
        return f"https://dexscreener.com/{record.get('chainId') or ''}/{record.get('pairAddress') or ''}"
