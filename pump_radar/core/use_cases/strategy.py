from datetime import datetime
from typing import Any, Dict, List, Optional

from pump_radar.core.exceptions import ConfigurationError
from pump_radar.core.use_cases.normalizer import CoinGeckoNormalizer, DexScreenerNormalizer, RecordNormalizer
from pump_radar.core.use_cases.scorer import BroadMarketScorer, ConfidenceScorer, PairSearchScorer

BROAD_MARKET = "broad_market"
PAIR_SEARCH = "pair_search"


class ScoringStrategy:
    """
    Pairs an upstream record shape and its admission policy with the
    scoring variant built for it. The two pairings have incompatible
    thresholds and are kept apart.
    """

    def __init__(self, name: str, normalizer: RecordNormalizer, scorer: ConfidenceScorer):
        self.name = name
        self.normalizer = normalizer
        self.scorer = scorer

    def evaluate(self, records: List[Any], now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        result = self.normalizer.run(records, now)
        return [self.scorer.score(candidate) for candidate in result.candidates]


STRATEGIES: Dict[str, ScoringStrategy] = {
    BROAD_MARKET: ScoringStrategy(BROAD_MARKET, CoinGeckoNormalizer(), BroadMarketScorer()),
    PAIR_SEARCH: ScoringStrategy(PAIR_SEARCH, DexScreenerNormalizer(), PairSearchScorer()),
}


def get_strategy(name: str) -> ScoringStrategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown scoring strategy '{name}'. Expected one of: {', '.join(sorted(STRATEGIES))}"
        ) from None
