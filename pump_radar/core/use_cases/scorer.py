import math
from abc import ABC, abstractmethod
from typing import Any, Dict

from pump_radar.core.entities.token import TokenCandidate, trade_plan

MIN_SCORE = 0
MAX_SCORE = 100


def clamp_score(score: float) -> int:
    if math.isnan(score):
        return MIN_SCORE
    return int(min(max(score, MIN_SCORE), MAX_SCORE))


class ConfidenceScorer(ABC):
    """
    Heuristic pump-potential score. Total over any numeric input:
    contributions are summed and the result is clamped, never rejected.
    """
    name: str = ""

    @abstractmethod
    def raw_score(self, candidate: TokenCandidate) -> float:
        pass

    def confidence(self, candidate: TokenCandidate) -> int:
        return clamp_score(self.raw_score(candidate))

    def score(self, candidate: TokenCandidate) -> Dict[str, Any]:
        """
        Attaches confidence and tradePlan together so one is never
        present without the other.
        """
        confidence = self.confidence(candidate)
        record = candidate.model_dump()
        record["confidence"] = confidence
        record["tradePlan"] = trade_plan(confidence)
        return record


class BroadMarketScorer(ConfidenceScorer):
    """
    Tiered score for large upstream listings, weighted 50/30/20 across
    price change, volume and market cap.
    """
    name = "broad_market"

    @staticmethod
    def price_points(price_change: float) -> int:
        # Highest matching tier wins
        if price_change > 50:
            return 50
        if price_change > 20:
            return 30
        if price_change > 10:
            return 20
        if price_change > 5:
            return 10
        return 0

    @staticmethod
    def volume_points(volume: float) -> int:
        if volume > 50_000_000:
            return 30
        if volume > 10_000_000:
            return 20
        if volume > 1_000_000:
            return 15
        if volume > 100_000:
            return 10
        return 0

    @staticmethod
    def market_cap_points(market_cap: float) -> int:
        # Sweet spot: both very small and very large caps score lower
        if 1_000_000 < market_cap < 100_000_000:
            return 20
        if 100_000 < market_cap < 1_000_000:
            return 15
        if 10_000 < market_cap < 100_000:
            return 10
        return 0

    def raw_score(self, candidate):
        score = (
            self.price_points(candidate.priceChange24h)
            + self.volume_points(candidate.volume24h)
            + self.market_cap_points(candidate.liquidity)
        )
        if candidate.priceChange24h < 0:
            score -= 20
        return score


class PairSearchScorer(ConfidenceScorer):
    """Flat, independently additive bonuses for young small-cap pairs."""
    name = "pair_search"

    def raw_score(self, candidate):
        score = 0
        if candidate.priceChange24h > 100:
            score += 40
        if candidate.volume24h > 1_000_000:
            score += 30
        if 5_000 < candidate.liquidity < 50_000:
            score += 20
        if candidate.ageDays < 7:
            score += 10
        if candidate.priceChange24h < 0:
            score -= 20
        return score
