from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, model_validator
from typing import Literal

TradePlan = Literal["Consider entry", "Watch closely", "Avoid"]

CONSIDER_ENTRY: TradePlan = "Consider entry"
WATCH_CLOSELY: TradePlan = "Watch closely"
AVOID: TradePlan = "Avoid"

TRADE_PLANS = (CONSIDER_ENTRY, WATCH_CLOSELY, AVOID)


def trade_plan(score: int) -> TradePlan:
    """The one classification law, shared by every scoring variant."""
    if score >= 70:
        return CONSIDER_ENTRY
    if score >= 40:
        return WATCH_CLOSELY
    return AVOID


class TokenCandidate(BaseModel):
    """
    A normalized upstream record that passed admission, before scoring.
    """
    pair: str
    chain: str
    priceChange24h: float
    volume24h: float
    liquidity: float  # Pool liquidity, or market cap where the source has none
    ageDays: int = 0
    url: str


class Token(BaseModel):
    """
    Canonical scored token as served to the dashboard.
    Field types are strict: the schema rejects rather than coerces.
    """
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "pair": "BONK/SOL",
                "chain": "Solana",
                "priceChange24h": 12.4,
                "volume24h": 2_400_000.0,
                "liquidity": 18_500.0,
                "ageDays": 3,
                "confidence": 60,
                "tradePlan": "Watch closely",
                "url": "https://dexscreener.com/solana/abc",
            }
        },
    )

    pair: StrictStr
    chain: StrictStr
    priceChange24h: StrictFloat
    volume24h: StrictFloat = Field(ge=0)
    liquidity: StrictFloat = Field(ge=0)
    ageDays: StrictInt = Field(ge=0)
    confidence: StrictInt = Field(ge=0, le=100)
    tradePlan: TradePlan
    url: StrictStr

    @model_validator(mode="after")
    def _plan_matches_confidence(self) -> "Token":
        expected = trade_plan(self.confidence)
        if self.tradePlan != expected:
            raise ValueError(
                f"tradePlan '{self.tradePlan}' does not match confidence {self.confidence} (expected '{expected}')"
            )
        return self
