"""
Dashboard Entities for Pump Radar

Request-scoped payloads returned by the dashboard endpoints.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, field_validator
from typing import Dict, List

from pump_radar.core.entities.token import Token


class SolPrice(BaseModel):
    model_config = ConfigDict(extra="forbid")

    usd: StrictFloat = Field(ge=0)
    pkr: StrictFloat = Field(ge=0)  # usd * fixed rate, never fetched


class DashboardData(BaseModel):
    """
    Scored tokens in upstream order plus the SOL quote and the build time.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    tokens: List[Token]
    solPrice: SolPrice
    lastUpdate: StrictStr

    @field_validator("lastUpdate")
    @classmethod
    def _iso_timestamp(cls, value: str) -> str:
        # fromisoformat only learned the Z suffix in 3.11
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("lastUpdate must be an ISO-8601 timestamp")
        return value


class DashboardSummary(BaseModel):
    """
    Headline numbers for the dashboard cards.
    """
    tokenCount: int
    highConfidenceCount: int
    planCounts: Dict[str, int]
    solPrice: SolPrice
    lastUpdate: str
