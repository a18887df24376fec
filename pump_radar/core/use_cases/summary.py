from pump_radar.core.entities.dashboard import DashboardData, DashboardSummary
from pump_radar.core.entities.token import TRADE_PLANS

HIGH_CONFIDENCE = 70


def summarize(data: DashboardData) -> DashboardSummary:
    plan_counts = {plan: 0 for plan in TRADE_PLANS}
    for token in data.tokens:
        plan_counts[token.tradePlan] += 1

    return DashboardSummary(
        tokenCount=len(data.tokens),
        highConfidenceCount=sum(1 for t in data.tokens if t.confidence >= HIGH_CONFIDENCE),
        planCounts=plan_counts,
        solPrice=data.solPrice,
        lastUpdate=data.lastUpdate,
    )
