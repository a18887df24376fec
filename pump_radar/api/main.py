import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Imports ---
from pump_radar.config import Settings
from pump_radar.core.entities.dashboard import DashboardData, DashboardSummary
from pump_radar.core.exceptions import PumpRadarError
from pump_radar.core.interfaces.datasource import IMarketDataSource
from pump_radar.core.services import DashboardService
from pump_radar.core.use_cases.strategy import PAIR_SEARCH, get_strategy
from pump_radar.core.use_cases.summary import summarize
from pump_radar.infrastructure.gateways.coingecko_api import CoinGeckoGateway
from pump_radar.infrastructure.gateways.dexscreener_api import DexScreenerGateway

# Setup Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("PumpRadar")

app = FastAPI(title="Pump Radar API", version="3.0.0", description="Scored crypto token dashboard with SOL price quote")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

DASHBOARD_ERROR = "Failed to fetch dashboard data"


def dashboard_error(error: Exception) -> JSONResponse:
    message = error.message if isinstance(error, PumpRadarError) else str(error) or "Unknown error"
    return JSONResponse(status_code=500, content={"error": DASHBOARD_ERROR, "message": message})


@app.exception_handler(PumpRadarError)
async def pump_radar_error_handler(request: Request, exc: PumpRadarError):
    logger.error(f"{request.url.path} failed: {exc.message}")
    return dashboard_error(exc)


# --- Dependency Injection ---

def get_settings() -> Settings:
    return Settings.from_env()


def get_market_source(settings: Settings, coingecko: CoinGeckoGateway) -> IMarketDataSource:
    if settings.strategy == PAIR_SEARCH:
        return DexScreenerGateway(
            query=settings.dexscreener_query,
            search_url=settings.dexscreener_search_url,
            timeout=settings.upstream_timeout_seconds,
        )
    return coingecko


def get_dashboard_service(settings: Settings = Depends(get_settings)) -> DashboardService:
    strategy = get_strategy(settings.strategy)
    coingecko = CoinGeckoGateway(
        markets_url=settings.coingecko_markets_url,
        price_url=settings.coingecko_price_url,
        timeout=settings.upstream_timeout_seconds,
    )
    return DashboardService(
        market_source=get_market_source(settings, coingecko),
        quote_source=coingecko,
        strategy=strategy,
    )


# --- Endpoints ---

@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    return {"status": "healthy", "strategy": settings.strategy}


@app.get("/api/dashboard", response_model=DashboardData)
async def get_dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """
    Fetches market records and the SOL quote, scores eligible tokens and
    returns the validated payload.
    """
    try:
        return await service.build_dashboard()
    except Exception as e:
        logger.error(f"Error fetching dashboard data: {e}")
        return dashboard_error(e)


@app.get("/api/dashboard/summary", response_model=DashboardSummary)
async def get_dashboard_summary(service: DashboardService = Depends(get_dashboard_service)):
    """
    Headline counts: tokens shown, high-confidence tokens, tokens per trade plan.
    """
    try:
        data = await service.build_dashboard()
    except Exception as e:
        logger.error(f"Error fetching dashboard summary: {e}")
        return dashboard_error(e)
    return summarize(data)
