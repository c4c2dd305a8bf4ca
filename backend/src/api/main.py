"""
Match Forecast API - FastAPI Application

Wires logging, CORS, error handling and the versioned routers into one
ASGI app. Run with `python -m src.api.main` from the backend directory.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from src.api.dependencies import get_api_football, get_stats_lookup
from src.api.routes import competitions, predictions
from src.application.dtos.dtos import HealthResponseDTO, ErrorResponseDTO
from src.domain.constants import COMPETITIONS
from src.domain.exceptions import PredictionException, StatsProviderException
from src.infrastructure.data_sources.api_football import APIFootballSource
from src.utils.time_utils import APP_TZ, get_current_time, get_current_season


APP_TITLE = "Match Forecast API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = """
Forecasts upcoming football matches from team season statistics and
recent form: 1X2 probabilities, over/under 2.5, both teams to score,
expected goals, a bounded confidence score and descriptive tags.

Educational purposes only.
"""

DEV_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


class LocalTimeFormatter(logging.Formatter):
    """Stamps records with the service timezone instead of the host clock."""

    def formatTime(self, record, datefmt=None):
        return get_current_time().strftime(datefmt or "%Y-%m-%d %H:%M:%S %Z")


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(LocalTimeFormatter("%(asctime)s %(levelname)-7s [%(name)s] %(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def allowed_origins() -> list[str]:
    """Dev origins plus the comma-separated CORS_ORIGINS, deduplicated in order."""
    extra = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",")]
    return list(dict.fromkeys(o for o in (*DEV_ORIGINS, *extra) if o))


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    source = get_api_football()
    logger.info(
        f"{APP_TITLE} v{APP_VERSION} up | season {get_current_season()} | "
        f"tz {APP_TZ.zone} | {len(COMPETITIONS)} competitions"
    )
    if not source.is_configured:
        logger.warning("API_FOOTBALL_KEY is not set; predictions will use default rates")

    yield

    logger.info(
        f"Shutting down after {source.request_count} provider requests | "
        f"cache {get_stats_lookup().get_stats()}"
    )


app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, message: str, request: Request) -> JSONResponse:
    body = ErrorResponseDTO(error=error, message=message, details={"path": request.url.path})
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(StatsProviderException)
async def provider_exception_handler(request: Request, exc: StatsProviderException):
    logger.error(f"Provider failure on {request.url.path}: {exc}")
    return _error(502, "provider_error", str(exc), request)


@app.exception_handler(PredictionException)
async def prediction_exception_handler(request: Request, exc: PredictionException):
    logger.error(f"Prediction failure on {request.url.path}: {exc}")
    return _error(500, "prediction_error", str(exc), request)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return _error(500, "internal_server_error", "An unexpected error occurred", request)


@app.get("/health", response_model=HealthResponseDTO, tags=["Health"])
async def health_check(
    source: APIFootballSource = Depends(get_api_football),
) -> HealthResponseDTO:
    """Liveness plus the season and whether the provider key is present."""
    return HealthResponseDTO(
        version=APP_VERSION,
        season=get_current_season(),
        provider_configured=source.is_configured,
    )


@app.get("/cache/status", tags=["Health"])
async def cache_status():
    """Hit/miss counters of the statistics lookup cache."""
    return get_stats_lookup().get_stats()


@app.get("/", tags=["Root"])
async def root():
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "competitions": [c["code"] for c in COMPETITIONS],
        "endpoints": {
            "health": "/health",
            "competitions": "/api/v1/competitions",
            "matches": "/api/v1/matches?competition_id={id}",
            "provider_key": "/api/v1/provider/key",
            "provider_status": "/api/v1/provider/status",
        },
    }


app.include_router(competitions.router, prefix="/api/v1")
app.include_router(predictions.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
