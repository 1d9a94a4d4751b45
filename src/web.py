# ABOUTME: ASGI web entry point serving weather, states, and destinations JSON endpoints.
# ABOUTME: Builds the Starlette app, its lifespan resources, and error-to-status mapping.

import contextlib
import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from src import config
from src.deps import create_http_client
from src.destinations import destinations_for_state, load_destinations
from src.errors import InputInvalid, LocationNotFound, ProviderError
from src.regions import STATE_NAMES
from src.weather_service import get_location_weather

logger = logging.getLogger(__name__)


async def weather(request: Request) -> JSONResponse:
    """GET /api/weather?location=... -> normalized current weather and 5-day forecast."""
    result = await get_location_weather(request.app.state.http_client, request.query_params.get("location"))
    return JSONResponse(result.model_dump(by_alias=True))


async def states(request: Request) -> JSONResponse:
    """GET /api/states -> every Indian state and union territory."""
    return JSONResponse({"states": list(STATE_NAMES)})


async def destinations(request: Request) -> JSONResponse:
    """GET /api/destinations?state=... -> curated destinations for one state."""
    state = request.query_params.get("state")
    if not state or not state.strip():
        return JSONResponse({"error": "Missing state query parameter"}, status_code=400)

    items = destinations_for_state(request.app.state.destinations, state)
    return JSONResponse({"state": state.strip(), "destinations": [d.model_dump() for d in items]})


async def handle_input_invalid(request: Request, exc: InputInvalid) -> JSONResponse:
    return JSONResponse({"error": "Missing location query parameter"}, status_code=400)


async def handle_location_not_found(request: Request, exc: LocationNotFound) -> JSONResponse:
    logger.info("No geocoding match for %r", exc.query)
    return JSONResponse({"error": "Location not found"}, status_code=404)


async def handle_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    """Log the upstream failure in full but keep the response generic."""
    logger.exception("Upstream provider failed for %s", request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error serving %s", request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(
    http_client_factory: Callable[[], httpx.AsyncClient] = create_http_client,
    destinations_path: Path = config.DESTINATIONS_PATH,
    cors_origins: tuple[str, ...] = config.CORS_ORIGINS,
) -> Starlette:
    """Build the Starlette app.

    The lifespan loads the destinations dataset and opens one shared HTTP client before
    the first request is served; both are read-only for the life of the process.
    """

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        app.state.destinations = load_destinations(destinations_path)
        app.state.http_client = http_client_factory()
        try:
            yield
        finally:
            await app.state.http_client.aclose()

    return Starlette(
        routes=[
            Route("/api/weather", weather, methods=["GET"]),
            Route("/api/states", states, methods=["GET"]),
            Route("/api/destinations", destinations, methods=["GET"]),
        ],
        middleware=[Middleware(CORSMiddleware, allow_origins=list(cors_origins), allow_methods=["GET"])],
        exception_handlers={
            InputInvalid: handle_input_invalid,
            LocationNotFound: handle_location_not_found,
            ProviderError: handle_provider_error,
            Exception: handle_unexpected_error,
        },
        lifespan=lifespan,
    )


app = create_app()


def main() -> None:
    """Run the API under uvicorn using HOST/PORT/LOG_LEVEL from the environment."""
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Weather server starting on http://%s:%d", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
