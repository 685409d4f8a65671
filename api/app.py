"""FastAPI application factory."""

import logging
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException

from aoryx import (
    AoryxClientError,
    AoryxServiceError,
    AoryxTimeoutError,
    AsyncAoryxClient,
    CountryDestinations,
    Destination,
    HotelInfoResult,
    SearchResult,
)
from config import (
    AORYX_API_KEY,
    AORYX_BASE_URL,
    AORYX_CUSTOMER_CODE,
    AORYX_DEFAULT_CURRENCY,
    AORYX_TASSPRO_CUSTOMER_CODE,
    AORYX_TASSPRO_REGION_ID,
    AORYX_TIMEOUT_MS,
    CORS_ORIGINS,
)
from db import close_mongo, connect_mongo, get_db
from services import ensure_indexes, get_effective_amd_rates
from services.pricing import ExchangeRatesError

from . import favorites, pages
from .dependencies import get_aoryx_client
from .schemas import (
    CountryInfoRequest,
    DestinationInfoRequest,
    HotelInfoRequest,
    HotelsByDestinationRequest,
    SearchRequest,
)

logger = logging.getLogger(__name__)

AoryxClient = Annotated[AsyncAoryxClient, Depends(get_aoryx_client)]


def _error(message: str, status_code: int, code: str | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": message}
    if code:
        body["code"] = code
    return JSONResponse(body, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate Aoryx and HTTP errors into ``{"error", "code"}`` bodies."""

    @app.exception_handler(AoryxServiceError)
    async def aoryx_service_error(request: Request, exc: AoryxServiceError) -> JSONResponse:
        status_code = 400 if exc.code == "INVALID_PARAMS" else 502
        logger.warning("[Aoryx] %s - %s: %s", request.url.path, exc.code, exc)
        return _error(str(exc), status_code, exc.code)

    @app.exception_handler(AoryxClientError)
    async def aoryx_client_error(request: Request, exc: AoryxClientError) -> JSONResponse:
        status_code = 504 if isinstance(exc, AoryxTimeoutError) else 502
        logger.error("[Aoryx] %s - %s failed: %s", request.url.path, exc.endpoint, exc)
        return _error(str(exc), status_code, type(exc).__name__)

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
        )


def create_app(aoryx_client: AsyncAoryxClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        aoryx_client: Client to use instead of one built from configuration.
    """
    app = FastAPI(title="Megatours")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.aoryx_client = aoryx_client or AsyncAoryxClient(
        AORYX_API_KEY,
        AORYX_BASE_URL,
        customer_code=AORYX_CUSTOMER_CODE or None,
        timeout_ms=AORYX_TIMEOUT_MS,
        default_currency=AORYX_DEFAULT_CURRENCY,
        tasspro_customer_code=AORYX_TASSPRO_CUSTOMER_CODE or None,
        tasspro_region_id=AORYX_TASSPRO_REGION_ID or None,
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event() -> None:
        await connect_mongo()
        await ensure_indexes(await get_db())

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await app.state.aoryx_client.close()
        await close_mongo()

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok"}

    @app.post("/api/aoryx/search", response_model=None)
    async def aoryx_search(request: SearchRequest, client: AoryxClient) -> SearchResult:
        """Search hotel availability."""
        return await client.search(request.to_params())

    @app.post("/api/aoryx/room-details", response_model=None)
    async def aoryx_room_details(request: SearchRequest, client: AoryxClient) -> dict[str, Any]:
        """Room options of one hotel."""
        return {"rooms": await client.room_details(request.to_params())}

    @app.post("/api/aoryx/hotel-info", response_model=None)
    async def aoryx_hotel_info(
        request: HotelInfoRequest, client: AoryxClient
    ) -> HotelInfoResult | None:
        """Static hotel content."""
        return await client.hotel_info(request.hotelCode)

    @app.post("/api/aoryx/hotels-by-destination", response_model=None)
    async def aoryx_hotels_by_destination(
        request: HotelsByDestinationRequest, client: AoryxClient
    ) -> dict[str, Any]:
        """Static content of all hotels of a destination."""
        destination_id = request.target_id() or ""
        return {"hotels": await client.hotels_info_by_destination_id(destination_id)}

    @app.post("/api/aoryx/destination-info", response_model=None)
    async def aoryx_destination_info(
        request: DestinationInfoRequest, client: AoryxClient
    ) -> dict[str, list[Destination]]:
        """Destinations under a parent destination."""
        return {"destinations": await client.destination_info(request.destinationId)}

    @app.post("/api/aoryx/country-info", response_model=None)
    async def aoryx_country_info(
        request: CountryInfoRequest, client: AoryxClient
    ) -> CountryDestinations:
        """Destinations of a country."""
        return await client.country_info(request.countryCode)

    @app.get("/api/utils/exchange-rates", response_model=None)
    async def exchange_rates(
        db: Annotated[AsyncIOMotorDatabase, Depends(get_db)],
    ) -> dict[str, float] | JSONResponse:
        """Effective AMD exchange rates."""
        try:
            return dict(await get_effective_amd_rates(db))
        except (ExchangeRatesError, PyMongoError):
            logger.exception("[ExchangeRates] Failed to load rates")
            return _error("Failed to load exchange rates", 500)

    app.include_router(pages.router)
    app.include_router(favorites.router)

    return app
