"""Aoryx hotel distribution API client package."""

from .client import AsyncAoryxClient
from .exceptions import (
    AoryxClientError,
    AoryxConfigError,
    AoryxError,
    AoryxServiceError,
    AoryxTimeoutError,
)
from .normalize import normalize_parent_destination_id
from .types import (
    CountryDestinations,
    Destination,
    HotelInfo,
    HotelInfoResult,
    HotelSummary,
    RoomOption,
    RoomSearch,
    SearchParams,
    SearchResult,
)

__all__ = [
    "AsyncAoryxClient",
    "AoryxError",
    "AoryxClientError",
    "AoryxConfigError",
    "AoryxServiceError",
    "AoryxTimeoutError",
    "CountryDestinations",
    "Destination",
    "HotelInfo",
    "HotelInfoResult",
    "HotelSummary",
    "RoomOption",
    "RoomSearch",
    "SearchParams",
    "SearchResult",
    "normalize_parent_destination_id",
]
