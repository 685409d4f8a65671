"""Aoryx API type definitions (request and normalized response types).

Site-facing types use camelCase keys; vendor payloads use PascalCase keys and
are only loosely typed because their shape is not a stable contract.
"""

from typing import Any, NotRequired, TypedDict

# Parsed vendor JSON, after pascalize_keys.
VendorJson = dict[str, Any]

# =============================================================================
# Request Types
# =============================================================================


class RoomSearch(TypedDict):
    """Room configuration with guest counts."""

    roomIdentifier: int
    adults: int
    childrenAges: list[int]


class SearchParams(TypedDict):
    """Search parameters in the site's camelCase format.

    Either ``destinationCode`` or ``hotelCode`` must be provided.
    """

    destinationCode: NotRequired[str | None]
    hotelCode: NotRequired[str | None]
    countryCode: str
    nationality: str
    checkInDate: str
    checkOutDate: str
    currency: NotRequired[str | None]
    regionId: NotRequired[str | None]
    customerCode: NotRequired[str | None]
    rooms: list[RoomSearch]


class ChildAge(TypedDict):
    """Child age entry in the vendor request."""

    Identifier: int
    Text: str


class RoomChildren(TypedDict):
    """Children block of a vendor room occupancy."""

    Count: int
    ChildAge: list[ChildAge]


class RoomOccupancy(TypedDict):
    """Room occupancy in the vendor request."""

    RoomIdentifier: int
    Adult: int  # singular on the vendor side
    Children: NotRequired[RoomChildren]


class TassProInfo(TypedDict, total=False):
    """Agency routing info attached to searches."""

    CustomerCode: str
    RegionID: str


class SearchParameter(TypedDict):
    """Vendor search parameter block."""

    DestinationCode: NotRequired[str | None]
    HotelCode: NotRequired[str | None]
    CountryCode: str
    Nationality: str
    Currency: str
    CheckInDate: str
    CheckOutDate: str
    Rooms: dict[str, list[RoomOccupancy]]
    TassProInfo: NotRequired[TassProInfo]


class SearchRequest(TypedDict):
    """Vendor search request body."""

    SearchParameter: SearchParameter


# =============================================================================
# Normalized Types: Search
# =============================================================================


class Money(TypedDict):
    """Amount with optional currency extracted from a vendor money field."""

    amount: float | None
    currency: str | None


class HotelSummary(TypedDict):
    """Hotel in normalized search results."""

    code: str | None
    name: str | None
    minPrice: float | None
    currency: str | None
    rating: float | None
    address: str | None
    city: str | None
    imageUrl: str | None
    latitude: float | None
    longitude: float | None


class DestinationRef(TypedDict):
    """Destination echoed back by the search audit block."""

    code: str | None
    name: str | None


class SearchResult(TypedDict):
    """Normalized search response."""

    sessionId: str
    currency: str | None
    propertyCount: int | None
    responseTime: str | None
    destination: DestinationRef | None
    hotels: list[HotelSummary]


# =============================================================================
# Normalized Types: Rooms
# =============================================================================


class RoomOption(TypedDict):
    """Bookable room option for a hotel."""

    id: str
    name: str | None
    boardType: str | None
    refundable: bool | None
    currency: str | None
    totalPrice: float | None
    availableRooms: int | None
    cancellationPolicy: str | None


# =============================================================================
# Normalized Types: Static content
# =============================================================================


class HotelInfo(TypedDict):
    """Hotel entry from the hotels-by-destination listing."""

    destinationId: str | None
    name: str | None
    systemId: str | None
    rating: float | None
    city: str | None
    address: str | None
    imageUrl: str | None
    latitude: float | None
    longitude: float | None


class HotelAddress(TypedDict):
    """Postal address of a hotel."""

    line1: str | None
    line2: str | None
    countryCode: str | None
    countryName: str | None
    cityName: str | None
    stateCode: str | None
    zipCode: str | None


class GeoCode(TypedDict):
    """Hotel coordinates."""

    lat: float | None
    lon: float | None


class HotelContact(TypedDict):
    """Hotel contact details."""

    phone: str | None
    fax: str | None
    website: str | None


class HotelInfoResult(TypedDict):
    """Detailed hotel information."""

    systemId: str | None
    name: str | None
    rating: float | None
    tripAdvisorRating: float | None
    tripAdvisorUrl: str | None
    currencyCode: str | None
    imageUrl: str | None
    imageUrls: list[str]
    address: HotelAddress | None
    geoCode: GeoCode | None
    contact: HotelContact | None


class Destination(TypedDict):
    """Destination (city/area) available in a country."""

    id: str
    name: str | None
    rawId: str | None


class CountryDestinations(TypedDict):
    """Destinations available for a country."""

    countryCode: str
    destinations: list[Destination]
