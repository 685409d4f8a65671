"""API request schemas."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from aoryx import SearchParams, normalize_parent_destination_id


class RoomRequest(BaseModel):
    """Room occupancy of a search request."""

    roomIdentifier: int | None = Field(default=None, ge=1, description="Room number (1-based)")
    adults: int = Field(ge=1, description="Number of adults")
    childrenAges: list[int] = Field(default_factory=list, description="Ages of children")


class SearchRequest(BaseModel):
    """Hotel availability search (also used for room details)."""

    destinationCode: str | None = Field(default=None, description="Vendor destination code")
    hotelCode: str | None = Field(default=None, description="Vendor hotel code")
    countryCode: str = Field(pattern=r"^[A-Za-z]{2}$", description="ISO 3166-1 alpha-2 country")
    nationality: str = Field(pattern=r"^[A-Za-z]{2}$", description="Guest nationality")
    checkInDate: date = Field(description="Check-in date")
    checkOutDate: date = Field(description="Check-out date")
    currency: str | None = Field(
        default=None, pattern=r"^[A-Za-z]{3}$", description="ISO 4217 currency code"
    )
    rooms: list[RoomRequest] = Field(min_length=1, description="Rooms to book")

    @model_validator(mode="after")
    def validate_target_and_dates(self) -> "SearchRequest":
        """Require a destination or hotel and a check-out after check-in."""
        if not self.destinationCode and not self.hotelCode:
            msg = "Either destinationCode or hotelCode is required"
            raise ValueError(msg)
        if self.checkOutDate <= self.checkInDate:
            msg = "Check-out date must be after check-in date"
            raise ValueError(msg)
        return self

    def to_params(self) -> SearchParams:
        """Convert to client search parameters, numbering rooms from 1."""
        params: SearchParams = {
            "countryCode": self.countryCode.upper(),
            "nationality": self.nationality.upper(),
            "checkInDate": self.checkInDate.isoformat(),
            "checkOutDate": self.checkOutDate.isoformat(),
            "rooms": [
                {
                    "roomIdentifier": room.roomIdentifier or index,
                    "adults": room.adults,
                    "childrenAges": room.childrenAges,
                }
                for index, room in enumerate(self.rooms, start=1)
            ],
        }
        if self.destinationCode:
            params["destinationCode"] = self.destinationCode
        if self.hotelCode:
            params["hotelCode"] = self.hotelCode
        if self.currency:
            params["currency"] = self.currency.upper()
        return params


class HotelInfoRequest(BaseModel):
    """Hotel info lookup."""

    hotelCode: str = Field(min_length=1, description="Vendor hotel code")


class HotelsByDestinationRequest(BaseModel):
    """Hotels listing of a destination."""

    destinationId: str | None = Field(default=None, description="Destination id, e.g. 160-0")
    parentDestinationId: str | None = Field(
        default=None, description="Parent destination id; takes precedence when usable"
    )

    def target_id(self) -> str | None:
        """Destination id sent to the vendor; a usable parent id wins."""
        parent_id = normalize_parent_destination_id(self.parentDestinationId)
        if parent_id:
            return parent_id
        destination_id = (self.destinationId or "").strip()
        return destination_id or None

    @model_validator(mode="after")
    def validate_destination(self) -> "HotelsByDestinationRequest":
        """Require at least one non-blank destination id."""
        if self.target_id() is None:
            msg = "destinationId or parentDestinationId is required"
            raise ValueError(msg)
        return self


class DestinationInfoRequest(BaseModel):
    """Destinations under a parent destination."""

    destinationId: str = Field(min_length=1, description="Parent destination id")


class CountryInfoRequest(BaseModel):
    """Destinations of a country."""

    countryCode: str = Field(
        pattern=r"^[A-Za-z]{2}$", description="ISO 3166-1 alpha-2 country code"
    )


class FavoriteRequest(BaseModel):
    """Favorite toggle body; hotel details are optional and loosely typed."""

    model_config = ConfigDict(extra="ignore")

    hotelCode: Any = Field(default=None, description="Vendor hotel code")
    name: Any = None
    city: Any = None
    address: Any = None
    imageUrl: Any = None
    rating: Any = None
    source: Any = None
