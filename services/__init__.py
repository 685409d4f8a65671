"""Business logic services for hotel search, favorites and pricing."""

from .favorites import (
    FavoriteItem,
    ensure_indexes,
    is_favorite,
    list_favorites,
    remove_favorite,
    toggle_favorite,
)
from .hotel_details import HotelView, build_hotel_view, gallery_images, resolve_coordinates
from .pricing import (
    AmdRates,
    ExchangeRatesError,
    calculate_booking_total,
    convert_to_amd,
    get_effective_amd_rates,
)
from .results import (
    DEFAULT_SORT,
    ResultsView,
    build_results_view,
    filter_hotels,
    parse_ratings,
    parse_sort,
    sort_hotels,
)
from .search_query import ParsedSearch, build_search_query, parse_search_params

__all__ = [
    "DEFAULT_SORT",
    "AmdRates",
    "ExchangeRatesError",
    "FavoriteItem",
    "HotelView",
    "ParsedSearch",
    "ResultsView",
    "build_hotel_view",
    "build_results_view",
    "build_search_query",
    "calculate_booking_total",
    "convert_to_amd",
    "ensure_indexes",
    "filter_hotels",
    "gallery_images",
    "get_effective_amd_rates",
    "is_favorite",
    "list_favorites",
    "parse_ratings",
    "parse_search_params",
    "parse_sort",
    "remove_favorite",
    "resolve_coordinates",
    "sort_hotels",
    "toggle_favorite",
]
