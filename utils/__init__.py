"""Utility functions."""

from .formatting import count_nights, format_date, format_price, parse_date
from .i18n import LOCALE_COOKIE, Locale, get_translations, resolve_locale
from .urls import hotel_detail_url, map_embed_url

__all__ = [
    "LOCALE_COOKIE",
    "Locale",
    "count_nights",
    "format_date",
    "format_price",
    "get_translations",
    "hotel_detail_url",
    "map_embed_url",
    "parse_date",
    "resolve_locale",
]
