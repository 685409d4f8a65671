"""URL generation utilities."""

from urllib.parse import quote


def hotel_detail_url(hotel_code: str, query: str | None = None) -> str:
    """Build the site URL of a hotel page, carrying the search query.

    Args:
        hotel_code: Vendor hotel code.
        query: Encoded search query string (without ``?``).

    Returns:
        Relative URL such as ``/hotels/12345?checkInDate=...``.
    """
    path = f"/hotels/{quote(hotel_code, safe='')}"
    return f"{path}?{query}" if query else path


def map_embed_url(lat: float, lon: float) -> str:
    """Google Maps embed URL centred on the given coordinates."""
    return f"https://www.google.com/maps?q={lat},{lon}&output=embed"
