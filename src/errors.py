# ABOUTME: Exception taxonomy for location resolution and weather lookup.
# ABOUTME: Separates bad input, unresolvable locations, and upstream provider failures.


class WeatherLookupError(Exception):
    """Base class for errors raised by the lookup pipeline."""


class InputInvalid(WeatherLookupError):
    """Raised when the location text is missing, empty, or whitespace-only."""


class LocationNotFound(WeatherLookupError):
    """Raised when every geocoding attempt came back without candidates."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Location not found: {query!r}")
        self.query = query


class ProviderError(WeatherLookupError):
    """Raised when a geocoding or forecast request fails or returns unusable data."""
