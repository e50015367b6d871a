"""Exception hierarchy for mdgeo."""

from __future__ import annotations

from typing import Optional


class MDGeoError(Exception):
    """Base exception for all mdgeo errors."""


class TransportError(MDGeoError):
    """The request failed: network error, timeout, non-2xx status or a service error body."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ParseError(MDGeoError):
    """The response body does not have the expected shape."""

    def __init__(self, detail: str, url: Optional[str] = None):
        self.detail = detail
        self.url = url
        super().__init__(f"Unexpected response from {url or 'service'}: {detail}")


class NotFoundError(MDGeoError):
    """Reverse geocoding found no address within the search radius."""

    def __init__(self, location: str, radius: Optional[float] = None):
        self.location = location
        self.radius = radius
        within = f" within {radius} m" if radius is not None else ""
        super().__init__(f"No address found{within} of {location}")
