"""Typed request and result models for mdgeo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

WEB_MERCATOR = "EPSG:3857"
WGS84 = "EPSG:4326"


@dataclass(frozen=True)
class GeoPoint:
    """An (x, y) pair tagged with its coordinate reference system.

    For geographic points (EPSG:4326) x is longitude and y is latitude.
    """

    x: float
    y: float
    crs: str = WEB_MERCATOR

    @classmethod
    def from_lat_lon(cls, latitude: float, longitude: float) -> GeoPoint:
        return cls(x=float(longitude), y=float(latitude), crs=WGS84)

    @property
    def is_geographic(self) -> bool:
        return self.crs == WGS84

    @property
    def latitude(self) -> float:
        if not self.is_geographic:
            raise ValueError(f"latitude is only defined for {WGS84} points, not {self.crs}")
        return self.y

    @property
    def longitude(self) -> float:
        if not self.is_geographic:
            raise ValueError(f"longitude is only defined for {WGS84} points, not {self.crs}")
        return self.x

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "crs": self.crs}


@dataclass(frozen=True)
class AddressRecord:
    """One address submitted for batch geocoding.

    Either the structured fields (street, city, zip) or a free-text
    single_line must be given. The id correlates results to records and
    must be unique within a batch.
    """

    id: int
    street: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    single_line: Optional[str] = None

    def __post_init__(self) -> None:
        if not (self.single_line or self.street or self.city or self.zip):
            raise ValueError(f"AddressRecord {self.id} has no address fields")


@dataclass(frozen=True)
class PartialAddress:
    """Incomplete address used to look up ranked candidates."""

    single_line: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None

    def __post_init__(self) -> None:
        if not (self.single_line or self.street or self.city or self.zip):
            raise ValueError("PartialAddress needs at least one non-empty field")


@dataclass(frozen=True)
class GeocodeResult:
    """A batch geocode match, correlated to its AddressRecord by id."""

    id: int
    address: str
    score: float             # 0-100
    location: GeoPoint       # source projection (EPSG:3857)
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "address": self.address,
            "score": self.score,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class AddressCandidate:
    """An address returned by reverse geocoding or candidate lookup."""

    address: str
    score: Optional[float]   # None for reverse geocode matches
    location: GeoPoint       # source projection (EPSG:3857)
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "score": self.score,
            "location": self.location.to_dict(),
        }
