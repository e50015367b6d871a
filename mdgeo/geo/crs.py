from __future__ import annotations

from functools import lru_cache

from pyproj import Transformer

from mdgeo.models import WEB_MERCATOR, WGS84, GeoPoint

__all__ = ["WEB_MERCATOR", "WGS84", "transform", "to_geographic", "to_projected"]


@lru_cache(maxsize=16)
def _transformer(from_crs: str, to_crs: str) -> Transformer:
    # always_xy keeps (lon, lat) ordering for EPSG:4326
    return Transformer.from_crs(from_crs, to_crs, always_xy=True)


def transform(point: GeoPoint, to_crs: str) -> GeoPoint:
    if point.crs == to_crs:
        return point
    x, y = _transformer(point.crs, to_crs).transform(point.x, point.y)
    return GeoPoint(x=float(x), y=float(y), crs=to_crs)


def to_geographic(point: GeoPoint) -> GeoPoint:
    return transform(point, WGS84)


def to_projected(point: GeoPoint) -> GeoPoint:
    return transform(point, WEB_MERCATOR)
