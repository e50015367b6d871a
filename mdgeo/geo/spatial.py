from __future__ import annotations

from typing import Any, Dict, Iterable, List, Union

import geopandas as gpd
from shapely.geometry import Point

from mdgeo.geo.crs import WEB_MERCATOR, WGS84, to_projected
from mdgeo.models import AddressCandidate, GeocodeResult

# ids are None for candidates
_COLUMNS = ("id", "address", "score")


def results_to_geodataframe(
    results: Iterable[Union[GeocodeResult, AddressCandidate]],
    to_crs: str = WGS84,
) -> gpd.GeoDataFrame:
    records: List[Dict[str, Any]] = []
    geometry: List[Point] = []
    for res in results:
        row: Dict[str, Any] = {
            "id": res.id if isinstance(res, GeocodeResult) else None,
            "address": res.address,
            "score": res.score,
        }
        records.append(row)
        loc = to_projected(res.location)
        geometry.append(Point(loc.x, loc.y))
    if not records:
        return gpd.GeoDataFrame({col: [] for col in _COLUMNS}, geometry=gpd.GeoSeries([]), crs=to_crs)
    gdf = gpd.GeoDataFrame(records, columns=list(_COLUMNS), geometry=geometry, crs=WEB_MERCATOR)
    return gdf.to_crs(to_crs)
