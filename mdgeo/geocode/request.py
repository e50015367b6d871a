from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from mdgeo.geocode import schema
from mdgeo.models import WEB_MERCATOR, AddressRecord, GeoPoint, PartialAddress


def _record_attributes(record: AddressRecord) -> Dict[str, Any]:
    attrs: Dict[str, Any] = {schema.OBJECT_ID: record.id}
    if record.single_line:
        attrs[schema.SINGLE_LINE] = record.single_line
    else:
        if record.street:
            attrs[schema.ADDRESS] = record.street
        if record.city:
            attrs[schema.CITY] = record.city
        if record.zip:
            attrs[schema.POSTAL] = record.zip
    return attrs


def build_addresses_form(records: Sequence[AddressRecord]) -> Dict[str, str]:
    seen = set()
    for rec in records:
        if rec.id in seen:
            raise ValueError(f"Duplicate AddressRecord id in batch: {rec.id}")
        seen.add(rec.id)
    payload = {"records": [{"attributes": _record_attributes(rec)} for rec in records]}
    return {
        "addresses": json.dumps(payload),
        "outSR": str(schema.SERVICE["wkid"]),
        "f": "json",
    }


def build_reverse_params(point: GeoPoint, radius: Optional[float] = None) -> Dict[str, str]:
    if point.crs != WEB_MERCATOR:
        raise ValueError(f"reverseGeocode expects {WEB_MERCATOR} coordinates, got {point.crs}")
    params = {
        "location": f"{point.x},{point.y}",
        "outSR": str(schema.SERVICE["wkid"]),
        "f": "json",
    }
    if radius is not None:
        if radius <= 0:
            raise ValueError("radius must be positive")
        radius = float(radius)
        params["distance"] = str(int(radius)) if radius.is_integer() else repr(radius)
    return params


def build_candidate_params(query: PartialAddress, max_results: Optional[int] = None) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if query.single_line:
        params[schema.SINGLE_LINE] = query.single_line
    if query.street:
        params[schema.ADDRESS] = query.street
    if query.city:
        params[schema.CITY] = query.city
    if query.zip:
        params[schema.POSTAL] = query.zip
    if max_results is not None:
        if max_results <= 0:
            raise ValueError("max_results must be positive")
        params["maxLocations"] = str(max_results)
    params["outFields"] = "*"
    params["outSR"] = str(schema.SERVICE["wkid"])
    params["f"] = "json"
    return params


def operation_url(base_url: str, operation: str) -> str:
    return f"{base_url.rstrip('/')}/{schema.SERVICE['operations'][operation]}"
