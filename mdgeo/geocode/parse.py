from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from mdgeo.exceptions import NotFoundError, ParseError, TransportError
from mdgeo.geocode import schema
from mdgeo.models import WEB_MERCATOR, AddressCandidate, GeocodeResult, GeoPoint


logger = logging.getLogger(__name__)

_NOT_FOUND_MARKER = "unable to find address"


def _service_error(body: Any) -> Optional[Dict[str, Any]]:
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"]
    return None


def raise_for_service_error(body: Any, url: str) -> None:
    """ArcGIS reports failures as HTTP 200 with an ``error`` object in the body."""
    err = _service_error(body)
    if err is None:
        return
    details = "; ".join(str(d) for d in err.get("details") or [])
    message = err.get("message") or "service error"
    if details:
        message = f"{message} ({details})"
    raise TransportError(f"{url} reported error {err.get('code')}: {message}", url=url, status_code=err.get("code"))


def _crs_from_body(body: Dict[str, Any]) -> str:
    sr = body.get("spatialReference") or {}
    wkid = sr.get("latestWkid") or sr.get("wkid")
    if wkid is None or wkid in schema.WEB_MERCATOR_WKIDS:
        return WEB_MERCATOR
    return f"EPSG:{wkid}"


def _point(raw: Any, crs: str) -> Optional[GeoPoint]:
    if not isinstance(raw, dict):
        return None
    x, y = raw.get("x"), raw.get("y")
    if x is None or y is None:
        return None
    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        return None
    if math.isnan(x) or math.isnan(y):
        return None
    return GeoPoint(x=x, y=y, crs=crs)


def _require_list(body: Any, key: str, url: str) -> List[Any]:
    if not isinstance(body, dict):
        raise ParseError(f"expected a JSON object, got {type(body).__name__}", url=url)
    items = body.get(key)
    if not isinstance(items, list):
        raise ParseError(f"missing '{key}' array", url=url)
    return items


def parse_locations(body: Any, submitted_ids: Iterable[int], url: str) -> List[GeocodeResult]:
    raise_for_service_error(body, url)
    locations = _require_list(body, "locations", url)
    crs = _crs_from_body(body)
    order = {rid: idx for idx, rid in enumerate(submitted_ids)}

    matched: Dict[int, GeocodeResult] = {}
    for loc in locations:
        if not isinstance(loc, dict):
            raise ParseError("location entry is not an object", url=url)
        attrs = loc.get("attributes") or {}
        try:
            rid = int(attrs.get(schema.RESULT_ID))
        except (TypeError, ValueError):
            logger.debug("Dropping location without a usable %s: %s", schema.RESULT_ID, attrs.get(schema.RESULT_ID))
            continue
        if rid not in order:
            logger.debug("Dropping location for unknown record id %s", rid)
            continue
        point = _point(loc.get("location"), crs)
        if point is None:
            logger.debug("Record %s was not matched", rid)
            continue
        matched[rid] = GeocodeResult(
            id=rid,
            address=loc.get("address") or attrs.get(schema.MATCH_ADDR) or "",
            score=float(loc.get("score") or attrs.get("Score") or 0),
            location=point,
            attributes=attrs,
        )

    unmatched = len(order) - len(matched)
    if unmatched:
        logger.warning("%d of %d records were not matched", unmatched, len(order))
    return sorted(matched.values(), key=lambda res: order[res.id])


def parse_candidates(body: Any, url: str) -> List[AddressCandidate]:
    raise_for_service_error(body, url)
    items = _require_list(body, "candidates", url)
    crs = _crs_from_body(body)

    out: List[AddressCandidate] = []
    for cand in items:
        if not isinstance(cand, dict):
            raise ParseError("candidate entry is not an object", url=url)
        point = _point(cand.get("location"), crs)
        if point is None:
            raise ParseError(f"candidate '{cand.get('address')}' has no location", url=url)
        out.append(
            AddressCandidate(
                address=cand.get("address") or "",
                score=float(cand.get("score") or 0),
                location=point,
                attributes=cand.get("attributes") or {},
            )
        )
    out.sort(key=lambda c: c.score, reverse=True)
    return out


def parse_reverse(body: Any, location: str, radius: Optional[float], url: str) -> AddressCandidate:
    err = _service_error(body)
    if err is not None:
        text = " ".join([str(err.get("message") or "")] + [str(d) for d in err.get("details") or []])
        if _NOT_FOUND_MARKER in text.lower():
            raise NotFoundError(location, radius)
        raise_for_service_error(body, url)
    if not isinstance(body, dict):
        raise ParseError(f"expected a JSON object, got {type(body).__name__}", url=url)

    address = body.get("address")
    if not isinstance(address, dict) or not address:
        raise NotFoundError(location, radius)
    loc = body.get("location") or {}
    crs = WEB_MERCATOR
    if isinstance(loc, dict) and loc.get("spatialReference"):
        crs = _crs_from_body(loc)
    point = _point(loc, crs)
    if point is None:
        raise ParseError("reverse geocode match has no location", url=url)
    return AddressCandidate(
        address=address.get(schema.MATCH_ADDR) or address.get(schema.ADDRESS) or "",
        score=None,
        location=point,
        attributes=address,
    )
