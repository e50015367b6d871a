"""Client for the Maryland iMAP composite geocoding service."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from mdgeo.config import DEFAULT_GEOCODE_URL
from mdgeo.geo.crs import to_projected
from mdgeo.geocode import parse, request
from mdgeo.io.http import build_session, request_json
from mdgeo.models import AddressCandidate, AddressRecord, GeocodeResult, GeoPoint, PartialAddress


logger = logging.getLogger(__name__)


class GeocodeClient:
    """
    Stateless wrapper around an ArcGIS GeocodeServer.

    The service works in Web Mercator (EPSG:3857). Points handed to
    reverse_geocode in any other CRS are projected before the request;
    results carry their EPSG:3857 location and can be converted with
    mdgeo.geo.crs.to_geographic.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GEOCODE_URL,
        timeout: float = 30,
        retries: int = 0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or build_session(retries=retries)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], session: Optional[requests.Session] = None) -> GeocodeClient:
        gc = cfg["geocode"]
        return cls(
            base_url=gc["base_url"],
            timeout=float(gc["timeout"]),
            retries=int(gc["retries"]),
            session=session,
        )

    # ── Public API ────────────────────────────────────────────────

    def geocode_batch(self, records: Sequence[AddressRecord]) -> List[GeocodeResult]:
        """
        Geocode a batch of address records in one request.

        Returns matched results in submission order; unmatched records
        are left out, so len(result) <= len(records).
        Raises TransportError, ParseError, or ValueError on duplicate ids.
        """
        if not records:
            return []
        form = request.build_addresses_form(records)
        url = request.operation_url(self.base_url, "batch")
        logger.info("Geocoding %d records", len(records))
        body = request_json(self.session, "POST", url, self.timeout, data=form)
        return parse.parse_locations(body, [rec.id for rec in records], url)

    def reverse_geocode(self, point: GeoPoint, radius: Optional[float] = None) -> AddressCandidate:
        """
        Return the address nearest to *point*.

        *radius* is the search distance in metres; the service default
        applies when omitted. Raises NotFoundError if nothing is in range.
        """
        projected = to_projected(point)
        params = request.build_reverse_params(projected, radius)
        url = request.operation_url(self.base_url, "reverse")
        body = request_json(self.session, "GET", url, self.timeout, params=params)
        return parse.parse_reverse(body, params["location"], radius, url)

    def find_candidates(self, query: PartialAddress, max_results: Optional[int] = None) -> List[AddressCandidate]:
        """Return candidates for a partial address, best score first. May be empty."""
        params = request.build_candidate_params(query, max_results)
        url = request.operation_url(self.base_url, "candidates")
        body = request_json(self.session, "GET", url, self.timeout, params=params)
        candidates = parse.parse_candidates(body, url)
        logger.debug("%d candidates for %s", len(candidates), query)
        return candidates

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> GeocodeClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
