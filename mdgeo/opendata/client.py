"""Client for Socrata (SODA) open data resource endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
import requests

from mdgeo.config import DEFAULT_OPENDATA_DOMAIN, get_app_token
from mdgeo.exceptions import ParseError
from mdgeo.io.http import build_session, request_json
from mdgeo.opendata.soql import SoQLQuery


logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def resource_endpoint(domain: str, dataset_id: str) -> str:
    return f"https://{domain}/resource/{dataset_id}"


def _json_url(endpoint: str) -> str:
    if "?" in endpoint:
        raise ValueError(f"Endpoint must not carry a query string, pass clauses instead: {endpoint}")
    endpoint = endpoint.rstrip("/")
    if endpoint.endswith(".json"):
        return endpoint
    return f"{endpoint}.json"


class OpenDataClient:
    """
    Queries Socrata resource endpoints with SoQL parameters.

    Rows come back exactly as the API sends them: a list of
    column -> value mappings with no schema validation or type
    coercion. The optional app token is sent as X-App-Token on each
    request, so a shared session never carries it.
    """

    def __init__(
        self,
        app_token: Optional[str] = None,
        timeout: float = 90,
        retries: int = 0,
        session: Optional[requests.Session] = None,
        domain: str = DEFAULT_OPENDATA_DOMAIN,
        page_size: int = 50000,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.timeout = timeout
        self.domain = domain
        self.page_size = page_size
        self.app_token = (app_token or "").strip() or None
        self._owns_session = session is None
        self.session = session or build_session(retries=retries)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], session: Optional[requests.Session] = None) -> OpenDataClient:
        od = cfg["opendata"]
        return cls(
            app_token=od.get("app_token") or get_app_token(),
            timeout=float(od["timeout"]),
            retries=int(od["retries"]),
            session=session,
            domain=od.get("domain") or DEFAULT_OPENDATA_DOMAIN,
            page_size=int(od.get("page_size") or 50000),
        )

    # ── Public API ────────────────────────────────────────────────

    def endpoint(self, dataset_id: str) -> str:
        return resource_endpoint(self.domain, dataset_id)

    def build_url(self, endpoint: str, clauses: Optional[SoQLQuery] = None) -> str:
        params = clauses.to_params() if clauses else {}
        return requests.Request("GET", _json_url(endpoint), params=params).prepare().url

    def query(self, endpoint: str, clauses: Optional[SoQLQuery] = None) -> List[Row]:
        """
        Run one SoQL query and return its rows.

        An empty list means nothing matched. Raises TransportError on
        network failure or non-2xx status, ParseError if the body is not
        a JSON array of objects.
        """
        url = self.build_url(endpoint, clauses)
        headers = {"X-App-Token": self.app_token} if self.app_token else {}
        body = request_json(self.session, "GET", url, self.timeout, headers=headers)
        if not isinstance(body, list):
            raise ParseError(f"expected a JSON array of rows, got {type(body).__name__}", url=url)
        for row in body:
            if not isinstance(row, dict):
                raise ParseError(f"row is not an object: {row!r}"[:200], url=url)
        logger.debug("%d rows from %s", len(body), url)
        return body

    def iter_pages(
        self, endpoint: str, clauses: Optional[SoQLQuery] = None, page_size: Optional[int] = None
    ) -> Iterator[List[Row]]:
        """Yield pages of rows via $limit/$offset; a set limit caps the total."""
        if page_size is None:
            page_size = self.page_size
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        base = clauses or SoQLQuery()
        cap = base.limit
        offset = base.offset or 0
        fetched = 0
        while cap is None or fetched < cap:
            limit = page_size if cap is None else min(page_size, cap - fetched)
            rows = self.query(endpoint, base.replace(limit=limit, offset=offset))
            if not rows:
                break
            yield rows
            fetched += len(rows)
            offset += len(rows)
            if len(rows) < limit:
                break
        logger.info("Fetched %d rows from %s", fetched, _json_url(endpoint))

    def query_all(
        self, endpoint: str, clauses: Optional[SoQLQuery] = None, page_size: Optional[int] = None
    ) -> List[Row]:
        rows: List[Row] = []
        for page in self.iter_pages(endpoint, clauses, page_size):
            rows.extend(page)
        return rows

    def query_frame(self, endpoint: str, clauses: Optional[SoQLQuery] = None) -> pd.DataFrame:
        rows = self.query(endpoint, clauses)
        if not rows:
            return pd.DataFrame()
        return pd.DataFrame(rows, dtype=object)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> OpenDataClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
