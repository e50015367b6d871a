from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from mdgeo.exceptions import ParseError, TransportError


logger = logging.getLogger(__name__)


def build_session(retries: int = 0, backoff: float = 0.5) -> requests.Session:
    retry = Retry(
        total=retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "POST"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _error_detail(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text.strip()[:200]
    if isinstance(body, dict):
        # Socrata puts the reason in "message", ArcGIS under "error"
        if body.get("message"):
            return str(body["message"])
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return r.text.strip()[:200]


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    timeout: float,
    params: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    logger.debug("%s %s params=%s", method, url, params)
    try:
        r = session.request(method, url, params=params, data=data, headers=headers, timeout=timeout)
    except requests.Timeout as exc:
        raise TransportError(f"Request to {url} timed out after {timeout}s", url=url) from exc
    except requests.RequestException as exc:
        raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

    try:
        r.raise_for_status()
    except requests.HTTPError as exc:
        raise TransportError(
            f"{method} {url} returned HTTP {r.status_code}: {_error_detail(r)}",
            url=url,
            status_code=r.status_code,
        ) from exc

    text = r.text.strip()
    if not text:
        raise ParseError("empty response body", url=url)
    try:
        return r.json()
    except ValueError as exc:
        raise ParseError(f"invalid JSON: {text[:200]}", url=url) from exc
