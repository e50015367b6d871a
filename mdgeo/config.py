import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

DEFAULT_GEOCODE_URL = "https://geodata.md.gov/imap/rest/services/GeocodeServices/MD_CompositeLocator/GeocodeServer"
DEFAULT_OPENDATA_DOMAIN = "opendata.maryland.gov"
APP_TOKEN_ENV = "SOCRATA_APP_TOKEN"


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    load_dotenv()
    cfg: Dict[str, Any] = {}
    if path is not None:
        cfg_path = Path(path).resolve()
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config not found: {cfg_path}")
        with cfg_path.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"Config must be a mapping: {cfg_path}")

    cfg.setdefault("geocode", {})
    cfg.setdefault("opendata", {})
    geocode = cfg["geocode"] or {}
    opendata = cfg["opendata"] or {}
    cfg["geocode"], cfg["opendata"] = geocode, opendata

    geocode.setdefault("base_url", DEFAULT_GEOCODE_URL)
    geocode.setdefault("timeout", 30)
    geocode.setdefault("retries", 0)

    opendata.setdefault("domain", DEFAULT_OPENDATA_DOMAIN)
    opendata.setdefault("timeout", 90)
    opendata.setdefault("retries", 0)
    opendata.setdefault("page_size", 50000)
    if not opendata.get("app_token"):
        opendata["app_token"] = get_app_token()

    for section in ("geocode", "opendata"):
        if float(cfg[section]["timeout"]) <= 0:
            raise ValueError(f"{section}.timeout must be positive")
        if int(cfg[section]["retries"]) < 0:
            raise ValueError(f"{section}.retries must not be negative")
    if int(opendata["page_size"]) <= 0:
        raise ValueError("opendata.page_size must be positive")

    return cfg


def get_app_token() -> Optional[str]:
    val = os.getenv(APP_TOKEN_ENV, "").strip()
    return val or None
