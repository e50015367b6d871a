from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence, Union

Columns = Union[str, Sequence[str]]

# Serialisation order of the clauses
_CLAUSES = (
    ("select", "$select"),
    ("where", "$where"),
    ("group", "$group"),
    ("order", "$order"),
    ("q", "$q"),
    ("limit", "$limit"),
    ("offset", "$offset"),
)


def _join(value: Columns) -> str:
    if isinstance(value, str):
        return value
    return ",".join(value)


def _whole(value: Any, clause: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{clause} must be an integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class SoQLQuery:
    """Optional SoQL clauses for one request. Unset clauses are omitted."""

    select: Optional[Columns] = None
    where: Optional[str] = None
    group: Optional[Columns] = None
    order: Optional[Columns] = None
    q: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        if self.limit is not None:
            object.__setattr__(self, "limit", _whole(self.limit, "$limit"))
            if self.limit <= 0:
                raise ValueError(f"$limit must be a positive integer, got {self.limit!r}")
        if self.offset is not None:
            object.__setattr__(self, "offset", _whole(self.offset, "$offset"))
            if self.offset < 0:
                raise ValueError(f"$offset must be a non-negative integer, got {self.offset!r}")

    def replace(self, **changes: Any) -> SoQLQuery:
        return dataclasses.replace(self, **changes)

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for attr, key in _CLAUSES:
            value = getattr(self, attr)
            if value is None or (not isinstance(value, int) and len(value) == 0):
                continue
            if attr in ("select", "group", "order"):
                params[key] = _join(value)
            else:
                params[key] = str(value)
        return params


def quote(value: Any) -> str:
    """Render a Python value as a SoQL literal, e.g. for a $where clause."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, datetime):
        return f"'{value.replace(tzinfo=None).isoformat()}'"
    if isinstance(value, date):
        return f"'{value.isoformat()}'"
    text = str(value).replace("'", "''")
    return f"'{text}'"
