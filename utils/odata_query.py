"""
Translation of the OData-style query options accepted by ``GET /Countries``.

Supported options:
  $filter   one or more ``<field> eq '<value>'`` clauses over
            name / isoCode / entityId, combined with AND
  $orderby  ``field[ asc|desc][, field[ asc|desc]]...``
  $skip     number of matches to skip
  $top      maximum number of matches to return
  $count    ``true`` to wrap the page with the number of matches

The filter reader is substring based: markers are located anywhere in the
string and the value runs to the next single quote. Only the first occurrence
of each marker is read and other field names are ignored. Keep callers on
``translate_query`` so a tokenizing parser can replace this one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from middleware.errors import InvalidQueryError

QUERY_OPTIONS = ("$filter", "$orderby", "$skip", "$top", "$count")

FILTER_MARKERS: Dict[str, str] = {
    "name": "name eq '",
    "isoCode": "isoCode eq '",
    "entityId": "entityId eq '",
}

_DESC_SUFFIX = " desc"
_ASC_SUFFIX = " asc"

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class CountryQuery:
    """Database-ready form of the query options."""

    filter: Dict[str, str] = field(default_factory=dict)
    sort: List[Tuple[str, int]] = field(default_factory=list)
    skip: int = 0
    top: Optional[int] = None
    count: bool = False

    @property
    def returns_nothing(self) -> bool:
        """Non-positive ``$top`` selects an empty page."""
        return self.top is not None and self.top <= 0


def has_query_options(args: Mapping[str, str]) -> bool:
    return any(option in args for option in QUERY_OPTIONS)


def parse_filter(raw: Optional[str]) -> Dict[str, str]:
    """Return the equality predicates found in ``raw`` (implicitly ANDed)."""
    predicates: Dict[str, str] = {}
    if not raw:
        return predicates

    for field_name, marker in FILTER_MARKERS.items():
        start = raw.find(marker)
        if start == -1:
            continue
        value_start = start + len(marker)
        value_end = raw.find("'", value_start)
        if value_end == -1:
            raise InvalidQueryError(
                f"Unterminated value for '{field_name}' in $filter",
                details={"$filter": raw, "field": field_name},
            )
        predicates[field_name] = raw[value_start:value_end]

    return predicates


def parse_orderby(raw: Optional[str]) -> List[Tuple[str, int]]:
    """Return ``(field, direction)`` sort keys, highest precedence first."""
    sort: List[Tuple[str, int]] = []
    if not raw:
        return sort

    seen = set()
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue

        lowered = item.lower()
        if lowered.endswith(_DESC_SUFFIX):
            name, direction = item[: -len(_DESC_SUFFIX)].strip(), DESCENDING
        elif lowered.endswith(_ASC_SUFFIX):
            name, direction = item[: -len(_ASC_SUFFIX)].strip(), ASCENDING
        else:
            name, direction = item, ASCENDING

        # A sort specification cannot name the same key twice
        if not name or name in seen:
            continue
        seen.add(name)
        sort.append((name, direction))

    return sort


def _parse_int(option: str, raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise InvalidQueryError(
            f"{option} must be an integer", details={option: raw}
        ) from exc
    # skip/limit travel as BSON int64
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise InvalidQueryError(
            f"{option} is out of range", details={option: raw}
        )
    return value


def parse_count(raw: Optional[str]) -> bool:
    if raw is None or not raw.strip():
        return False
    normalized = raw.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise InvalidQueryError("$count must be 'true' or 'false'", details={"$count": raw})


def translate_query(args: Mapping[str, str]) -> CountryQuery:
    """Build a ``CountryQuery`` from raw request arguments."""
    skip = _parse_int("$skip", args.get("$skip")) or 0
    return CountryQuery(
        filter=parse_filter(args.get("$filter")),
        sort=parse_orderby(args.get("$orderby")),
        skip=max(skip, 0),
        top=_parse_int("$top", args.get("$top")),
        count=parse_count(args.get("$count")),
    )
