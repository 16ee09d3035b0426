"""
Query string translation.

Turns the raw query parameters of a list request into a QueryPlan. Only
the operators in QUERY_OPERATORS ever become storage operators; every
other key is a literal equality filter, and names that would be read as
storage directives (a leading `$`) are dropped.
"""

import logging
import re
from typing import Any, Mapping, Optional

from .models import (
    ComparisonOperator,
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT,
    FilterPredicate,
    MAX_SKIP,
    QUERY_OPERATORS,
    QueryPlan,
    RESERVED_KEYS,
    SortDirection,
    SortKey,
)

logger = logging.getLogger(__name__)

_OPERATOR_KEY = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<operator>[^\[\]]*)\]$")
_INTEGER = re.compile(r"^-?\d+$")
_DECIMAL = re.compile(r"^-?\d+\.\d+$")

_OPERATORS_BY_TOKEN = {operator.value: operator for operator in QUERY_OPERATORS}


def is_safe_field(name: str) -> bool:
    """Whether a client-supplied field name may reach the storage layer."""
    return bool(name) and not name.startswith("$") and "\x00" not in name


def coerce_value(raw: str) -> Any:
    """
    Convert a query string value to the type it spells.

    `true`/`false` become booleans, integer and decimal literals become
    numbers, anything else is returned unchanged.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    if _INTEGER.match(raw):
        return int(raw)
    if _DECIMAL.match(raw):
        return float(raw)
    return raw


def parse_filter(key: str, raw: str) -> Optional[FilterPredicate]:
    """
    Translate one query parameter into a predicate.

    Returns None when the field name is unsafe.
    """
    field = key
    operator = ComparisonOperator.EQ

    match = _OPERATOR_KEY.match(key)
    if match:
        field = match.group("field")
        operator = _OPERATORS_BY_TOKEN.get(match.group("operator"), ComparisonOperator.EQ)

    field = field.strip()
    if not is_safe_field(field):
        logger.debug("Dropping filter on unsafe field %r", key)
        return None

    if operator is ComparisonOperator.IN:
        value: Any = [coerce_value(item.strip()) for item in raw.split(",") if item.strip()]
    else:
        value = coerce_value(raw)

    return FilterPredicate(field=field, operator=operator, value=value)


def parse_filters(
    params: Mapping[str, str],
    reserved: frozenset[str] = RESERVED_KEYS,
) -> tuple[FilterPredicate, ...]:
    predicates = []
    for key, raw in params.items():
        if key in reserved:
            continue
        predicate = parse_filter(key, raw)
        if predicate is not None:
            predicates.append(predicate)
    return tuple(predicates)


def _split_fields(raw: str) -> list[str]:
    return [name.strip() for name in raw.split(",") if name.strip()]


def parse_select(raw: Optional[str]) -> Optional[tuple[str, ...]]:
    """`name,description` becomes an inclusion projection."""
    if not raw:
        return None
    fields = tuple(name for name in _split_fields(raw) if is_safe_field(name))
    return fields or None


def parse_sort(raw: Optional[str]) -> tuple[SortKey, ...]:
    """
    `-createdAt,name` becomes ordered sort keys.

    A leading `-` sorts that field descending. Without usable keys the
    plan's default (newest first) applies.
    """
    keys = []
    for name in _split_fields(raw or ""):
        direction = SortDirection.ASCENDING
        if name.startswith("-"):
            direction = SortDirection.DESCENDING
            name = name[1:].strip()
        if is_safe_field(name):
            keys.append(SortKey(field=name, direction=direction))

    if not keys:
        return DEFAULT_SORT
    return tuple(keys)


def parse_positive_int(raw: Optional[str], default: int, maximum: int = MAX_SKIP) -> int:
    """Parse a positive integer, falling back to the default on bad input."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if 1 <= value <= maximum else default


def translate_query(
    params: Mapping[str, str],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
    reserved: frozenset[str] = RESERVED_KEYS,
) -> QueryPlan:
    """
    Build a QueryPlan from raw query parameters.

    Args:
        params: Query string keys mapped to their (last) values
        default_limit: Page size when `limit` is absent or invalid
        max_limit: Upper bound applied to `limit`, if any
        reserved: Control keys excluded from filtering

    Returns:
        QueryPlan with page >= 1, 1 <= limit <= max_limit and a skip
        the storage layer can encode
    """
    page = parse_positive_int(params.get("page"), DEFAULT_PAGE)
    limit = parse_positive_int(params.get("limit"), default_limit)
    if max_limit is not None:
        limit = min(limit, max_limit)
    if (page - 1) * limit > MAX_SKIP:
        logger.debug("Page %d is out of range, using page %d", page, DEFAULT_PAGE)
        page = DEFAULT_PAGE

    return QueryPlan(
        filters=parse_filters(params, reserved),
        projection=parse_select(params.get("select")),
        sort=parse_sort(params.get("sort")),
        page=page,
        limit=limit,
    )
