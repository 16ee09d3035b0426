"""
Query module data models.

A QueryPlan is the normalized, storage-independent form of a list
request: typed filter predicates, an optional projection, ordered sort
keys and positive pagination parameters.
"""

from enum import Enum
from typing import Any, Iterable, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class ComparisonOperator(str, Enum):
    """Operators a filter predicate may carry."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"

    @property
    def storage_token(self) -> str:
        return f"${self.value}"


# Operators a client may name in `field[op]=value`
QUERY_OPERATORS = frozenset(
    {
        ComparisonOperator.GT,
        ComparisonOperator.GTE,
        ComparisonOperator.LT,
        ComparisonOperator.LTE,
        ComparisonOperator.IN,
    }
)

# Control parameters that are never treated as filters
RESERVED_KEYS = frozenset({"select", "sort", "page", "limit"})

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
DEFAULT_SORT_FIELD = "createdAt"

# Largest skip the storage layer can encode (signed 64-bit)
MAX_SKIP = 2**63 - 1


def to_reference(value: Any) -> Any:
    """Cast an id-shaped filter value to the ObjectId it names."""
    if isinstance(value, list):
        return [to_reference(item) for item in value]
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        text = str(value)
        if len(text) == 24 and ObjectId.is_valid(text):
            return ObjectId(text)
    return value


class SortDirection(int, Enum):
    ASCENDING = 1
    DESCENDING = -1


class FilterPredicate(BaseModel):
    """A single `field <operator> value` condition."""

    model_config = ConfigDict(frozen=True)

    field: str
    operator: ComparisonOperator = ComparisonOperator.EQ
    value: Any


class SortKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASCENDING


DEFAULT_SORT = (
    SortKey(field=DEFAULT_SORT_FIELD, direction=SortDirection.DESCENDING),
)


class QueryPlan(BaseModel):
    """
    Normalized list query.

    Page and limit are validated as positive integers, so a plan can never
    describe a negative skip or an unbounded page.
    """

    model_config = ConfigDict(frozen=True)

    filters: tuple[FilterPredicate, ...] = ()
    projection: Optional[tuple[str, ...]] = None
    sort: tuple[SortKey, ...] = DEFAULT_SORT
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end_index(self) -> int:
        return self.page * self.limit

    def to_storage_filter(self, reference_fields: Iterable[str] = ()) -> dict[str, Any]:
        """
        Build the storage filter.

        A lone equality becomes `{field: value}`; anything else on a field
        becomes an operator document built only from ComparisonOperator
        tokens. Values on `_id` and on the given reference fields are cast
        to ObjectIds where they spell one.
        """
        references = {"_id", *reference_fields}
        grouped: dict[str, list[FilterPredicate]] = {}
        for predicate in self.filters:
            if predicate.field in references:
                predicate = predicate.model_copy(update={"value": to_reference(predicate.value)})
            grouped.setdefault(predicate.field, []).append(predicate)

        storage_filter: dict[str, Any] = {}
        for field, predicates in grouped.items():
            if len(predicates) == 1 and predicates[0].operator is ComparisonOperator.EQ:
                storage_filter[field] = predicates[0].value
                continue
            storage_filter[field] = {
                predicate.operator.storage_token: predicate.value
                for predicate in predicates
            }
        return storage_filter

    def to_storage_sort(self) -> list[tuple[str, int]]:
        return [(key.field, key.direction.value) for key in self.sort]
