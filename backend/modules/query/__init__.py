"""
Query module.

Translates list-endpoint query strings into bounded storage queries and
paginates their results.

Public API:
- translate_query: query parameters -> QueryPlan
- paginate: QueryPlan + collection -> ListEnvelope
- Relation: related documents to inline into a page
"""

from .models import (
    ComparisonOperator,
    DEFAULT_SORT,
    FilterPredicate,
    QueryPlan,
    QUERY_OPERATORS,
    RESERVED_KEYS,
    SortDirection,
    SortKey,
)
from .translator import translate_query, coerce_value
from .paginator import Relation, build_pagination, expand_relations, paginate

__all__ = [
    # Models
    "ComparisonOperator",
    "DEFAULT_SORT",
    "FilterPredicate",
    "QueryPlan",
    "QUERY_OPERATORS",
    "RESERVED_KEYS",
    "SortDirection",
    "SortKey",
    # Translation
    "translate_query",
    "coerce_value",
    # Pagination
    "Relation",
    "build_pagination",
    "expand_relations",
    "paginate",
]
