"""Filter engine: the simple table query and rule-style predicate chains."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from txn_explorer.domain.operators import Connector, Operator, parse_operator
from txn_explorer.domain.records import Record
from txn_explorer.domain.values import NumberValue, parse_value

DEFAULT_STATUS_COLUMN = "state"
DEFAULT_FRAUD_COLUMN = "fraud"


@dataclass(frozen=True)
class FilterState:
    """Simple table query. An empty string means no constraint."""

    search_term: str = ""
    status_filter: str = ""
    fraud_filter: str = ""


# Query parameter / quick filter name -> FilterState field
FILTER_FIELDS = {
    "search": "search_term",
    "status": "status_filter",
    "fraud": "fraud_filter",
}


def matches_filters(
    record: Record,
    filters: FilterState,
    status_column: str = DEFAULT_STATUS_COLUMN,
    fraud_column: str = DEFAULT_FRAUD_COLUMN,
) -> bool:
    if filters.search_term:
        term = filters.search_term.lower()
        if not any(term in str(value).lower() for value in record.values()):
            return False
    if filters.status_filter and record.get(status_column) != filters.status_filter:
        return False
    if filters.fraud_filter and record.get(fraud_column) != filters.fraud_filter:
        return False
    return True


def apply_filters(
    records: Iterable[Record],
    filters: FilterState,
    status_column: str = DEFAULT_STATUS_COLUMN,
    fraud_column: str = DEFAULT_FRAUD_COLUMN,
) -> list[Record]:
    """Records matching every non-empty field of ``filters``, in input order."""
    return [
        record
        for record in records
        if matches_filters(record, filters, status_column, fraud_column)
    ]


def update_filter(filters: FilterState, kind: str, value: str) -> FilterState:
    """Set one field, keeping the others. Unknown kinds leave the state unchanged."""
    field = FILTER_FIELDS.get(kind)
    if field is None:
        return filters
    return replace(filters, **{field: value})


def quick_filter(kind: str, value: str = "") -> FilterState:
    """Reset every field, then set exactly one.

    ``clear`` resets everything. ``status`` sets the status filter and any
    other kind sets the fraud filter, mirroring the stat card shortcuts.
    """
    if kind == "clear":
        return FilterState()
    if kind == "status":
        return FilterState(status_filter=value)
    return FilterState(fraud_filter=value)


def active_filters(filters: FilterState) -> dict[str, str]:
    return {kind: getattr(filters, field) for kind, field in FILTER_FIELDS.items()}


class PredicateLike(Protocol):
    column: str
    operator: str
    value: str


@dataclass(frozen=True)
class Predicate:
    """A single column/operator/value test."""

    column: str = ""
    operator: str = ""
    value: str = ""


def evaluate_predicate(record: Record, predicate: PredicateLike) -> bool:
    """Evaluate one predicate. Missing columns read as empty strings."""
    operator = parse_operator(predicate.operator)
    if operator is None:
        return False

    actual = record.get(predicate.column) or ""
    expected = predicate.value or ""

    match operator:
        case Operator.EQUALS:
            return actual == expected
        case Operator.NOT_EQUALS:
            return actual != expected
        case Operator.CONTAINS:
            return expected in actual
        case Operator.NOT_CONTAINS:
            return expected not in actual
        case Operator.STARTS_WITH:
            return actual.startswith(expected)
        case Operator.ENDS_WITH:
            return actual.endswith(expected)
        case Operator.IS_EMPTY:
            return actual == ""
        case Operator.IS_NOT_EMPTY:
            return actual != ""

    left = parse_value(actual)
    right = parse_value(expected)
    if not isinstance(left, NumberValue) or not isinstance(right, NumberValue):
        return False

    match operator:
        case Operator.GREATER_THAN:
            return left.number > right.number
        case Operator.LESS_THAN:
            return left.number < right.number
        case Operator.GREATER_EQUAL:
            return left.number >= right.number
        case Operator.LESS_EQUAL:
            return left.number <= right.number
    return False


def evaluate_chain(
    record: Record,
    filters: Sequence[PredicateLike],
    connectors: Sequence[str | Connector],
) -> bool:
    """Fold predicates left to right; there is no AND-over-OR precedence.

    ``connectors[i - 1]`` joins the running result with ``filters[i]``.
    """
    if not filters:
        return False
    if len(connectors) != len(filters) - 1:
        raise ValueError(
            f"Expected {len(filters) - 1} connectors for {len(filters)} filters, "
            f"got {len(connectors)}"
        )

    result = evaluate_predicate(record, filters[0])
    for connector, predicate in zip(connectors, filters[1:], strict=True):
        matched = evaluate_predicate(record, predicate)
        if connector == Connector.AND:
            result = result and matched
        else:
            result = result or matched
    return result
