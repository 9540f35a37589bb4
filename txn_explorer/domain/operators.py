"""Predicate operator vocabulary and column type inference."""

import re
from enum import Enum


class Operator(str, Enum):
    """Column-level predicate operators."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"


class Connector(str, Enum):
    """Joins two adjacent predicates in a chain."""

    AND = "AND"
    OR = "OR"


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"


OPERATOR_LABELS: dict[Operator, str] = {
    Operator.EQUALS: "equals",
    Operator.NOT_EQUALS: "does not equal",
    Operator.CONTAINS: "contains",
    Operator.NOT_CONTAINS: "does not contain",
    Operator.STARTS_WITH: "starts with",
    Operator.ENDS_WITH: "ends with",
    Operator.GREATER_THAN: "is greater than",
    Operator.LESS_THAN: "is less than",
    Operator.GREATER_EQUAL: "is greater than or equal to",
    Operator.LESS_EQUAL: "is less than or equal to",
    Operator.IS_EMPTY: "is empty",
    Operator.IS_NOT_EMPTY: "is not empty",
}

EMPTINESS_OPERATORS = frozenset({Operator.IS_EMPTY, Operator.IS_NOT_EMPTY})

NUMERIC_OPERATORS: tuple[Operator, ...] = (
    Operator.EQUALS,
    Operator.NOT_EQUALS,
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
    Operator.GREATER_EQUAL,
    Operator.LESS_EQUAL,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
)

TEXT_OPERATORS: tuple[Operator, ...] = (
    Operator.EQUALS,
    Operator.NOT_EQUALS,
    Operator.CONTAINS,
    Operator.NOT_CONTAINS,
    Operator.STARTS_WITH,
    Operator.ENDS_WITH,
    Operator.IS_EMPTY,
    Operator.IS_NOT_EMPTY,
)

# Known numeric fields of the transaction export
NUMERIC_COLUMNS = frozenset(
    {
        "charged_amount",
        "user_id",
        "transaction_id",
        "merchant_id",
        "sub_merchant_id",
        "mcc",
    }
)


def infer_column_type(column: str) -> ColumnType:
    """Numeric for the known id/amount fields and any column mentioning "amount"."""
    if column in NUMERIC_COLUMNS or "amount" in column:
        return ColumnType.NUMERIC
    return ColumnType.TEXT


def is_numeric_column(column: str) -> bool:
    return infer_column_type(column) is ColumnType.NUMERIC


def available_operators(column: str | None) -> tuple[Operator, ...]:
    """Operators an analyst may pick for ``column``.

    A blank column has not been chosen yet, so every operator is offered.
    """
    if not column:
        return tuple(Operator)
    if is_numeric_column(column):
        return NUMERIC_OPERATORS
    return TEXT_OPERATORS


def parse_operator(value: str | Operator | None) -> Operator | None:
    """Return the operator for ``value``, or None when it is blank or unknown."""
    if isinstance(value, Operator):
        return value
    if not value:
        return None
    try:
        return Operator(value)
    except ValueError:
        return None


def needs_value(operator: str | Operator | None) -> bool:
    parsed = parse_operator(operator)
    return parsed is not None and parsed not in EMPTINESS_OPERATORS


def format_header_name(column: str) -> str:
    """Human-readable label for a column, e.g. ``user_name`` -> ``User Name``."""
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), column.replace("_", " "))
