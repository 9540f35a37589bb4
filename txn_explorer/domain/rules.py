"""Fraud detection rule model: predicate chains, editor operations, validation.

A rule's logic is a chain of predicates joined by AND/OR connectors. Inside
the domain the chain is a sequence of links where each link owns the
connector to its successor and the last link owns none, so the
"one connector fewer than filters" invariant holds by construction. The
parallel ``filters`` / ``filter_connectors`` arrays only exist at the
storage and API boundary.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from txn_explorer.domain.filtering import Predicate, PredicateLike, evaluate_chain
from txn_explorer.domain.operators import (
    Connector,
    available_operators,
    needs_value,
    parse_operator,
)
from txn_explorer.domain.records import Record
from txn_explorer.domain.values import is_numeric

CUSTOM_CATEGORY = "Custom"

RULE_CATEGORIES: tuple[str, ...] = (
    "Transaction Amount",
    "Merchant Analysis",
    "Location Based",
    "User Behavior",
    "Payment Method",
    "Time Based",
    CUSTOM_CATEGORY,
)


class ComparisonKind(str, Enum):
    """Threshold comparison."""

    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EQUALS = "equals"
    GREATER_EQUAL = "greater_equal"
    LESS_EQUAL = "less_equal"


class Frequency(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class AlertAction(str, Enum):
    EMAIL_NOTIFICATION = "email_notification"


COMPARISON_LABELS: dict[ComparisonKind, str] = {
    ComparisonKind.GREATER_THAN: "Greater than",
    ComparisonKind.LESS_THAN: "Less than",
    ComparisonKind.EQUALS: "Equals",
    ComparisonKind.GREATER_EQUAL: "Greater than or equal to",
    ComparisonKind.LESS_EQUAL: "Less than or equal to",
}

FREQUENCY_LABELS: dict[Frequency, str] = {
    Frequency.HOURLY: "Hourly",
    Frequency.DAILY: "Daily",
    Frequency.WEEKLY: "Weekly",
}

ACTION_LABELS: dict[AlertAction, str] = {
    AlertAction.EMAIL_NOTIFICATION: "Send an email notification",
}

DEFAULT_RE_ALERT_DAYS = 7
MIN_RE_ALERT_DAYS = 1
MAX_RE_ALERT_DAYS = 30
COPY_SUFFIX = " (Copy)"


@dataclass(frozen=True)
class ChainLink:
    predicate: Predicate
    next_connector: Connector | None = None


@dataclass(frozen=True)
class PredicateChain:
    """Immutable predicate chain; every editor operation returns a new chain."""

    links: tuple[ChainLink, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for link in self.links[:-1]:
            if link.next_connector is None:
                raise ValueError("Only the last predicate of a chain may omit its connector")
        if self.links and self.links[-1].next_connector is not None:
            raise ValueError("The last predicate of a chain cannot carry a connector")

    @classmethod
    def blank(cls) -> "PredicateChain":
        """A new rule starts with one empty predicate."""
        return cls((ChainLink(Predicate()),))

    @classmethod
    def from_parallel(
        cls,
        filters: Sequence[PredicateLike],
        connectors: Sequence[str | Connector],
    ) -> "PredicateChain":
        if len(connectors) != max(len(filters) - 1, 0):
            raise ValueError(
                f"Expected {max(len(filters) - 1, 0)} connectors for {len(filters)} filters, "
                f"got {len(connectors)}"
            )
        links = []
        for index, item in enumerate(filters):
            connector = Connector(connectors[index]) if index < len(connectors) else None
            predicate = Predicate(
                column=item.column or "",
                operator=str(getattr(item.operator, "value", item.operator) or ""),
                value=item.value or "",
            )
            links.append(ChainLink(predicate, connector))
        return cls(tuple(links))

    @property
    def filters(self) -> list[Predicate]:
        return [link.predicate for link in self.links]

    @property
    def connectors(self) -> list[Connector]:
        return [link.next_connector for link in self.links if link.next_connector is not None]

    def __len__(self) -> int:
        return len(self.links)

    def add_blank(self) -> "PredicateChain":
        """Append an empty predicate joined to the previous one with AND."""
        if not self.links:
            return PredicateChain.blank()
        *head, last = self.links
        return PredicateChain(
            (
                *head,
                ChainLink(last.predicate, Connector.AND),
                ChainLink(Predicate()),
            )
        )

    def update(self, index: int, predicate: Predicate) -> "PredicateChain":
        link = self.links[index]
        links = list(self.links)
        links[index] = ChainLink(predicate, link.next_connector)
        return PredicateChain(tuple(links))

    def set_connector(self, index: int, connector: Connector | str) -> "PredicateChain":
        """Set the connector between predicate ``index`` and ``index + 1``."""
        if not 0 <= index < len(self.links) - 1:
            raise IndexError(f"No connector at index {index}")
        links = list(self.links)
        links[index] = ChainLink(links[index].predicate, Connector(connector))
        return PredicateChain(tuple(links))

    def remove(self, index: int) -> "PredicateChain":
        """Drop predicate ``index`` together with exactly one connector.

        A predicate takes its outgoing connector with it; the last predicate
        has none, so removing it drops the connector leading into it. The
        only remaining predicate cannot be removed.
        """
        if len(self.links) <= 1:
            return self
        if not 0 <= index < len(self.links):
            raise IndexError(f"No predicate at index {index}")
        links = [link for position, link in enumerate(self.links) if position != index]
        last = links[-1]
        links[-1] = ChainLink(last.predicate)
        return PredicateChain(tuple(links))

    def matches(self, record: Record) -> bool:
        return evaluate_chain(record, self.filters, self.connectors)


class ThresholdLike(Protocol):
    operator: str
    value: str


class RuleDraftLike(Protocol):
    name: str
    category: str
    description: str
    filters: Sequence[PredicateLike]
    threshold: ThresholdLike


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: dict[str, str]


def _filter_error(predicate: PredicateLike) -> str | None:
    column = (predicate.column or "").strip()
    raw_operator = getattr(predicate.operator, "value", predicate.operator)
    if not column or not raw_operator:
        return "All filters must be complete"
    operator = parse_operator(raw_operator)
    if operator is None or operator not in available_operators(column):
        return f"Operator '{raw_operator}' is not available for column '{column}'"
    if needs_value(operator) and not predicate.value:
        return "All filters must be complete"
    return None


def validate_rule(draft: RuleDraftLike) -> ValidationResult:
    """Check a draft is complete enough to save.

    Errors are keyed by field and never raised; the caller decides whether
    an invalid draft blocks the save.
    """
    errors: dict[str, str] = {}

    if not (draft.name or "").strip():
        errors["name"] = "Name is required"

    category = (draft.category or "").strip()
    if not category:
        errors["category"] = "Category is required"
    elif category not in RULE_CATEGORIES:
        errors["category"] = "Unknown category"

    if not (draft.description or "").strip():
        errors["description"] = "Description is required"

    if not draft.filters:
        errors["filters"] = "At least one filter is required"
    else:
        incomplete = "All filters must be complete"
        messages = [message for p in draft.filters if (message := _filter_error(p))]
        if messages:
            errors["filters"] = incomplete if incomplete in messages else messages[0]

    threshold_value = (draft.threshold.value or "").strip()
    if not threshold_value:
        errors["threshold"] = "Threshold value is required"
    elif not is_numeric(threshold_value):
        errors["threshold"] = "Threshold value must be numeric"

    return ValidationResult(valid=not errors, errors=errors)
