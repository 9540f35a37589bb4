"""Fraud detection rule schemas.

Rules are stored and returned with camelCase keys (``filterConnectors``,
``reAlertDays``, ``createdAt``); snake_case field names are accepted on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from txn_explorer.domain.operators import Connector
from txn_explorer.domain.rules import (
    DEFAULT_RE_ALERT_DAYS,
    MAX_RE_ALERT_DAYS,
    MIN_RE_ALERT_DAYS,
    AlertAction,
    ComparisonKind,
    Frequency,
    PredicateChain,
)


def _stringify(value: Any) -> Any:
    """Accept numbers where the stored form is a string."""
    if value is None:
        return ""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class RuleSchemaBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PredicateFilter(RuleSchemaBase):
    """A single column/operator/value test. Blank fields are allowed in drafts."""

    column: str = ""
    operator: str = ""
    value: str = ""

    @field_validator("column", "operator", "value", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        return _stringify(v)


class Threshold(RuleSchemaBase):
    operator: ComparisonKind = ComparisonKind.GREATER_THAN
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        return _stringify(v)


class RuleSettings(RuleSchemaBase):
    re_alert_days: int = Field(
        default=DEFAULT_RE_ALERT_DAYS,
        ge=MIN_RE_ALERT_DAYS,
        le=MAX_RE_ALERT_DAYS,
        description="Days before the same rule may alert again",
    )
    frequency: Frequency = Frequency.DAILY
    action: AlertAction = AlertAction.EMAIL_NOTIFICATION


class RuleDraft(RuleSchemaBase):
    """Rule content as authored in the editor, before an id is assigned."""

    name: str = ""
    category: str = ""
    description: str = ""
    filters: list[PredicateFilter] = Field(default_factory=lambda: [PredicateFilter()])
    filter_connectors: list[Connector] = Field(default_factory=list)
    threshold: Threshold = Field(default_factory=Threshold)
    settings: RuleSettings = Field(default_factory=RuleSettings)
    active: bool = True

    @model_validator(mode="after")
    def check_connector_count(self) -> "RuleDraft":
        expected = max(len(self.filters) - 1, 0)
        if len(self.filter_connectors) != expected:
            raise ValueError(
                f"filterConnectors must have {expected} entries for "
                f"{len(self.filters)} filters, got {len(self.filter_connectors)}"
            )
        return self

    def chain(self) -> PredicateChain:
        return PredicateChain.from_parallel(self.filters, self.filter_connectors)

    def with_chain(self, chain: PredicateChain) -> "RuleDraft":
        """Copy of this draft whose filters and connectors come from ``chain``."""
        return self.model_copy(
            update={
                "filters": [
                    PredicateFilter(column=p.column, operator=p.operator, value=p.value)
                    for p in chain.filters
                ],
                "filter_connectors": chain.connectors,
            }
        )


class Rule(RuleDraft):
    """A persisted rule."""

    id: str
    created_at: str
    updated_at: str


class RuleListResponse(BaseModel):
    items: list[Rule]
    total: int


class RuleValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str]


class OptionItem(BaseModel):
    value: str
    label: str


class RuleOptionsResponse(BaseModel):
    """Choices the rule editor offers."""

    categories: list[str]
    threshold_operators: list[OptionItem]
    frequencies: list[OptionItem]
    actions: list[OptionItem]
    re_alert_days_min: int
    re_alert_days_max: int


class ColumnOperatorsResponse(BaseModel):
    column: str
    column_type: str
    input_type: str
    operators: list[OptionItem]
