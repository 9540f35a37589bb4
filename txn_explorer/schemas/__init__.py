"""Schemas package for request/response models."""

from txn_explorer.schemas.auth import AuthStatusResponse, LoginRequest
from txn_explorer.schemas.rules import (
    ColumnOperatorsResponse,
    OptionItem,
    PredicateFilter,
    Rule,
    RuleDraft,
    RuleListResponse,
    RuleOptionsResponse,
    RuleSettings,
    RuleValidationResponse,
    Threshold,
)
from txn_explorer.schemas.transactions import (
    ActiveFilters,
    ColumnInfo,
    ColumnListResponse,
    FilterUpdateRequest,
    PageRequest,
    QuickFilterRequest,
    ReloadResponse,
    SortInfo,
    SortRequest,
    StatsDetailResponse,
    StatsResponse,
    TransactionPageResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "AuthStatusResponse",
    # Transactions
    "TransactionPageResponse",
    "SortInfo",
    "ActiveFilters",
    "StatsResponse",
    "StatsDetailResponse",
    "ColumnInfo",
    "ColumnListResponse",
    "ReloadResponse",
    "FilterUpdateRequest",
    "QuickFilterRequest",
    "SortRequest",
    "PageRequest",
    # Rules
    "PredicateFilter",
    "Threshold",
    "RuleSettings",
    "RuleDraft",
    "Rule",
    "RuleListResponse",
    "RuleValidationResponse",
    "OptionItem",
    "RuleOptionsResponse",
    "ColumnOperatorsResponse",
]
