"""API routes for fraud detection rules."""

from fastapi import APIRouter, Depends, Query, status

from txn_explorer.core.dependencies import RulesServiceDep, require_authenticated
from txn_explorer.domain.operators import (
    OPERATOR_LABELS,
    available_operators,
    infer_column_type,
    is_numeric_column,
)
from txn_explorer.domain.rules import (
    ACTION_LABELS,
    COMPARISON_LABELS,
    FREQUENCY_LABELS,
    MAX_RE_ALERT_DAYS,
    MIN_RE_ALERT_DAYS,
    RULE_CATEGORIES,
)
from txn_explorer.schemas.rules import (
    ColumnOperatorsResponse,
    Rule,
    RuleDraft,
    RuleListResponse,
    RuleOptionsResponse,
    RuleValidationResponse,
)

router = APIRouter(
    prefix="/rules",
    tags=["rules"],
    dependencies=[Depends(require_authenticated)],
)


@router.get("", response_model=RuleListResponse)
async def list_rules(rules_service: RulesServiceDep) -> dict:
    rules = await rules_service.list_rules()
    return {"items": rules, "total": len(rules)}


@router.get("/options", response_model=RuleOptionsResponse)
async def get_rule_options() -> dict:
    """Choices offered by the rule editor."""
    return {
        "categories": list(RULE_CATEGORIES),
        "threshold_operators": [
            {"value": kind.value, "label": label} for kind, label in COMPARISON_LABELS.items()
        ],
        "frequencies": [
            {"value": kind.value, "label": label} for kind, label in FREQUENCY_LABELS.items()
        ],
        "actions": [{"value": kind.value, "label": label} for kind, label in ACTION_LABELS.items()],
        "re_alert_days_min": MIN_RE_ALERT_DAYS,
        "re_alert_days_max": MAX_RE_ALERT_DAYS,
    }


@router.get("/operators", response_model=ColumnOperatorsResponse)
async def get_column_operators(column: str = Query("", description="Column name")) -> dict:
    """Operators available for a column, based on its inferred type.

    Leave ``column`` blank to list every operator.
    """
    return {
        "column": column,
        "column_type": infer_column_type(column).value,
        "input_type": "number" if column and is_numeric_column(column) else "text",
        "operators": [
            {"value": operator.value, "label": OPERATOR_LABELS[operator]}
            for operator in available_operators(column)
        ],
    }


@router.post("/validate", response_model=RuleValidationResponse)
async def validate_rule(draft: RuleDraft, rules_service: RulesServiceDep) -> dict:
    """Check a draft without saving it."""
    result = rules_service.validate(draft)
    return {"valid": result.valid, "errors": result.errors}


@router.post("", response_model=Rule, status_code=status.HTTP_201_CREATED)
async def create_rule(draft: RuleDraft, rules_service: RulesServiceDep) -> Rule:
    """Create a rule. Incomplete drafts are rejected with the field errors."""
    return await rules_service.create_rule(draft)


@router.get("/{rule_id}", response_model=Rule)
async def get_rule(rule_id: str, rules_service: RulesServiceDep) -> Rule:
    return await rules_service.get_rule(rule_id)


@router.put("/{rule_id}", response_model=Rule)
async def update_rule(rule_id: str, draft: RuleDraft, rules_service: RulesServiceDep) -> Rule:
    return await rules_service.update_rule(rule_id, draft)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(rule_id: str, rules_service: RulesServiceDep) -> None:
    await rules_service.delete_rule(rule_id)


@router.post(
    "/{rule_id}/duplicate",
    response_model=Rule,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_rule(rule_id: str, rules_service: RulesServiceDep) -> Rule:
    """Copy a rule under a new id with " (Copy)" appended to its name."""
    return await rules_service.duplicate_rule(rule_id)
