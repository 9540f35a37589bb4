"""Rules service for fraud detection rule management."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from txn_explorer.core.errors import NotFoundError, ValidationError
from txn_explorer.domain.rules import COPY_SUFFIX, ValidationResult, validate_rule
from txn_explorer.persistence.rules_repository import RulesRepository
from txn_explorer.schemas.rules import Rule, RuleDraft

logger = logging.getLogger(__name__)

_RULE_METADATA = {"id", "created_at", "updated_at"}


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def _new_id() -> str:
    return str(uuid4())


class RulesService:
    """Service for rule create/update/delete/duplicate operations.

    Each write loads the whole collection, applies one change and saves it
    back. If the save fails nothing is applied.
    """

    def __init__(self, repo: RulesRepository):
        self.repo = repo

    def validate(self, draft: RuleDraft) -> ValidationResult:
        return validate_rule(draft)

    def _ensure_valid(self, draft: RuleDraft) -> None:
        result = validate_rule(draft)
        if not result.valid:
            raise ValidationError("Rule is incomplete", details=result.errors)

    async def list_rules(self) -> list[Rule]:
        return await self.repo.load_rules()

    async def get_rule(self, rule_id: str) -> Rule:
        for rule in await self.repo.load_rules():
            if rule.id == rule_id:
                return rule
        raise NotFoundError("Rule not found", details={"rule_id": rule_id})

    async def create_rule(self, draft: RuleDraft) -> Rule:
        """Validate and store a new rule with a fresh id and timestamps."""
        self._ensure_valid(draft)
        now = _now()
        rule = Rule(
            **draft.model_dump(exclude=_RULE_METADATA),
            id=_new_id(),
            created_at=now,
            updated_at=now,
        )
        existing = await self.repo.load_rules()
        await self.repo.save_rules([*existing, rule])
        logger.info("Rule created", extra={"rule_id": rule.id, "rule_name": rule.name})
        return rule

    async def update_rule(self, rule_id: str, draft: RuleDraft) -> Rule:
        """Replace a rule's content. The id and creation time are kept."""
        self._ensure_valid(draft)
        existing = await self.repo.load_rules()
        current = next((rule for rule in existing if rule.id == rule_id), None)
        if current is None:
            raise NotFoundError("Rule not found", details={"rule_id": rule_id})

        updated = Rule(
            **draft.model_dump(exclude=_RULE_METADATA),
            id=rule_id,
            created_at=current.created_at,
            updated_at=_now(),
        )
        await self.repo.save_rules([updated if rule.id == rule_id else rule for rule in existing])
        logger.info("Rule updated", extra={"rule_id": rule_id})
        return updated

    async def delete_rule(self, rule_id: str) -> bool:
        existing = await self.repo.load_rules()
        remaining = [rule for rule in existing if rule.id != rule_id]
        if len(remaining) == len(existing):
            raise NotFoundError("Rule not found", details={"rule_id": rule_id})
        await self.repo.save_rules(remaining)
        logger.info("Rule deleted", extra={"rule_id": rule_id})
        return True

    async def duplicate_rule(self, rule_id: str) -> Rule:
        """Clone a rule under a new id, marking the name as a copy."""
        existing = await self.repo.load_rules()
        source = next((rule for rule in existing if rule.id == rule_id), None)
        if source is None:
            raise NotFoundError("Rule not found", details={"rule_id": rule_id})

        now = _now()
        duplicate = source.model_copy(
            update={
                "id": _new_id(),
                "name": f"{source.name}{COPY_SUFFIX}",
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        await self.repo.save_rules([*existing, duplicate])
        logger.info(
            "Rule duplicated",
            extra={"rule_id": duplicate.id, "source_rule_id": rule_id},
        )
        return duplicate
