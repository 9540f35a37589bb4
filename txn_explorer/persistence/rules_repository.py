"""Rules repository on top of a key-value store.

The whole rule collection lives under a single key and is replaced on every
write; there are no partial updates.
"""

import json
import logging

from pydantic import TypeAdapter

from txn_explorer.core.errors import StorageError
from txn_explorer.persistence.kv_store import KeyValueStore
from txn_explorer.schemas.rules import Rule

logger = logging.getLogger(__name__)

RULES_KEY = "fraudDetectionRules"

_rules_adapter = TypeAdapter(list[Rule])


class RulesRepository:
    """Repository for the persisted fraud detection rules."""

    def __init__(self, store: KeyValueStore, key: str = RULES_KEY):
        self.store = store
        self.key = key

    async def load_rules(self) -> list[Rule]:
        """Load every rule. Any failure is logged and yields an empty list."""
        try:
            raw = await self.store.get(self.key)
            if not raw:
                return []
            return _rules_adapter.validate_json(raw)
        except Exception as exc:
            logger.error(
                "Loading rules failed",
                extra={"key": self.key, "error": str(exc)},
            )
            return []

    async def save_rules(self, rules: list[Rule]) -> None:
        """Replace the stored collection with ``rules``."""
        try:
            payload = json.dumps(
                [rule.model_dump(mode="json", by_alias=True) for rule in rules]
            )
            await self.store.set(self.key, payload)
        except Exception as exc:
            logger.error(
                "Saving rules failed",
                extra={"key": self.key, "count": len(rules), "error": str(exc)},
            )
            raise StorageError("Failed to save rules to storage", original_error=exc) from exc
