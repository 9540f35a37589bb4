"""Analyst sign-in gate.

A single configured username/password pair. Being signed in is a flag kept
in the key-value store next to the rules.
"""

import hmac
import logging

from txn_explorer.core.config import AuthConfig
from txn_explorer.core.errors import UnauthorizedError
from txn_explorer.persistence.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

AUTH_KEY = "authStatus"
AUTH_VALUE = "authenticated"


class AuthService:
    def __init__(self, store: KeyValueStore, config: AuthConfig):
        self.store = store
        self.config = config

    def check_credentials(self, username: str, password: str) -> bool:
        """Constant-time comparison on the UTF-8 bytes of both fields."""
        expected_password = self.config.password.get_secret_value()
        username_ok = hmac.compare_digest(username.encode(), self.config.username.encode())
        password_ok = hmac.compare_digest(password.encode(), expected_password.encode())
        return username_ok and password_ok

    async def is_authenticated(self) -> bool:
        """Read the flag. A store failure counts as signed out."""
        try:
            return await self.store.get(AUTH_KEY) == AUTH_VALUE
        except Exception as e:
            logger.error("Checking authentication status failed", extra={"error": str(e)})
            return False

    async def login(self, username: str, password: str) -> bool:
        if not self.check_credentials(username, password):
            logger.warning("Rejected sign-in", extra={"username": username})
            raise UnauthorizedError("Invalid username or password.")
        try:
            await self.store.set(AUTH_KEY, AUTH_VALUE)
        except Exception as e:
            logger.error("Setting authentication status failed", extra={"error": str(e)})
            return False
        logger.info("Analyst signed in", extra={"username": username})
        return True

    async def logout(self) -> bool:
        try:
            await self.store.delete(AUTH_KEY)
        except Exception as e:
            logger.error("Removing authentication status failed", extra={"error": str(e)})
            return False
        return True
