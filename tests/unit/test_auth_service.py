"""Unit tests for the sign-in gate."""

from unittest.mock import AsyncMock

import pytest

from txn_explorer.core.config import AuthConfig
from txn_explorer.core.errors import UnauthorizedError
from txn_explorer.persistence.kv_store import InMemoryKeyValueStore
from txn_explorer.services.auth_service import AUTH_KEY, AUTH_VALUE, AuthService


class TestCheckCredentials:
    """Test check_credentials."""

    def test_matching_pair(self, kv_store, auth_config):
        """Test the configured pair is accepted."""
        assert AuthService(kv_store, auth_config).check_credentials("analyst", "s3cret") is True

    @pytest.mark.parametrize(
        ("username", "password"),
        [("analyst", "wrong"), ("other", "s3cret"), ("", ""), ("Analyst", "s3cret")],
    )
    def test_rejected_pairs(self, kv_store, auth_config, username, password):
        """Test any other pair is rejected."""
        assert AuthService(kv_store, auth_config).check_credentials(username, password) is False

    def test_non_ascii_credentials(self, kv_store):
        """Test non-ASCII usernames and passwords compare without raising."""
        service = AuthService(kv_store, AuthConfig(username="josé", password="contraseña"))
        assert service.check_credentials("josé", "contraseña") is True
        assert service.check_credentials("jose", "contraseña") is False
        assert service.check_credentials("josé", "ñ") is False


@pytest.mark.asyncio
class TestLoginLogout:
    """Test login, logout and the stored flag."""

    async def test_login_sets_flag(self, kv_store, auth_config):
        """Test a successful login stores the flag."""
        service = AuthService(kv_store, auth_config)
        assert await service.is_authenticated() is False
        assert await service.login("analyst", "s3cret") is True
        assert await kv_store.get(AUTH_KEY) == AUTH_VALUE
        assert await service.is_authenticated() is True

    async def test_login_wrong_password(self, kv_store, auth_config):
        """Test bad credentials raise and leave the flag unset."""
        service = AuthService(kv_store, auth_config)
        with pytest.raises(UnauthorizedError) as exc_info:
            await service.login("analyst", "nope")
        assert exc_info.value.message == "Invalid username or password."
        assert await kv_store.get(AUTH_KEY) is None

    async def test_login_non_ascii_username(self, kv_store, auth_config):
        """Test a non-ASCII username is rejected as unauthorized."""
        service = AuthService(kv_store, auth_config)
        with pytest.raises(UnauthorizedError):
            await service.login("josé", "yesiwill")
        assert await kv_store.get(AUTH_KEY) is None

    async def test_logout_clears_flag(self, auth_config):
        """Test logout removes the flag."""
        store = InMemoryKeyValueStore({AUTH_KEY: AUTH_VALUE})
        service = AuthService(store, auth_config)
        assert await service.logout() is True
        assert await service.is_authenticated() is False

    async def test_other_flag_values_are_signed_out(self, auth_config):
        """Test only the exact flag value counts."""
        service = AuthService(InMemoryKeyValueStore({AUTH_KEY: "true"}), auth_config)
        assert await service.is_authenticated() is False

    async def test_store_failures(self, auth_config):
        """Test store failures report false instead of raising."""
        store = AsyncMock()
        store.get.side_effect = OSError("unavailable")
        store.set.side_effect = OSError("unavailable")
        store.delete.side_effect = OSError("unavailable")
        service = AuthService(store, auth_config)
        assert await service.is_authenticated() is False
        assert await service.login("analyst", "s3cret") is False
        assert await service.logout() is False
