"""
FastAPI dependency injection utilities.

Services are built once in the application lifespan and kept on
``app.state``; these dependencies hand them to the routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from txn_explorer.core.errors import UnauthorizedError
from txn_explorer.services.auth_service import AuthService
from txn_explorer.services.rules_service import RulesService
from txn_explorer.services.table_service import TableService


def get_table_service(request: Request) -> TableService:
    return request.app.state.table_service


def get_rules_service(request: Request) -> RulesService:
    return request.app.state.rules_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


TableServiceDep = Annotated[TableService, Depends(get_table_service)]
RulesServiceDep = Annotated[RulesService, Depends(get_rules_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def require_authenticated(auth_service: AuthServiceDep) -> bool:
    """
    Dependency that enforces the sign-in flag.

    Raises:
        UnauthorizedError: If the analyst has not signed in
    """
    if not await auth_service.is_authenticated():
        raise UnauthorizedError("Authentication required")
    return True

