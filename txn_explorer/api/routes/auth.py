"""API routes for analyst sign-in."""

from fastapi import APIRouter

from txn_explorer.core.dependencies import AuthServiceDep
from txn_explorer.core.errors import StorageError
from txn_explorer.schemas.auth import AuthStatusResponse, LoginRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthStatusResponse)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> dict:
    """Check the credentials and set the signed-in flag."""
    if not await auth_service.login(request.username, request.password):
        raise StorageError("Failed to store authentication status")
    return {"authenticated": True}


@router.post("/logout", response_model=AuthStatusResponse)
async def logout(auth_service: AuthServiceDep) -> dict:
    if not await auth_service.logout():
        raise StorageError("Failed to clear authentication status")
    return {"authenticated": False}


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(auth_service: AuthServiceDep) -> dict:
    return {"authenticated": await auth_service.is_authenticated()}
