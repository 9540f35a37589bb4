"""API routes package."""

from fastapi import APIRouter

from txn_explorer.api.routes.auth import router as auth_router
from txn_explorer.api.routes.rules import router as rules_router
from txn_explorer.api.routes.table import router as table_router
from txn_explorer.api.routes.transactions import router as transactions_router

# Create API router with all sub-routers
api_router = APIRouter()

# Register all route modules
api_router.include_router(auth_router)
api_router.include_router(transactions_router)
api_router.include_router(table_router)
api_router.include_router(rules_router)


__all__ = [
    "api_router",
    "auth_router",
    "transactions_router",
    "table_router",
    "rules_router",
]
