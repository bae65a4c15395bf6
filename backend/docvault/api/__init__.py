# backend/docvault/api/__init__.py
from .documents import router as documents_router
from .roles import router as roles_router
from .users import router as users_router

__all__ = ["documents_router", "roles_router", "users_router"]
