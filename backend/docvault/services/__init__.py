# backend/docvault/services/__init__.py
from .access import Requester, can_view, can_mutate, visibility_filter
from .documents import DocumentCommandService, DocumentQueryService
from .roles import RoleService
from .users import UserService

__all__ = [
    "Requester", "can_view", "can_mutate", "visibility_filter",
    "DocumentCommandService", "DocumentQueryService", "RoleService", "UserService"
]
