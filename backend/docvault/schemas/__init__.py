# backend/docvault/schemas/__init__.py
from .base import MessageResponse, PageInfo
from .role import Role, RoleCreate, RoleUpdate
from .user import User, UserCreate, UserUpdate, UserLogin
from .document import Document, DocumentCreate, DocumentUpdate, DocumentRows

__all__ = [
    "MessageResponse", "PageInfo",
    "Role", "RoleCreate", "RoleUpdate",
    "User", "UserCreate", "UserUpdate", "UserLogin",
    "Document", "DocumentCreate", "DocumentUpdate", "DocumentRows"
]
