# backend/docvault/models/__init__.py
from ..database import Base
from .role import Role
from .user import User
from .document import Document, DocumentAccess

__all__ = [
    "Base",
    "Role",
    "User",
    "Document",
    "DocumentAccess"
]
