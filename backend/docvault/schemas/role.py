# backend/docvault/schemas/role.py
from typing import List, Optional

from .base import BaseSchema, MessageResponse, TimestampMixin

class RoleFields(BaseSchema):
    title: Optional[str] = None

class RoleCreate(RoleFields):
    pass

class RoleUpdate(RoleFields):
    pass

class Role(BaseSchema, TimestampMixin):
    id: int
    title: str

class RoleResponse(MessageResponse):
    role: Role

class RoleUpdateResponse(MessageResponse):
    updated_role: Role

class RoleListResponse(MessageResponse):
    roles: List[Role]
