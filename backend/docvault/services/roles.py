# backend/docvault/services/roles.py
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import ActionForbidden, Conflict, NotFound, ValidationError
from ..models.role import Role
from ..models.user import User
from ..utils.logging import service_logger

ACTION_DENIED = "You are not permitted to perform this action"
SYSTEM_ROLE_DENIED = "You are not permitted to modify this role"
ROLE_NOT_FOUND = "This role does not exist"
ROLE_EXISTS = "role already exist"
ROLE_IN_USE = "This role is assigned to existing users"


def is_admin(role_id: Optional[int]) -> bool:
    return role_id == settings.ADMIN_ROLE_ID


def is_system_role(role_id: int) -> bool:
    return role_id in settings.system_role_ids


def role_exists(db: Session, role_id: int) -> bool:
    return db.get(Role, role_id) is not None


def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError.for_fields([
            {"path": "title", "message": "Input a valid title"},
            {"path": "title", "message": "This field cannot be empty"},
        ])
    return cleaned


class RoleService:
    """Admin-only role management"""

    def __init__(self, db: Session):
        self.db = db

    def _require_admin(self, requester) -> None:
        if not requester.is_admin:
            service_logger.warning("Non-admin role operation rejected", extra={"user_id": requester.user_id})
            raise ActionForbidden(ACTION_DENIED)

    def _get_or_404(self, role_id: int) -> Role:
        role = self.db.get(Role, role_id)
        if role is None:
            raise NotFound(ROLE_NOT_FOUND)
        return role

    def _ensure_title_free(self, title: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Role).filter(func.lower(Role.title) == title.lower())
        if exclude_id is not None:
            query = query.filter(Role.id != exclude_id)
        if query.first() is not None:
            raise Conflict("title", ROLE_EXISTS)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Only a clash on the unique title is a client error
            if "title" not in str(e.orig).lower():
                raise
            raise Conflict("title", ROLE_EXISTS)

    def list_roles(self, requester) -> List[Role]:
        self._require_admin(requester)
        return self.db.query(Role).order_by(Role.id).all()

    def get_role(self, requester, role_id: int) -> Role:
        self._require_admin(requester)
        return self._get_or_404(role_id)

    def create_role(self, requester, title: Optional[str]) -> Role:
        self._require_admin(requester)
        title = _clean_title(title)
        self._ensure_title_free(title)

        role = Role(title=title)
        self.db.add(role)
        self._commit()
        self.db.refresh(role)

        service_logger.info("Role created", extra={"role_id": role.id, "title": role.title})
        return role

    def update_role(self, requester, role_id: int, title: Optional[str]) -> Role:
        self._require_admin(requester)
        if is_system_role(role_id):
            raise ActionForbidden(SYSTEM_ROLE_DENIED)
        role = self._get_or_404(role_id)
        title = _clean_title(title)
        self._ensure_title_free(title, exclude_id=role.id)

        role.title = title
        self._commit()
        self.db.refresh(role)

        service_logger.info("Role updated", extra={"role_id": role.id, "title": role.title})
        return role

    def delete_role(self, requester, role_id: int) -> None:
        self._require_admin(requester)
        if is_system_role(role_id):
            raise ActionForbidden(SYSTEM_ROLE_DENIED)
        role = self._get_or_404(role_id)

        assigned = self.db.query(func.count(User.id)).filter(User.role_id == role.id).scalar()
        if assigned:
            raise ValidationError(ROLE_IN_USE)

        self.db.delete(role)
        self.db.commit()
        service_logger.info("Role deleted", extra={"role_id": role_id})
