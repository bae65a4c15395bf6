# backend/docvault/services/users.py
from typing import Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import ActionForbidden, Conflict, Forbidden, InvalidCredentials, NotFound
from ..models.user import User
from ..schemas.user import UserCreate, UserLogin, UserUpdate
from ..utils.logging import service_logger
from ..utils.pagination import PageRequest, QueryPage, build_page_info
from .access import Requester
from .credentials import create_access_token, hash_password, verify_password
from .roles import ACTION_DENIED, ROLE_NOT_FOUND, is_admin, role_exists

USER_NOT_FOUND = "This user does not exist"
USER_MODIFY_DENIED = "You are not permitted to modify this user"
LOGIN_FAILED = "Invalid login credentials"
UNIQUE_FIELDS = ("username", "email")


class UserService:
    """Registration, login and profile management"""

    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound(USER_NOT_FOUND)
        return user

    def _ensure_unique(self, values: dict, exclude_id: Optional[int] = None) -> None:
        for field in UNIQUE_FIELDS:
            value = values.get(field)
            if value is None:
                continue
            query = self.db.query(User.id).filter(func.lower(getattr(User, field)) == value.lower())
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            if query.first() is not None:
                raise Conflict(field, f"{field} already exist")

    def _check_role(self, role_id: int) -> None:
        if not role_exists(self.db, role_id):
            raise NotFound(ROLE_NOT_FOUND)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            message = str(e.orig).lower()
            field = next((f for f in UNIQUE_FIELDS if f in message), None)
            if field is None:
                raise
            raise Conflict(field, f"{field} already exist")

    def register(self, data: UserCreate) -> Tuple[User, str]:
        role_id = data.role_id if data.role_id is not None else settings.DEFAULT_ROLE_ID
        if is_admin(role_id):
            raise ActionForbidden(ACTION_DENIED)
        self._check_role(role_id)
        self._ensure_unique(data.model_dump())

        user = User(
            username=data.username,
            firstname=data.firstname,
            lastname=data.lastname,
            email=data.email,
            password_hash=hash_password(data.password),
            role_id=role_id
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)

        service_logger.info("User registered", extra={"user_id": user.id, "role_id": user.role_id})
        return user, create_access_token(user)

    def login(self, data: UserLogin) -> Tuple[User, str]:
        identifiers = []
        if data.username:
            identifiers.append(User.username == data.username)
        if data.email:
            identifiers.append(func.lower(User.email) == data.email.lower())

        user = self.db.query(User).filter(or_(*identifiers)).first()
        if user is None or not user.active or not verify_password(data.password, user.password_hash):
            service_logger.warning("Failed login attempt", extra={"username": data.username, "email": data.email})
            raise InvalidCredentials(LOGIN_FAILED)

        service_logger.info("User logged in", extra={"user_id": user.id})
        return user, create_access_token(user)

    def get_user(self, requester: Requester, user_id: int) -> User:
        return self._get_or_404(user_id)

    def list_users(self, requester: Requester, page: PageRequest) -> QueryPage:
        if not requester.is_admin:
            raise ActionForbidden(ACTION_DENIED)

        query = self.db.query(User)
        total = query.count()
        query = query.order_by(User.created_at.desc(), User.id.desc()).offset(page.offset)
        if page.limit is not None:
            query = query.limit(page.limit)
        return QueryPage(rows=query.all(), count=total, page_info=build_page_info(total, page))

    def update_user(self, requester: Requester, user_id: int, data: UserUpdate) -> User:
        user = self._get_or_404(user_id)
        if not requester.is_admin and requester.user_id != user.id:
            raise Forbidden(USER_MODIFY_DENIED)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if ("role_id" in changes or "active" in changes) and not requester.is_admin:
            raise ActionForbidden(ACTION_DENIED)
        if "role_id" in changes:
            self._check_role(changes["role_id"])
        self._ensure_unique(changes, exclude_id=user.id)

        # The hash is derived here, never stored from the request as-is
        password = changes.pop("password", None)
        if password is not None:
            user.password_hash = hash_password(password)
        for field, value in changes.items():
            setattr(user, field, value)

        self._commit()
        self.db.refresh(user)

        service_logger.info("User updated", extra={
            "user_id": user.id,
            "updated_by": requester.user_id,
            "update_fields": sorted(data.model_dump(exclude_unset=True, exclude_none=True).keys())
        })
        return user

    def delete_user(self, requester: Requester, user_id: int) -> None:
        user = self._get_or_404(user_id)
        if not requester.is_admin and requester.user_id != user.id:
            raise Forbidden(USER_MODIFY_DENIED)

        self.db.delete(user)
        self.db.commit()
        service_logger.info("User deleted", extra={"user_id": user_id, "deleted_by": requester.user_id})
