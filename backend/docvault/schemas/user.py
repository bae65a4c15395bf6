# backend/docvault/schemas/user.py
import re
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from .base import BaseSchema, MessageResponse, PageInfo, TimestampMixin

WORD_PATTERN = re.compile(r"\w+")
USERNAME_PATTERN = re.compile(r"^\w+$")
MIN_PASSWORD_LENGTH = 8


def _check_name(value: Optional[str], label: str) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise PydanticCustomError("empty", "This field cannot be empty")
    if not WORD_PATTERN.search(value):
        raise PydanticCustomError("invalid", f"Input a valid {label}")
    return value


class UserFields(BaseSchema):
    """Field rules shared by registration and profile updates"""

    @field_validator("username", check_fields=False)
    @classmethod
    def check_username(cls, value):
        if value is not None and not USERNAME_PATTERN.match(value.strip()):
            raise PydanticCustomError("invalid", "Input a valid username")
        return value.strip() if value is not None else value

    @field_validator("firstname", check_fields=False)
    @classmethod
    def check_firstname(cls, value):
        return _check_name(value, "firstname")

    @field_validator("lastname", check_fields=False)
    @classmethod
    def check_lastname(cls, value):
        return _check_name(value, "lastname")

    @field_validator("email", check_fields=False)
    @classmethod
    def check_email(cls, value):
        if value is None:
            return value
        try:
            return validate_email(value.strip(), check_deliverability=False).normalized
        except EmailNotValidError:
            raise PydanticCustomError("invalid", "Input a valid email address")

    @field_validator("password", check_fields=False)
    @classmethod
    def check_password(cls, value):
        if value is not None and (len(value) < MIN_PASSWORD_LENGTH or not WORD_PATTERN.search(value)):
            raise PydanticCustomError("invalid", "Minimum of 8 characters is required")
        return value


class UserCreate(UserFields):
    username: str
    firstname: str
    lastname: str
    email: str
    password: str
    role_id: Optional[int] = None


class UserUpdate(UserFields):
    username: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[int] = None
    active: Optional[bool] = None


class UserLogin(BaseSchema):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def require_identifier(self):
        if not self.username and not self.email:
            raise PydanticCustomError("missing", "Username or email is required")
        return self


class User(BaseSchema, TimestampMixin):
    id: int
    username: str
    firstname: str
    lastname: str
    email: str
    role_id: int
    active: bool


class UserResponse(MessageResponse):
    user: User


class UserTokenResponse(MessageResponse):
    user: User
    token: str


class UserUpdateResponse(MessageResponse):
    updated_user: User


class UserRows(BaseSchema):
    rows: List[User] = []
    count: int = 0


class UserListResponse(MessageResponse):
    users: UserRows
    pagination: PageInfo
