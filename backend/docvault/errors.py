# backend/docvault/errors.py
from typing import List, Optional


class DocVaultError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_body(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.errors:
            body["errorArray"] = self.errors
        return body


class ValidationError(DocVaultError):
    status_code = 400

    @classmethod
    def for_fields(cls, errors: List[dict]) -> "ValidationError":
        return cls(errors[0]["message"], errors=errors)


# Missing or unusable token. Reported as 400, not 401.
class AuthenticationMissing(DocVaultError):
    status_code = 400


class InvalidCredentials(DocVaultError):
    status_code = 401


# Ownership checks on documents and users
class Forbidden(DocVaultError):
    status_code = 401


# Admin-only actions and system roles
class ActionForbidden(DocVaultError):
    status_code = 403


class NotFound(DocVaultError):
    status_code = 404


class Conflict(DocVaultError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message, errors=[{"path": field, "message": message}])
        self.field = field


class Internal(DocVaultError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
