# backend/docvault/services/access.py
"""
Document access policy.

Every visibility and ownership decision about documents is made here, either
row by row (``decide``) or as a SQL predicate for listings
(``visibility_filter``). Precedence:

1. admin: view and modify everything
2. owner: view and modify regardless of access level
3. public: anyone may view
4. role: requesters sharing the owner's role may view
5. nothing otherwise
"""
import enum
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from ..errors import Forbidden
from ..models.document import Document, DocumentAccess
from ..models.user import User
from ..utils.logging import service_logger

VIEW_DENIED = "You are not permitted to view this document"
MODIFY_DENIED = "You are not permitted to modify this document"


@dataclass(frozen=True)
class Requester:
    """Authenticated identity behind a request"""
    user_id: int
    role_id: int
    is_admin: bool = False


class AccessReason(str, enum.Enum):
    ADMIN = "admin"
    OWNER = "owner"
    PUBLIC = "public"
    SHARED_ROLE = "shared_role"
    DENIED = "denied"


@dataclass(frozen=True)
class AccessDecision:
    reason: AccessReason
    can_view: bool
    can_mutate: bool


_DECISIONS = {
    AccessReason.ADMIN: AccessDecision(AccessReason.ADMIN, True, True),
    AccessReason.OWNER: AccessDecision(AccessReason.OWNER, True, True),
    AccessReason.PUBLIC: AccessDecision(AccessReason.PUBLIC, True, False),
    AccessReason.SHARED_ROLE: AccessDecision(AccessReason.SHARED_ROLE, True, False),
    AccessReason.DENIED: AccessDecision(AccessReason.DENIED, False, False),
}


def _access_of(document) -> Optional[DocumentAccess]:
    try:
        return DocumentAccess(document.access)
    except ValueError:
        return None


def decide(requester: Requester, document) -> AccessDecision:
    """Classify what ``requester`` may do with ``document``.

    ``document`` needs ``owner_id``, ``access`` and ``owner_role_id``.
    """
    if requester.is_admin:
        return _DECISIONS[AccessReason.ADMIN]
    if document.owner_id == requester.user_id:
        return _DECISIONS[AccessReason.OWNER]

    access = _access_of(document)
    if access is DocumentAccess.PUBLIC:
        return _DECISIONS[AccessReason.PUBLIC]
    if access is DocumentAccess.ROLE and document.owner_role_id == requester.role_id:
        return _DECISIONS[AccessReason.SHARED_ROLE]
    return _DECISIONS[AccessReason.DENIED]


def can_view(requester: Requester, document) -> bool:
    return decide(requester, document).can_view


def can_mutate(requester: Requester, document) -> bool:
    return decide(requester, document).can_mutate


def ensure_can_view(requester: Requester, document) -> AccessDecision:
    decision = decide(requester, document)
    if not decision.can_view:
        service_logger.warning("Document view denied", extra={
            "document_id": document.id,
            "user_id": requester.user_id
        })
        raise Forbidden(VIEW_DENIED)
    return decision


def ensure_can_mutate(requester: Requester, document) -> AccessDecision:
    decision = decide(requester, document)
    if not decision.can_mutate:
        service_logger.warning("Document modification denied", extra={
            "document_id": document.id,
            "user_id": requester.user_id,
            "reason": decision.reason.value
        })
        raise Forbidden(MODIFY_DENIED)
    return decision


def visibility_filter(requester: Requester) -> Optional[ColumnElement]:
    """SQL counterpart of ``can_view``; ``None`` means unrestricted.

    The predicate refers to ``User.role_id`` so the query must join the owner.
    """
    if requester.is_admin:
        return None
    return or_(
        Document.owner_id == requester.user_id,
        Document.access == DocumentAccess.PUBLIC,
        and_(
            Document.access == DocumentAccess.ROLE,
            User.role_id == requester.role_id
        )
    )
