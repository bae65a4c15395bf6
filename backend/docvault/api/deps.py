# backend/docvault/api/deps.py
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.access import Requester
from ..services.credentials import authenticate


def get_requester(
    x_access_token: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Requester:
    """Resolve the ``x-access-token`` header to the calling user"""
    return authenticate(db, x_access_token)
