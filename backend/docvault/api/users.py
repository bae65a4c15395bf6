# backend/docvault/api/users.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.base import MessageResponse
from ..schemas.document import UserDocumentsResponse
from ..schemas.user import (
    UserCreate, UserLogin, UserUpdate, UserResponse, UserTokenResponse,
    UserUpdateResponse, UserListResponse
)
from ..services.access import Requester
from ..services.documents import DocumentQueryService
from ..services.users import UserService
from ..utils.logging import api_logger
from ..utils.pagination import parse_page_params
from .deps import get_requester

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserTokenResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    api_logger.info("Registering user", extra={"username": user.username})

    db_user, token = UserService(db).register(user)
    return {"message": "Your account has been created successfully", "user": db_user, "token": token}


@router.post("/login", response_model=UserTokenResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    api_logger.info("Login attempt", extra={"username": credentials.username, "email": credentials.email})

    db_user, token = UserService(db).login(credentials)
    return {"message": "You have successfully logged in", "user": db_user, "token": token}


@router.get("", response_model=UserListResponse)
def list_users(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    page = parse_page_params(limit, offset)
    result = UserService(db).list_users(requester, page)

    api_logger.info("Listed users", extra={"total_count": result.count})
    return {
        "message": "You have successfully retrieved all users",
        "users": {"rows": result.rows, "count": result.count},
        "pagination": result.page_info
    }


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Fetching user", extra={"user_id": user_id})

    user = UserService(db).get_user(requester, user_id)
    return {"message": "This user has been retrieved successfully", "user": user}


@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: int,
    user: UserUpdate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Updating user", extra={
        "user_id": user_id,
        "update_fields": [f for f in user.model_dump(exclude_unset=True) if f != "password"]
    })

    db_user = UserService(db).update_user(requester, user_id, user)
    return {"message": "This user has been updated successfully", "updated_user": db_user}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Deleting user", extra={"user_id": user_id})

    UserService(db).delete_user(requester, user_id)
    return {"message": "This user has been deleted successfully"}


@router.get("/{user_id}/documents", response_model=UserDocumentsResponse)
def list_user_documents(
    user_id: int,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Listing user documents", extra={
        "target_user_id": user_id,
        "user_id": requester.user_id
    })

    page = parse_page_params(limit, offset)
    user, result = DocumentQueryService(db).list_user_documents(requester, user_id, page)

    api_logger.info("Successfully listed user documents", extra={
        "target_user_id": user_id,
        "total_count": result.count
    })
    return {
        "message": "You have successfully retrieved this user's documents",
        "user_documents": {
            "user": user,
            "documents": {"rows": result.rows, "count": result.count}
        },
        "pagination": result.page_info
    }
