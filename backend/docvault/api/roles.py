# backend/docvault/api/roles.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.base import MessageResponse
from ..schemas.role import RoleCreate, RoleUpdate, RoleResponse, RoleUpdateResponse, RoleListResponse
from ..services.access import Requester
from ..services.roles import RoleService
from ..utils.logging import api_logger
from .deps import get_requester

router = APIRouter(prefix="/roles", tags=["roles"])


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
def create_role(
    role: RoleCreate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Creating new role", extra={"role_title": role.title, "user_id": requester.user_id})

    db_role = RoleService(db).create_role(requester, role.title)
    return {"message": "Role created successfully", "role": db_role}


@router.get("", response_model=RoleListResponse)
def list_roles(requester: Requester = Depends(get_requester), db: Session = Depends(get_db)):
    """List all roles"""
    roles = RoleService(db).list_roles(requester)
    api_logger.info(f"Found {len(roles)} roles")
    return {"message": "You have successfully retrived all roles", "roles": roles}


@router.get("/{role_id}", response_model=RoleResponse)
def get_role(
    role_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Fetching role", extra={"role_id": role_id})

    role = RoleService(db).get_role(requester, role_id)
    return {"message": "This role has been retrieved successfully", "role": role}


@router.put("/{role_id}", response_model=RoleUpdateResponse)
def update_role(
    role_id: int,
    role: RoleUpdate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Updating role", extra={"role_id": role_id})

    db_role = RoleService(db).update_role(requester, role_id, role.title)
    return {"message": "This role has been updated", "updated_role": db_role}


@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(
    role_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Deleting role", extra={"role_id": role_id})

    RoleService(db).delete_role(requester, role_id)
    api_logger.info(f"Successfully deleted role {role_id}")
    return {"message": "This role has been deleted"}
