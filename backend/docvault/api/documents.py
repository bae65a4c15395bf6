# backend/docvault/api/documents.py
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import DocVaultError
from ..schemas.base import MessageResponse
from ..schemas.document import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentUpdateResponse,
    DocumentListResponse
)
from ..services.access import Requester
from ..services.documents import DocumentCommandService, DocumentQueryService, SearchRequest
from ..utils.logging import api_logger
from ..utils.pagination import QueryPage, parse_page_params
from .deps import get_requester

router = APIRouter(prefix="/documents", tags=["documents"])


def _listing(result: QueryPage, message: str) -> dict:
    return {
        "message": message,
        "documents": {"rows": result.rows, "count": result.count},
        "pagination": result.page_info
    }


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(
    document: DocumentCreate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Creating new document", extra={
        "user_id": requester.user_id,
        "access": document.access
    })

    try:
        start_time = time.time()
        db_document = DocumentCommandService(db).create_document(requester, document)

        execution_time = time.time() - start_time
        api_logger.info("Successfully created document", extra={
            "document_id": db_document.id,
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return {"message": "Document created successfully", "document": db_document}

    except DocVaultError:
        raise
    except Exception as e:
        api_logger.error("Error creating document", extra={
            "user_id": requester.user_id,
            "error": str(e)
        })
        db.rollback()
        raise


@router.get("", response_model=DocumentListResponse)
def list_documents(
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Listing documents", extra={
        "user_id": requester.user_id,
        "limit": limit,
        "offset": offset
    })

    page = parse_page_params(limit, offset)
    result = DocumentQueryService(db).list_documents(requester, page)

    api_logger.info("Successfully listed documents", extra={
        "user_id": requester.user_id,
        "document_count": len(result.rows),
        "total_count": result.count
    })
    return _listing(result, "You have successfully retrieved all documents")


@router.get("/search", response_model=DocumentListResponse)
def search_documents(
    query: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    published_date: Optional[str] = Query(None, alias="publishedDate"),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Searching documents", extra={
        "user_id": requester.user_id,
        "query": query,
        "published_date": published_date
    })

    start_time = time.time()
    search = SearchRequest.from_params(query, limit, offset, published_date)
    result = DocumentQueryService(db).search_documents(requester, search)

    execution_time = time.time() - start_time
    api_logger.info("Search completed", extra={
        "user_id": requester.user_id,
        "total_count": result.count,
        "execution_time_ms": round(execution_time * 1000, 2)
    })
    return _listing(result, "This search was successfull")


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(
    document_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Retrieving document", extra={
        "document_id": document_id,
        "user_id": requester.user_id
    })

    document = DocumentCommandService(db).get_document(requester, document_id)
    return {"message": "You have successfully retrived this document", "document": document}


@router.put("/{document_id}", response_model=DocumentUpdateResponse)
def update_document(
    document_id: int,
    document: DocumentUpdate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Updating document", extra={
        "document_id": document_id,
        "update_fields": list(document.model_dump(exclude_unset=True).keys())
    })

    try:
        db_document = DocumentCommandService(db).update_document(requester, document_id, document)
        api_logger.info("Successfully updated document", extra={"document_id": document_id})
        return {
            "message": "This document has been updated successfully",
            "updated_document": db_document
        }

    except DocVaultError:
        raise
    except Exception as e:
        api_logger.error("Error updating document", extra={
            "document_id": document_id,
            "error": str(e)
        })
        db.rollback()
        raise


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: int,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db)
):
    api_logger.info("Deleting document", extra={
        "document_id": document_id,
        "user_id": requester.user_id
    })

    try:
        DocumentCommandService(db).delete_document(requester, document_id)
        api_logger.info(f"Successfully deleted document {document_id}")
        return {"message": "This document has been deleted successfully"}

    except DocVaultError:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error(f"Failed to delete document: {str(e)}")
        raise
