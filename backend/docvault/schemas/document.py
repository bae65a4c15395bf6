# backend/docvault/schemas/document.py
from typing import List, Optional

from .base import BaseSchema, MessageResponse, PageInfo, TimestampMixin
from .user import User
from ..models.document import DocumentAccess

class DocumentFields(BaseSchema):
    # Presence and values are checked by the command service so each
    # field gets its own message
    title: Optional[str] = None
    content: Optional[str] = None
    access: Optional[str] = None

class DocumentCreate(DocumentFields):
    pass

class DocumentUpdate(DocumentFields):
    pass

class Document(BaseSchema, TimestampMixin):
    id: int
    title: str
    content: str
    access: DocumentAccess
    owner_id: int

class DocumentRows(BaseSchema):
    rows: List[Document] = []
    count: int = 0

class DocumentResponse(MessageResponse):
    document: Document

class DocumentUpdateResponse(MessageResponse):
    updated_document: Document

class DocumentListResponse(MessageResponse):
    documents: DocumentRows
    pagination: PageInfo

class UserDocuments(BaseSchema):
    user: User
    documents: DocumentRows

class UserDocumentsResponse(MessageResponse):
    user_documents: UserDocuments
    pagination: PageInfo
