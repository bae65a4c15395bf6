# backend/docvault/services/documents.py
import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, contains_eager, joinedload
from sqlalchemy.sql import func

from ..errors import NotFound, ValidationError
from ..models.document import Document, DocumentAccess
from ..models.user import User
from ..schemas.document import DocumentCreate, DocumentUpdate
from ..utils.logging import service_logger
from ..utils.pagination import PageRequest, QueryPage, build_page_info, parse_page_params
from .access import Requester, ensure_can_mutate, ensure_can_view, visibility_filter

DOCUMENT_NOT_FOUND = "This document cannot be found"
DOCUMENT_MISSING = "This document does not exist"
USER_NOT_FOUND = "This user does not exist"
TITLE_REQUIRED = "Title field is required"
CONTENT_REQUIRED = "Content field is required"
ACCESS_INVALID = "Access type can only be public, private or role"
QUERY_REQUIRED = "Please enter a search query"
SORT_INVALID = "publishedDate can only be ASC or DESC"


class SortOrder(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortOrder":
        if raw is None or not raw.strip():
            return cls.DESC
        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise ValidationError(SORT_INVALID)


@dataclass(frozen=True)
class SearchRequest:
    terms: Tuple[str, ...]
    page: PageRequest = PageRequest()
    order: SortOrder = SortOrder.DESC

    @classmethod
    def from_params(
        cls,
        query: Optional[str],
        limit: Optional[str] = None,
        offset: Optional[str] = None,
        published_date: Optional[str] = None
    ) -> "SearchRequest":
        """Validate raw search parameters: query, then paging, then sort order"""
        terms = tuple((query or "").split())
        if not terms:
            raise ValidationError(QUERY_REQUIRED)
        return cls(
            terms=terms,
            page=parse_page_params(limit, offset),
            order=SortOrder.parse(published_date)
        )


def _require_text(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value


def _parse_access(value: Optional[str]) -> DocumentAccess:
    try:
        return DocumentAccess(value)
    except ValueError:
        raise ValidationError(ACCESS_INVALID)


class DocumentQueryService:
    """Listing and search, always restricted to what the requester may view"""

    def __init__(self, db: Session):
        self.db = db

    def _visible(self, requester: Requester) -> Query:
        query = self.db.query(Document) \
            .join(User, Document.owner_id == User.id) \
            .options(contains_eager(Document.owner))
        clause = visibility_filter(requester)
        if clause is not None:
            query = query.filter(clause)
        return query

    def _paginate(self, query: Query, page: PageRequest, order: SortOrder = SortOrder.DESC) -> QueryPage:
        # Count the filtered set before slicing so page info matches what can be seen
        total = query.order_by(None).count()

        if order is SortOrder.ASC:
            query = query.order_by(Document.created_at.asc(), Document.id.asc())
        else:
            query = query.order_by(Document.created_at.desc(), Document.id.desc())

        if page.offset:
            query = query.offset(page.offset)
        if page.limit is not None:
            query = query.limit(page.limit)

        return QueryPage(rows=query.all(), count=total, page_info=build_page_info(total, page))

    def list_documents(self, requester: Requester, page: PageRequest) -> QueryPage:
        result = self._paginate(self._visible(requester), page)
        service_logger.debug("Listed documents", extra={
            "user_id": requester.user_id,
            "total_count": result.count
        })
        return result

    def search_documents(self, requester: Requester, search: SearchRequest) -> QueryPage:
        # Any term in either field matches
        conditions = []
        for term in search.terms:
            conditions.append(Document.title.icontains(term, autoescape=True))
            conditions.append(Document.content.icontains(term, autoescape=True))

        query = self._visible(requester).filter(or_(*conditions))
        result = self._paginate(query, search.page, search.order)
        service_logger.debug("Searched documents", extra={
            "user_id": requester.user_id,
            "terms": list(search.terms),
            "total_count": result.count
        })
        return result

    def list_user_documents(self, requester: Requester, user_id: int, page: PageRequest) -> tuple[User, QueryPage]:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound(USER_NOT_FOUND)

        query = self._visible(requester).filter(Document.owner_id == user.id)
        return user, self._paginate(query, page)


class DocumentCommandService:
    """Create, read, update and delete single documents"""

    def __init__(self, db: Session):
        self.db = db

    def _load(self, document_id: int) -> Optional[Document]:
        return self.db.query(Document) \
            .options(joinedload(Document.owner)) \
            .filter(Document.id == document_id) \
            .first()

    def get_document(self, requester: Requester, document_id: int) -> Document:
        document = self._load(document_id)
        if document is None:
            raise NotFound(DOCUMENT_NOT_FOUND)
        ensure_can_view(requester, document)
        return document

    def create_document(self, requester: Requester, data: DocumentCreate) -> Document:
        title = _require_text(data.title, TITLE_REQUIRED)
        content = _require_text(data.content, CONTENT_REQUIRED)
        access = _parse_access(data.access) if data.access is not None else DocumentAccess.PUBLIC

        document = Document(
            title=title,
            content=content,
            access=access,
            owner_id=requester.user_id
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)

        service_logger.info("Document created", extra={
            "document_id": document.id,
            "owner_id": document.owner_id,
            "access": document.access.value
        })
        return document

    def update_document(self, requester: Requester, document_id: int, data: DocumentUpdate) -> Document:
        document = self._load(document_id)
        if document is None:
            raise NotFound(DOCUMENT_MISSING)
        ensure_can_mutate(requester, document)

        changes = data.model_dump(exclude_unset=True)
        if "title" in changes:
            document.title = _require_text(changes["title"], TITLE_REQUIRED)
        if "content" in changes:
            document.content = _require_text(changes["content"], CONTENT_REQUIRED)
        if "access" in changes:
            document.access = _parse_access(changes["access"])
        document.updated_at = func.now()

        self.db.commit()
        self.db.refresh(document)

        service_logger.info("Document updated", extra={
            "document_id": document.id,
            "user_id": requester.user_id,
            "update_fields": list(changes.keys())
        })
        return document

    def delete_document(self, requester: Requester, document_id: int) -> None:
        document = self._load(document_id)
        if document is None:
            raise NotFound(DOCUMENT_MISSING)
        ensure_can_mutate(requester, document)

        self.db.delete(document)
        self.db.commit()
        service_logger.info("Document deleted", extra={
            "document_id": document_id,
            "user_id": requester.user_id
        })
