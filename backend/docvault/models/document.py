# backend/docvault/models/document.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class DocumentAccess(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    ROLE = "role"


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    access = Column(
        Enum(DocumentAccess, values_callable=lambda members: [m.value for m in members]),
        nullable=False,
        default=DocumentAccess.PUBLIC
    )
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    owner = relationship("User", back_populates="documents")

    @property
    def owner_role_id(self):
        return self.owner.role_id if self.owner is not None else None
