"""SQLAlchemy model for stored documents."""

from sqlalchemy import Column, DateTime, Index, String

from insights_api.infrastructure.database import Base
from insights_api.utils import now_in_app_naive_datetime


class DocumentModel(Base):
    """Database representation of a document owned by an organization."""

    __tablename__ = "document"
    __table_args__ = (Index("ix_document_org_kind_updated", "org_id", "kind", "updated_at"),)

    id = Column(String(64), primary_key=True)
    org_id = Column(String(64), nullable=False)
    title = Column(String(255), nullable=True)
    kind = Column(String(30), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["DocumentModel"]
