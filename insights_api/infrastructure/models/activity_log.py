"""SQLAlchemy model for the append-only activity log."""

from sqlalchemy import Column, DateTime, Index, Integer, String

from insights_api.infrastructure.database import Base
from insights_api.utils import now_in_app_naive_datetime

from ._types import json_payload_type


class ActivityLogModel(Base):
    """Database representation of a recorded business event."""

    __tablename__ = "activity_log"
    __table_args__ = (
        Index("ix_activity_log_org_created", "org_id", "created_at", "id"),
        Index("ix_activity_log_org_type", "org_id", "type"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    org_id = Column(String(64), nullable=False)
    user_id = Column(String(64), nullable=True)
    type = Column(String(64), nullable=False)
    taxonomy_version = Column(Integer, nullable=False)
    document_id = Column(String(64), nullable=True)
    version_id = Column(String(64), nullable=True)
    unified_item_id = Column(String(64), nullable=True)
    envelope_id = Column(String(64), nullable=True)
    share_link_id = Column(String(64), nullable=True)
    provider = Column(String(64), nullable=True)
    context = Column(json_payload_type, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ActivityLogModel"]
