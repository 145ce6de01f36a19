"""SQLAlchemy model for accounts pack runs."""

from sqlalchemy import Column, Date, DateTime, Index, Integer, String

from insights_api.infrastructure.database import Base
from insights_api.utils import now_in_app_naive_datetime

from ._types import json_payload_type


class PackRunModel(Base):
    """Database representation of one pack computation attempt."""

    __tablename__ = "accounts_pack_runs"
    __table_args__ = (
        Index("ix_pack_runs_org_type_status_created", "org_id", "type", "status", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    org_id = Column(String(64), nullable=False)
    type = Column(String(50), nullable=False)
    period_start = Column(Date(), nullable=True)
    period_end = Column(Date(), nullable=True)
    status = Column(String(20), nullable=False)
    metrics = Column(json_payload_type, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PackRunModel"]
