"""SQLAlchemy model for e-signature envelopes."""

from sqlalchemy import Column, DateTime, String, UniqueConstraint

from insights_api.infrastructure.database import Base


class EnvelopeModel(Base):
    """Database representation of a signature envelope."""

    __tablename__ = "envelope"
    __table_args__ = (
        UniqueConstraint("provider", "provider_envelope_id", name="uq_envelope_provider_id"),
    )

    id = Column(String(64), primary_key=True)
    org_id = Column(String(64), nullable=False)
    document_id = Column(String(64), nullable=True)
    created_by = Column(String(64), nullable=True)
    provider = Column(String(30), nullable=False)
    provider_envelope_id = Column(String(128), nullable=False)
    status = Column(String(20), nullable=False, default="draft")
    sent_at = Column(DateTime(), nullable=True)
    completed_at = Column(DateTime(), nullable=True)
    cancelled_at = Column(DateTime(), nullable=True)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["EnvelopeModel"]
