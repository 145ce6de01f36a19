"""Persistence helpers for signature envelopes."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from insights_api.domain.entities import Envelope
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.models import EnvelopeModel
from insights_api.utils import ensure_app_naive_datetime, ensure_app_timezone


class EnvelopeRepository:
    """Look up envelopes by provider id and persist status transitions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_provider_id(self, *, provider: str, provider_envelope_id: str) -> Envelope | None:
        try:
            model = (
                self.session.query(EnvelopeModel)
                .filter(EnvelopeModel.provider == provider)
                .filter(EnvelopeModel.provider_envelope_id == provider_envelope_id)
                .one_or_none()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to look up envelope") from exc
        if model is None:
            return None
        return self._to_entity(model)

    def update_status(self, envelope: Envelope) -> Envelope:
        """Persist the status and status timestamps of ``envelope``."""

        try:
            model = self.session.get(EnvelopeModel, envelope.id)
            if model is None:
                msg = f"Envelope with id {envelope.id} not found"
                raise ValueError(msg)
            model.status = envelope.status
            model.sent_at = ensure_app_naive_datetime(envelope.sent_at)
            model.completed_at = ensure_app_naive_datetime(envelope.completed_at)
            model.cancelled_at = ensure_app_naive_datetime(envelope.cancelled_at)
            model.updated_at = ensure_app_naive_datetime(envelope.updated_at)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to update envelope") from exc
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: EnvelopeModel) -> Envelope:
        return Envelope(
            id=model.id,
            org_id=model.org_id,
            provider=model.provider,
            provider_envelope_id=model.provider_envelope_id,
            status=model.status,
            document_id=model.document_id,
            created_by=model.created_by,
            sent_at=ensure_app_timezone(model.sent_at),
            completed_at=ensure_app_timezone(model.completed_at),
            cancelled_at=ensure_app_timezone(model.cancelled_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["EnvelopeRepository"]
