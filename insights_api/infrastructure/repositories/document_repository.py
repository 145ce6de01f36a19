"""Read helpers for documents referenced by insights."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from insights_api.domain.entities import DocumentSummary
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.models import DocumentModel
from insights_api.utils import ensure_app_timezone


class DocumentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_recent(self, *, org_id: str, kind: str, limit: int = 5) -> list[DocumentSummary]:
        """Return the most recently updated documents of ``kind``.

        Documents without an update timestamp sort after every dated one.
        """

        query = (
            self.session.query(DocumentModel)
            .filter(DocumentModel.org_id == org_id)
            .filter(DocumentModel.kind == kind)
            .order_by(
                DocumentModel.updated_at.is_(None),
                DocumentModel.updated_at.desc(),
                DocumentModel.id.asc(),
            )
            .limit(limit)
        )
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to read documents") from exc
        return [
            DocumentSummary(
                id=model.id,
                org_id=model.org_id,
                title=model.title,
                kind=model.kind,
                updated_at=ensure_app_timezone(model.updated_at),
            )
            for model in models
        ]


__all__ = ["DocumentRepository"]
