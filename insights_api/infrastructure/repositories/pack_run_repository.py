"""Persistence layer for accounts pack runs."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from insights_api.domain.entities import PackRun, PackRunStatus, PackType
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.models import PackRunModel
from insights_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class PackRunRepository:
    """Append and read :class:`PackRun` rows. Runs are never updated."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, run: PackRun) -> PackRun:
        model = PackRunModel(
            org_id=run.org_id,
            type=run.type.value,
            status=run.status.value,
            period_start=run.period_start,
            period_end=run.period_end,
            metrics=run.metrics,
            created_at=(
                ensure_app_naive_datetime(run.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            ),
        )
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to append pack run") from exc
        return self._to_entity(model)

    def get_latest(
        self,
        *,
        org_id: str,
        pack_type: PackType,
        status: PackRunStatus | None = None,
    ) -> PackRun | None:
        """Return the most recent run of ``pack_type``, optionally by status."""

        query = (
            self.session.query(PackRunModel)
            .filter(PackRunModel.org_id == org_id)
            .filter(PackRunModel.type == pack_type.value)
        )
        if status is not None:
            query = query.filter(PackRunModel.status == status.value)
        query = query.order_by(PackRunModel.created_at.desc(), PackRunModel.id.desc())
        try:
            model = query.first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to read pack runs") from exc
        if model is None:
            return None
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: PackRunModel) -> PackRun:
        return PackRun(
            id=model.id,
            org_id=model.org_id,
            type=PackType(model.type),
            status=PackRunStatus(model.status),
            period_start=model.period_start,
            period_end=model.period_end,
            metrics=dict(model.metrics) if isinstance(model.metrics, dict) else None,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["PackRunRepository"]
