"""Persistence layer for the append-only activity log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from insights_api.domain.entities import (
    ActivityEvent,
    ActivityEventType,
    ActivityReferences,
    MatchKind,
    MatchRule,
)
from insights_api.domain.errors import DataAccessError
from insights_api.infrastructure.models import ActivityLogModel
from insights_api.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_KNOWN_TYPES = [event_type.value for event_type in ActivityEventType]


def compile_rules(rules: Sequence[MatchRule]):
    """Translate match rules into a single OR-combined SQL predicate."""

    clauses = []
    for rule in rules:
        if rule.kind is MatchKind.PREFIX:
            clauses.append(ActivityLogModel.type.startswith(rule.value, autoescape=True))
        else:
            clauses.append(ActivityLogModel.type == rule.value)
    return or_(*clauses)


class ActivityLogRepository:
    """Append and read :class:`ActivityEvent` rows.

    The log is append-only: there is deliberately no update or delete helper.
    Every read is constrained to exactly one organization.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, event: ActivityEvent) -> ActivityEvent:
        model = ActivityLogModel()
        self._apply_entity_to_model(model, event)
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to append activity log row") from exc
        return self._to_entity(model)

    def list_page(
        self,
        *,
        org_id: str,
        limit: int,
        start: datetime | None = None,
        end: datetime | None = None,
        rules: Sequence[MatchRule] = (),
        provider: str | None = None,
        search: str | None = None,
        cursor: datetime | None = None,
        cursor_id: int | None = None,
    ) -> list[ActivityEvent]:
        """Return one page of events, newest first."""

        query = self._scoped_query(org_id, start=start, end=end, rules=rules)
        if provider is not None:
            query = query.filter(ActivityLogModel.provider == provider)
        if search:
            query = query.filter(
                func.lower(ActivityLogModel.type).contains(search.lower(), autoescape=True)
            )
        if cursor is not None:
            naive_cursor = ensure_app_naive_datetime(cursor)
            if cursor_id is None:
                query = query.filter(ActivityLogModel.created_at < naive_cursor)
            else:
                query = query.filter(
                    or_(
                        ActivityLogModel.created_at < naive_cursor,
                        and_(
                            ActivityLogModel.created_at == naive_cursor,
                            ActivityLogModel.id < cursor_id,
                        ),
                    )
                )

        query = query.order_by(
            ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc()
        ).limit(limit)
        return self._fetch(query)

    def list_window(
        self,
        *,
        org_id: str,
        start: datetime,
        end: datetime,
        rules: Sequence[MatchRule] = (),
    ) -> list[ActivityEvent]:
        """Return every event of the window in chronological order."""

        query = self._scoped_query(org_id, start=start, end=end, rules=rules)
        query = query.order_by(ActivityLogModel.created_at.asc(), ActivityLogModel.id.asc())
        return self._fetch(query)

    def count(
        self,
        *,
        org_id: str,
        rules: Sequence[MatchRule],
        start: datetime,
        end: datetime,
    ) -> int:
        """Count the events of the window whose type matches any of ``rules``."""

        query = (
            self.session.query(func.count(ActivityLogModel.id))
            .filter(ActivityLogModel.org_id == org_id)
            .filter(ActivityLogModel.created_at >= ensure_app_naive_datetime(start))
            .filter(ActivityLogModel.created_at <= ensure_app_naive_datetime(end))
        )
        if rules:
            query = query.filter(compile_rules(rules))
        try:
            return int(query.scalar() or 0)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to count activity log rows") from exc

    def _scoped_query(
        self,
        org_id: str,
        *,
        start: datetime | None,
        end: datetime | None,
        rules: Sequence[MatchRule],
    ) -> Query:
        query = (
            self.session.query(ActivityLogModel)
            .filter(ActivityLogModel.org_id == org_id)
            .filter(ActivityLogModel.type.in_(_KNOWN_TYPES))
        )
        if start is not None:
            query = query.filter(ActivityLogModel.created_at >= ensure_app_naive_datetime(start))
        if end is not None:
            query = query.filter(ActivityLogModel.created_at <= ensure_app_naive_datetime(end))
        if rules:
            query = query.filter(compile_rules(rules))
        return query

    def _fetch(self, query: Query) -> list[ActivityEvent]:
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise DataAccessError("Failed to read activity log rows") from exc
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: ActivityLogModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            org_id=model.org_id,
            user_id=model.user_id,
            type=ActivityEventType(model.type),
            created_at=ensure_app_timezone(model.created_at),
            references=ActivityReferences(
                document_id=model.document_id,
                version_id=model.version_id,
                unified_item_id=model.unified_item_id,
                envelope_id=model.envelope_id,
                share_link_id=model.share_link_id,
            ),
            provider=model.provider,
            context=dict(model.context) if model.context is not None else None,
            taxonomy_version=model.taxonomy_version,
        )

    @staticmethod
    def _apply_entity_to_model(model: ActivityLogModel, event: ActivityEvent) -> None:
        references = event.references
        model.org_id = event.org_id
        model.user_id = event.user_id
        model.type = event.type.value
        model.taxonomy_version = event.taxonomy_version
        model.document_id = references.document_id
        model.version_id = references.version_id
        model.unified_item_id = references.unified_item_id
        model.envelope_id = references.envelope_id
        model.share_link_id = references.share_link_id
        model.provider = event.provider
        model.context = event.context
        model.created_at = (
            ensure_app_naive_datetime(event.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )


__all__ = ["ActivityLogRepository", "compile_rules"]
