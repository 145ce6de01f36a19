"""Closed taxonomy of activity log event types and their filter groups.

Only members of :class:`ActivityEventType` may be written to the activity log.
Each member is declared together with its human readable label, and every
:class:`EventGroup` must have an entry in :data:`GROUP_RULES`; the module
refuses to import otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Iterable

EVENT_TAXONOMY_VERSION: Final[int] = 3


class ActivityEventType(str, Enum):
    """Every business event the activity log accepts."""

    label: str

    def __new__(cls, value: str, label: str) -> "ActivityEventType":
        member = str.__new__(cls, value)
        member._value_ = value
        member.label = label
        return member

    # Builder & analyze
    GENERATE = ("generate", "Docs generated")
    ANALYZE = ("analyze", "Docs analyzed")
    SAVE_TO_VAULT = ("save_to_vault", "Saved to Vault")
    DOC_GENERATED = ("doc_generated", "Documents generated")
    DOC_SAVED_TO_VAULT = ("doc_saved_to_vault", "Documents saved to Vault")

    # Share & signatures
    SHARE_LINK_CREATED = ("share_link_created", "Share links created")
    SHARE_LINK_ACCESSED = ("share_link_accessed", "Share links opened")
    SIGNATURE_REQUEST_SENT = ("signature_request_sent", "Signature requests sent")
    SIGNATURE_COMPLETED = ("signature_completed", "Signatures completed")
    ENVELOPE_STATUS_CHANGED = ("envelope_status_changed", "Envelope status changes")

    # Playbooks
    PLAYBOOK_RUN_STARTED = ("playbook_run_started", "Playbook runs started")
    PLAYBOOK_RUN_COMPLETED = ("playbook_run_completed", "Playbook runs completed")
    PLAYBOOK_RUN_FAILED = ("playbook_run_failed", "Playbook runs failed")

    # Assistant
    MONO_QUERY = ("mono_query", "Assistant queries")

    # Connectors
    CONNECTOR_SYNC_STARTED = ("connector_sync_started", "Connector syncs started")
    CONNECTOR_SYNC_COMPLETED = ("connector_sync_completed", "Connector syncs completed")
    CONNECTOR_SYNC_FAILED = ("connector_sync_failed", "Connector syncs failed")

    # Accounts packs
    ACCOUNTS_PACK_SUCCESS = ("accounts_pack_success", "Accounts pack run succeeded")
    ACCOUNTS_PACK_FAILURE = ("accounts_pack_failure", "Accounts pack run failed")

    # Contracts
    CONTRACT_DRAFT_CREATED = ("contract_draft_created", "Contract drafts created")
    CONTRACT_SENT_FOR_SIGNATURE = (
        "contract_sent_for_signature",
        "Contracts sent for signature",
    )
    CONTRACT_SIGNED = ("contract_signed", "Contracts signed")

    # Decks
    DECK_GENERATED = ("deck_generated", "Decks generated")
    DECK_SAVED_TO_VAULT = ("deck_saved_to_vault", "Decks saved to Vault")
    DECK_EXPORTED = ("deck_exported", "Decks exported")

    @classmethod
    def parse(cls, value: Any) -> "ActivityEventType":
        """Return the member matching ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown activity event type: {value!r}")
        try:
            return cls(value.strip())
        except ValueError as exc:
            raise ValueError(f"Unknown activity event type: {value!r}") from exc


class EventGroup(str, Enum):
    """Named categories used to filter the activity log."""

    DOCUMENTS = "documents"
    ASSISTANT = "assistant"
    CONNECTORS = "connectors"
    SIGNATURES = "signatures"
    SYSTEM = "system"


class MatchKind(str, Enum):
    PREFIX = "prefix"
    EXACT = "exact"


@dataclass(frozen=True)
class MatchRule:
    """Structured predicate over an event ``type`` value."""

    kind: MatchKind
    value: str

    @classmethod
    def prefix(cls, value: str) -> "MatchRule":
        return cls(MatchKind.PREFIX, value)

    @classmethod
    def exact(cls, value: str) -> "MatchRule":
        return cls(MatchKind.EXACT, value)

    def matches(self, event_type: str) -> bool:
        candidate = event_type.value if isinstance(event_type, Enum) else str(event_type)
        if self.kind is MatchKind.PREFIX:
            return candidate.startswith(self.value)
        return candidate == self.value


GROUP_RULES: Final[dict[EventGroup, tuple[MatchRule, ...]]] = {
    EventGroup.DOCUMENTS: (MatchRule.prefix("doc_"), MatchRule.prefix("share_")),
    EventGroup.ASSISTANT: (MatchRule.prefix("mono_"),),
    EventGroup.CONNECTORS: (MatchRule.prefix("connector_"),),
    EventGroup.SIGNATURES: (MatchRule.prefix("signature_"),),
    EventGroup.SYSTEM: (MatchRule.prefix("system_"), MatchRule.prefix("playbook_")),
}

_missing_groups = [group.value for group in EventGroup if not GROUP_RULES.get(group)]
if _missing_groups:  # pragma: no cover - guarded at import time
    raise RuntimeError(f"Event groups without match rules: {', '.join(_missing_groups)}")


def rules_for_groups(groups: Iterable[EventGroup]) -> list[MatchRule]:
    """Return the match rules of ``groups`` in declaration order, without duplicates."""

    requested = set(groups)
    rules: list[MatchRule] = []
    for group in EventGroup:
        if group not in requested:
            continue
        for rule in GROUP_RULES[group]:
            if rule not in rules:
                rules.append(rule)
    return rules


def groups_for_event_type(event_type: ActivityEventType | str) -> list[EventGroup]:
    """Return the groups whose rules match ``event_type``."""

    return [
        group
        for group, rules in GROUP_RULES.items()
        if any(rule.matches(event_type) for rule in rules)
    ]


__all__ = [
    "EVENT_TAXONOMY_VERSION",
    "ActivityEventType",
    "EventGroup",
    "GROUP_RULES",
    "MatchKind",
    "MatchRule",
    "groups_for_event_type",
    "rules_for_groups",
]
