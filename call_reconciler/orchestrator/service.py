"""Reconciliation service that joins calls, conversations, and directory entries."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..cache import SnapshotCache
from ..config import ReconcilerConfig
from ..directory import ContactDirectoryIndex
from ..enrich import enrich_conversations
from ..matcher import match_conversations_to_calls
from ..models import CallRecord, ContactEntry, ConversationRecord, EnrichedCall

LOGGER = logging.getLogger(__name__)

ContactsLoader = Callable[[], Optional[Iterable[ContactEntry]]]
ContactsSource = Union[Iterable[ContactEntry], ContactsLoader, None]


@dataclass
class ReconciliationReport:
    """Enriched results from one pass plus summary counts."""

    results: Dict[str, EnrichedCall] = field(default_factory=dict)
    conversations: int = 0
    calls: int = 0
    contacts: int = 0
    directory_available: bool = True

    @property
    def matched(self) -> int:
        return sum(1 for item in self.results.values() if item.caller_phone)

    @property
    def named(self) -> int:
        return sum(1 for item in self.results.values() if item.has_contact_name)


class ReconciliationService:
    """Runs the match and enrichment pipeline over independently fetched snapshots.

    Each call is independent: nothing is carried between passes except the
    per-organization directory cache. Callers may inject one; otherwise the
    service owns a cache expiring after ``config.directory_ttl_seconds``.
    """

    def __init__(
        self,
        config: Optional[ReconcilerConfig] = None,
        *,
        directory_cache: Optional[SnapshotCache[ContactDirectoryIndex]] = None,
    ) -> None:
        self._config = config or ReconcilerConfig()
        if directory_cache is None:
            directory_cache = SnapshotCache(self._config.directory_ttl_seconds)
        self._directory_cache = directory_cache

    @property
    def config(self) -> ReconcilerConfig:
        return self._config

    @property
    def directory_cache(self) -> SnapshotCache[ContactDirectoryIndex]:
        return self._directory_cache

    def reconcile(
        self,
        conversations: Optional[Sequence[ConversationRecord]],
        calls: Optional[Sequence[CallRecord]],
        contacts: ContactsSource = None,
    ) -> Dict[str, EnrichedCall]:
        """Return conversation id -> :class:`EnrichedCall` for every conversation supplied."""

        return self.run(conversations, calls, contacts).results

    def run(
        self,
        conversations: Optional[Sequence[ConversationRecord]],
        calls: Optional[Sequence[CallRecord]],
        contacts: ContactsSource = None,
    ) -> ReconciliationReport:
        index, available = self._build_index(contacts)
        return self._reconcile_with_index(conversations, calls, index, available)

    def reconcile_for_organization(
        self,
        org_id: str,
        conversations: Optional[Sequence[ConversationRecord]],
        calls: Optional[Sequence[CallRecord]],
        contacts_loader: ContactsLoader,
    ) -> ReconciliationReport:
        """Like :meth:`run`, reusing a cached directory index for *org_id* when one is fresh."""

        cached = self._directory_cache.get(org_id)
        if cached is not None:
            LOGGER.debug("Using cached directory index for organization %s", org_id)
            return self._reconcile_with_index(conversations, calls, cached, True)

        index, available = self._build_index(contacts_loader)
        if available:
            self._directory_cache.put(org_id, index)
        return self._reconcile_with_index(conversations, calls, index, available)

    def _reconcile_with_index(
        self,
        conversations: Optional[Sequence[ConversationRecord]],
        calls: Optional[Sequence[CallRecord]],
        index: ContactDirectoryIndex,
        directory_available: bool,
    ) -> ReconciliationReport:
        conversation_list: List[ConversationRecord] = list(conversations or ())
        call_list: List[CallRecord] = list(calls or ())

        matches = match_conversations_to_calls(
            conversation_list,
            call_list,
            self._config.match_window_ms,
            strategy=self._config.match_strategy,
        )
        report = ReconciliationReport(
            results=enrich_conversations(conversation_list, matches, index),
            conversations=len(conversation_list),
            calls=len(call_list),
            contacts=len(index),
            directory_available=directory_available,
        )
        LOGGER.info(
            "Reconciled %s conversations against %s calls: %s matched, %s named",
            report.conversations,
            report.calls,
            report.matched,
            report.named,
        )
        return report

    def _build_index(self, contacts: ContactsSource) -> tuple[ContactDirectoryIndex, bool]:
        if contacts is None:
            LOGGER.debug("Directory snapshot not available yet; showing phone numbers only")
            return ContactDirectoryIndex.empty(), False

        entries: Optional[Iterable[ContactEntry]]
        if callable(contacts):
            try:
                entries = contacts()
            except Exception:
                LOGGER.exception("Contacts directory fetch failed; continuing without contact names")
                return ContactDirectoryIndex.empty(), False
        else:
            entries = contacts

        return ContactDirectoryIndex.build(entries), True


__all__ = ["ContactsLoader", "ReconciliationReport", "ReconciliationService"]
