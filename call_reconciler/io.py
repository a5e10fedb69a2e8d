"""Input/output helpers for snapshot triples and reconciliation results."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

from .ingestion import export_enriched_calls, load_calls, load_contacts, load_conversations
from .models import CallRecord, ContactEntry, ConversationRecord, EnrichedCall

LOGGER = logging.getLogger(__name__)


@dataclass
class SnapshotSet:
    """The three independently fetched inputs to one reconciliation pass."""

    conversations: List[ConversationRecord] = field(default_factory=list)
    calls: List[CallRecord] = field(default_factory=list)
    contacts: Optional[List[ContactEntry]] = None


def load_snapshots(
    conversations_path: str | Path,
    calls_path: str | Path,
    contacts_path: str | Path | None = None,
) -> SnapshotSet:
    conversations = load_conversations(conversations_path)
    calls = load_calls(calls_path)
    contacts = load_contacts(contacts_path) if contacts_path else None
    LOGGER.info(
        "Loaded %s conversations, %s calls, %s contacts",
        len(conversations),
        len(calls),
        "no" if contacts is None else len(contacts),
    )
    return SnapshotSet(conversations=conversations, calls=calls, contacts=contacts)


def write_results(
    path: str | Path,
    results: Union[Mapping[str, EnrichedCall], Iterable[EnrichedCall]],
    *,
    format_phones: bool = False,
) -> Path:
    return export_enriched_calls(results, path, format_phones=format_phones)


__all__ = ["SnapshotSet", "load_snapshots", "write_results"]
