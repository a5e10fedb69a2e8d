"""Search filters shared by the call list, message list, and contacts views."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .directory import contact_phone_keys
from .models import ContactEntry, EnrichedCall, EnrichedMessage
from .phone import normalize_phone, phone_digits


def filter_enriched_calls(calls: Iterable[EnrichedCall], query: Optional[str]) -> List[EnrichedCall]:
    calls = list(calls or ())
    text = (query or "").strip().lower()
    if not text:
        return calls
    digits = phone_digits(text)
    results: List[EnrichedCall] = []
    for call in calls:
        if text in call.display_name.lower():
            results.append(call)
        elif digits and digits in phone_digits(call.caller_phone):
            results.append(call)
    return results


def filter_messages(messages: Iterable[EnrichedMessage], query: Optional[str]) -> List[EnrichedMessage]:
    messages = list(messages or ())
    raw = (query or "").strip()
    if not raw:
        return messages
    text = raw.lower()
    return [
        item
        for item in messages
        if text in item.message.body.lower()
        or raw in item.message.to_phone
        or raw in item.message.from_phone
        or (item.contact_name is not None and text in item.contact_name.lower())
    ]


def filter_contacts(entries: Iterable[ContactEntry], query: Optional[str]) -> List[ContactEntry]:
    """Match on display name, or a substring of the entry's first phone number."""

    entries = list(entries or ())
    raw = (query or "").strip()
    if not raw:
        return entries
    text = raw.lower()
    results: List[ContactEntry] = []
    for entry in entries:
        primary = entry.names[0] if entry.names else None
        name = (primary.display_name or primary.given_name or "") if primary else ""
        first_phone = (entry.phone_numbers[0].value or "") if entry.phone_numbers else ""
        if text in name.lower() or raw in first_phone:
            results.append(entry)
    return results


def find_contact_by_phone(entries: Sequence[ContactEntry], raw: Optional[str]) -> Optional[ContactEntry]:
    """Return the entry that owns *raw* in the directory index (the last one listing it)."""

    key = normalize_phone(raw)
    if not key:
        return None
    for entry in reversed(list(entries or ())):
        if key in contact_phone_keys(entry):
            return entry
    return None


__all__ = ["filter_contacts", "filter_enriched_calls", "filter_messages", "find_contact_by_phone"]
