"""Phone-to-name lookup built from contacts directory entries."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from .models import UNKNOWN_CONTACT, ContactEntry
from .phone import normalize_phone

LOGGER = logging.getLogger(__name__)


def contact_display_name(entry: ContactEntry) -> str:
    """First non-empty of the primary name's display name and given name."""

    if entry.names:
        primary = entry.names[0]
        for candidate in (primary.display_name, primary.given_name):
            if candidate and candidate.strip():
                return candidate.strip()
    return UNKNOWN_CONTACT


def contact_phone_keys(entry: ContactEntry) -> List[str]:
    """Canonical phone keys for *entry*, deduplicated, in directory order."""

    keys: List[str] = []
    for phone in entry.phone_numbers:
        # Canonical forms arrive as E.164 and reduce to the same key.
        key = normalize_phone(phone.canonical_form or phone.value)
        if key and key not in keys:
            keys.append(key)
    return keys


def build_contact_index(entries: Iterable[ContactEntry]) -> Dict[str, str]:
    """Map canonical phone -> display name.

    When two entries share a phone, the one later in *entries* wins.
    """

    index: Dict[str, str] = {}
    for entry in entries or ():
        name = contact_display_name(entry)
        for key in contact_phone_keys(entry):
            previous = index.get(key)
            if previous is not None and previous != name:
                LOGGER.debug("Directory entry %s overrides name for phone ending %s", entry.id, key[-4:])
            index[key] = name
    return index


class ContactDirectoryIndex(Mapping[str, str]):
    """Read-only phone lookup over one directory snapshot."""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None) -> None:
        self._index: Dict[str, str] = dict(mapping or {})

    @classmethod
    def build(cls, entries: Optional[Iterable[ContactEntry]]) -> "ContactDirectoryIndex":
        return cls(build_contact_index(entries or ()))

    @classmethod
    def empty(cls) -> "ContactDirectoryIndex":
        return cls()

    def lookup(self, raw: Optional[str]) -> Optional[str]:
        """Normalise *raw* and return the matching display name, or ``None``."""

        key = normalize_phone(raw)
        if not key:
            return None
        return self._index.get(key)

    def __getitem__(self, key: str) -> str:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._index)} phones)"


def lookup_contact_name(index: Optional[Mapping[str, str]], raw: Optional[str]) -> Optional[str]:
    """Look *raw* up in any phone -> name mapping, tolerating a missing index."""

    if not index:
        return None
    key = normalize_phone(raw)
    if not key:
        return None
    return index.get(key)


__all__ = [
    "ContactDirectoryIndex",
    "build_contact_index",
    "contact_display_name",
    "contact_phone_keys",
    "lookup_contact_name",
]
