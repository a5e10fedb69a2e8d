from __future__ import annotations

import logging

from call_reconciler.directory import (
    ContactDirectoryIndex,
    build_contact_index,
    contact_display_name,
    lookup_contact_name,
)
from call_reconciler.models import ContactEntry, ContactName, ContactPhone


def _entry(entry_id: str, *phones: str, display: str | None = None, given: str | None = None) -> ContactEntry:
    names = [ContactName(display_name=display, given_name=given)] if (display or given) else []
    return ContactEntry(id=entry_id, names=names, phone_numbers=[ContactPhone(value=p) for p in phones])


def test_display_name_prefers_display_then_given_then_unknown() -> None:
    assert contact_display_name(_entry("a", display="Jane Doe", given="Jane")) == "Jane Doe"
    assert contact_display_name(_entry("b", given="Jane")) == "Jane"
    assert contact_display_name(ContactEntry(id="c", names=[ContactName(display_name="  ")])) == "Unknown"
    assert contact_display_name(ContactEntry(id="d")) == "Unknown"


def test_index_keys_are_canonical_and_deduplicated_per_entry() -> None:
    entry = _entry("a", "+1 (206) 555-1234", "206-555-1234", "425.555.0000", display="Jane Doe")

    index = build_contact_index([entry])

    assert index == {"2065551234": "Jane Doe", "4255550000": "Jane Doe"}


def test_provider_canonical_form_is_preferred_over_raw_value() -> None:
    entry = ContactEntry(
        id="a",
        names=[ContactName(display_name="Jane Doe")],
        phone_numbers=[ContactPhone(value="call me maybe", canonical_form="+12065551234")],
    )

    assert build_contact_index([entry]) == {"2065551234": "Jane Doe"}


def test_later_entry_wins_on_shared_phone(caplog) -> None:
    first = _entry("a", "2065551234", display="Jane Doe")
    second = _entry("b", "+1 206 555 1234", display="John Roe")

    with caplog.at_level(logging.DEBUG, logger="call_reconciler.directory"):
        index = ContactDirectoryIndex.build([first, second])

    assert index.lookup("(206) 555-1234") == "John Roe"
    assert ContactDirectoryIndex.build([second, first]).lookup("2065551234") == "Jane Doe"
    assert any("overrides" in record.message for record in caplog.records)


def test_lookup_misses_return_none() -> None:
    index = ContactDirectoryIndex.build([_entry("a", "2065551234", display="Jane Doe")])

    assert index.lookup("4255550000") is None
    assert index.lookup(None) is None
    assert index.lookup("") is None
    assert len(index) == 1
    assert "2065551234" in index


def test_empty_and_missing_directories() -> None:
    assert build_contact_index([]) == {}
    assert len(ContactDirectoryIndex.build(None)) == 0
    assert lookup_contact_name(None, "2065551234") is None
    assert lookup_contact_name({"2065551234": "Jane"}, "+1 206 555 1234") == "Jane"


def test_build_does_not_mutate_entries() -> None:
    entries = [_entry("a", "2065551234", display="Jane Doe")]
    snapshot = list(entries)

    build_contact_index(entries)

    assert entries == snapshot
    assert entries[0].phone_numbers[0].value == "2065551234"


def test_display_name_is_returned_stripped() -> None:
    padded = ContactEntry(id="e", names=[ContactName(display_name="  Jane Doe  ")])
    given_only = ContactEntry(id="f", names=[ContactName(display_name=" ", given_name="\tJane\n")])

    assert contact_display_name(padded) == "Jane Doe"
    assert contact_display_name(given_only) == "Jane"
    assert build_contact_index([_entry("g", "2065551234", display=" Jane ")]) == {"2065551234": "Jane"}
