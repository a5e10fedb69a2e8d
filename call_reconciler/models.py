"""Unified data models for call, conversation, and contact directory snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

LOGGER = logging.getLogger(__name__)

UNKNOWN_CALLER = "Unknown Caller"
UNKNOWN_CONTACT = "Unknown"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 or RFC 2822 string, epoch seconds, or datetime into an aware datetime.

    Returns ``None`` for anything that cannot be interpreted; callers treat a
    missing start time as "never matches" rather than as an error.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.replace(".", "", 1).isdecimal():
            try:
                return parse_timestamp(float(text))
            except ValueError:
                return None
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError):
            LOGGER.debug("Unparseable timestamp %r", value)
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


# --- Telephony provider ---

@dataclass(frozen=True)
class CallRecord:
    """A raw phone call as reported by the telephony provider."""

    id: str
    started_at: Optional[datetime]
    caller_phone: Optional[str] = None
    duration_seconds: Optional[int] = None
    direction: Optional[str] = None
    status: Optional[str] = None
    callee_phone: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CallRecord":
        return cls(
            id=str(data.get("id") or data.get("sid") or data.get("twilio_call_sid") or ""),
            started_at=parse_timestamp(data.get("started_at") or data.get("start_time") or data.get("date_created")),
            caller_phone=_clean_text(data.get("caller_phone") or data.get("from")),
            duration_seconds=_optional_int(data.get("duration_seconds", data.get("duration"))),
            direction=_clean_text(data.get("direction")),
            status=_clean_text(data.get("status")),
            callee_phone=_clean_text(data.get("to")),
        )


# --- Conversational-AI platform ---

@dataclass(frozen=True)
class ConversationRecord:
    """A spoken conversation transcript. It never carries the caller's number."""

    id: str
    started_at: Optional[datetime]
    status: str = ""
    message_count: int = 0
    transcript: Optional[str] = None
    summary: Optional[str] = None
    duration_seconds: Optional[int] = None
    call_successful: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConversationRecord":
        analysis = data.get("analysis") or {}
        if not isinstance(analysis, Mapping):
            analysis = {}
        started = data.get("started_at")
        if started is None and data.get("start_time_unix_secs") is not None:
            started = data.get("start_time_unix_secs")
        return cls(
            id=str(data.get("conversation_id") or data.get("id") or ""),
            started_at=parse_timestamp(started),
            status=str(data.get("status") or ""),
            message_count=_optional_int(data.get("message_count")) or 0,
            transcript=_clean_text(data.get("transcript")) if isinstance(data.get("transcript"), str) else None,
            summary=_clean_text(
                data.get("summary") or data.get("transcript_summary") or analysis.get("transcript_summary")
            ),
            duration_seconds=_optional_int(data.get("duration_seconds", data.get("call_duration_secs"))),
            call_successful=_clean_text(data.get("call_successful") or analysis.get("call_successful")),
        )


# --- Contacts directory service ---

@dataclass(frozen=True)
class ContactName:
    display_name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None


@dataclass(frozen=True)
class ContactPhone:
    """A raw directory phone number, optionally with the provider's canonical form."""

    value: Optional[str] = None
    canonical_form: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class ContactEntry:
    """A human-entered directory entry; names are ordered, the first usable one wins."""

    id: str = ""
    names: List[ContactName] = field(default_factory=list)
    phone_numbers: List[ContactPhone] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContactEntry":
        names = [
            ContactName(
                display_name=_clean_text(item.get("displayName")),
                given_name=_clean_text(item.get("givenName")),
                family_name=_clean_text(item.get("familyName")),
            )
            for item in data.get("names") or []
            if isinstance(item, Mapping)
        ]
        phones = [
            ContactPhone(
                value=_clean_text(item.get("value")),
                canonical_form=_clean_text(item.get("canonicalForm")),
                type=_clean_text(item.get("type")),
            )
            for item in data.get("phoneNumbers") or []
            if isinstance(item, Mapping)
        ]
        return cls(
            id=str(data.get("id") or data.get("resourceName") or ""),
            names=names,
            phone_numbers=phones,
        )


# --- Derived results ---

@dataclass(frozen=True)
class EnrichedCall:
    """Display-ready view of one conversation after reconciliation."""

    conversation_id: str
    caller_phone: Optional[str] = None
    contact_name: Optional[str] = None
    has_contact_name: bool = False

    @property
    def display_name(self) -> str:
        return self.contact_name or self.caller_phone or UNKNOWN_CALLER

    def as_row(self) -> Dict[str, Any]:
        """Return a serialisable representation of the result."""
        return {
            "conversation_id": self.conversation_id,
            "display_name": self.display_name,
            "caller_phone": self.caller_phone or "",
            "contact_name": self.contact_name or "",
            "has_contact_name": self.has_contact_name,
        }


@dataclass(frozen=True)
class SmsMessage:
    """A text message from the telephony provider."""

    id: str
    direction: str
    from_phone: str
    to_phone: str
    body: str = ""
    status: str = ""
    created_at: Optional[datetime] = None

    @property
    def counterpart_phone(self) -> str:
        """The other party's number: the sender for inbound, the recipient otherwise."""
        return self.from_phone if self.direction == "inbound" else self.to_phone

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SmsMessage":
        return cls(
            id=str(data.get("id") or data.get("sid") or ""),
            direction=str(data.get("direction") or ""),
            from_phone=str(data.get("from") or ""),
            to_phone=str(data.get("to") or ""),
            body=str(data.get("body") or ""),
            status=str(data.get("status") or ""),
            created_at=parse_timestamp(data.get("created_at") or data.get("date_created")),
        )


@dataclass(frozen=True)
class EnrichedMessage:
    message: SmsMessage
    contact_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.contact_name or self.message.counterpart_phone


__all__ = [
    "UNKNOWN_CALLER",
    "UNKNOWN_CONTACT",
    "CallRecord",
    "ConversationRecord",
    "ContactName",
    "ContactPhone",
    "ContactEntry",
    "EnrichedCall",
    "SmsMessage",
    "EnrichedMessage",
    "parse_timestamp",
]
