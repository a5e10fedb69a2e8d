"""Reconcile telephony calls, AI conversation transcripts, and directory contacts."""

from . import models  # noqa: F401
from .directory import ContactDirectoryIndex, build_contact_index, lookup_contact_name
from .enrich import enrich_conversation, enrich_conversations, enrich_message, enrich_messages
from .matcher import DEFAULT_MATCH_WINDOW_MS, find_matching_call, match_conversations_to_calls
from .models import (
    UNKNOWN_CALLER,
    CallRecord,
    ContactEntry,
    ContactName,
    ContactPhone,
    ConversationRecord,
    EnrichedCall,
    EnrichedMessage,
    SmsMessage,
)
from .orchestrator import ReconciliationReport, ReconciliationService
from .phone import format_phone_display, normalize_phone

__all__ = [
    "DEFAULT_MATCH_WINDOW_MS",
    "UNKNOWN_CALLER",
    "CallRecord",
    "ContactDirectoryIndex",
    "ContactEntry",
    "ContactName",
    "ContactPhone",
    "ConversationRecord",
    "EnrichedCall",
    "EnrichedMessage",
    "ReconciliationReport",
    "ReconciliationService",
    "SmsMessage",
    "build_contact_index",
    "enrich_conversation",
    "enrich_conversations",
    "enrich_message",
    "enrich_messages",
    "find_matching_call",
    "format_phone_display",
    "lookup_contact_name",
    "match_conversations_to_calls",
    "normalize_phone",
    "ingestion",
    "orchestrator",
]
