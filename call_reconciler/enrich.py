"""Compose matching and directory lookup into display-ready results."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from .directory import lookup_contact_name
from .models import ConversationRecord, EnrichedCall, EnrichedMessage, SmsMessage


def enrich_conversation(
    conversation: ConversationRecord,
    matches: Optional[Mapping[str, str]],
    contact_index: Optional[Mapping[str, str]],
) -> EnrichedCall:
    """Resolve caller phone and contact name for one conversation.

    Display falls back from contact name, to caller phone, to "Unknown Caller".
    """

    caller_phone = (matches or {}).get(conversation.id) or None
    contact_name = lookup_contact_name(contact_index, caller_phone) if caller_phone else None
    contact_name = contact_name or None
    return EnrichedCall(
        conversation_id=conversation.id,
        caller_phone=caller_phone,
        contact_name=contact_name,
        has_contact_name=contact_name is not None,
    )


def enrich_conversations(
    conversations: Iterable[ConversationRecord],
    matches: Optional[Mapping[str, str]],
    contact_index: Optional[Mapping[str, str]],
) -> Dict[str, EnrichedCall]:
    return {
        conversation.id: enrich_conversation(conversation, matches, contact_index)
        for conversation in conversations or ()
    }


def enrich_message(message: SmsMessage, contact_index: Optional[Mapping[str, str]]) -> EnrichedMessage:
    contact_name = lookup_contact_name(contact_index, message.counterpart_phone)
    return EnrichedMessage(message=message, contact_name=contact_name or None)


def enrich_messages(
    messages: Iterable[SmsMessage], contact_index: Optional[Mapping[str, str]]
) -> List[EnrichedMessage]:
    return [enrich_message(message, contact_index) for message in messages or ()]


__all__ = ["enrich_conversation", "enrich_conversations", "enrich_message", "enrich_messages"]
