"""Pair conversation transcripts with the telephony calls that produced them.

The two upstream systems share no identifier, so a conversation is attributed
to the first call (in the order the calls were supplied) whose start time lies
strictly within ``window_ms`` of the conversation's start, even when a later
call is closer in time.
"""
from __future__ import annotations

import logging
import math
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from .models import CallRecord, ConversationRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_MATCH_WINDOW_MS = 60_000
MATCH_STRATEGIES = ("linear", "bucketed")


def _epoch_ms(value: Optional[datetime]) -> Optional[float]:
    if value is None:
        return None
    return value.timestamp() * 1000.0


def _within_window(call_ms: Optional[float], conversation_ms: float, window_ms: float) -> bool:
    return call_ms is not None and abs(call_ms - conversation_ms) < window_ms


def find_matching_call(
    conversation: ConversationRecord,
    calls: Sequence[CallRecord],
    window_ms: float = DEFAULT_MATCH_WINDOW_MS,
) -> Optional[CallRecord]:
    """Return the first call in *calls* within the window of *conversation*, if any."""

    conversation_ms = _epoch_ms(conversation.started_at)
    if conversation_ms is None:
        return None
    for call in calls:
        if _within_window(_epoch_ms(call.started_at), conversation_ms, window_ms):
            return call
    return None


class _CallBuckets:
    """Calls grouped by ``floor(t / window_ms)``, each bucket in original order."""

    def __init__(self, calls: Sequence[CallRecord], window_ms: float) -> None:
        self._calls = list(calls)
        self._window_ms = window_ms
        self._times: List[Optional[float]] = [_epoch_ms(call.started_at) for call in self._calls]
        self._buckets: Dict[int, List[int]] = defaultdict(list)
        for position, call_ms in enumerate(self._times):
            if call_ms is not None:
                self._buckets[int(call_ms // window_ms)].append(position)

    def first_match(self, conversation_ms: float) -> Optional[CallRecord]:
        # |t - c| < w can only hold for calls in the conversation's bucket or its neighbours.
        bucket = int(conversation_ms // self._window_ms)
        best: Optional[int] = None
        for candidate_bucket in (bucket - 1, bucket, bucket + 1):
            for position in self._buckets.get(candidate_bucket, ()):
                if best is not None and position >= best:
                    break
                if _within_window(self._times[position], conversation_ms, self._window_ms):
                    best = position
                    break
        return self._calls[best] if best is not None else None


def match_conversations_to_calls(
    conversations: Iterable[ConversationRecord],
    calls: Sequence[CallRecord],
    window_ms: float = DEFAULT_MATCH_WINDOW_MS,
    *,
    strategy: str = "linear",
) -> Dict[str, str]:
    """Map conversation id -> raw caller phone of the matched call.

    Unmatched conversations, and matched calls without a caller phone, get no
    entry.  ``strategy="bucketed"`` indexes calls by time window first and
    selects exactly the same call as the linear scan.
    """

    if strategy not in MATCH_STRATEGIES:
        raise ValueError(f"Unknown match strategy '{strategy}'. Expected one of {MATCH_STRATEGIES}")

    matches: Dict[str, str] = {}
    calls = list(calls or ())
    if not calls or not window_ms > 0:
        return matches

    # Sub-millisecond or unbounded windows make bucket numbers meaningless; scan instead.
    bucketed = strategy == "bucketed" and 1 <= window_ms < math.inf
    buckets = _CallBuckets(calls, window_ms) if bucketed else None
    for conversation in conversations or ():
        conversation_ms = _epoch_ms(conversation.started_at)
        if conversation_ms is None:
            continue
        if buckets is not None:
            call = buckets.first_match(conversation_ms)
        else:
            call = find_matching_call(conversation, calls, window_ms)
        if call is None:
            LOGGER.debug("No call within %sms of conversation %s", window_ms, conversation.id)
            continue
        if call.caller_phone:
            matches[conversation.id] = call.caller_phone
    return matches


__all__ = [
    "DEFAULT_MATCH_WINDOW_MS",
    "MATCH_STRATEGIES",
    "find_matching_call",
    "match_conversations_to_calls",
]
