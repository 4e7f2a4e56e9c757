"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
submission flow. Events are logged and kept in a bounded in-memory buffer
for test observation; payloads never carry personal info.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List
import logging

logger = logging.getLogger(__name__)

SUBMISSION_ACCEPTED = "submission.accepted"
SUBMISSION_REJECTED = "submission.rejected"

EVENT_BUFFER_SIZE = 100

# Most recent events only; older entries drop off as new ones arrive
EVENT_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=EVENT_BUFFER_SIZE)


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "SUBMISSION_ACCEPTED",
    "SUBMISSION_REJECTED",
    "EVENT_BUFFER_SIZE",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
