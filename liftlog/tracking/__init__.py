"""Per-slot tracking: saved sessions and completion marks."""

from liftlog.tracking.completions import CompletionTracker
from liftlog.tracking.sessions import SessionStore
from liftlog.tracking.types import CompletedSlot, CompletionMark, SessionEntry, SlotKey

__all__ = [
    "CompletedSlot",
    "CompletionMark",
    "CompletionTracker",
    "SessionEntry",
    "SessionStore",
    "SlotKey",
]
