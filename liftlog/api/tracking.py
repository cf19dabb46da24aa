"""API endpoints for per-slot tracking: saved sessions and completion marks.

Slot fields are optional at the schema level so that a missing field is
reported as a 400 by slot validation rather than a schema error.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from liftlog.api.dependencies.auth import get_current_user_id
from liftlog.api.dependencies.stores import get_completion_tracker, get_session_store
from liftlog.api.errors import http_errors
from liftlog.errors import ValidationError
from liftlog.tracking.completions import CompletionTracker
from liftlog.tracking.sessions import SessionStore
from liftlog.tracking.types import SlotKey

sessions_router = APIRouter(prefix="/api/sessions", tags=["sessions"])
completions_router = APIRouter(prefix="/api/completed", tags=["completions"])


class SlotRequest(BaseModel):
    plan_id: int | None = None
    week_id: str | None = None
    day_id: str | None = None


class SaveSessionRequest(SlotRequest):
    data: Any = None


class SetCompletedRequest(SlotRequest):
    completed: bool = False


class SessionEntryResponse(BaseModel):
    plan_id: int
    week_id: str
    day_id: str
    updated_at: str  # ISO datetime string
    data: Any


class CompletionStatusResponse(BaseModel):
    completed: bool


class CompletionMarkResponse(BaseModel):
    week_id: str
    day_id: str
    completed_at: str  # ISO datetime string


class CompletedSlotResponse(BaseModel):
    week_id: str
    day_id: str


def _require_plan_id(plan_id: int | None) -> int:
    if plan_id is None:
        raise ValidationError("Missing plan_id")
    return plan_id


@sessions_router.post("")
def save_session(
    request: SaveSessionRequest,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    with http_errors("Failed to save session"):
        slot = SlotKey(user_id, request.plan_id, request.week_id, request.day_id)
        store.save(slot, request.data)
    return {"ok": True}


@sessions_router.get("/last")
def get_last_session(
    plan_id: int | None = Query(None),
    week_id: str | None = Query(None),
    day_id: str | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
) -> Any:
    """Get the saved session payload for a slot, or null."""
    with http_errors("Failed to load session"):
        return store.get_last(SlotKey(user_id, plan_id, week_id, day_id))


@sessions_router.get("", response_model=list[SessionEntryResponse])
def list_sessions(
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
) -> list[SessionEntryResponse]:
    with http_errors("Failed to load sessions"):
        return [
            SessionEntryResponse(
                plan_id=entry.plan_id,
                week_id=entry.week_id,
                day_id=entry.day_id,
                updated_at=entry.updated_at.isoformat(),
                data=entry.data,
            )
            for entry in store.list_all(user_id)
        ]


@completions_router.post("")
def set_completed(
    request: SetCompletedRequest,
    user_id: str = Depends(get_current_user_id),
    tracker: CompletionTracker = Depends(get_completion_tracker),
) -> dict:
    with http_errors("Failed to set completed"):
        slot = SlotKey(user_id, request.plan_id, request.week_id, request.day_id)
        tracker.set_completed(slot, request.completed)
    return {"ok": True}


@completions_router.get("/get", response_model=CompletionStatusResponse)
def get_completed(
    plan_id: int | None = Query(None),
    week_id: str | None = Query(None),
    day_id: str | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    tracker: CompletionTracker = Depends(get_completion_tracker),
) -> CompletionStatusResponse:
    with http_errors("Failed to load completion"):
        completed = tracker.get_status(SlotKey(user_id, plan_id, week_id, day_id))
    return CompletionStatusResponse(completed=completed)


@completions_router.get("/last", response_model=CompletionMarkResponse | None)
def get_last_completed(
    plan_id: int | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    tracker: CompletionTracker = Depends(get_completion_tracker),
) -> CompletionMarkResponse | None:
    with http_errors("Failed to load completion"):
        mark = tracker.get_last(user_id, _require_plan_id(plan_id))
    if mark is None:
        return None
    return CompletionMarkResponse(
        week_id=mark.week_id,
        day_id=mark.day_id,
        completed_at=mark.completed_at.isoformat(),
    )


@completions_router.get("/all", response_model=list[CompletedSlotResponse])
def get_all_completed(
    plan_id: int | None = Query(None),
    user_id: str = Depends(get_current_user_id),
    tracker: CompletionTracker = Depends(get_completion_tracker),
) -> list[CompletedSlotResponse]:
    """List completed slots of a plan, oldest completion first."""
    with http_errors("Failed to load completions"):
        slots = tracker.get_all(user_id, _require_plan_id(plan_id))
    return [CompletedSlotResponse(week_id=s.week_id, day_id=s.day_id) for s in slots]
