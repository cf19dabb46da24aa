"""API endpoints for templates, the exercise library and user preferences."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from liftlog.api.dependencies.auth import get_current_user_id
from liftlog.api.dependencies.stores import get_exercise_library, get_preference_store, get_template_store
from liftlog.api.errors import http_errors
from liftlog.exercises.library import ExerciseLibrary
from liftlog.plans.templates import TemplateStore
from liftlog.plans.types import Template
from liftlog.users.prefs import PreferenceStore

templates_router = APIRouter(prefix="/api/templates", tags=["templates"])
exercises_router = APIRouter(prefix="/api/exercises", tags=["exercises"])
prefs_router = APIRouter(prefix="/api/prefs", tags=["prefs"])


class TemplateWriteRequest(BaseModel):
    name: str | None = None
    data: dict[str, Any] | None = None


class TemplateResponse(BaseModel):
    id: int
    name: str
    data: dict[str, Any]

    @classmethod
    def from_template(cls, template: Template) -> "TemplateResponse":
        return cls(
            id=template.id,
            name=template.name,
            data=template.data if isinstance(template.data, dict) else {},
        )


class ExerciseRequest(BaseModel):
    name: str | None = None


class ExerciseResponse(BaseModel):
    id: int
    name: str


class PrefsRequest(BaseModel):
    last_plan_id: int | None = None
    last_week_id: str | None = None
    last_day_id: str | None = None


class PrefsResponse(PrefsRequest):
    user_id: str


@templates_router.get("", response_model=list[TemplateResponse])
def list_templates(
    user_id: str = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> list[TemplateResponse]:
    with http_errors("Failed to load templates"):
        return [TemplateResponse.from_template(t) for t in store.list(user_id)]


@templates_router.post("", response_model=TemplateResponse)
def create_template(
    request: TemplateWriteRequest,
    user_id: str = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> TemplateResponse:
    with http_errors("Failed to create template"):
        return TemplateResponse.from_template(store.create(user_id, request.name, request.data))


@templates_router.put("/{template_id}", response_model=TemplateResponse)
def update_template(
    template_id: int,
    request: TemplateWriteRequest,
    user_id: str = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> TemplateResponse:
    with http_errors("Failed to update template"):
        return TemplateResponse.from_template(store.update(template_id, user_id, request.name, request.data))


@templates_router.delete("/{template_id}")
def delete_template(
    template_id: int,
    user_id: str = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> dict:
    with http_errors("Failed to delete template"):
        store.delete(template_id, user_id)
    return {"ok": True}


@exercises_router.get("", response_model=list[ExerciseResponse])
def list_exercises(
    name: str | None = Query(None, description="Only return the exercise with this name (case-insensitive)"),
    user_id: str = Depends(get_current_user_id),
    library: ExerciseLibrary = Depends(get_exercise_library),
) -> list[ExerciseResponse]:
    """List the exercise library, or look up a single name."""
    with http_errors("Failed to load exercises"):
        if name is not None:
            match = library.find_by_name(user_id, name)
            exercises = [match] if match is not None else []
        else:
            exercises = library.list(user_id)
    return [ExerciseResponse(id=e.id, name=e.name) for e in exercises]


@exercises_router.post("", response_model=ExerciseResponse | None)
def find_or_create_exercise(
    request: ExerciseRequest,
    user_id: str = Depends(get_current_user_id),
    library: ExerciseLibrary = Depends(get_exercise_library),
) -> ExerciseResponse | None:
    """Return the exercise with this name, creating it if needed. Blank names return null."""
    with http_errors("Failed to save exercise"):
        exercise = library.find_or_create(user_id, request.name)
    if exercise is None:
        return None
    return ExerciseResponse(id=exercise.id, name=exercise.name)


@exercises_router.delete("/{exercise_id}")
def delete_exercise(
    exercise_id: int,
    user_id: str = Depends(get_current_user_id),
    library: ExerciseLibrary = Depends(get_exercise_library),
) -> dict:
    with http_errors("Failed to delete exercise"):
        library.delete(exercise_id, user_id)
    return {"ok": True}


@prefs_router.put("")
def save_prefs(
    request: PrefsRequest,
    user_id: str = Depends(get_current_user_id),
    store: PreferenceStore = Depends(get_preference_store),
) -> dict:
    with http_errors("Failed to save prefs"):
        store.set(user_id, request.last_plan_id, request.last_week_id, request.last_day_id)
    return {"ok": True}


@prefs_router.get("", response_model=PrefsResponse | None)
def get_prefs(
    user_id: str = Depends(get_current_user_id),
    store: PreferenceStore = Depends(get_preference_store),
) -> PrefsResponse | None:
    with http_errors("Failed to load prefs"):
        prefs = store.get(user_id)
    if prefs is None:
        return None
    return PrefsResponse(
        user_id=prefs.user_id,
        last_plan_id=prefs.last_plan_id,
        last_week_id=prefs.last_week_id,
        last_day_id=prefs.last_day_id,
    )
