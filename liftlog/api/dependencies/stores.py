"""FastAPI dependencies that build stores on the configured session scope.

Override get_session_scope to point every route at another engine.
"""

from fastapi import Depends

from liftlog.db.session import SessionScope, get_session
from liftlog.exercises.library import ExerciseLibrary
from liftlog.plans.store import PlanStore
from liftlog.plans.templates import TemplateStore
from liftlog.tracking.completions import CompletionTracker
from liftlog.tracking.sessions import SessionStore
from liftlog.users.prefs import PreferenceStore


def get_session_scope() -> SessionScope:
    return get_session


def get_plan_store(scope: SessionScope = Depends(get_session_scope)) -> PlanStore:
    return PlanStore(scope)


def get_template_store(scope: SessionScope = Depends(get_session_scope)) -> TemplateStore:
    return TemplateStore(scope)


def get_session_store(scope: SessionScope = Depends(get_session_scope)) -> SessionStore:
    return SessionStore(scope)


def get_completion_tracker(scope: SessionScope = Depends(get_session_scope)) -> CompletionTracker:
    return CompletionTracker(scope)


def get_preference_store(scope: SessionScope = Depends(get_session_scope)) -> PreferenceStore:
    return PreferenceStore(scope)


def get_exercise_library(scope: SessionScope = Depends(get_session_scope)) -> ExerciseLibrary:
    return ExerciseLibrary(scope)
