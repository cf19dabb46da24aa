"""API endpoints for plans.

Includes CRUD, archive/unarchive, rollover, lineage and CSV exchange.
"""

import re
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from loguru import logger
from pydantic import BaseModel, Field

from liftlog.api.dependencies.auth import get_current_user_id
from liftlog.api.dependencies.stores import get_plan_store
from liftlog.api.errors import http_errors
from liftlog.plans.csv_io import csv_to_plan, plan_to_csv
from liftlog.plans.store import PlanStore
from liftlog.plans.types import Plan

router = APIRouter(prefix="/api/plans", tags=["plans"])

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._ -]+")


class PlanWriteRequest(BaseModel):
    name: str | None = None
    data: dict[str, Any] | None = None


class PlanImportRequest(BaseModel):
    csv: str = Field(..., description="CSV text with a header row")
    filename: str | None = Field(None, description="Uploaded file name, used when the CSV has no plan name")


class PlanResponse(BaseModel):
    """Response model for a plan."""

    id: int
    name: str
    data: dict[str, Any]
    archived: bool
    predecessor_plan_id: int | None
    created_at: str  # ISO datetime string

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanResponse":
        return cls(
            id=plan.id,
            name=plan.name,
            data=plan.data if isinstance(plan.data, dict) else {},
            archived=plan.archived,
            predecessor_plan_id=plan.predecessor_plan_id,
            created_at=plan.created_at.isoformat(),
        )


@router.get("", response_model=list[PlanResponse])
def list_plans(
    archived: bool = Query(False, description="List archived plans instead of active ones"),
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> list[PlanResponse]:
    with http_errors("Failed to load plans"):
        return [PlanResponse.from_plan(plan) for plan in store.list(user_id, archived=archived)]


@router.post("", response_model=PlanResponse)
def create_plan(
    request: PlanWriteRequest,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    with http_errors("Failed to create plan"):
        return PlanResponse.from_plan(store.create(user_id, request.name, request.data))


@router.post("/import", response_model=PlanResponse)
def import_plan(
    request: PlanImportRequest,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    """Create a new active plan from CSV text."""
    with http_errors("Failed to import plan"):
        name, data = csv_to_plan(request.csv, request.filename)
        return PlanResponse.from_plan(store.create(user_id, name, data))


@router.get("/{plan_id}", response_model=PlanResponse)
def get_plan(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    with http_errors("Failed to load plan"):
        return PlanResponse.from_plan(store.get(plan_id, user_id))


@router.put("/{plan_id}", response_model=PlanResponse)
def update_plan(
    plan_id: int,
    request: PlanWriteRequest,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    with http_errors("Failed to update plan"):
        return PlanResponse.from_plan(store.update(plan_id, user_id, request.name, request.data))


@router.delete("/{plan_id}")
def delete_plan(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> dict:
    with http_errors("Failed to delete plan"):
        store.delete(plan_id, user_id)
    return {"ok": True}


@router.post("/{plan_id}/archive", response_model=PlanResponse)
def archive_plan(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    with http_errors("Failed to archive plan"):
        return PlanResponse.from_plan(store.archive(plan_id, user_id))


@router.post("/{plan_id}/unarchive", response_model=PlanResponse)
def unarchive_plan(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    with http_errors("Failed to unarchive plan"):
        return PlanResponse.from_plan(store.unarchive(plan_id, user_id))


@router.post("/{plan_id}/rollover", response_model=PlanResponse)
def rollover_plan(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> PlanResponse:
    """Archive the plan and return its next version."""
    logger.info("Plan rollover requested", user_id=user_id, plan_id=plan_id)
    with http_errors("Failed to roll over plan"):
        return PlanResponse.from_plan(store.rollover(plan_id, user_id))


@router.get("/{plan_id}/lineage", response_model=list[PlanResponse])
def get_plan_lineage(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> list[PlanResponse]:
    """Get the plan and its predecessors, newest first."""
    with http_errors("Failed to load plan lineage"):
        return [PlanResponse.from_plan(plan) for plan in store.lineage(plan_id, user_id)]


@router.get("/{plan_id}/csv")
def export_plan_csv(
    plan_id: int,
    user_id: str = Depends(get_current_user_id),
    store: PlanStore = Depends(get_plan_store),
) -> Response:
    with http_errors("Failed to export plan"):
        plan = store.get(plan_id, user_id)
    filename = _UNSAFE_FILENAME_CHARS.sub("_", plan.name).strip() or "plan"
    return Response(
        content=plan_to_csv(plan.name, plan.data if isinstance(plan.data, dict) else {}),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )
