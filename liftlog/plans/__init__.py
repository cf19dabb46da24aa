"""Plan lifecycle: plans, rollover versioning, templates and CSV exchange."""

from liftlog.plans.csv_io import csv_to_plan, plan_to_csv
from liftlog.plans.naming import next_version_name, split_version
from liftlog.plans.store import PlanStore
from liftlog.plans.templates import TemplateStore
from liftlog.plans.types import Plan, Template

__all__ = [
    "Plan",
    "PlanStore",
    "Template",
    "TemplateStore",
    "csv_to_plan",
    "next_version_name",
    "plan_to_csv",
    "split_version",
]
