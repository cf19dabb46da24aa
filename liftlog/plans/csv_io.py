"""Plan document <-> CSV conversion.

One CSV row per exercise item. Week and day structure is rebuilt on import by
grouping rows on week and day names in first-seen order.
"""

import re
import uuid
from typing import Any

from loguru import logger

from liftlog.errors import ValidationError
from liftlog.utils.csv_codec import decode, encode

PLAN_CSV_HEADERS = ["planName", "weekName", "dayName", "exerciseName", "targetSets", "targetReps"]
REQUIRED_COLUMNS = ("weekName", "dayName", "exerciseName", "targetSets")
IMPORTED_PLAN_NAME = "Imported Plan"

_CSV_SUFFIX = re.compile(r"\.csv$", re.IGNORECASE)


def _sets(raw: Any) -> int:
    try:
        value = int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        return 0
    return value if value > 0 else 0


def plan_to_csv(name: str, data: dict | None) -> str:
    """Export a plan document as CSV. Days without items produce no rows."""
    rows = []
    for week in (data or {}).get("weeks") or []:
        for day in week.get("days") or []:
            for item in day.get("items") or []:
                rows.append(
                    [
                        name or "",
                        week.get("name") or "",
                        day.get("name") or "",
                        item.get("exerciseName") or "",
                        _sets(item.get("targetSets") or 0),
                        item.get("targetReps") or "",
                    ]
                )
    return encode(PLAN_CSV_HEADERS, rows)


def csv_to_plan(text: str, filename: str | None = None) -> tuple[str, dict]:
    """Import a plan document from CSV.

    Args:
        text: CSV text with a header row
        filename: Upload filename, used as the plan name when no planName column is filled

    Returns:
        (plan name, plan document)

    Raises:
        ValidationError: If the text is empty or required columns are missing
    """
    headers, rows = decode(text)
    if not headers:
        raise ValidationError("CSV is empty")

    index = {h.strip().lower(): i for i, h in reversed(list(enumerate(headers)))}
    missing = [column for column in REQUIRED_COLUMNS if column.lower() not in index]
    if missing:
        raise ValidationError(f"CSV missing required columns: {', '.join(missing)}")

    def cell(row: list[str], column: str) -> str:
        i = index.get(column.lower())
        if i is None or i >= len(row):
            return ""
        return row[i]

    weeks: list[dict] = []
    plan_name = ""
    for row in rows:
        if all(not value.strip() for value in row):
            continue
        if not plan_name:
            plan_name = cell(row, "planName")

        week_name = cell(row, "weekName")
        week = next((w for w in weeks if w["name"] == (week_name or "Week")), None)
        if week is None:
            week = {"id": str(uuid.uuid4()), "name": week_name or "Week", "days": []}
            weeks.append(week)

        day_name = cell(row, "dayName")
        day = next((d for d in week["days"] if d["name"] == (day_name or "Day")), None)
        if day is None:
            day = {"id": str(uuid.uuid4()), "name": day_name or "Day", "items": []}
            week["days"].append(day)

        exercise_name = cell(row, "exerciseName")
        if exercise_name:
            day["items"].append(
                {
                    "id": str(uuid.uuid4()),
                    "exerciseName": exercise_name,
                    "targetSets": _sets(cell(row, "targetSets")),
                    "targetReps": cell(row, "targetReps"),
                }
            )

    name = _CSV_SUFFIX.sub("", plan_name or filename or IMPORTED_PLAN_NAME)
    logger.info(f"Imported plan CSV with {len(weeks)} weeks and {len(rows)} rows")
    return name, {"weeks": weeks}
