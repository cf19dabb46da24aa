"""Tests for plan CSV export/import."""

import pytest

from liftlog.errors import ValidationError
from liftlog.plans.csv_io import PLAN_CSV_HEADERS, csv_to_plan, plan_to_csv
from liftlog.utils.csv_codec import decode

PLAN_DATA = {
    "weeks": [
        {
            "id": "w1",
            "name": "Week 1",
            "days": [
                {
                    "id": "d1",
                    "name": "Push",
                    "items": [
                        {"id": "i1", "exerciseName": "Bench, Flat", "targetSets": 3, "targetReps": "5"},
                        {"id": "i2", "exerciseName": 'Dips "weighted"', "targetSets": "4", "targetReps": "8-10"},
                    ],
                },
                {"id": "d2", "name": "Rest", "items": []},
            ],
        },
        {
            "id": "w2",
            "name": "Week 2",
            "days": [{"id": "d3", "name": "Pull", "items": [{"id": "i3", "exerciseName": "Row", "targetSets": -2}]}],
        },
    ]
}


def test_export_one_row_per_item() -> None:
    headers, rows = decode(plan_to_csv("Block", PLAN_DATA))

    assert headers == PLAN_CSV_HEADERS
    assert rows == [
        ["Block", "Week 1", "Push", "Bench, Flat", "3", "5"],
        ["Block", "Week 1", "Push", 'Dips "weighted"', "4", "8-10"],
        ["Block", "Week 2", "Pull", "Row", "0", ""],
    ]


def test_export_empty_plan_has_only_header() -> None:
    assert plan_to_csv("Empty", {}) == ",".join(PLAN_CSV_HEADERS) + "\n"


def test_import_groups_weeks_and_days_in_order() -> None:
    name, data = csv_to_plan(plan_to_csv("Block", PLAN_DATA))

    assert name == "Block"
    assert [w["name"] for w in data["weeks"]] == ["Week 1", "Week 2"]
    push = data["weeks"][0]["days"][0]
    assert push["name"] == "Push"
    assert [(i["exerciseName"], i["targetSets"], i["targetReps"]) for i in push["items"]] == [
        ("Bench, Flat", 3, "5"),
        ('Dips "weighted"', 4, "8-10"),
    ]
    # Days without items are not exported, so they do not come back
    assert [d["name"] for d in data["weeks"][0]["days"]] == ["Push"]
    assert all(w["id"] for w in data["weeks"])


def test_import_name_falls_back_to_filename() -> None:
    text = "weekName,dayName,exerciseName,targetSets\nW1,D1,Squat,5\n"

    assert csv_to_plan(text, "legs.CSV")[0] == "legs"
    assert csv_to_plan(text)[0] == "Imported Plan"


def test_import_tolerates_header_case_and_blank_rows() -> None:
    text = "WeekName,DAYNAME,exercisename,TargetSets\r\n\r\n,,Squat,abc\r\n"

    _, data = csv_to_plan(text)

    week = data["weeks"][0]
    assert week["name"] == "Week"
    assert week["days"][0]["name"] == "Day"
    assert week["days"][0]["items"][0]["targetSets"] == 0


def test_import_empty_text_is_rejected() -> None:
    with pytest.raises(ValidationError, match="CSV is empty"):
        csv_to_plan("")


def test_import_missing_columns_is_rejected() -> None:
    with pytest.raises(ValidationError, match="exerciseName, targetSets"):
        csv_to_plan("weekName,dayName\nW1,D1\n")
