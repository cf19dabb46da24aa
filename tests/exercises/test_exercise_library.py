"""Tests for the exercise library."""

from liftlog.exercises.library import ExerciseLibrary


def test_find_or_create_is_case_insensitive(exercise_library: ExerciseLibrary, test_user_id: str) -> None:
    created = exercise_library.find_or_create(test_user_id, "  Bench Press ")
    again = exercise_library.find_or_create(test_user_id, "bench press")

    assert created.name == "Bench Press"
    assert again.id == created.id
    assert [e.name for e in exercise_library.list(test_user_id)] == ["Bench Press"]


def test_blank_names_are_ignored(exercise_library: ExerciseLibrary, test_user_id: str) -> None:
    assert exercise_library.find_or_create(test_user_id, "   ") is None
    assert exercise_library.find_or_create(test_user_id, None) is None
    assert exercise_library.find_by_name(test_user_id, "") is None
    assert exercise_library.list(test_user_id) == []


def test_libraries_are_per_user(exercise_library: ExerciseLibrary, test_user_id: str, other_user_id: str) -> None:
    mine = exercise_library.find_or_create(test_user_id, "Squat")
    theirs = exercise_library.find_or_create(other_user_id, "squat")

    assert mine.id != theirs.id
    assert exercise_library.find_by_name(other_user_id, "SQUAT").id == theirs.id


def test_list_sorted_by_name(exercise_library: ExerciseLibrary, test_user_id: str) -> None:
    for name in ("row", "Deadlift", "bench"):
        exercise_library.find_or_create(test_user_id, name)

    assert [e.name for e in exercise_library.list(test_user_id)] == ["bench", "Deadlift", "row"]


def test_delete_is_owner_scoped(exercise_library: ExerciseLibrary, test_user_id: str, other_user_id: str) -> None:
    exercise = exercise_library.find_or_create(test_user_id, "Squat")

    exercise_library.delete(exercise.id, other_user_id)
    assert exercise_library.find_by_name(test_user_id, "squat") is not None

    exercise_library.delete(exercise.id, test_user_id)
    assert exercise_library.find_by_name(test_user_id, "squat") is None
