"""Tests for last-viewed preferences."""

from liftlog.users.prefs import PreferenceStore, UserPrefs


def test_get_without_prefs_is_none(preference_store: PreferenceStore, test_user_id: str) -> None:
    assert preference_store.get(test_user_id) is None


def test_set_replaces_all_fields(preference_store: PreferenceStore, test_user_id: str, other_user_id: str) -> None:
    preference_store.set(test_user_id, 3, "w1", "d2")
    preference_store.set(test_user_id, 4, None, None)
    preference_store.set(other_user_id, 9, "w9", "d9")

    assert preference_store.get(test_user_id) == UserPrefs(test_user_id, 4, None, None)
    assert preference_store.get(other_user_id).last_plan_id == 9
