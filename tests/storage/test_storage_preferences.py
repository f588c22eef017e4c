import os
import tempfile
import unittest

from driveview.storage import JsonFileStore, UserPreferences
from driveview.storage.preferences import MAX_RECENT_SEARCHES


class TestUserPreferences(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "state.json")
        self.store = JsonFileStore(self.path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_open_migrates_all_legacy_keys(self) -> None:
        self.store.set("starredIds", ["a", "b"])
        self.store.set("gd_plan", "business")
        self.store.set("recentSearches", ["q"])

        prefs = UserPreferences.open(self.store, "user-1")

        self.assertEqual(prefs.load_starred_ids(), ["a", "b"])
        self.assertEqual(prefs.plan, "business")
        self.assertEqual(prefs.recent_searches, ["q"])
        self.assertEqual(
            sorted(JsonFileStore(self.path).keys()),
            ["gd_plan_user-1", "recentSearches_user-1", "starredIds_user-1"],
        )

    def test_users_are_isolated(self) -> None:
        first = UserPreferences.open(self.store, "one")
        first.save_starred_ids(["x"])
        first.plan = "pro"

        second = UserPreferences.open(self.store, "two")
        self.assertEqual(second.load_starred_ids(), [])
        self.assertEqual(second.plan, "free")

    def test_plan_validation(self) -> None:
        prefs = UserPreferences.open(self.store, "u")
        with self.assertRaises(ValueError):
            prefs.plan = "enterprise"
        self.store.set("gd_plan_u", "bogus")
        self.assertEqual(prefs.plan, "free")

    def test_recent_searches(self) -> None:
        prefs = UserPreferences.open(self.store, "u")
        prefs.add_recent_search("alpha")
        prefs.add_recent_search(" beta ")
        prefs.add_recent_search("alpha")
        prefs.add_recent_search("   ")
        self.assertEqual(prefs.recent_searches, ["alpha", "beta"])

        for i in range(MAX_RECENT_SEARCHES + 5):
            prefs.add_recent_search(f"q{i}")
        self.assertEqual(len(prefs.recent_searches), MAX_RECENT_SEARCHES)
        self.assertEqual(prefs.recent_searches[0], f"q{MAX_RECENT_SEARCHES + 4}")

        prefs.clear_recent_searches()
        self.assertEqual(prefs.recent_searches, [])

    def test_garbage_values_are_ignored(self) -> None:
        self.store.set("starredIds_u", ["ok", 3, None])
        prefs = UserPreferences.open(self.store, "u")
        self.assertEqual(prefs.load_starred_ids(), ["ok"])


if __name__ == "__main__":
    unittest.main()
