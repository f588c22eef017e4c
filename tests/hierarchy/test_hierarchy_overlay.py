import unittest

from driveview.hierarchy.overlay import StarOverlay, backend_starred
from driveview.models import FileItem, FolderItem


class MemoryOverlayStore:
    def __init__(self, ids=None) -> None:
        self.ids = list(ids or [])
        self.saves = 0

    def load_starred_ids(self) -> list[str]:
        return list(self.ids)

    def save_starred_ids(self, ids) -> None:
        self.ids = list(ids)
        self.saves += 1


class TestBackendStarred(unittest.TestCase):
    def test_spellings(self) -> None:
        self.assertTrue(backend_starred({"isStarred": True}))
        self.assertTrue(backend_starred({"is_starred": 1}))
        self.assertTrue(backend_starred({"flags": {"starred": True}}))
        self.assertTrue(backend_starred({"metadata": {"starred": True}}))
        self.assertTrue(backend_starred({"labels": ["work", "starred"]}))
        self.assertFalse(backend_starred({"starred": False}))
        self.assertFalse(backend_starred({}))
        self.assertFalse(backend_starred(None))


class TestStarOverlay(unittest.TestCase):
    def test_effective_flag_is_backend_or_overlay(self) -> None:
        overlay = StarOverlay()
        backend = FileItem(id="a", name="a", starred=True, backend_starred=True)
        plain = FileItem(id="b", name="b")

        self.assertEqual([i.starred for i in overlay.effective([backend, plain])], [True, False])

        overlay.toggle("b")
        self.assertEqual([i.starred for i in overlay.effective([backend, plain])], [True, True])

        overlay.toggle("b")
        self.assertEqual([i.starred for i in overlay.effective([backend, plain])], [True, False])

    def test_overlay_cannot_unstar_backend_flag(self) -> None:
        overlay = StarOverlay()
        item = FolderItem(id="d", name="d", starred=True, backend_starred=True)
        overlay.toggle("d")
        overlay.toggle("d")
        self.assertTrue(overlay.is_starred(item))

    def test_items_are_not_mutated(self) -> None:
        overlay = StarOverlay()
        overlay.toggle("x")
        item = FileItem(id="x", name="x")
        (copy,) = overlay.effective([item])
        self.assertTrue(copy.starred)
        self.assertFalse(item.starred)

    def test_toggle_persists_immediately(self) -> None:
        store = MemoryOverlayStore(["keep"])
        overlay = StarOverlay(store)
        self.assertIn("keep", overlay)

        self.assertTrue(overlay.toggle("new"))
        self.assertEqual(store.ids, ["keep", "new"])
        self.assertFalse(overlay.toggle("keep"))
        self.assertEqual(store.ids, ["new"])
        self.assertEqual(store.saves, 2)

        reloaded = StarOverlay(store)
        self.assertEqual(reloaded.ids, frozenset({"new"}))

    def test_starred_only(self) -> None:
        overlay = StarOverlay()
        overlay.toggle("b")
        items = [FileItem(id="a", name="a"), FileItem(id="b", name="b"), FileItem(id="c", name="c", backend_starred=True)]
        self.assertEqual([i.id for i in overlay.starred_only(items)], ["b", "c"])
        self.assertEqual([i.starred for i in overlay.starred_only(items)], [False, False])

    def test_merged_copies_do_not_keep_the_overlay_flag(self) -> None:
        overlay = StarOverlay()
        item = FileItem(id="a", name="a")

        overlay.toggle("a")
        (merged,) = overlay.effective([item])
        self.assertTrue(merged.starred)

        overlay.toggle("a")
        self.assertFalse(overlay.is_starred(merged))
        (remerged,) = overlay.effective([merged])
        self.assertFalse(remerged.starred)

    def test_empty_id_rejected(self) -> None:
        with self.assertRaises(ValueError):
            StarOverlay().toggle("")

    def test_clear(self) -> None:
        store = MemoryOverlayStore(["a", "b"])
        overlay = StarOverlay(store)
        overlay.clear()
        self.assertEqual(store.ids, [])
        self.assertNotIn("a", overlay)


if __name__ == "__main__":
    unittest.main()
