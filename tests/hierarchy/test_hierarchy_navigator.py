import unittest

from driveview.hierarchy import to_file_items, to_folder_items
from driveview.hierarchy.navigator import ROOT, children_of, navigate
from driveview.models import FileItem


def _trash_collection():
    files = to_file_items(
        [
            {"id": "t1", "name": "loose", "deletedAt": "2024-01-01T00:00:00Z"},
            {"id": "t2", "name": "inside", "originalParentId": "TF"},
            {"id": "t3", "name": "orphan", "previousFolderId": "gone"},
        ]
    )
    folders = to_folder_items(
        [
            {"id": "TF", "name": "Trashed folder", "originalParentId": "live-parent"},
            {"id": "TG", "name": "Nested", "parent_id": "TF"},
        ]
    )
    return files, folders


class TestTrashScope(unittest.TestCase):
    def test_trash_root_shows_everything(self) -> None:
        files, folders = _trash_collection()
        listing = navigate(files, folders, ROOT, scope="trash")
        self.assertEqual({f.id for f in listing.files}, {"t1", "t2", "t3"})
        self.assertEqual({fo.id for fo in listing.folders}, {"TF", "TG"})

    def test_trash_folder_shows_exact_children(self) -> None:
        files, folders = _trash_collection()
        listing = navigate(files, folders, "TF", scope="trash")
        self.assertEqual([f.id for f in listing.files], ["t2"])
        self.assertEqual([fo.id for fo in listing.folders], ["TG"])

    def test_counts_cover_the_whole_collection(self) -> None:
        files, folders = _trash_collection()
        listing = navigate(files, folders, ROOT, scope="trash")
        counts = {fo.id: fo.item_count for fo in listing.folders}
        self.assertEqual(counts, {"TF": 2, "TG": 0})


class TestRootPolicyByScope(unittest.TestCase):
    def test_same_collection_differs_between_trash_and_live_root(self) -> None:
        files, folders = _trash_collection()

        trash_root = navigate(files, folders, ROOT, scope="trash")
        live_root = navigate(files, folders, ROOT, scope="live")

        self.assertNotEqual(trash_root, live_root)
        self.assertEqual({f.id for f in trash_root.files}, {"t1", "t2", "t3"})
        self.assertEqual({f.id for f in live_root.files}, {"t1", "t3"})
        self.assertEqual({fo.id for fo in trash_root.folders}, {"TF", "TG"})
        self.assertEqual({fo.id for fo in live_root.folders}, {"TF"})


class TestLiveScope(unittest.TestCase):
    def test_root_includes_parentless_and_dangling(self) -> None:
        files = to_file_items(
            [
                {"id": "a", "name": "a"},
                {"id": "b", "name": "b", "parentId": "D"},
                {"id": "c", "name": "c", "parentId": "missing"},
            ]
        )
        folders = to_folder_items([{"id": "D", "name": "D"}])
        listing = navigate(files, folders, ROOT, scope="live")
        self.assertEqual({f.id for f in listing.files}, {"a", "c"})
        self.assertEqual([fo.id for fo in listing.folders], ["D"])
        self.assertEqual(listing.folders[0].item_count, 1)

    def test_none_is_root(self) -> None:
        files = [FileItem(id="a", name="a")]
        self.assertEqual(children_of(files, None, scope="live"), files)

    def test_folder_id_selects_exact_matches(self) -> None:
        files = [FileItem(id="a", name="a", parent_id="X"), FileItem(id="b", name="b")]
        self.assertEqual([f.id for f in children_of(files, "X", scope="live")], ["a"])


class TestSingleFolder(unittest.TestCase):
    def test_one_file_in_one_folder(self) -> None:
        files = to_file_items([{"id": "f1", "name": "f1", "parentId": "d1"}])
        folders = to_folder_items([{"id": "d1", "name": "d1"}])

        root = navigate(files, folders, ROOT, scope="live")
        self.assertEqual(root.files, [])
        self.assertEqual([fo.id for fo in root.folders], ["d1"])
        self.assertEqual(root.folders[0].item_count, 1)

        inside = navigate(files, folders, "d1", scope="live")
        self.assertEqual([f.id for f in inside.files], ["f1"])
        self.assertEqual(inside.folders, [])

    def test_parentless_items_are_root_and_uncounted(self) -> None:
        files = to_file_items([{"id": "a", "name": "a", "mystery": "d1"}])
        folders = to_folder_items([{"id": "d1", "name": "d1"}])

        root = navigate(files, folders, ROOT, scope="live")
        self.assertEqual([f.id for f in root.files], ["a"])
        self.assertEqual(root.folders[0].item_count, 0)


class TestNavigationIsPure(unittest.TestCase):
    def test_repeated_navigation_is_identical(self) -> None:
        files, folders = _trash_collection()
        first = navigate(files, folders, "TF", scope="trash")
        second = navigate(files, folders, "TF", scope="trash")
        self.assertEqual(first, second)

    def test_unknown_scope(self) -> None:
        with self.assertRaises(ValueError):
            children_of([], ROOT, scope="archive")  # type: ignore[arg-type]

    def test_root_repr(self) -> None:
        self.assertEqual(repr(ROOT), "ROOT")


if __name__ == "__main__":
    unittest.main()
