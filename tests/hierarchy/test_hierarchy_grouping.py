import unittest

from driveview.hierarchy import to_file_items, to_folder_items
from driveview.hierarchy.grouping import aggregate, count_children, with_item_counts
from driveview.models import FolderItem


def _mixed_collection():
    files = to_file_items(
        [
            {"id": "f1", "name": "one", "parentId": "A"},
            {"id": "f2", "name": "two", "folder_id": "A"},
            {"id": "f3", "name": "three", "trashInfo": {"parentId": "B"}},
            {"id": "f4", "name": "four", "parent": {"id": "A"}},
            {"id": "f5", "name": "five"},
        ]
    )
    folders = to_folder_items(
        [
            {"id": "A", "name": "A", "itemCount": 99},
            {"id": "B", "name": "B", "originalFolderId": "A"},
            {"id": "C", "name": "C", "itemCount": 7},
        ]
    )
    return files, folders


class TestCountChildren(unittest.TestCase):
    def test_counts_use_resolved_parents(self) -> None:
        files, folders = _mixed_collection()
        counts = count_children([*files, *folders])
        self.assertEqual(counts, {"A": 4, "B": 1})

    def test_root_items_are_not_counted(self) -> None:
        self.assertEqual(count_children([]), {})


class TestWithItemCounts(unittest.TestCase):
    def test_backend_counts_are_replaced(self) -> None:
        files, folders = _mixed_collection()
        counts, counted = aggregate(files, folders)
        by_id = {fo.id: fo.item_count for fo in counted}
        self.assertEqual(by_id, {"A": 4, "B": 1, "C": 0})
        self.assertEqual(counts["A"], 4)

    def test_inputs_are_not_mutated(self) -> None:
        folder = FolderItem(id="x", name="x", item_count=5)
        (updated,) = with_item_counts([folder], {"x": 2})
        self.assertEqual(updated.item_count, 2)
        self.assertEqual(folder.item_count, 5)


if __name__ == "__main__":
    unittest.main()
