import unittest
from datetime import datetime, timezone

from driveview.models import FileItem, FolderItem
from driveview.util.sorting import sort_items


def _dt(day: int) -> datetime:
    return datetime(2025, 1, day, tzinfo=timezone.utc)


class TestSortItems(unittest.TestCase):
    def test_name_is_case_insensitive(self) -> None:
        items = [FolderItem(id="1", name="beta"), FolderItem(id="2", name="Alpha")]
        self.assertEqual([f.name for f in sort_items(items)], ["Alpha", "beta"])

    def test_modified_falls_back_to_created(self) -> None:
        a = FileItem(id="a", name="a", updated_at=_dt(3))
        b = FileItem(id="b", name="b", created_at=_dt(2))
        c = FileItem(id="c", name="c")
        self.assertEqual([f.id for f in sort_items([a, b, c], "modified")], ["c", "b", "a"])

    def test_size_descending(self) -> None:
        files = [FileItem(id="s", name="s", size=1), FileItem(id="l", name="l", size=100)]
        self.assertEqual([f.id for f in sort_items(files, "size", descending=True)], ["l", "s"])

    def test_type_and_folders(self) -> None:
        files = [
            FileItem(id="t", name="t", mime_type="text/plain"),
            FileItem(id="i", name="i", mime_type="image/png"),
        ]
        self.assertEqual([f.id for f in sort_items(files, "type")], ["i", "t"])
        folders = [FolderItem(id="x", name="x"), FolderItem(id="y", name="y")]
        self.assertEqual([f.id for f in sort_items(folders, "size")], ["x", "y"])

    def test_unknown_key(self) -> None:
        with self.assertRaises(ValueError):
            sort_items([], "color")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
