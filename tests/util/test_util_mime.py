import unittest

from driveview.util.mime import (
    FOLDER_MIME,
    can_preview,
    file_category,
    is_file_like,
    is_folder_like,
)


class TestUtilMime(unittest.TestCase):
    def test_file_category(self) -> None:
        self.assertEqual(file_category("image/png"), "image")
        self.assertEqual(file_category("video/mp4"), "video")
        self.assertEqual(file_category("audio/mpeg"), "audio")
        self.assertEqual(file_category("application/pdf"), "pdf")
        self.assertEqual(
            file_category("application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
            "document",
        )
        self.assertEqual(file_category("application/vnd.ms-excel"), "spreadsheet")
        self.assertEqual(file_category("application/vnd.ms-powerpoint"), "presentation")
        self.assertEqual(file_category("application/json"), "text")
        self.assertEqual(file_category("application/zip"), "archive")
        self.assertEqual(file_category("application/octet-stream"), "other")
        self.assertEqual(file_category(""), "other")

    def test_can_preview(self) -> None:
        self.assertTrue(can_preview("image/jpeg"))
        self.assertTrue(can_preview("text/plain"))
        self.assertFalse(can_preview("application/zip"))

    def test_kind_heuristics_prefer_type_tag(self) -> None:
        self.assertTrue(is_file_like({"type": "file", "name": "a"}))
        self.assertFalse(is_folder_like({"type": "file", "name": "a"}))
        self.assertTrue(is_folder_like({"type": "Folder", "name": "a"}))
        self.assertFalse(is_file_like({"type": "folder", "mimeType": "text/plain"}))

    def test_kind_heuristics_untagged(self) -> None:
        self.assertTrue(is_file_like({"name": "a.txt", "mimeType": "text/plain"}))
        self.assertTrue(is_file_like({"name": "a.bin", "size": 12}))
        self.assertTrue(is_folder_like({"name": "Docs"}))
        self.assertTrue(is_folder_like({"name": "x", "isFolder": True, "size": 3}))
        self.assertTrue(is_folder_like({"name": "x", "mimeType": FOLDER_MIME}))
        self.assertFalse(is_folder_like({}))
        self.assertFalse(is_file_like("not a record"))


if __name__ == "__main__":
    unittest.main()
