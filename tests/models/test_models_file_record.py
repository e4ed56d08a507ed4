import unittest

from gdrivereorg.errors import InvalidInputError
from gdrivereorg.models import FileRecord, records_from_dicts
from gdrivereorg.util.mime import FOLDER_MIME, FileKind


class TestFileRecord(unittest.TestCase):
    def test_current_parent_defaults_to_root(self) -> None:
        self.assertEqual(FileRecord(id="a", name="a", mime_type="text/plain").current_parent, "root")
        self.assertEqual(
            FileRecord(id="a", name="a", mime_type="text/plain", parents=[]).current_parent, "root"
        )
        self.assertEqual(
            FileRecord(id="a", name="a", mime_type="text/plain", parents=["p1", "p2"]).current_parent,
            "p1",
        )

    def test_kind_and_is_folder(self) -> None:
        folder = FileRecord(id="d", name="Docs", mime_type=FOLDER_MIME)
        self.assertTrue(folder.is_folder)
        self.assertEqual(folder.kind, FileKind.FOLDER)
        self.assertFalse(FileRecord(id="f", name="x.pdf", mime_type="application/pdf").is_folder)

    def test_from_dict_maps_fields(self) -> None:
        r = FileRecord.from_dict(
            {
                "id": "f1",
                "name": "report.pdf",
                "mimeType": "application/pdf",
                "parents": ["p1"],
                "modifiedTime": "2025-01-01T00:00:00Z",
                "size": 123,
                "webViewLink": "https://drive.example/f1",
            }
        )
        self.assertEqual(r.mime_type, "application/pdf")
        self.assertEqual(r.parents, ["p1"])
        self.assertEqual(r.size, "123")
        self.assertEqual(r.web_view_link, "https://drive.example/f1")
        self.assertIsNone(r.created_time)

    def test_from_dict_reads_nested_children(self) -> None:
        r = FileRecord.from_dict(
            {
                "id": "d1",
                "name": "Docs",
                "mimeType": FOLDER_MIME,
                "children": [{"id": "f1", "name": "a", "mimeType": "text/plain", "parents": ["d1"]}],
            }
        )
        self.assertEqual([c.id for c in r.children], ["f1"])

    def test_from_dict_rejects_missing_id(self) -> None:
        with self.assertRaises(InvalidInputError):
            FileRecord.from_dict({"name": "a"})
        with self.assertRaises(InvalidInputError):
            FileRecord.from_dict({"id": "", "name": "a"})

    def test_records_from_dicts_requires_list(self) -> None:
        with self.assertRaises(InvalidInputError):
            records_from_dicts({"id": "a"})
        with self.assertRaises(InvalidInputError):
            records_from_dicts(["not an object"])

    def test_to_dict_omits_children_and_unset_fields(self) -> None:
        r = FileRecord(id="f1", name="a", mime_type="text/plain", parents=None)
        r.children.append(FileRecord(id="x", name="x", mime_type="text/plain"))
        self.assertEqual(r.to_dict(), {"id": "f1", "name": "a", "mimeType": "text/plain", "parents": []})

    def test_clone_replaces_parents_and_drops_children(self) -> None:
        r = FileRecord(id="f1", name="a", mime_type="text/plain", parents=["p1"], size="5")
        r.children.append(FileRecord(id="x", name="x", mime_type="text/plain"))
        c = r.clone(parents=["p2"])
        self.assertEqual(c.parents, ["p2"])
        self.assertEqual(c.size, "5")
        self.assertEqual(c.children, [])
        self.assertEqual(r.parents, ["p1"])

    def test_compact_dict(self) -> None:
        r = FileRecord(id="f1", name="a", mime_type="text/plain", size="5")
        self.assertEqual(
            r.to_compact_dict(), {"id": "f1", "name": "a", "mimeType": "text/plain", "parents": []}
        )


if __name__ == "__main__":
    unittest.main()
