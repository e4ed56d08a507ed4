import unittest

from gdrivereorg.adapter import EXCERPT_LENGTH, hierarchical_to_flat, parse_external_result
from gdrivereorg.errors import InvalidShapeError, MalformedResponseError

FOLDER = "application/vnd.google-apps.folder"


class TestParseExternalResult(unittest.TestCase):
    def test_flat_array(self) -> None:
        records = parse_external_result(
            '[{"id": "a", "name": "A", "mimeType": "text/plain", "parents": ["root"]}]'
        )
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].parents, ["root"])

    def test_fenced_payload_is_recovered(self) -> None:
        text = (
            "Sure [draft]! Here is the structure:\n"
            "```json\n"
            '[{"id": "temp_docs", "name": "Docs", "mimeType": "%s", "parents": ["root"]},\n'
            ' {"id": "a", "name": "A", "mimeType": "text/plain", "parents": ["temp_docs"]}]\n'
            "```\n" % FOLDER
        )
        records = parse_external_result(text)
        self.assertEqual([r.id for r in records], ["temp_docs", "a"])
        self.assertEqual(records[1].parents, ["temp_docs"])

    def test_nested_result_is_flattened(self) -> None:
        text = (
            '[{"id": "temp_docs", "name": "Docs", "mimeType": "%s", "parents": ["root"],'
            ' "children": [{"id": "a", "name": "A", "mimeType": "text/plain", "size": "10"}]}]'
            % FOLDER
        )
        records = parse_external_result(text)
        self.assertEqual([r.id for r in records], ["temp_docs", "a"])
        self.assertEqual(records[1].parents, ["temp_docs"])
        self.assertEqual(records[1].size, "10")
        self.assertEqual(records[0].children, [])

    def test_not_json_raises_malformed(self) -> None:
        with self.assertRaises(MalformedResponseError) as ctx:
            parse_external_result("not json at all")
        self.assertEqual(ctx.exception.details["excerpt"], "not json at all")

    def test_excerpt_is_truncated(self) -> None:
        with self.assertRaises(MalformedResponseError) as ctx:
            parse_external_result("x" * (EXCERPT_LENGTH + 100))
        self.assertEqual(len(ctx.exception.details["excerpt"]), EXCERPT_LENGTH)

    def test_non_array_raises_invalid_shape(self) -> None:
        with self.assertRaises(InvalidShapeError):
            parse_external_result('{"files": []}')

    def test_entries_without_id_raise_invalid_shape(self) -> None:
        with self.assertRaises(InvalidShapeError):
            parse_external_result('[{"name": "no id"}]')

    def test_non_text_raises_invalid_shape(self) -> None:
        with self.assertRaises(InvalidShapeError):
            parse_external_result(None)  # type: ignore[arg-type]


class TestHierarchicalToFlat(unittest.TestCase):
    def test_injected_parents_reach_deeper_levels(self) -> None:
        items = [
            {
                "id": "d1",
                "name": "Top",
                "mimeType": FOLDER,
                "children": [
                    {
                        "id": "d2",
                        "name": "Mid",
                        "mimeType": FOLDER,
                        "children": [{"id": "f1", "name": "leaf", "mimeType": "text/plain"}],
                    }
                ],
            }
        ]
        flat = hierarchical_to_flat(items)
        self.assertEqual([i["id"] for i in flat], ["d1", "d2", "f1"])
        self.assertEqual(flat[0]["parents"], [])
        self.assertEqual(flat[1]["parents"], ["d1"])
        self.assertEqual(flat[2]["parents"], ["d2"])
        self.assertNotIn("children", flat[0])

    def test_explicit_child_parents_are_kept(self) -> None:
        items = [{"id": "d1", "children": [{"id": "f1", "parents": ["other"]}]}]
        self.assertEqual(hierarchical_to_flat(items)[1]["parents"], ["other"])

    def test_non_object_entry_raises(self) -> None:
        with self.assertRaises(InvalidShapeError):
            hierarchical_to_flat(["nope"])


if __name__ == "__main__":
    unittest.main()
