import unittest

from gdrivereorg.models import FileRecord
from gdrivereorg.tree import RecordIndex, build_tree, resolve_path, tree_to_dicts
from gdrivereorg.util.mime import FOLDER_MIME


def _folder(file_id: str, name: str, parents=None) -> FileRecord:
    return FileRecord(id=file_id, name=name, mime_type=FOLDER_MIME, parents=parents)


def _file(file_id: str, name: str, parents=None) -> FileRecord:
    return FileRecord(id=file_id, name=name, mime_type="text/plain", parents=parents)


class TestRecordIndex(unittest.TestCase):
    def test_first_duplicate_wins(self) -> None:
        index = RecordIndex.from_records([_file("f1", "first"), _file("f1", "second")])
        self.assertEqual(index.get("f1").name, "first")
        self.assertEqual(index.order, ["f1"])

    def test_children_and_roots(self) -> None:
        index = RecordIndex.from_records(
            [
                _folder("d1", "Docs", ["root"]),
                _file("f1", "a", ["d1"]),
                _file("f2", "b", ["d1"]),
                _file("f3", "c", ["missing"]),
            ]
        )
        self.assertEqual(index.list_children_ids("d1"), ["f1", "f2"])
        self.assertEqual(index.root_ids(), ["d1", "f3"])
        self.assertIsNone(index.find(None))
        self.assertFalse(index.has("missing"))

    def test_depth_of(self) -> None:
        index = RecordIndex.from_records(
            [
                _folder("d1", "A"),
                _folder("d2", "B", ["d1"]),
                _folder("d3", "C", ["d2"]),
                _folder("x1", "X", ["gone"]),
            ]
        )
        self.assertEqual(index.depth_of("d1"), 0)
        self.assertEqual(index.depth_of("d2"), 1)
        self.assertEqual(index.depth_of("d3"), 2)
        self.assertEqual(index.depth_of("x1"), 1)

    def test_depth_of_stops_on_cycle(self) -> None:
        index = RecordIndex.from_records([_folder("a", "A", ["b"]), _folder("b", "B", ["a"])])
        self.assertEqual(index.depth_of("a"), 2)


class TestResolvePath(unittest.TestCase):
    def test_path_joins_ancestors(self) -> None:
        index = RecordIndex.from_records(
            [_folder("d1", "Docs"), _folder("d2", "Sub", ["d1"]), _file("f1", "a.txt", ["d2"])]
        )
        self.assertEqual(resolve_path(index.get("f1"), index), "Docs/Sub/a.txt")

    def test_unknown_parent_yields_own_name(self) -> None:
        record = _file("f1", "a.txt", ["nowhere"])
        index = RecordIndex.from_records([record])
        self.assertEqual(resolve_path(record, index), "a.txt")

    def test_fallback_index_is_consulted(self) -> None:
        proposed = RecordIndex.from_records([_file("f1", "a.txt", ["d1"])])
        original = RecordIndex.from_records([_folder("d1", "Docs")])
        self.assertEqual(resolve_path(proposed.get("f1"), proposed, original), "Docs/a.txt")

    def test_cycle_terminates(self) -> None:
        index = RecordIndex.from_records([_folder("a", "A", ["b"]), _folder("b", "B", ["a"])])
        self.assertEqual(resolve_path(index.get("a"), index), "B/A")


class TestBuildTree(unittest.TestCase):
    def test_folders_first_then_name(self) -> None:
        roots = build_tree(
            [
                _file("f2", "zeta.txt"),
                _folder("d1", "Docs"),
                _file("f1", "Alpha.txt"),
                _file("f3", "b.txt", ["d1"]),
                _folder("d2", "Archive", ["d1"]),
            ]
        )
        self.assertEqual([r.id for r in roots], ["d1", "f1", "f2"])
        self.assertEqual([c.id for c in roots[0].children], ["d2", "f3"])

    def test_unknown_parent_is_top_level(self) -> None:
        roots = build_tree([_file("f1", "a", ["nowhere"])])
        self.assertEqual([r.id for r in roots], ["f1"])

    def test_cycle_members_surface_once(self) -> None:
        roots = build_tree([_folder("a", "A", ["b"]), _folder("b", "B", ["a"])])
        self.assertEqual(len(roots), 1)
        self.assertEqual(len(roots[0].children), 1)

    def test_input_is_not_mutated(self) -> None:
        folder = _folder("d1", "Docs")
        build_tree([folder, _file("f1", "a", ["d1"])])
        self.assertEqual(folder.children, [])

    def test_tree_to_dicts_nests_children(self) -> None:
        roots = build_tree([_folder("d1", "Docs"), _file("f1", "a", ["d1"])])
        out = tree_to_dicts(roots)
        self.assertEqual(out[0]["id"], "d1")
        self.assertEqual(out[0]["children"][0]["id"], "f1")
        self.assertEqual(out[0]["children"][0]["children"], [])


if __name__ == "__main__":
    unittest.main()
