import unittest

from gdrivereorg.errors import InvalidArgumentError, NotFoundError, RateLimitError
from gdrivereorg.models import FileRecord
from gdrivereorg.provider import InMemoryProvider, StorageProvider
from gdrivereorg.util.mime import FOLDER_MIME


def _folder(file_id: str, name: str, parents=None) -> FileRecord:
    return FileRecord(id=file_id, name=name, mime_type=FOLDER_MIME, parents=parents)


def _file(file_id: str, name: str, parents=None) -> FileRecord:
    return FileRecord(id=file_id, name=name, mime_type="text/plain", parents=parents)


class TestInMemoryProvider(unittest.IsolatedAsyncioTestCase):
    async def test_satisfies_protocol(self) -> None:
        self.assertIsInstance(InMemoryProvider(), StorageProvider)

    async def test_seed_records_are_copied(self) -> None:
        record = _file("f1", "a", ["root"])
        provider = InMemoryProvider([record])
        record.parents = ["elsewhere"]
        self.assertEqual(provider.parent_of("f1"), "root")

    async def test_list_files_paginates(self) -> None:
        provider = InMemoryProvider([_file(f"f{i}", str(i)) for i in range(5)], page_size=2)
        first = await provider.list_files("q")
        self.assertEqual([r.id for r in first.files], ["f0", "f1"])
        self.assertEqual(first.next_page_token, "2")
        last = await provider.list_files("q", "4")
        self.assertEqual([r.id for r in last.files], ["f4"])
        self.assertIsNone(last.next_page_token)

    async def test_create_folder_assigns_ids(self) -> None:
        provider = InMemoryProvider()
        a = await provider.create_folder("A", "root")
        b = await provider.create_folder("B", a.id)
        self.assertEqual((a.id, b.id), ("mem_1", "mem_2"))
        self.assertEqual(provider.parent_of("mem_2"), "mem_1")
        self.assertTrue(b.is_folder)

    async def test_create_folder_under_missing_parent(self) -> None:
        provider = InMemoryProvider([_file("f1", "a")])
        with self.assertRaises(NotFoundError):
            await provider.create_folder("A", "nope")
        with self.assertRaises(NotFoundError):
            await provider.create_folder("A", "f1")

    async def test_update_parents_replaces_old_parent(self) -> None:
        provider = InMemoryProvider([_folder("d1", "D"), _file("f1", "a", ["root"])])
        record = await provider.update_parents("f1", "d1", "root")
        self.assertEqual(record.parents, ["d1"])

    async def test_update_parents_rejects_self(self) -> None:
        provider = InMemoryProvider([_folder("d1", "D")])
        with self.assertRaises(InvalidArgumentError):
            await provider.update_parents("d1", "d1", "root")

    async def test_update_parents_missing_file(self) -> None:
        with self.assertRaises(NotFoundError):
            await InMemoryProvider([_folder("d1", "D")]).update_parents("ghost", "d1")

    async def test_delete_cascades(self) -> None:
        provider = InMemoryProvider(
            [
                _folder("d1", "Top"),
                _folder("d2", "Sub", ["d1"]),
                _file("f1", "a", ["d2"]),
                _file("f2", "b", ["root"]),
            ]
        )
        await provider.delete_file("d1")
        self.assertEqual([r.id for r in provider.snapshot()], ["f2"])

    async def test_injected_failure_fires_once(self) -> None:
        provider = InMemoryProvider([_file("f1", "a")])
        provider.fail("get", "f1", RateLimitError("slow down"))
        with self.assertRaises(RateLimitError):
            await provider.get_file("f1")
        self.assertEqual((await provider.get_file("f1")).id, "f1")
        self.assertEqual(provider.calls, [("get", "f1"), ("get", "f1")])


if __name__ == "__main__":
    unittest.main()
