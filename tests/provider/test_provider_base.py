import unittest

from gdrivereorg.models import FileRecord
from gdrivereorg.provider import FilePage, InMemoryProvider, fetch_all_files


class _ScriptedProvider:
    def __init__(self, pages: dict[str | None, FilePage]) -> None:
        self._pages = pages
        self.tokens: list[str | None] = []

    async def list_files(self, query: str, page_token: str | None = None) -> FilePage:
        self.tokens.append(page_token)
        return self._pages[page_token]


class TestFetchAllFiles(unittest.IsolatedAsyncioTestCase):
    async def test_follows_page_tokens(self) -> None:
        provider = _ScriptedProvider(
            {
                None: FilePage([FileRecord(id="a", name="a", mime_type="text/plain")], "t2"),
                "t2": FilePage([FileRecord(id="b", name="b", mime_type="text/plain")], None),
            }
        )
        files = await fetch_all_files(provider)  # type: ignore[arg-type]
        self.assertEqual([f.id for f in files], ["a", "b"])
        self.assertEqual(provider.tokens, [None, "t2"])

    async def test_in_memory_listing(self) -> None:
        records = [FileRecord(id=f"f{i}", name=str(i), mime_type="text/plain") for i in range(7)]
        files = await fetch_all_files(InMemoryProvider(records, page_size=3))
        self.assertEqual([f.id for f in files], [r.id for r in records])


if __name__ == "__main__":
    unittest.main()
