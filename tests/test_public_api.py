import unittest

import gdrivereorg


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdrivereorg, "ReorganizationManager"))
        self.assertTrue(hasattr(gdrivereorg, "StructureOptimizer"))
        self.assertTrue(hasattr(gdrivereorg, "InMemoryProvider"))
        self.assertTrue(hasattr(gdrivereorg, "DriveStorageProvider"))

        self.assertTrue(hasattr(gdrivereorg, "normalize"))
        self.assertTrue(hasattr(gdrivereorg, "propose_structure"))
        self.assertTrue(hasattr(gdrivereorg, "parse_external_result"))
        self.assertTrue(hasattr(gdrivereorg, "diff"))
        self.assertTrue(hasattr(gdrivereorg, "compare"))

        self.assertTrue(hasattr(gdrivereorg, "GDriveReorgError"))
        self.assertTrue(hasattr(gdrivereorg, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(gdrivereorg, "__all__"))
        self.assertIn("ReorganizationManager", gdrivereorg.__all__)
        self.assertIn("GDriveReorgError", gdrivereorg.__all__)
        for name in gdrivereorg.__all__:
            self.assertTrue(hasattr(gdrivereorg, name), name)


if __name__ == "__main__":
    unittest.main()
