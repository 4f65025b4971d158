import unittest as ut
from bunnyfs.bunnycdn import RemoteObject
from bunnyfs.exc import NotFoundError, AmbiguousPathError, RemoteNotFoundError
from bunnyfs.storage import BunnyCDNAdapter


class ListingStub:
    """Returns a fixed directory listing and records which directories were requested."""

    def __init__(self, entries: list, storage_zone_name: str = "zone", missing: bool = False):
        self.storage_zone_name = storage_zone_name
        self.entries = entries
        self.missing = missing
        self.listed = []

    def get_storage_objects(self, directory: str):
        self.listed.append(directory)
        if self.missing:
            raise RemoteNotFoundError("not found")
        return self.entries


class TestResolve(ut.TestCase):

    def test_single_match(self):
        target = RemoteObject("/zone/folder/", "file.txt", 5)
        stub = ListingStub([
            RemoteObject("/zone/folder/", "other.txt", 3),
            target,
            RemoteObject("/zone/folder/", "file.txt.bak", 7),
        ])
        adapter = BunnyCDNAdapter(stub)
        self.assertIs(adapter.resolve("folder/file.txt"), target)
        self.assertEqual(stub.listed, ["zone/folder"])

    def test_no_match(self):
        stub = ListingStub([RemoteObject("/zone/folder/", "other.txt", 3)])
        adapter = BunnyCDNAdapter(stub)
        self.assertRaises(NotFoundError, adapter.resolve, "folder/file.txt")

    def test_empty_listing(self):
        adapter = BunnyCDNAdapter(ListingStub([]))
        self.assertRaises(NotFoundError, adapter.resolve, "file.txt")

    def test_missing_parent_directory(self):
        adapter = BunnyCDNAdapter(ListingStub([], missing=True))
        self.assertRaises(NotFoundError, adapter.resolve, "nope/file.txt")

    def test_duplicate_match(self):
        stub = ListingStub([
            RemoteObject("/zone/folder/", "file.txt", 5),
            RemoteObject("/zone/folder/", "file.txt", 5),
        ])
        adapter = BunnyCDNAdapter(stub)
        self.assertRaises(AmbiguousPathError, adapter.resolve, "folder/file.txt")

    def test_duplicate_is_not_a_not_found(self):
        stub = ListingStub([
            RemoteObject("/zone/", "file.txt", 5),
            RemoteObject("/zone/", "file.txt", 6),
        ])
        adapter = BunnyCDNAdapter(stub)
        with self.assertRaises(AmbiguousPathError) as h:
            adapter.resolve("file.txt")
        self.assertNotIsInstance(h.exception, NotFoundError)

    def test_root_level_file(self):
        target = RemoteObject("/zone/", "file.txt", 5)
        stub = ListingStub([target])
        adapter = BunnyCDNAdapter(stub)
        self.assertIs(adapter.resolve("file.txt"), target)
        self.assertEqual(stub.listed, ["zone/"])

    def test_directory_with_trailing_slash(self):
        target = RemoteObject("/zone/a/", "folder", 0, is_directory=True)
        stub = ListingStub([target])
        adapter = BunnyCDNAdapter(stub)
        self.assertIs(adapter.resolve("a/folder/"), target)
        self.assertEqual(stub.listed, ["zone/a"])

    def test_unnormalized_input(self):
        target = RemoteObject("/zone/a/b/", "c.txt", 1)
        adapter = BunnyCDNAdapter(ListingStub([target]))
        for path in ("/a/b/c.txt", "a//b/c.txt", "a\\b\\c.txt"):
            with self.subTest(path=path):
                self.assertIs(adapter.resolve(path), target)

    def test_root_never_matches(self):
        adapter = BunnyCDNAdapter(ListingStub([RemoteObject("/zone/", "file.txt", 5)]))
        self.assertRaises(NotFoundError, adapter.resolve, "")
        self.assertRaises(NotFoundError, adapter.resolve, "/")

    def test_metadata_queries_use_resolve(self):
        target = RemoteObject("/zone/folder/", "file.txt", 5, "2024-01-02T03:04:05.123", storage_zone_name="zone")
        adapter = BunnyCDNAdapter(ListingStub([target]))
        self.assertTrue(adapter.has("folder/file.txt"))
        self.assertEqual(adapter.get_size("folder/file.txt"), 5)
        self.assertEqual(adapter.get_timestamp("folder/file.txt"), 1704164645)
        self.assertEqual(adapter.get_metadata("folder/file.txt")["path"], "folder/file.txt")

    def test_metadata_queries_on_missing_or_duplicate(self):
        stub = ListingStub([
            RemoteObject("/zone/", "dupe.txt", 5),
            RemoteObject("/zone/", "dupe.txt", 5),
        ])
        adapter = BunnyCDNAdapter(stub)
        for path in ("dupe.txt", "missing.txt"):
            with self.subTest(path=path):
                self.assertFalse(adapter.has(path))
                self.assertIsNone(adapter.get_size(path))
                self.assertIsNone(adapter.get_timestamp(path))
                self.assertIsNone(adapter.get_metadata(path))
