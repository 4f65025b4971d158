import io
import pathlib
import tempfile
import unittest as ut
from bunnyfs.exc import InvalidPathError, StorageError
from bunnyfs.storage import LocalAdapter


class TestLocalAdapter(ut.TestCase):

    def setUp(self):
        self._temp_dir = tempfile.TemporaryDirectory()
        self.root = pathlib.Path(self._temp_dir.name)
        self.adapter = LocalAdapter(self.root)

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_write_and_read(self):
        self.assertTrue(self.adapter.write("folder/file.txt", "hello"))
        self.assertEqual((self.root / "folder" / "file.txt").read_bytes(), b"hello")
        self.assertEqual(self.adapter.read("folder/file.txt"), b"hello")
        self.assertEqual(self.adapter.read("folder\\file.txt"), b"hello")

    def test_update(self):
        self.adapter.write("a.txt", "one")
        self.assertTrue(self.adapter.update("a.txt", b"two"))
        self.assertEqual(self.adapter.read("a.txt"), b"two")

    def test_read_missing(self):
        self.assertIsNone(self.adapter.read("missing.txt"))

    def test_streams(self):
        self.assertTrue(self.adapter.write_stream("s.bin", io.BytesIO(b"streamed")))
        with self.adapter.read_stream("s.bin") as h:
            self.assertEqual(h.read(), b"streamed")
        self.assertTrue(self.adapter.update_stream("s.bin", io.BytesIO(b"again")))
        self.assertEqual(self.adapter.read("s.bin"), b"again")
        self.assertIsNone(self.adapter.read_stream("missing.bin"))

    def test_paths_cannot_leave_root(self):
        self.assertRaises(InvalidPathError, self.adapter.read, "../outside.txt")
        self.assertRaises(InvalidPathError, self.adapter.write, "a/../../outside.txt", "x")
        self.assertRaises(InvalidPathError, self.adapter.write_stream, "../outside.txt", io.BytesIO(b"x"))
        self.assertRaises(InvalidPathError, self.adapter.update, "..\\outside.txt", "x")
        self.assertRaises(InvalidPathError, self.adapter.delete, "../outside.txt")
        self.assertRaises(InvalidPathError, self.adapter.create_dir, "../outside")
        self.assertRaises(InvalidPathError, self.adapter.delete_dir, "../outside")
        self.assertRaises(InvalidPathError, self.adapter.has, "../outside.txt")

    def test_delete_root_is_refused(self):
        self.adapter.write("keep/a.txt", "a")
        for path in ("", "/", ".", "\\"):
            with self.subTest(path=path):
                self.assertRaises(InvalidPathError, self.adapter.delete, path)
                self.assertRaises(InvalidPathError, self.adapter.delete_dir, path)
        self.assertEqual(self.adapter.read("keep/a.txt"), b"a")

    def test_has_and_metadata(self):
        self.adapter.write("folder/file.txt", "hello")
        self.assertTrue(self.adapter.has("folder/file.txt"))
        self.assertTrue(self.adapter.has("folder"))
        self.assertFalse(self.adapter.has("folder/other.txt"))
        metadata = self.adapter.get_metadata("folder/file.txt")
        self.assertEqual(metadata["type"], "file")
        self.assertEqual(metadata["path"], "folder/file.txt")
        self.assertEqual(metadata["size"], 5)
        self.assertIsInstance(metadata["timestamp"], int)
        self.assertEqual(self.adapter.get_size("folder/file.txt"), 5)
        self.assertEqual(self.adapter.get_metadata("folder")["type"], "dir")
        self.assertIsNone(self.adapter.get_metadata("missing.txt"))
        self.assertIsNone(self.adapter.get_size("missing.txt"))
        self.assertIsNone(self.adapter.get_timestamp("missing.txt"))

    def test_mimetype(self):
        self.adapter.write("a.txt", "x")
        self.adapter.write("b.unknownext", "x")
        self.assertEqual(self.adapter.get_mimetype("a.txt"), "text/plain")
        self.assertEqual(self.adapter.get_mimetype("b.unknownext"), "application/octet-stream")
        self.assertIsNone(self.adapter.get_mimetype("missing.txt"))

    def test_directories(self):
        self.assertTrue(self.adapter.create_dir("a/b"))
        self.assertTrue((self.root / "a" / "b").is_dir())
        self.adapter.write("a/b/c.txt", "c")
        self.assertTrue(self.adapter.delete_dir("a"))
        self.assertFalse(self.adapter.has("a"))
        self.assertFalse(self.adapter.delete_dir("a"))
        self.assertRaises(InvalidPathError, self.adapter.delete_dir, "")

    def test_delete(self):
        self.adapter.write("a.txt", "x")
        self.assertTrue(self.adapter.delete("a.txt"))
        self.assertFalse(self.adapter.has("a.txt"))
        self.assertFalse(self.adapter.delete("a.txt"))

    def test_list_contents(self):
        self.adapter.write("a.txt", "a")
        self.adapter.write("folder/b.txt", "bb")
        self.adapter.write("folder/sub/c.txt", "ccc")
        self.assertEqual({x["path"] for x in self.adapter.list_contents()}, {"a.txt", "folder"})
        self.assertEqual(
            {x["path"] for x in self.adapter.list_contents("", recursive=True)},
            {"a.txt", "folder", "folder/b.txt", "folder/sub", "folder/sub/c.txt"}
        )
        self.assertRaises(StorageError, self.adapter.list_contents, "missing")

    def test_copy_and_rename(self):
        self.adapter.write("a.txt", "hello")
        self.assertTrue(self.adapter.copy("a.txt", "b/a.txt"))
        self.assertTrue(self.adapter.rename("a.txt", "c.txt"))
        self.assertFalse(self.adapter.has("a.txt"))
        self.assertEqual(self.adapter.read("c.txt"), b"hello")
        self.assertEqual(self.adapter.read("b/a.txt"), b"hello")
        self.assertFalse(self.adapter.copy("missing.txt", "d.txt"))

    def test_build(self):
        self.assertEqual(LocalAdapter.build(f"file://{self.root}").root, self.root.absolute())
        self.assertEqual(LocalAdapter.build(str(self.root)).root, self.root.absolute())
