"""Local directory adapter"""
from __future__ import annotations
import mimetypes
import pathlib
import shutil
from .base import BaseAdapter, Contents, as_bytes, local_file_error_wrap
from bunnyfs.exc import StorageError, InvalidPathError
import typing as t


class LocalAdapter(BaseAdapter):
    """Adapter for the files below a directory on a local disk or accessible network drive.

        The underlying functionality is based on pathlib.Path. Unlike the remote
        adapters, streams and mimetypes are supported.
    """

    def __init__(self, root: t.Union[str, pathlib.Path], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._root = pathlib.Path(root).expanduser().absolute()

    @property
    def root(self) -> pathlib.Path:
        return self._root

    def _full_path(self, path: str) -> pathlib.Path:
        parts = [x for x in path.replace('\\', '/').split('/') if x]
        if '..' in parts:
            raise InvalidPathError(f"Path [{path}] may not leave the adapter root")
        return self._root.joinpath(*parts)

    def _relative(self, full_path: pathlib.Path) -> str:
        return full_path.relative_to(self._root).as_posix()

    def _safely(self, description: str, cb, *args):
        try:
            return local_file_error_wrap(cb)(*args)
        except StorageError:
            self._log.exception(f"Error {description}")
            return None

    def write(self, path: str, contents: Contents) -> bool:
        full_path = self._full_path(path)
        return self._safely(f"writing [{path}]", self._write, full_path, as_bytes(contents)) is not None

    def _write(self, full_path: pathlib.Path, contents: bytes) -> bool:
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(contents)
        return True

    def write_stream(self, path: str, resource: t.BinaryIO) -> bool:
        full_path = self._full_path(path)
        return self._safely(f"writing [{path}]", self._write_stream, full_path, resource) is not None

    def update_stream(self, path: str, resource: t.BinaryIO) -> bool:
        return self.write_stream(path, resource)

    def _write_stream(self, full_path: pathlib.Path, resource: t.BinaryIO) -> bool:
        full_path.parent.mkdir(parents=True, exist_ok=True)
        with open(full_path, "wb") as dest:
            shutil.copyfileobj(resource, dest)
        return True

    def read(self, path: str) -> t.Optional[bytes]:
        return self._safely(f"reading [{path}]", self._full_path(path).read_bytes)

    def read_stream(self, path: str) -> t.Optional[t.BinaryIO]:
        return self._safely(f"reading [{path}]", open, self._full_path(path), "rb")

    def _deletable_path(self, path: str) -> pathlib.Path:
        full_path = self._full_path(path)
        if full_path == self._root:
            raise InvalidPathError(f"Cannot delete the adapter root")
        return full_path

    def delete(self, path: str) -> bool:
        full_path = self._deletable_path(path)
        return self._safely(f"deleting [{path}]", self._delete, full_path) is not None

    def _delete(self, full_path: pathlib.Path) -> bool:
        if full_path.is_dir():
            shutil.rmtree(full_path)
        else:
            full_path.unlink()
        return True

    def delete_dir(self, dirname: str) -> bool:
        full_path = self._deletable_path(dirname)
        return self._safely(f"deleting directory [{dirname}]", self._delete_dir, full_path) is not None

    def _delete_dir(self, full_path: pathlib.Path) -> bool:
        shutil.rmtree(full_path)
        return True

    def create_dir(self, dirname: str) -> bool:
        full_path = self._full_path(dirname)
        return self._safely(f"creating directory [{dirname}]", self._create_dir, full_path) is not None

    def _create_dir(self, full_path: pathlib.Path) -> bool:
        full_path.mkdir(parents=True, exist_ok=True)
        return True

    def has(self, path: str) -> bool:
        return self._full_path(path).exists()

    @local_file_error_wrap
    def _metadata(self, full_path: pathlib.Path) -> dict:
        stat = full_path.stat()
        return {
            'type': 'dir' if full_path.is_dir() else 'file',
            'path': self._relative(full_path),
            'size': stat.st_size if not full_path.is_dir() else 0,
            'timestamp': int(stat.st_mtime),
        }

    def get_metadata(self, path: str) -> t.Optional[dict]:
        full_path = self._full_path(path)
        if not full_path.exists():
            return None
        return self._metadata(full_path)

    def get_size(self, path: str) -> t.Optional[int]:
        metadata = self.get_metadata(path)
        return None if metadata is None else metadata['size']

    def get_timestamp(self, path: str) -> t.Optional[int]:
        metadata = self.get_metadata(path)
        return None if metadata is None else metadata['timestamp']

    def get_mimetype(self, path: str) -> t.Optional[str]:
        if not self._full_path(path).is_file():
            return None
        mimetype, _ = mimetypes.guess_type(path)
        return mimetype or 'application/octet-stream'

    @local_file_error_wrap
    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict]:
        results = []
        work = [self._full_path(directory)]
        while work:
            d = work.pop()
            for file in sorted(d.iterdir()):
                results.append(self._metadata(file))
                if recursive and file.is_dir():
                    work.append(file)
        return results

    @staticmethod
    def supports(target: str) -> bool:
        return True

    @classmethod
    def build(cls, target: str) -> LocalAdapter:
        if target.startswith("file://"):
            return cls(pathlib.Path(target[7:]))
        return cls(pathlib.Path(target))
