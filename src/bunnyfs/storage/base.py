from __future__ import annotations
import functools
import zrlog
from bunnyfs.exc import StorageError, NotSupportedError
import typing as t


Contents = t.Union[str, bytes, bytearray]


def local_file_error_wrap(cb):
    """Converts typical local file-system errors into appropriate StorageErrors with recoverable set properly."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except StorageError:
            raise
        except FileNotFoundError as ex:
            raise StorageError(f"Local file not found", 1002) from ex
        except PermissionError as ex:
            raise StorageError(f"Access to local file denied", 1003, True) from ex
        except IsADirectoryError as ex:
            raise StorageError(f"Local file is a directory", 1004) from ex
        except NotADirectoryError as ex:
            raise StorageError(f"Local directory is not a directory", 1005) from ex
        except OSError as ex:
            raise StorageError(f"Exception processing local file: {ex.__class__.__name__}: {str(ex)}", 1006) from ex

    return _inner


def as_bytes(contents: Contents) -> bytes:
    if isinstance(contents, str):
        return contents.encode("utf-8")
    return bytes(contents)


class BaseAdapter:
    """Common interface for reading and writing files on a storage backend.

        Paths are relative to the root of the backend and use forward slashes.
        Operations that move data report failure by returning False (or None when
        they return content) instead of raising; operations the backend cannot
        perform raise NotSupportedError.
    """

    def __init__(self, *args, **kwargs):
        self._log = zrlog.get_logger(f"bunnyfs.storage.{self.__class__.__name__.lower()}")

    def write(self, path: str, contents: Contents) -> bool:
        """Write the contents to a new or existing file."""
        raise NotImplementedError

    def update(self, path: str, contents: Contents) -> bool:
        """Replace the contents of an existing file."""
        return self.write(path, contents)

    def write_stream(self, path: str, resource: t.BinaryIO) -> bool:
        raise NotSupportedError(f"{self.__class__.__name__} does not support stream writing, use write() instead")

    def update_stream(self, path: str, resource: t.BinaryIO) -> bool:
        raise NotSupportedError(f"{self.__class__.__name__} does not support stream updating, use update() instead")

    def read(self, path: str) -> t.Optional[bytes]:
        """Read the contents of a file, None if it cannot be read."""
        raise NotImplementedError

    def read_stream(self, path: str) -> t.Optional[t.BinaryIO]:
        raise NotSupportedError(f"{self.__class__.__name__} does not support stream reading, use read() instead")

    def delete(self, path: str) -> bool:
        raise NotImplementedError

    def delete_dir(self, dirname: str) -> bool:
        """Remove a directory and everything below it."""
        raise NotImplementedError

    def create_dir(self, dirname: str) -> bool:
        raise NotImplementedError

    def has(self, path: str) -> bool:
        """Check if a file or directory exists."""
        raise NotImplementedError

    def get_metadata(self, path: str) -> t.Optional[dict]:
        """Retrieve type, path, size and timestamp of an entry."""
        raise NotImplementedError

    def get_size(self, path: str) -> t.Optional[int]:
        raise NotImplementedError

    def get_timestamp(self, path: str) -> t.Optional[int]:
        """Last modification time as seconds since the epoch."""
        raise NotImplementedError

    def get_mimetype(self, path: str) -> t.Optional[str]:
        raise NotSupportedError(f"{self.__class__.__name__} does not provide mimetype information")

    def get_visibility(self, path: str) -> str:
        raise NotSupportedError(f"{self.__class__.__name__} does not support visibility")

    def set_visibility(self, path: str, visibility: str) -> bool:
        raise NotSupportedError(f"{self.__class__.__name__} does not support visibility")

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict]:
        """List the metadata of the entries of a directory."""
        raise NotImplementedError

    def copy(self, path: str, new_path: str) -> bool:
        """Copy a file by reading it and writing it to the new path."""
        contents = self.read(path)
        if contents is None:
            return False
        return self.write(new_path, contents)

    def rename(self, path: str, new_path: str) -> bool:
        """Move a file by copying it and removing the original.

            This is not atomic: if the original cannot be removed after the copy
            succeeded, both paths exist and False is returned.
        """
        if not self.copy(path, new_path):
            return False
        if not self.delete(path):
            self._log.warning(f"Renamed [{path}] to [{new_path}] but could not remove the original")
            return False
        return True

    @staticmethod
    def supports(target: str) -> bool:
        """Check if this adapter class supports the given target."""
        raise NotImplementedError

    @classmethod
    def build(cls, target: str) -> BaseAdapter:
        """Construct an adapter from the given target."""
        return cls(target)
