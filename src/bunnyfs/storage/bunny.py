"""Adapter for BunnyCDN storage zones.

    The storage API can list a directory but cannot look up a single path, so every
    metadata query lists the parent directory and picks out the matching entry with
    resolve().
"""
from __future__ import annotations
from urllib.parse import urlparse, parse_qs
from .base import BaseAdapter, Contents, as_bytes
from bunnyfs.bunnycdn import BunnyCDNStorage, RemoteObject
from bunnyfs.exc import NotFoundError, AmbiguousPathError, InvalidPathError, RemoteTransportError, RemoteNotFoundError
from bunnyfs.paths import join_key, split_path
import typing as t


class BunnyCDNAdapter(BaseAdapter):
    """Adapter for the files of one BunnyCDN storage zone.

        Transfers are buffered in memory, stream operations and mimetypes are not
        supported.
    """

    def __init__(self, storage: BunnyCDNStorage, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._storage = storage

    @property
    def storage_zone_name(self) -> str:
        return self._storage.storage_zone_name

    def _key(self, path: str, is_directory: t.Optional[bool] = None) -> str:
        return join_key(self.storage_zone_name, path, is_directory=is_directory)

    def resolve(self, path: str) -> RemoteObject:
        """Find the unique remote object for a path.

            Raises NotFoundError if nothing matches and AmbiguousPathError if the
            listing contains more than one match.
        """
        parent, leaf = split_path(path)
        try:
            listing = self._storage.get_storage_objects(f"{self.storage_zone_name}/{parent}")
        except RemoteNotFoundError as ex:
            raise NotFoundError(f"Could not find parent directory of [{path}]") from ex
        expected = '/' + join_key(self.storage_zone_name, parent, leaf, is_directory=(leaf == ''))
        matches = [obj for obj in listing if obj.full_path == expected]
        if len(matches) > 1:
            raise AmbiguousPathError(f"More than one object was returned for path [{path}]")
        if not matches:
            raise NotFoundError(f"Could not find file [{path}]")
        return matches[0]

    def write(self, path: str, contents: Contents) -> bool:
        try:
            self._storage.upload(self._key(path, False), as_bytes(contents))
            return True
        except RemoteTransportError:
            self._log.exception(f"Error writing [{path}]")
            return False

    def read(self, path: str) -> t.Optional[bytes]:
        try:
            return self._storage.download(self._key(path, False))
        except RemoteNotFoundError:
            self._log.warning(f"Cannot read [{path}], file not found")
            return None
        except RemoteTransportError:
            self._log.exception(f"Error reading [{path}]")
            return None

    def _deletable_key(self, path: str, is_directory: t.Optional[bool] = None) -> str:
        key = self._key(path, is_directory)
        if key == self._key("", True):
            raise InvalidPathError(f"Cannot delete the root of storage zone [{self.storage_zone_name}]")
        return key

    def delete(self, path: str) -> bool:
        key = self._deletable_key(path)
        try:
            self._storage.delete_object(key)
            return True
        except RemoteTransportError:
            self._log.exception(f"Error deleting [{path}]")
            return False

    def delete_dir(self, dirname: str) -> bool:
        key = self._deletable_key(dirname, True)
        try:
            self._storage.delete_object(key)
            return True
        except RemoteTransportError:
            self._log.exception(f"Error deleting directory [{dirname}]")
            return False

    def create_dir(self, dirname: str) -> bool:
        try:
            self._storage.make_directory(self._key(dirname, True))
            return True
        except RemoteTransportError:
            self._log.exception(f"Error creating directory [{dirname}]")
            return False

    def has(self, path: str) -> bool:
        try:
            self.resolve(path)
            return True
        except (NotFoundError, AmbiguousPathError):
            return False
        except RemoteTransportError:
            self._log.exception(f"Error checking if [{path}] exists")
            return False

    def get_metadata(self, path: str) -> t.Optional[dict]:
        try:
            return self.resolve(path).as_metadata()
        except (NotFoundError, AmbiguousPathError):
            return None

    def get_size(self, path: str) -> t.Optional[int]:
        try:
            return self.resolve(path).length
        except (NotFoundError, AmbiguousPathError):
            return None

    def get_timestamp(self, path: str) -> t.Optional[int]:
        try:
            return self.resolve(path).timestamp()
        except (NotFoundError, AmbiguousPathError):
            return None

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict]:
        results = []
        work = [directory]
        while work:
            current = work.pop()
            for obj in self._storage.get_storage_objects(self._key(current, True)):
                results.append(obj.as_metadata())
                if recursive and obj.is_directory:
                    work.append(obj.relative_path())
        return results

    @staticmethod
    def supports(target: str) -> bool:
        return target.startswith("bunnycdn://")

    @classmethod
    def build(cls, target: str) -> BunnyCDNAdapter:
        """Build an adapter from bunnycdn://ZONE_NAME[?region=REGION]."""
        pieces = urlparse(target)
        region = parse_qs(pieces.query).get("region", [None])[0]
        return cls(BunnyCDNStorage(pieces.netloc, region=region))
