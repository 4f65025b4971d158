from __future__ import annotations
import datetime
import re
from bunnyfs.exc import RemoteTransportError
import typing as t


_FRACTION = re.compile(r"\.(\d+)")


def parse_bunny_timestamp(value: t.Optional[str]) -> t.Optional[datetime.datetime]:
    """Parse a BunnyCDN timestamp (ISO-8601, usually without a zone, always UTC).

        The API does not pad the fractional seconds, so they are normalized to
        microseconds before parsing.
    """
    if not value:
        return None
    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1]
    value = _FRACTION.sub(lambda m: f".{m.group(1)[:6].ljust(6, '0')}", value, count=1)
    try:
        dt = datetime.datetime.fromisoformat(value)
    except ValueError as ex:
        raise RemoteTransportError(f"BunnyCDN: Invalid timestamp [{value}] received", 2007) from ex
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt


class RemoteObject:
    """One entry of a storage zone directory listing."""

    def __init__(self,
                 path: str,
                 object_name: str,
                 length: int = 0,
                 last_changed: t.Optional[str] = None,
                 is_directory: bool = False,
                 guid: t.Optional[str] = None,
                 storage_zone_name: t.Optional[str] = None,
                 content_type: t.Optional[str] = None,
                 checksum: t.Optional[str] = None,
                 date_created: t.Optional[str] = None):
        self.path = path
        self.object_name = object_name
        self.length = length
        self.last_changed = last_changed
        self.is_directory = is_directory
        self.guid = guid
        self.storage_zone_name = storage_zone_name
        self.content_type = content_type
        self.checksum = checksum
        self.date_created = date_created

    def __repr__(self):
        return f"<RemoteObject {self.full_path}>"

    @property
    def full_path(self) -> str:
        """Containing directory plus the object name, as reported by the API (e.g. /zone/dir/file)."""
        return f"{self.path}{self.object_name}"

    def modified_datetime(self) -> t.Optional[datetime.datetime]:
        return parse_bunny_timestamp(self.last_changed)

    def timestamp(self) -> t.Optional[int]:
        dt = self.modified_datetime()
        return None if dt is None else int(dt.timestamp())

    def relative_path(self) -> str:
        """Path of the object inside its storage zone, without leading slash."""
        full_path = self.full_path.lstrip('/')
        zone_prefix = f"{self.storage_zone_name}/" if self.storage_zone_name else None
        if zone_prefix is None and '/' in full_path:
            zone_prefix = full_path[:full_path.find('/') + 1]
        if zone_prefix and full_path.startswith(zone_prefix):
            full_path = full_path[len(zone_prefix):]
        return full_path

    def as_metadata(self) -> dict:
        metadata = {
            'type': 'dir' if self.is_directory else 'file',
            'path': self.relative_path(),
            'size': self.length,
            'timestamp': self.timestamp(),
        }
        if self.guid:
            metadata['guid'] = self.guid
        if self.checksum:
            metadata['checksum'] = self.checksum
        if self.content_type:
            metadata['content_type'] = self.content_type
        return metadata

    @staticmethod
    def from_json(data: dict) -> RemoteObject:
        return RemoteObject(
            path=data.get('Path', '/'),
            object_name=data.get('ObjectName', ''),
            length=int(data.get('Length') or 0),
            last_changed=data.get('LastChanged'),
            is_directory=bool(data.get('IsDirectory', False)),
            guid=data.get('Guid'),
            storage_zone_name=data.get('StorageZoneName'),
            content_type=data.get('ContentType') or None,
            checksum=data.get('Checksum'),
            date_created=data.get('DateCreated'),
        )
