import functools
import hashlib
import pathlib
import requests
import zirconium as zr
import zrlog
from autoinject import injector
from bunnyfs.exc import RemoteTransportError, RemoteNotFoundError, InvalidPathError, BunnyFSError
from bunnyfs.paths import normalize_path
from .structures import RemoteObject
import typing as t


DEFAULT_REGION = "de"
DEFAULT_TIMEOUT = 30


def wrap_bunny_errors(cb):
    """Converts requests errors into RemoteTransportErrors with recoverable set properly."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except requests.Timeout as ex:
            raise RemoteTransportError(f"BunnyCDN: Connection timeout error: {ex.__class__.__name__}: {str(ex)}", 2001, True) from ex
        except requests.ConnectionError as ex:
            raise RemoteTransportError(f"BunnyCDN: Connection error: {ex.__class__.__name__}: {str(ex)}", 2002, True) from ex
        except requests.HTTPError as ex:
            status_code = ex.response.status_code if ex.response is not None else None
            if status_code == 401:
                raise RemoteTransportError(f"BunnyCDN: Unauthorized, check the access key", 2003, False, status_code) from ex
            elif status_code == 404:
                raise RemoteNotFoundError(f"BunnyCDN: Object not found: {ex.request.url if ex.request is not None else ''}") from ex
            elif status_code is not None and status_code >= 500:
                raise RemoteTransportError(f"BunnyCDN: Server error {status_code}", 2005, True, status_code) from ex
            raise RemoteTransportError(f"BunnyCDN: HTTP error {status_code}: {str(ex)}", 2006, False, status_code) from ex
        except requests.RequestException as ex:
            raise RemoteTransportError(f"BunnyCDN: {ex.__class__.__name__}: {str(ex)}", 2000) from ex

    return _inner


class BunnyCDNStorage:
    """Client for the storage API of a single BunnyCDN storage zone.

        Keys passed to this client include the storage zone name as their first
        component (e.g. "myzone/folder/file.txt"), matching the paths the API
        reports in its directory listings.

        Any value not given explicitly is read from the configuration:

            [bunnycdn]
            timeout = 30

            [bunnycdn.zones.ZONE_NAME]
            access_key = "..."
            region = "de"
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self,
                 storage_zone_name: str,
                 access_key: t.Optional[str] = None,
                 region: t.Optional[str] = None,
                 timeout: t.Optional[float] = None):
        if not storage_zone_name:
            raise BunnyFSError("Missing storage zone name", "BUNNYCDN", 1000)
        self.storage_zone_name = storage_zone_name
        self._access_key = access_key or self.config.as_str(("bunnycdn", "zones", storage_zone_name, "access_key"), default=None)
        if not self._access_key:
            raise BunnyFSError(f"Missing access key for storage zone [{storage_zone_name}]", "BUNNYCDN", 1001)
        if region is None:
            region = self.config.as_str(("bunnycdn", "zones", storage_zone_name, "region"), default=DEFAULT_REGION)
        self.region = (region or DEFAULT_REGION).lower()
        self.timeout = float(timeout if timeout is not None else self.config.get(("bunnycdn", "timeout"), default=DEFAULT_TIMEOUT))
        self._log = zrlog.get_logger("bunnyfs.bunnycdn")

    def base_url(self) -> str:
        if self.region == DEFAULT_REGION or self.region == "":
            return "https://storage.bunnycdn.com/"
        return f"https://{self.region}.storage.bunnycdn.com/"

    def normalize_path(self, path: str, is_directory: t.Optional[bool] = None) -> str:
        """Normalize a key and check that it belongs to this storage zone."""
        path = normalize_path(path, is_directory)
        if not (path.startswith(f"{self.storage_zone_name}/") or path == self.storage_zone_name):
            raise InvalidPathError(f"Path validation failed, path must begin with /{self.storage_zone_name}/")
        if any(segment in ('.', '..') for segment in path.split('/')):
            raise InvalidPathError(f"Path validation failed, [{path}] contains relative segments")
        return path

    def upload(self, key: str, data: t.Union[bytes, bytearray]) -> None:
        """Upload the given bytes to the key."""
        self._make_request(
            "PUT",
            self.normalize_path(key, False),
            data=bytes(data),
            headers={
                "Checksum": hashlib.sha256(data).hexdigest().upper(),
                "Content-Type": "application/octet-stream",
            }
        )

    def upload_file(self, local_path: t.Union[str, pathlib.Path], key: str) -> None:
        """Upload a local file to the key."""
        with open(local_path, "rb") as h:
            self.upload(key, h.read())

    def make_directory(self, key: str) -> None:
        self._make_request("PUT", self.normalize_path(key, True), data=b'', headers={"Content-Length": "0"})

    def download(self, key: str) -> bytes:
        """Download the contents of the key."""
        return self._make_request("GET", self.normalize_path(key, False)).content

    def download_file(self, key: str, local_path: t.Union[str, pathlib.Path]) -> None:
        content = self.download(key)
        with open(local_path, "wb") as h:
            h.write(content)

    def delete_object(self, key: str) -> None:
        """Delete a file, or a directory and its contents if the key ends with a slash."""
        self._make_request("DELETE", self.normalize_path(key))

    def get_storage_objects(self, directory: str) -> list[RemoteObject]:
        """List the immediate children of a directory."""
        resp = self._make_request("GET", self.normalize_path(directory, True), headers={"Accept": "application/json"})
        try:
            return [RemoteObject.from_json(x) for x in resp.json()]
        except (ValueError, TypeError, AttributeError) as ex:
            raise RemoteTransportError(f"BunnyCDN: Invalid directory listing received", 2007) from ex

    @wrap_bunny_errors
    def _make_request(self, method: str, path: str, data: t.Optional[bytes] = None, headers: t.Optional[dict] = None) -> requests.Response:
        full_url = f"{self.base_url()}{path}"
        self._log.debug(f"{method} {full_url}")
        headers = headers or {}
        headers["AccessKey"] = self._access_key
        headers.setdefault("Accept", "*/*")
        resp = requests.request(method, full_url, data=data, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp
