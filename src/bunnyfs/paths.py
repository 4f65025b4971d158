"""Helpers for building remote object keys.

    Remote keys always use forward slashes, never start with a slash, never contain
    a double slash and end with a slash if and only if they refer to a directory.
"""
import typing as t
from bunnyfs.exc import InvalidPathError


def normalize_path(path: str, is_directory: t.Optional[bool] = None) -> str:
    """Convert a client-supplied path into the canonical remote key.

        If is_directory is True, a trailing slash is added. If it is False, a path
        with a trailing slash (other than the root) is rejected. If it is None, the
        trailing slash is left as-is.
    """
    path = path.replace('\\', '/')
    if is_directory is not None:
        if is_directory:
            if not path.endswith('/'):
                path += '/'
        elif path.endswith('/') and path != '/':
            raise InvalidPathError(f"The requested path [{path}] is invalid")
    while '//' in path:
        path = path.replace('//', '/')
    if path.startswith('/'):
        path = path[1:]
    return path


def split_path(path: str) -> tuple[str, str]:
    """Split a path into its parent directory and leaf name, ignoring one trailing slash."""
    path = path.replace('\\', '/')
    if path.endswith('/'):
        path = path[:-1]
    parent, _, leaf = path.rpartition('/')
    return parent, leaf


def join_key(*parts: str, is_directory: t.Optional[bool] = None) -> str:
    return normalize_path('/'.join(parts), is_directory)
