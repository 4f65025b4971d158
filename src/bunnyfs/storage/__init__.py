"""
    Provides general storage functionality.

    In general, one should use the StorageController to get an adapter for a target.
    The adapter knows how to perform the various file operations on that target,
    regardless of if it is a BunnyCDN storage zone or a directory on a local drive.

    It is worth noting that, given the differences between a remote object store and a
    local disk, not every operation is supported everywhere (e.g. streams and mimetypes
    are only available locally). Unsupported operations raise NotSupportedError rather
    than doing something approximately similar.

    One key note: the BunnyCDN storage API makes no distinction in its keys between a
    directory and a file without a server call. This component adopts a strict convention
    that remote keys for directories end with a trailing slash (e.g. zone/directory/) and
    keys for files do not (e.g. zone/file). Paths given to the adapters are normalized to
    follow this convention (see bunnyfs.paths.normalize_path).

    The storage API also cannot look up a single path. Existence checks and metadata are
    answered by listing the parent directory and matching the entry by name (see
    BunnyCDNAdapter.resolve()).
"""
from .core import StorageController
from .base import BaseAdapter
from .bunny import BunnyCDNAdapter
from .local import LocalAdapter
