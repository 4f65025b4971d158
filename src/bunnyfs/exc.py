
class BunnyFSError(Exception):
    """Super-type of all errors raised by bunnyfs code"""

    def __init__(self, msg: str, code_space: str = "GEN", code_number: int = None, is_recoverable: bool = False):
        self.internal_code = "" if code_number is None else f"{code_space}-{code_number}"
        super().__init__(f"{msg} [{self.internal_code}]")
        self.is_recoverable = is_recoverable


class StorageError(BunnyFSError):
    """Error class specifically for storage errors."""

    def __init__(self, msg, code, is_recoverable: bool = False):
        super().__init__(msg, "STORAGE", code, is_recoverable=is_recoverable)


class NotFoundError(StorageError):
    """No object matched the requested path."""

    def __init__(self, msg, code: int = 1002):
        super().__init__(msg, code)


class AmbiguousPathError(StorageError):
    """More than one object matched the requested path."""

    def __init__(self, msg, code: int = 1010):
        super().__init__(msg, code)


class InvalidPathError(StorageError):

    def __init__(self, msg, code: int = 1011):
        super().__init__(msg, code)


class NotSupportedError(StorageError):
    """The storage backend has no equivalent for the requested operation."""

    def __init__(self, msg, code: int = 1012):
        super().__init__(msg, code)


class RemoteTransportError(BunnyFSError):
    """The remote storage API could not be reached or refused the request."""

    def __init__(self, msg, code, is_recoverable: bool = False, status_code: int = None):
        super().__init__(msg, "BUNNYCDN", code, is_recoverable=is_recoverable)
        self.status_code = status_code


class RemoteNotFoundError(RemoteTransportError):
    """The remote storage API answered 404."""

    def __init__(self, msg, code: int = 2004):
        super().__init__(msg, code, False, 404)
