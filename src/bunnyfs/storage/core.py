from autoinject import injector
from bunnyfs.storage.base import BaseAdapter
from bunnyfs.storage.bunny import BunnyCDNAdapter
from bunnyfs.storage.local import LocalAdapter
import typing as t
import pathlib


@injector.injectable_global
class StorageController:
    """Controller class that identifies the correct adapter for a given target.

        bunnycdn://ZONE_NAME -> BunnyCDNAdapter
        bunnycdn://ZONE_NAME?region=ny -> BunnyCDNAdapter
        file://PATH -> LocalAdapter
        (default or path-like) -> LocalAdapter
    """

    def __init__(self):
        self.adapter_classes = [
            BunnyCDNAdapter,
        ]
        self.default_adapter = LocalAdapter

    def register(self, adapter_cls: type):
        """Register an additional adapter class, checked before the built-in ones."""
        self.adapter_classes.insert(0, adapter_cls)

    def get_adapter(self, target: t.Union[str, pathlib.Path]) -> BaseAdapter:
        """Build an appropriate adapter for the given target."""
        if isinstance(target, pathlib.Path):
            return LocalAdapter(target.resolve())
        for cls in self.adapter_classes:
            if cls.supports(target):
                return cls.build(target)
        return self.default_adapter.build(target)
