"""Client for the BunnyCDN storage zone API."""
from .client import BunnyCDNStorage, wrap_bunny_errors
from .structures import RemoteObject
