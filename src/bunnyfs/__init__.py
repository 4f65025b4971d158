"""Filesystem adapters for BunnyCDN storage zones and local directories."""
