"""Uptime monitor - periodic HTTP probing behind a key-protected API."""

__version__ = "1.0.0"
