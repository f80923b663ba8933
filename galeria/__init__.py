"""Galeria - client gallery pages and access-code registry."""

__version__ = "0.1.0"
