"""
Object inventory compilation and persistence.

This module aggregates parsed definitions into the inventory artifact and
writes it, together with the catalog, to disk.
"""

__all__ = ["builder", "store", "catalog", "client_objects", "service"]
