"""
Read-only HTTP API over a compiled object inventory.
"""

__all__ = ["inventory_api", "http_server"]
