"""
LwM2M Objects - object definition compiler

This package compiles OMA LwM2M object definition documents
(lwm2m-object-<id>.xml) into a normalized JSON inventory with synthesized
default values per resource, plus a human-readable catalog.

Main modules:
- definitions: file discovery, tolerant field extraction, default values
- inventory: aggregation, mirrored persistence, catalog, client export
- cli: lwm2mctl operational CLI
- ui: read-only HTTP API over a compiled inventory
"""

__version__ = "0.3.0"
__author__ = "LwM2M Objects Team"

__all__ = ["__version__", "__author__"]
