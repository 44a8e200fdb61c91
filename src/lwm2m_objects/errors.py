"""
Exceptions raised by the object definition compiler.

Per-file parse problems are never raised; they are logged and the file is
skipped. Only persistence failures surface to the caller.
"""

from pathlib import Path
from typing import List, Optional


class CompilerError(Exception):
    """Base class for compiler failures."""
    pass


class InventoryWriteError(CompilerError):
    """
    Raised when the inventory cannot be written to one of its destinations.

    Attributes:
        path: Destination that failed
        written: Destinations already written before the failure
    """

    def __init__(self, path: Path, written: Optional[List[Path]] = None, reason: str = ""):
        self.path = Path(path)
        self.written = list(written or [])
        self.reason = reason
        message = f"Failed to write inventory to {self.path}"
        if reason:
            message += f": {reason}"
        if self.written:
            message += f" (already written: {', '.join(str(p) for p in self.written)})"
        super().__init__(message)

    @property
    def partial(self) -> bool:
        """True if at least one destination was written before the failure."""
        return bool(self.written)


class InventoryLoadError(CompilerError):
    """Raised when an existing inventory file cannot be read or decoded."""
    pass


class CatalogWriteError(CompilerError):
    """Raised when the catalog report cannot be written."""
    pass
