"""
Inventory persistence to a primary file and its public mirror.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from ..definitions.models import ObjectDefinition
from ..errors import InventoryLoadError, InventoryWriteError

logger = logging.getLogger(__name__)


def write_file_atomic(path: Union[str, Path], content: str) -> Path:
    """
    Write text through a sibling temporary file renamed into place.

    The target is either left untouched or fully replaced.

    Args:
        path: Destination file
        content: Text to write (UTF-8)

    Returns:
        Path written

    Raises:
        OSError: If the directory, the temporary file or the rename fails
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    mode = path.stat().st_mode & 0o777 if path.is_file() else 0o644

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path


class InventoryStore:
    """
    File storage for the compiled inventory.

    The same serialized content is written to both destinations; the mirror
    is read by a separate presentation surface and must never diverge.
    """

    def __init__(
        self,
        primary_path: Union[str, Path],
        mirror_path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize inventory store.

        Args:
            primary_path: Main inventory file
            mirror_path: Public mirror file (optional)
        """
        self.primary_path = Path(primary_path)
        self.mirror_path = Path(mirror_path) if mirror_path else None

    @property
    def destinations(self) -> List[Path]:
        paths = [self.primary_path]
        if self.mirror_path is not None and self.mirror_path != self.primary_path:
            paths.append(self.mirror_path)
        return paths

    def write(self, content: str) -> List[Path]:
        """
        Write serialized inventory to every destination.

        Args:
            content: JSON text

        Returns:
            Paths written

        Raises:
            InventoryWriteError: If any destination fails. A failure after
                the primary was written leaves the mirror stale and is
                logged as an error.
        """
        written: List[Path] = []

        for path in self.destinations:
            try:
                write_file_atomic(path, content)
            except OSError as e:
                if written:
                    logger.error(
                        f"Inventory mirrors diverged: wrote {', '.join(map(str, written))} "
                        f"but failed to write {path}: {e}"
                    )
                else:
                    logger.error(f"Error writing inventory to {path}: {e}")
                raise InventoryWriteError(path, written=written, reason=str(e)) from e

            written.append(path)
            logger.info(f"Written inventory to {path}")

        return written

    def mirrors_consistent(self) -> bool:
        """
        Check that every destination exists with identical bytes.

        Returns:
            True if all destinations match
        """
        contents = []
        for path in self.destinations:
            try:
                contents.append(path.read_bytes())
            except OSError:
                return False
        return len(set(contents)) == 1

    def load(self, path: Optional[Union[str, Path]] = None) -> Dict[str, ObjectDefinition]:
        """
        Load a previously compiled inventory.

        Args:
            path: File to read (defaults to the primary path)

        Returns:
            Inventory mapping; empty if the file does not exist

        Raises:
            InventoryLoadError: If the file is unreadable or malformed
        """
        path = Path(path) if path else self.primary_path

        if not path.exists():
            logger.info(f"Inventory file {path} not found")
            return {}

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise InventoryLoadError(f"Error loading inventory from {path}: {e}") from e

        if not isinstance(data, dict):
            raise InventoryLoadError(f"Inventory {path} is not a JSON object")

        try:
            return {
                object_id: ObjectDefinition.model_validate(entry)
                for object_id, entry in data.items()
            }
        except ValidationError as e:
            raise InventoryLoadError(f"Invalid inventory entry in {path}: {e}") from e

    def get_stats(self) -> Dict[str, int]:
        """Get inventory statistics from the primary file."""
        inventory = self.load()
        resources = sum(len(obj.resources) for obj in inventory.values())
        singletons = sum(1 for obj in inventory.values() if obj.is_singleton)
        return {
            "total_objects": len(inventory),
            "total_resources": resources,
            "singleton_objects": singletons,
        }
