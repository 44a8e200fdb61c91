"""
Human-readable object catalog.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from ..definitions.models import ObjectDefinition
from ..errors import CatalogWriteError
from .store import write_file_atomic

logger = logging.getLogger(__name__)

CATALOG_TITLE = "# LwM2M Objects"


class CatalogWriter:
    """
    Writes a Markdown summary of parsed objects.

    The catalog is rendered from the parsed objects, one section per file
    in scan order, not from the inventory file.
    """

    def render(self, objects: Iterable[ObjectDefinition]) -> str:
        sections = [f"{CATALOG_TITLE}\n\n"]
        for obj in objects:
            sections.append(f"## Object {obj.object_id}: {obj.name}\n\n")
            sections.append(f"{obj.description}\n\n")
        return "".join(sections)

    def write(self, objects: Iterable[ObjectDefinition], path: Union[str, Path]) -> Path:
        """
        Render and write the catalog.

        Args:
            objects: Parsed objects
            path: Output file

        Returns:
            Path written

        Raises:
            CatalogWriteError: If the file cannot be written
        """
        path = Path(path)
        content = self.render(objects)

        try:
            write_file_atomic(path, content)
        except OSError as e:
            raise CatalogWriteError(f"Error writing catalog to {path}: {e}") from e

        logger.info(f"Written catalog to {path}")
        return path
