"""
Compiler service: one synchronous batch pass from definition files to the
inventory and catalog.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from ..config import CompilerConfig
from ..definitions.models import CompileReport, ObjectDefinition
from ..definitions.parser import DefinitionParser
from ..definitions.scanner import find_definition_files
from .builder import InventoryBuilder
from .catalog import CatalogWriter
from .client_objects import write_client_objects
from .store import InventoryStore

logger = logging.getLogger(__name__)


class CompilerService:
    """
    Runs the definition compiler.

    Each run:
    1. Scans the definitions directory
    2. Parses every definition file (failures are skipped)
    3. Builds the inventory and writes it to the primary file and the mirror
    4. Writes the catalog and, if configured, the client object mapping
    """

    def __init__(
        self,
        config: CompilerConfig,
        parser: Optional[DefinitionParser] = None,
        builder: Optional[InventoryBuilder] = None,
        store: Optional[InventoryStore] = None,
        catalog: Optional[CatalogWriter] = None,
    ):
        """
        Initialize compiler service.

        Args:
            config: Compiler configuration
            parser: Definition parser
            builder: Inventory builder
            store: Inventory store (defaults to the configured paths)
            catalog: Catalog writer
        """
        self.config = config
        self.parser = parser or DefinitionParser(
            include_execute=config.include_execute_resources
        )
        self.builder = builder or InventoryBuilder()
        self.store = store or InventoryStore(
            config.resolved_inventory_path, config.resolved_mirror_path
        )
        self.catalog = catalog or CatalogWriter()

    def parse_all(self, files: List[Path], report: CompileReport) -> List[ObjectDefinition]:
        """
        Parse definition files in order.

        Args:
            files: Files in scan order
            report: Report to record skipped files on

        Returns:
            Parsed objects in scan order
        """
        objects: List[ObjectDefinition] = []

        for path in files:
            logger.debug(f"Parsing {path}...")
            obj = self.parser.parse_file(path)
            if obj is None:
                report.skipped.append(path)
                continue
            objects.append(obj)

        return objects

    def compile(self) -> CompileReport:
        """
        Run one full compilation.

        Returns:
            CompileReport describing what was written

        Raises:
            InventoryWriteError: If the inventory or its mirror cannot be written
            CatalogWriteError: If the catalog cannot be written
        """
        started = time.monotonic()
        definitions_dir = self.config.definitions_dir
        report = CompileReport(definitions_dir=definitions_dir)

        logger.info(f"Starting LwM2M definition compilation in {definitions_dir}")

        files = find_definition_files(definitions_dir)
        report.files_found = len(files)
        logger.info(f"Found {len(files)} LwM2M XML files")

        if not files:
            logger.warning("No LwM2M definition files found")
            report.duration_seconds = time.monotonic() - started
            return report

        objects = self.parse_all(files, report)
        if report.skipped:
            logger.warning(f"Skipped {len(report.skipped)} definition files")

        inventory = self.builder.build(objects)
        report.objects = list(inventory)

        content = self.builder.serialize(inventory)
        report.inventory_paths = self.store.write(content)

        catalog_path = self.config.resolved_catalog_path
        if catalog_path is not None:
            report.catalog_path = self.catalog.write(objects, catalog_path)

        if self.config.client_objects_path is not None:
            report.client_objects_path = write_client_objects(
                inventory, self.config.client_objects_path
            )

        report.duration_seconds = time.monotonic() - started
        logger.info(
            f"Processing complete: inventory created with {len(inventory)} objects "
            f"from {len(files)} XML files"
        )
        return report


def compile_definitions(
    definitions_dir: Union[str, Path],
    inventory_path: Union[str, Path],
    mirror_path: Optional[Union[str, Path]] = None,
    **options,
) -> CompileReport:
    """
    Compile a definitions directory into an inventory.

    Args:
        definitions_dir: Directory holding lwm2m-object-<id>.xml files
        inventory_path: Primary inventory file
        mirror_path: Public mirror (default: <definitions_dir>/../public/<inventory name>)
        **options: Any other CompilerConfig field

    Returns:
        CompileReport
    """
    config = CompilerConfig(
        definitions_dir=Path(definitions_dir),
        inventory_path=Path(inventory_path),
        mirror_path=Path(mirror_path) if mirror_path else None,
        **options,
    )
    return CompilerService(config).compile()
