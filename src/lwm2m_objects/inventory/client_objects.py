"""
Export of the inventory in the client runtime's object format.

Each object is rendered as Object -> Instance 0 -> Resources, with the
synthesized default value and access operations for each resource.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import CompilerError
from .builder import Inventory
from .store import write_file_atomic

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE = "0"


def build_client_objects(inventory: Inventory) -> Dict[str, Dict[str, Any]]:
    """
    Convert the inventory to the client object mapping.

    Objects without any resources are left out.

    Args:
        inventory: Built inventory

    Returns:
        Mapping objectId -> {"0": {...resources}, "description", "isSingleton"}
    """
    objects: Dict[str, Dict[str, Any]] = {}

    for object_id, obj in inventory.items():
        if not obj.resources:
            logger.info(f"Object {object_id} ({obj.name}) has no resources with default values")
            continue

        instance: Dict[str, Any] = {"description": f"{obj.name} Instance {DEFAULT_INSTANCE}"}
        for resource_id, resource in obj.resources.items():
            instance[resource_id] = resource.value_spec.to_client_value()

        objects[object_id] = {
            DEFAULT_INSTANCE: instance,
            "description": obj.name,
            "isSingleton": obj.is_singleton,
        }
        logger.debug(f"Converted object {object_id} with {len(obj.resources)} resources")

    return objects


def write_client_objects(inventory: Inventory, path: Union[str, Path]) -> Path:
    """
    Write the client object mapping as JSON.

    Args:
        inventory: Built inventory
        path: Output file

    Returns:
        Path written

    Raises:
        CompilerError: If the file cannot be written
    """
    path = Path(path)
    content = json.dumps(
        build_client_objects(inventory), indent=4, ensure_ascii=False, allow_nan=False
    )

    try:
        write_file_atomic(path, content)
    except OSError as e:
        raise CompilerError(f"Error writing client objects to {path}: {e}") from e

    logger.info(f"Written client objects to {path}")
    return path
