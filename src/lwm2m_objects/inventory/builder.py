"""
Inventory aggregation and serialization.
"""

import json
import logging
from typing import Dict, Iterable, Tuple

from ..definitions.models import ObjectDefinition, ResourceDefinition

logger = logging.getLogger(__name__)

Inventory = Dict[str, ObjectDefinition]


def numeric_key(identifier: str) -> Tuple[int, int, str]:
    """Sort key placing numeric IDs first, in numeric order."""
    if identifier.isdigit():
        return 0, int(identifier), identifier
    return 1, 0, identifier


class InventoryBuilder:
    """
    Aggregates parsed objects into the inventory mapping.

    The inventory is rebuilt from scratch on every run; nothing is merged
    with a previous inventory.
    """

    def build(self, objects: Iterable[ObjectDefinition]) -> Inventory:
        """
        Build the inventory from parsed objects.

        When several objects share an ID the last one wins, so callers must
        pass objects in a deterministic order.

        Args:
            objects: Parsed objects in scan order

        Returns:
            Inventory keyed and ordered by numeric object ID
        """
        collected: Inventory = {}

        for obj in objects:
            previous = collected.get(obj.object_id)
            if previous is not None:
                logger.warning(
                    f"Duplicate object {obj.object_id}: {obj.source_path} "
                    f"replaces {previous.source_path}"
                )
            collected[obj.object_id] = obj
            logger.info(
                f"Parsed object {obj.object_id} ({obj.name}) "
                f"with {len(obj.resources)} resources"
            )

        inventory: Inventory = {}
        for object_id in sorted(collected, key=numeric_key):
            inventory[object_id] = self._with_sorted_resources(collected[object_id])

        return inventory

    def _with_sorted_resources(self, obj: ObjectDefinition) -> ObjectDefinition:
        resources: Dict[str, ResourceDefinition] = {
            rid: obj.resources[rid] for rid in sorted(obj.resources, key=numeric_key)
        }
        return obj.model_copy(update={"resources": resources})

    def to_dict(self, inventory: Inventory) -> Dict[str, dict]:
        """Convert the inventory to plain JSON-compatible data."""
        return {object_id: obj.to_inventory_entry() for object_id, obj in inventory.items()}

    def serialize(self, inventory: Inventory) -> str:
        """
        Serialize the inventory to JSON text.

        Args:
            inventory: Built inventory

        Returns:
            Indented JSON; identical inventories give identical text
        """
        return json.dumps(
            self.to_dict(inventory), indent=2, ensure_ascii=False, allow_nan=False
        )
