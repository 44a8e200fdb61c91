"""
Inventory API endpoints.

Serves the compiled inventory mirror to the presentation surface.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..config import CompilerConfig
from ..definitions.models import ObjectDefinition, ResourceDefinition
from ..errors import InventoryLoadError
from ..inventory.builder import Inventory
from ..inventory.store import InventoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/objects", tags=["objects"])


class ObjectSummary(BaseModel):
    """Short listing entry for one object."""

    object_id: str
    name: str
    description: str = ""
    is_singleton: bool = False
    resource_count: int = 0


def get_store() -> InventoryStore:
    """Store for the configured inventory. Overridden in tests."""
    config = CompilerConfig()
    return InventoryStore(config.resolved_mirror_path)


def load_inventory(store: InventoryStore = Depends(get_store)) -> Inventory:
    try:
        return store.load()
    except InventoryLoadError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail="Inventory is unreadable")


def _get_object(inventory: Inventory, object_id: str) -> ObjectDefinition:
    obj = inventory.get(object_id)
    if obj is None:
        raise HTTPException(status_code=404, detail=f"Object {object_id} not found")
    return obj


@router.get("", response_model=List[ObjectSummary])
async def list_objects(
    singleton: Optional[bool] = None,
    inventory: Inventory = Depends(load_inventory),
) -> List[ObjectSummary]:
    """
    List compiled objects.

    Args:
        singleton: Only objects with this singleton flag

    Returns:
        Object summaries in inventory order
    """
    summaries = [
        ObjectSummary(
            object_id=obj.object_id,
            name=obj.name,
            description=obj.description,
            is_singleton=obj.is_singleton,
            resource_count=len(obj.resources),
        )
        for obj in inventory.values()
        if singleton is None or obj.is_singleton == singleton
    ]
    return summaries


@router.get("/{object_id}")
async def get_object(object_id: str, inventory: Inventory = Depends(load_inventory)) -> dict:
    """Get the full inventory entry for one object."""
    return _get_object(inventory, object_id).to_inventory_entry()


@router.get("/{object_id}/resources/{resource_id}")
async def get_resource(
    object_id: str,
    resource_id: str,
    inventory: Inventory = Depends(load_inventory),
) -> dict:
    """Get one resource definition, including its synthesized default."""
    obj = _get_object(inventory, object_id)
    resource: Optional[ResourceDefinition] = obj.resources.get(resource_id)
    if resource is None:
        raise HTTPException(
            status_code=404,
            detail=f"Resource {resource_id} not found in object {object_id}",
        )
    return resource.model_dump(by_alias=True, exclude_none=True, mode="json")
