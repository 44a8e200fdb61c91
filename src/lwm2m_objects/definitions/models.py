"""
Object definition data models.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

DefaultValue = Union[bool, int, float, str]


class ValueKind(str, Enum):
    """Normalized value kinds used by the client runtime."""

    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    OBJECT_LINK = "OBJECT_LINK"
    FUNCTION = "FUNCTION"


class ResourceValueSpec(BaseModel):
    """
    Synthesized value description for one resource.

    Execute markers (kind FUNCTION) carry no default value.
    """

    kind: ValueKind
    operations: str = "R"
    default_value: Optional[DefaultValue] = None
    description: Optional[str] = None

    @property
    def is_function(self) -> bool:
        return self.kind == ValueKind.FUNCTION

    def to_client_value(self) -> Dict[str, Any]:
        """
        Render the value in the client runtime's resource format.

        Returns:
            {type, acl, value, description?} for data resources,
            {type, description?} for execute markers
        """
        if self.is_function:
            value: Dict[str, Any] = {"type": ValueKind.FUNCTION.value}
        else:
            value = {
                "type": self.kind.value,
                "acl": self.operations,
                "value": self.default_value,
            }
        if self.description:
            value["description"] = self.description
        return value


class ResourceDefinition(BaseModel):
    """
    One resource (Item) of an LwM2M object.

    The synthesized kind and default value are merged in so the inventory
    carries everything a consumer needs to seed its object store.
    """

    id: str = Field(..., description="Resource ID")
    name: str = Field(..., description="Resource name")
    type: str = Field(
        default="",
        description="Data type as written in the definition; empty for execute-only resources",
    )
    mandatory: bool = Field(default=False, description="Mandatory vs optional marker")
    operations: str = Field(default="", description="Access operations (R, W, RW, E)")
    units: Optional[str] = Field(None, description="Units if declared")
    range_enumeration: Optional[str] = Field(
        None,
        alias="rangeEnumeration",
        description="Range such as '0..100'; only the lower bound is used",
    )
    description: Optional[str] = Field(None, description="Resource description")
    kind: ValueKind = Field(default=ValueKind.FUNCTION, description="Normalized value kind")
    default_value: Optional[DefaultValue] = Field(
        None,
        alias="defaultValue",
        description="Synthesized default value; absent for execute markers",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "5700",
                "name": "Sensor Value",
                "type": "Float",
                "mandatory": True,
                "operations": "R",
                "units": "Cel",
                "description": "Last or Current Measured Value from the Sensor.",
                "kind": "FLOAT",
                "defaultValue": 0.0,
            }
        }

    @property
    def is_execute(self) -> bool:
        """True for resources with no data type (callable operations)."""
        return not self.type.strip()

    @property
    def value_spec(self) -> ResourceValueSpec:
        return ResourceValueSpec(
            kind=self.kind,
            operations=self.operations or "R",
            default_value=self.default_value,
            description=self.description,
        )


class ObjectDefinition(BaseModel):
    """
    Compiled definition of one LwM2M object.
    """

    object_id: str = Field(..., alias="objectId", description="Numeric object ID as a string")
    name: str = Field(..., description="Display name")
    description: str = Field(default="", description="Object description (trimmed)")
    is_singleton: bool = Field(
        default=False,
        alias="isSingleton",
        description="True only when MultipleInstances is explicitly 'Single'",
    )
    resources: Dict[str, ResourceDefinition] = Field(
        default_factory=dict,
        description="Resources keyed by resource ID",
    )
    source_path: Optional[Path] = Field(None, exclude=True)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "objectId": "3303",
                "name": "Temperature",
                "description": "This IPSO object should be used with a temperature sensor.",
                "isSingleton": False,
                "resources": {},
            }
        }

    def to_inventory_entry(self) -> Dict[str, Any]:
        """Serialize as it appears in the inventory file."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CompileReport(BaseModel):
    """
    Outcome of one compiler run.
    """

    definitions_dir: Path
    files_found: int = 0
    objects: List[str] = Field(default_factory=list, description="Compiled object IDs")
    skipped: List[Path] = Field(default_factory=list, description="Files that failed to parse")
    inventory_paths: List[Path] = Field(default_factory=list)
    catalog_path: Optional[Path] = None
    client_objects_path: Optional[Path] = None
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """False when nothing was found to compile."""
        return self.files_found > 0 and bool(self.inventory_paths)
