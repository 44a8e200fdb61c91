"""
Default value synthesis for resource types.
"""

import logging
import math
import re
from typing import Callable, Dict, Optional, Union

from .models import DefaultValue, ResourceValueSpec, ValueKind

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = ".."
OBJECT_LINK_DEFAULT = "0:0"

INTEGER_BOUND_PATTERN = re.compile(r"-?\d+", re.ASCII)
FLOAT_BOUND_PATTERN = re.compile(r"-?\d+(\.\d+)?([eE][-+]?\d+)?", re.ASCII)

# LwM2M data type -> normalized kind. Time is carried as a Unix timestamp.
TYPE_KINDS: Dict[str, ValueKind] = {
    "boolean": ValueKind.BOOLEAN,
    "integer": ValueKind.INTEGER,
    "float": ValueKind.FLOAT,
    "string": ValueKind.STRING,
    "time": ValueKind.INTEGER,
    "objlnk": ValueKind.OBJECT_LINK,
}


def _normalize(resource_type: Optional[str]) -> str:
    return (resource_type or "").strip().lower()


def kind_for_type(resource_type: Optional[str]) -> ValueKind:
    """
    Map an LwM2M data type to its value kind.

    Args:
        resource_type: Type as written in the definition (case-insensitive)

    Returns:
        Matching ValueKind, or FUNCTION for empty and unknown types
    """
    return TYPE_KINDS.get(_normalize(resource_type), ValueKind.FUNCTION)


def parse_lower_bound(
    range_enumeration: Optional[str],
    cast: Callable[[str], Union[int, float]],
) -> Optional[Union[int, float]]:
    """
    Parse the lower bound of a '<min>..<max>' range.

    Args:
        range_enumeration: Range text, e.g. '-40..85'
        cast: int or float

    Returns:
        Lower bound, or None if absent or unparseable
    """
    if not range_enumeration or RANGE_SEPARATOR not in range_enumeration:
        return None

    lower = range_enumeration.split(RANGE_SEPARATOR)[0].strip()
    if not lower:
        return None

    pattern = INTEGER_BOUND_PATTERN if cast is int else FLOAT_BOUND_PATTERN
    if not pattern.fullmatch(lower):
        logger.debug(f"Unparseable range lower bound {lower!r} in {range_enumeration!r}")
        return None

    value = cast(lower)
    if not math.isfinite(value):
        logger.debug(f"Non-finite range lower bound {lower!r} in {range_enumeration!r}")
        return None
    return value


def default_value_for_type(
    resource_type: Optional[str],
    units: Optional[str] = None,
    range_enumeration: Optional[str] = None,
) -> Optional[DefaultValue]:
    """
    Synthesize the default value for a resource.

    Args:
        resource_type: LwM2M data type
        units: Declared units (string default)
        range_enumeration: Declared range (numeric lower bound)

    Returns:
        Type-appropriate default, or None for execute markers
    """
    normalized = _normalize(resource_type)

    if normalized == "boolean":
        return False
    if normalized == "integer":
        lower = parse_lower_bound(range_enumeration, int)
        return lower if lower is not None else 0
    if normalized == "float":
        lower = parse_lower_bound(range_enumeration, float)
        return float(lower) if lower is not None else 0.0
    if normalized == "string":
        return units or ""
    if normalized == "time":
        return 0
    if normalized == "objlnk":
        return OBJECT_LINK_DEFAULT

    return None


def synthesize(
    resource_type: Optional[str],
    units: Optional[str] = None,
    range_enumeration: Optional[str] = None,
    operations: Optional[str] = None,
    description: Optional[str] = None,
) -> ResourceValueSpec:
    """
    Build the value spec for a resource.

    Args:
        resource_type: LwM2M data type, empty for execute-only resources
        units: Declared units
        range_enumeration: Declared range
        operations: Access operations; defaults to 'R'
        description: Carried through unchanged

    Returns:
        ResourceValueSpec
    """
    default_value = default_value_for_type(resource_type, units, range_enumeration)

    if default_value is None:
        return ResourceValueSpec(
            kind=ValueKind.FUNCTION,
            operations=operations or "R",
            description=description,
        )

    return ResourceValueSpec(
        kind=kind_for_type(resource_type),
        operations=operations or "R",
        default_value=default_value,
        description=description,
    )
