"""
Tolerant parser for LwM2M object definition documents.

Fields are pulled out of the raw text with one regular expression per
well-known tag; no XML tree is built. Only the tag shapes used by the
published definition files are recognized.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from .models import ObjectDefinition, ResourceDefinition
from .scanner import definition_path
from .synthesizer import synthesize

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"<ObjectID>(\d+)</ObjectID>", re.ASCII)
MULTIPLE_INSTANCES_PATTERN = re.compile(
    r"<MultipleInstances>(Single|Multiple)</MultipleInstances>"
)
ITEM_PATTERN = re.compile(r'<Item ID="([^"]+)"[\s\S]*?</Item>')
ITEM_ID_PATTERN = re.compile(r'<Item ID="([^"]+)"')

# Tags whose value may legitimately be empty (e.g. <Type></Type> for execute resources)
EMPTY_ALLOWED_TAGS = {"Type", "Units", "RangeEnumeration"}

_tag_patterns: Dict[str, "re.Pattern[str]"] = {}
_block_patterns: Dict[str, "re.Pattern[str]"] = {}


def _tag_pattern(tag: str) -> "re.Pattern[str]":
    if tag not in _tag_patterns:
        body = "[^<]*" if tag in EMPTY_ALLOWED_TAGS else "[^<]+"
        _tag_patterns[tag] = re.compile(f"<{tag}>({body})</{tag}>")
    return _tag_patterns[tag]


def _block_pattern(tag: str) -> "re.Pattern[str]":
    if tag not in _block_patterns:
        _block_patterns[tag] = re.compile(
            rf"<{tag}>(?:<!\[CDATA\[)?(.*?)(?:\]\]>)?</{tag}>",
            re.DOTALL,
        )
    return _block_patterns[tag]


def extract_tag(text: str, tag: str) -> Optional[str]:
    """
    Extract the first plain-text value of a tag.

    Args:
        text: Raw document or item text
        tag: Tag name, e.g. 'Name'

    Returns:
        Captured value, or None if the tag is absent
    """
    match = _tag_pattern(tag).search(text)
    return match.group(1) if match else None


def extract_text_block(text: str, tag: str) -> Optional[str]:
    """
    Extract a free-text tag value that may span lines and be CDATA-wrapped.

    Args:
        text: Raw document or item text
        tag: Tag name, e.g. 'Description1'

    Returns:
        Captured value without the CDATA wrapper, or None if absent
    """
    match = _block_pattern(tag).search(text)
    return match.group(1) if match else None


def extract_object_id(text: str) -> Optional[str]:
    match = OBJECT_ID_PATTERN.search(text)
    return match.group(1) if match else None


def extract_is_singleton(text: str) -> bool:
    """
    Read the MultipleInstances flag.

    Only an explicit 'Single' marks the object as a singleton; a missing or
    unrecognized tag yields False.
    """
    match = MULTIPLE_INSTANCES_PATTERN.search(text)
    return match.group(1) == "Single" if match else False


def extract_item_blocks(text: str) -> Iterator[str]:
    """
    Yield the raw text of each <Item ID="..."> ... </Item> block.

    The scan is non-greedy so tags inside one item never leak into the next.
    """
    for match in ITEM_PATTERN.finditer(text):
        yield match.group(0)


def extract_item_id(item_text: str) -> Optional[str]:
    match = ITEM_ID_PATTERN.search(item_text)
    return match.group(1) if match else None


class DefinitionParser:
    """
    Parses definition documents into ObjectDefinition models.
    """

    def __init__(self, include_execute: bool = False):
        """
        Initialize parser.

        Args:
            include_execute: Keep resources without a data type as FUNCTION
                markers instead of dropping them
        """
        self.include_execute = include_execute

    def parse_file(self, path: Union[str, Path]) -> Optional[ObjectDefinition]:
        """
        Parse one definition file.

        Args:
            path: Path to lwm2m-object-<id>.xml

        Returns:
            ObjectDefinition or None if the file is unreadable or has no ObjectID
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read definition file {path}: {e}")
            return None

        return self.parse_text(text, source=path)

    def parse_text(
        self, text: str, source: Optional[Path] = None
    ) -> Optional[ObjectDefinition]:
        """
        Parse the raw text of one definition document.

        Args:
            text: Document text
            source: Originating file, used for log messages

        Returns:
            ObjectDefinition or None if no ObjectID is present
        """
        label = source or "<text>"

        object_id = extract_object_id(text)
        if object_id is None:
            logger.warning(f"No ObjectID found in {label}")
            return None

        name = extract_tag(text, "Name") or f"Object {object_id}"
        description = (extract_text_block(text, "Description1") or "").strip()

        resources: Dict[str, ResourceDefinition] = {}
        for item_text in extract_item_blocks(text):
            resource = self.parse_item(item_text)
            if resource is None:
                continue
            if resource.is_execute and not self.include_execute:
                logger.debug(
                    f"Object {object_id}: skipping execute resource {resource.id} ({resource.name})"
                )
                continue
            resources[resource.id] = resource

        return ObjectDefinition(
            object_id=object_id,
            name=name,
            description=description,
            is_singleton=extract_is_singleton(text),
            resources=resources,
            source_path=source,
        )

    def parse_item(self, item_text: str) -> Optional[ResourceDefinition]:
        """
        Parse one <Item> block.

        Every field is extracted independently; a missing field becomes an
        empty string or None and never aborts the item.

        Args:
            item_text: Raw text of the item

        Returns:
            ResourceDefinition, or None when the item lacks an ID or a Name
        """
        resource_id = extract_item_id(item_text)
        name = extract_tag(item_text, "Name")
        if resource_id is None or name is None:
            logger.debug(f"Dropping item without ID/Name: {item_text[:60]!r}")
            return None

        resource_type = extract_tag(item_text, "Type") or ""
        mandatory = extract_tag(item_text, "Mandatory")
        operations = extract_tag(item_text, "Operations") or ""
        units = extract_tag(item_text, "Units") or None
        range_enumeration = extract_tag(item_text, "RangeEnumeration") or None
        description = extract_text_block(item_text, "Description")

        value = synthesize(
            resource_type,
            units=units,
            range_enumeration=range_enumeration,
            operations=operations,
            description=description,
        )

        return ResourceDefinition(
            id=resource_id,
            name=name,
            type=resource_type,
            mandatory=bool(mandatory) and mandatory.strip().lower() == "mandatory",
            operations=operations,
            units=units,
            range_enumeration=range_enumeration,
            description=description,
            kind=value.kind,
            default_value=value.default_value,
        )


def get_object_info(
    directory: Union[str, Path], object_id: str, include_execute: bool = False
) -> Optional[ObjectDefinition]:
    """
    Parse the definition of a single object by ID.

    Args:
        directory: Definitions directory
        object_id: Object ID
        include_execute: Keep execute resources as FUNCTION markers

    Returns:
        ObjectDefinition, or None if there is no such file or it fails to parse
    """
    path = definition_path(directory, object_id)
    if not path.is_file():
        return None
    return DefinitionParser(include_execute=include_execute).parse_file(path)
