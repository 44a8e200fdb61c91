"""
Definition file discovery.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEFINITION_FILE_PATTERN = re.compile(r"lwm2m-object-(\d+)\.xml", re.ASCII)


def object_id_from_filename(path: Union[str, Path]) -> Optional[str]:
    """
    Extract the object ID from a definition filename.

    Args:
        path: File path or name

    Returns:
        ID segment of lwm2m-object-<id>.xml, or None if the name does not match
    """
    match = DEFINITION_FILE_PATTERN.fullmatch(Path(path).name)
    return match.group(1) if match else None


def _sort_key(path: Path) -> Tuple[int, str]:
    return int(object_id_from_filename(path) or 0), path.name


def find_definition_files(directory: Union[str, Path] = ".") -> List[Path]:
    """
    List definition files directly inside a directory.

    Files are returned in numeric object ID order so that aggregation is
    reproducible across platforms.

    Args:
        directory: Directory to scan (not recursive)

    Returns:
        Sorted list of matching file paths, empty if the directory is unusable
    """
    directory = Path(directory)

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        logger.warning(f"Cannot read definitions directory {directory}: {e}")
        return []

    files = [
        entry
        for entry in entries
        if DEFINITION_FILE_PATTERN.fullmatch(entry.name) and entry.is_file()
    ]
    files.sort(key=_sort_key)

    logger.debug(f"Found {len(files)} definition files in {directory}")
    return files


def list_available_object_ids(directory: Union[str, Path] = ".") -> List[str]:
    """
    List object IDs that have a definition file in a directory.

    Args:
        directory: Directory to scan

    Returns:
        Object IDs taken from filenames, in numeric order
    """
    return [
        object_id
        for object_id in (object_id_from_filename(path) for path in find_definition_files(directory))
        if object_id is not None
    ]


def definition_path(directory: Union[str, Path], object_id: str) -> Path:
    """Path of the definition file for an object ID."""
    return Path(directory) / f"lwm2m-object-{object_id}.xml"
