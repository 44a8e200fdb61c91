"""
Configuration management for the object definition compiler.

Uses Pydantic Settings for environment variable validation and type safety.
Settings can also be read from a YAML file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

INVENTORY_FILENAME = "lwm2m-object-inventory.json"
CATALOG_FILENAME = "README.md"
PUBLIC_DIRNAME = "public"


class CompilerConfig(BaseSettings):
    """Compiler configuration."""

    definitions_dir: Path = Field(
        default=Path("."),
        description="Directory holding lwm2m-object-<id>.xml files",
    )
    inventory_path: Optional[Path] = Field(
        default=None,
        description="Primary inventory file (default: <definitions_dir>/lwm2m-object-inventory.json)",
    )
    mirror_path: Optional[Path] = Field(
        default=None,
        description="Public inventory mirror (default: <definitions_dir>/../public/lwm2m-object-inventory.json)",
    )
    catalog_path: Optional[Path] = Field(
        default=None,
        description="Catalog report (default: <definitions_dir>/README.md)",
    )
    write_catalog: bool = Field(
        default=True,
        description="Write the catalog report after the inventory",
    )
    include_execute_resources: bool = Field(
        default=False,
        description="Keep resources without a data type as FUNCTION markers",
    )
    client_objects_path: Optional[Path] = Field(
        default=None,
        description="Also export the client object mapping to this file",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    api_host: str = Field(default="0.0.0.0", description="Read API bind host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="Read API port")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    class Config:
        env_prefix = "LWM2M_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def resolved_inventory_path(self) -> Path:
        return self.inventory_path or self.definitions_dir / INVENTORY_FILENAME

    @property
    def resolved_mirror_path(self) -> Path:
        if self.mirror_path:
            return self.mirror_path
        return self.definitions_dir / ".." / PUBLIC_DIRNAME / self.resolved_inventory_path.name

    @property
    def resolved_catalog_path(self) -> Optional[Path]:
        if not self.write_catalog:
            return None
        return self.catalog_path or self.definitions_dir / CATALOG_FILENAME


def load_config(
    path: Optional[Union[str, Path]] = None, **overrides: Any
) -> CompilerConfig:
    """
    Build the compiler configuration.

    Priority order (highest first):
    1. Explicit overrides (None values are ignored)
    2. Values from the YAML file
    3. LWM2M_* environment variables / .env
    4. Defaults

    Args:
        path: Optional YAML file with a top-level mapping of settings
        **overrides: Explicit settings, e.g. from CLI arguments

    Returns:
        CompilerConfig

    Example YAML:
        definitions_dir: ./config
        inventory_path: ./config/lwm2m-object-inventory.json
        include_execute_resources: false
    """
    values: Dict[str, Any] = {}

    if path:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        values.update(data)
        logger.debug(f"Loaded configuration from {path}")

    values.update({k: v for k, v in overrides.items() if v is not None})
    return CompilerConfig(**values)
