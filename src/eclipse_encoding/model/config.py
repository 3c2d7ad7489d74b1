"""
Build configuration for resource encodings, loaded from YAML.

Source sets play the role of the build's compile settings: every directory of a
source set gets that source set's encoding in the default layer. The project
encoding and per-resource entries go to the override layer.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .registry import EncodingConfigError, EncodingRegistry, resource_key

logger = logging.getLogger(__name__)


class SourceSetSpec(BaseModel):
    """Schema for one source set in the YAML config."""

    name: Optional[str] = None
    encoding: str = Field(..., min_length=1)
    dirs: List[str] = Field(..., min_length=1)


class EncodingConfig(BaseModel):
    """Schema for the whole YAML config."""

    project_encoding: Optional[str] = None
    source_sets: List[SourceSetSpec] = Field(default_factory=list)
    resources: Dict[str, Optional[str]] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}


def compute_default_encodings(source_sets: Iterable[SourceSetSpec]) -> Dict[str, str]:
    """
    Map every source directory to its source set's encoding.

    Keys are preference keys in declaration order. A directory listed by more
    than one source set takes the encoding of the last one.
    """
    defaults: Dict[str, str] = {}
    for source_set in source_sets:
        for directory in source_set.dirs:
            defaults[resource_key(directory)] = source_set.encoding
    return defaults


def parse_encoding_config(raw: Any, source: str = "<config>") -> EncodingConfig:
    """Validate an already-loaded YAML document as EncodingConfig."""
    if raw is None:
        return EncodingConfig()
    if not isinstance(raw, dict):
        logger.error("Config %s root must be a dict, got %s", source, type(raw))
        raise EncodingConfigError(
            f"Config {source!r} root must be a mapping, got {type(raw).__name__}."
        )
    try:
        return EncodingConfig.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid encoding config %s: %s", source, e)
        raise EncodingConfigError(f"Invalid encoding config {source!r}: {e}") from e


def load_encoding_config(path: Path) -> EncodingConfig:
    """Load encoding config from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated EncodingConfig. An empty file yields an empty config.

    Raises:
        EncodingConfigError: If the file is missing, not valid YAML, or does not
            match the schema.
    """
    if not path.exists():
        logger.error("Config file not found: %s", path)
        raise EncodingConfigError(f"Config not found at {path}.")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read config %s: %s", path, e)
        raise EncodingConfigError(f"Could not read config {str(path)!r}: {e}.") from e

    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error("Invalid YAML in config %s: %s", path, e)
        raise EncodingConfigError(f"Invalid YAML in config {str(path)!r}: {e}.") from e

    return parse_encoding_config(raw, source=str(path))


def build_registry(
    config: EncodingConfig, registry: Optional[EncodingRegistry] = None
) -> EncodingRegistry:
    """
    Populate a registry from config: defaults first, then overrides.

    Args:
        config: Validated config.
        registry: Registry to populate; a new one is created when omitted.
    """
    if registry is None:
        registry = EncodingRegistry()
    registry.set_default_encodings(compute_default_encodings(config.source_sets))
    if config.project_encoding is not None:
        registry.record_project_encoding(config.project_encoding)
    for path, encoding in config.resources.items():
        registry.record_resource_encoding(path, encoding)
    return registry
