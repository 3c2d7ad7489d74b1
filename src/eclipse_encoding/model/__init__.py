"""
Model package: encoding registry, preference document, and file merger.
"""

from .document import EncodingPreferences
from .merger import PropertiesFileContentMerger, normalize_line_endings
from .registry import (
    PROJECT,
    EncodingConfigError,
    EncodingRegistry,
    ProjectEncodingArgs,
    ResourceEncodingArgs,
    resource_key,
)

__all__ = [
    "PROJECT",
    "EncodingConfigError",
    "EncodingPreferences",
    "EncodingRegistry",
    "ProjectEncodingArgs",
    "PropertiesFileContentMerger",
    "ResourceEncodingArgs",
    "normalize_line_endings",
    "resource_key",
]
