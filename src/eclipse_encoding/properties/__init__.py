"""
Properties package: the text codec used for Eclipse preference files.
"""

from .codec import (
    PropertiesFormatError,
    format_properties,
    parse_properties,
    properties_to_bytes,
    read_properties_bytes,
)

__all__ = [
    "PropertiesFormatError",
    "format_properties",
    "parse_properties",
    "properties_to_bytes",
    "read_properties_bytes",
]
