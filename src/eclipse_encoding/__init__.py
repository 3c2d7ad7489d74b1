"""
Generate Eclipse resource encoding preferences (.settings/org.eclipse.core.resources.prefs).
"""

from .generator import ResourceEncodingGenerator, generate_for_project
from .model import EncodingPreferences, EncodingRegistry, PropertiesFileContentMerger

__all__ = [
    "EncodingPreferences",
    "EncodingRegistry",
    "PropertiesFileContentMerger",
    "ResourceEncodingGenerator",
    "generate_for_project",
]
