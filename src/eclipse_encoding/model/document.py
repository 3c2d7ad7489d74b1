"""
In-memory form of the Eclipse resource encoding preference file.

EncodingPreferences is created for one generation cycle: seeded with the schema
marker, loaded from the existing file (or the packaged default), configured with
the registry's effective mapping, then stored.
"""

import logging
from importlib import resources
from typing import Dict, Mapping, Optional

from ..properties.codec import format_properties, parse_properties

logger = logging.getLogger(__name__)

SCHEMA_KEY = "eclipse.preferences.version"
SCHEMA_VERSION = "1"
DEFAULT_RESOURCE_NAME = "defaultEncodingPrefs.properties"


class EncodingPreferences:
    """Persistable key/value document for org.eclipse.core.resources.prefs."""

    def __init__(self) -> None:
        self.entries: Dict[str, str] = {}
        self.initialize()

    def initialize(self) -> None:
        """Reset entries to the schema marker only."""
        self.entries = {SCHEMA_KEY: SCHEMA_VERSION}

    def load(self, persisted: Mapping[str, str]) -> None:
        """
        Merge previously persisted key/value pairs into the document.

        Keys not managed by the registry (hand edits, other tools) are kept and
        written back on store(). The schema marker is always reset to "1".

        Args:
            persisted: Key/value pairs read from the existing file.
        """
        for key, value in persisted.items():
            self.entries[key] = value
        self.entries[SCHEMA_KEY] = SCHEMA_VERSION
        logger.debug(f"Loaded {len(persisted)} persisted preference entries")

    def load_defaults(self) -> None:
        """Load the packaged default preference template."""
        template = resources.files("eclipse_encoding") / "defaults" / DEFAULT_RESOURCE_NAME
        self.load(parse_properties(template.read_text(encoding="iso-8859-1")))

    def configure(self, encodings: Mapping[str, Optional[str]]) -> None:
        """
        Apply an effective encoding mapping.

        A None value removes the key; any other value sets or replaces it.
        Applying the same mapping twice leaves entries unchanged.
        """
        for key, value in encodings.items():
            if value is None:
                self.entries.pop(key, None)
            else:
                self.entries[key] = value

    def get(self, key: str) -> Optional[str]:
        """Return the value stored for key, or None."""
        return self.entries.get(key)

    def store(self) -> Dict[str, str]:
        """Return the entries to persist, ordered by key."""
        return {key: self.entries[key] for key in sorted(self.entries)}

    def to_text(self) -> str:
        """Serialize stored entries as properties text."""
        return format_properties(self.store())

    @classmethod
    def from_text(cls, text: str) -> "EncodingPreferences":
        """Build a document from properties text (schema marker seeded first)."""
        document = cls()
        document.load(parse_properties(text))
        return document

    def __repr__(self) -> str:
        return f"EncodingPreferences({self.entries!r})"
