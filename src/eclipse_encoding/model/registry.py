"""
Registry of the desired resource encodings for one project.

Entries live in two layers: default encodings computed from the build's source
settings, and override encodings recorded explicitly by the user. The effective
mapping overlays the overrides on the defaults and is what gets merged into the
preference file.

Preference keys are derived from resource paths with resource_key(); the key
strings must stay stable so hand-edited files round-trip.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .document import EncodingPreferences
from .merger import PropertiesFileContentMerger

logger = logging.getLogger(__name__)

PROJECT = "<project>"
PROJECT_KEY = f"encoding/{PROJECT}"
RESOURCE_KEY_PREFIX = "encoding//"

EncodingMap = Dict[str, Optional[str]]


class EncodingConfigError(ValueError):
    """Raised when encoding configuration is invalid or incomplete."""


class ResourceEncodingArgs(BaseModel):
    """Named arguments for recording a resource encoding.

    resource defaults to the whole project. encoding must be present; None
    records a removal of the key.
    """

    resource: Optional[str] = PROJECT
    encoding: Optional[str] = Field(...)

    model_config = {"extra": "forbid"}


class ProjectEncodingArgs(BaseModel):
    """Named arguments for recording the project-wide encoding."""

    encoding: Optional[str] = Field(...)

    model_config = {"extra": "forbid"}


def resource_key(path: Optional[str]) -> str:
    """
    Derive the preference key for a resource path.

    None or "<project>" map to "encoding/<project>". Any other path maps to
    "encoding//" followed by the path without leading or trailing slashes.

    Example:
        "/src/" -> "encoding//src"
    """
    if path is None or path == PROJECT:
        return PROJECT_KEY
    return RESOURCE_KEY_PREFIX + path.lstrip("/").rstrip("/")


def _validate_args(
    model: type[BaseModel], args: Union[BaseModel, Mapping[str, Any]]
) -> Any:
    if isinstance(args, model):
        return args
    if not isinstance(args, Mapping):
        raise EncodingConfigError(
            f"{model.__name__} must be a mapping, got {type(args).__name__}."
        )
    raw = dict(args)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid encoding arguments %s: %s", raw, e)
        raise EncodingConfigError(f"Invalid encoding arguments {raw!r}: {e}") from e


def _require_mapping(encodings: Optional[Mapping[str, Optional[str]]], layer: str) -> EncodingMap:
    if encodings is None:
        raise EncodingConfigError(f"{layer} encodings must be a mapping, got None.")
    return dict(encodings)


class EncodingRegistry:
    """Default and override encodings for a project, plus the file merger."""

    def __init__(self, file: Optional[PropertiesFileContentMerger] = None):
        """
        Args:
            file: Hooks and transformer for the preference file. A fresh
                PropertiesFileContentMerger is created when omitted.
        """
        self.file = file if file is not None else PropertiesFileContentMerger()
        self._default_encodings: EncodingMap = {}
        self._override_encodings: EncodingMap = {}

    # --- layers ---

    @property
    def default_encodings(self) -> EncodingMap:
        return self._default_encodings

    @default_encodings.setter
    def default_encodings(self, encodings: Mapping[str, Optional[str]]) -> None:
        self.set_default_encodings(encodings)

    def set_default_encodings(self, encodings: Mapping[str, Optional[str]]) -> None:
        """Replace the default (computed) layer."""
        self._default_encodings = _require_mapping(encodings, "Default")

    def get_default_encodings(self) -> EncodingMap:
        return self._default_encodings

    @property
    def override_encodings(self) -> EncodingMap:
        return self._override_encodings

    @override_encodings.setter
    def override_encodings(self, encodings: Mapping[str, Optional[str]]) -> None:
        self.set_override_encodings(encodings)

    def set_override_encodings(self, encodings: Mapping[str, Optional[str]]) -> None:
        """Replace the override (explicit) layer."""
        self._override_encodings = _require_mapping(encodings, "Override")

    def get_override_encodings(self) -> EncodingMap:
        return self._override_encodings

    # --- recording ---

    def record_resource_encoding(self, path: Optional[str], encoding: Optional[str]) -> None:
        """Record an override encoding for a resource path (None means the project)."""
        key = resource_key(path)
        self._override_encodings[key] = encoding
        logger.debug(f"Recorded {key} = {encoding}")

    def record_resource_encoding_from(
        self, args: Union[ResourceEncodingArgs, Mapping[str, Any]]
    ) -> None:
        """
        Record a resource encoding from named arguments.

        Args:
            args: ResourceEncodingArgs or a mapping with "encoding" and an
                optional "resource" key.

        Raises:
            EncodingConfigError: If "encoding" is missing or unknown keys are given.
                Nothing is recorded in that case.
        """
        parsed = _validate_args(ResourceEncodingArgs, args)
        self.record_resource_encoding(parsed.resource, parsed.encoding)

    def record_project_encoding(self, encoding: Optional[str]) -> None:
        """Record the project-wide encoding."""
        self.record_resource_encoding(None, encoding)

    def record_project_encoding_from(
        self, args: Union[ProjectEncodingArgs, Mapping[str, Any]]
    ) -> None:
        """Record the project-wide encoding from named arguments."""
        parsed = _validate_args(ProjectEncodingArgs, args)
        self.record_project_encoding(parsed.encoding)

    # --- reading ---

    def effective_mapping(self) -> EncodingMap:
        """Return defaults overlaid by overrides, as a new dict."""
        combined: EncodingMap = dict(self._default_encodings)
        combined.update(self._override_encodings)
        return combined

    def get_property(self, key: str) -> Optional[str]:
        """Return the effective encoding for a preference key, or None."""
        return self.effective_mapping().get(key)

    # --- merging ---

    def configure_file(
        self, action: Callable[[PropertiesFileContentMerger], None]
    ) -> None:
        """Run action against the file merger (to set hooks or a transformer)."""
        action(self.file)

    def merge_encodings(self, document: EncodingPreferences) -> None:
        """
        Merge the effective mapping into document.

        Runs the before_merged hook, applies the effective mapping, then runs
        the when_merged hook. Hook exceptions propagate to the caller.
        """
        self.file.run_before_merged(document)
        encodings = self.effective_mapping()
        document.configure(encodings)
        logger.debug(f"Merged {len(encodings)} encoding entries")
        self.file.run_when_merged(document)
