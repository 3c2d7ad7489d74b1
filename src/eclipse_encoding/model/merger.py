"""
Customization points for merging and writing the preference file.

The before_merged hook sees the document after the existing file was loaded and
before the registry's encodings are applied; when_merged sees it afterwards.
The transformer post-processes the serialized text before it is written.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .document import EncodingPreferences

logger = logging.getLogger(__name__)

MergeHook = Callable[["EncodingPreferences"], None]
Transformer = Callable[[str], str]


@dataclass
class PropertiesFileContentMerger:
    """Hooks and output transformer for one preference file."""

    before_merged: Optional[MergeHook] = None
    when_merged: Optional[MergeHook] = None
    transformer: Optional[Transformer] = None

    def before_merged_hook(self, hook: MergeHook) -> MergeHook:
        """Set the before-merge hook. Returns hook so it can be used as a decorator."""
        self.before_merged = hook
        return hook

    def when_merged_hook(self, hook: MergeHook) -> MergeHook:
        """Set the after-merge hook. Returns hook so it can be used as a decorator."""
        self.when_merged = hook
        return hook

    def run_before_merged(self, document: "EncodingPreferences") -> None:
        if self.before_merged is not None:
            logger.debug("Running before_merged hook")
            self.before_merged(document)

    def run_when_merged(self, document: "EncodingPreferences") -> None:
        if self.when_merged is not None:
            logger.debug("Running when_merged hook")
            self.when_merged(document)

    def transform(self, text: str) -> str:
        """Apply the transformer to serialized text, if one is set."""
        if self.transformer is None:
            return text
        return self.transformer(text)


def normalize_line_endings(style: str) -> Transformer:
    """
    Returns a transformer that rewrites every line ending.

    Args:
        style: "unix" for \\n or "windows" for \\r\\n.

    Raises:
        ValueError: If style is unknown.
    """
    separators = {"unix": "\n", "windows": "\r\n"}
    if style not in separators:
        raise ValueError(
            f"Unknown line ending style {style!r}. Known: {list(separators)}."
        )
    separator = separators[style]

    def _transformer(text: str) -> str:
        return separator.join(text.replace("\r\n", "\n").split("\n"))

    return _transformer
