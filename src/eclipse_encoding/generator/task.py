"""
Generation step for the Eclipse resource encoding preference file.

The generator depends only on an EncodingRegistry. One call to generate() reads
the input file once, merges, and writes the output file once. The output is
written only after both merge hooks have returned.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..model.document import EncodingPreferences
from ..model.registry import EncodingRegistry
from ..storage.prefs_file import DEFAULT_PREFS_PATH, read_prefs_file, write_prefs_file

logger = logging.getLogger(__name__)


class ResourceEncodingGenerator:
    """Generates .settings/org.eclipse.core.resources.prefs from a registry."""

    def __init__(
        self,
        registry: EncodingRegistry,
        output_file: Union[str, Path],
        input_file: Optional[Union[str, Path]] = None,
    ):
        """
        Args:
            registry: Encodings to merge and the file hooks/transformer.
            output_file: Destination preference file.
            input_file: Existing file to merge from (defaults to output_file).
        """
        self.registry = registry
        self.output_file = Path(output_file)
        self.input_file = Path(input_file) if input_file is not None else self.output_file

    def create(self) -> EncodingPreferences:
        """Create a fresh document for one generation cycle."""
        return EncodingPreferences()

    async def load(self) -> EncodingPreferences:
        """Create a document and load the input file (or the packaged default)."""
        document = self.create()
        persisted = await read_prefs_file(self.input_file)
        if persisted is None:
            logger.debug(f"{self.input_file} not found, using default preferences")
            document.load_defaults()
        else:
            document.load(persisted)
        return document

    async def render(self) -> tuple[EncodingPreferences, str]:
        """Load, merge, serialize, and transform without writing.

        Returns:
            The merged document and the text that generate() would write.
        """
        document = await self.load()
        self.registry.merge_encodings(document)
        text = self.registry.file.transform(document.to_text())
        return document, text

    async def generate(self) -> EncodingPreferences:
        """Run one generate-and-write cycle.

        Returns:
            The merged document.

        Raises:
            PrefsFileError: If the input cannot be read or the output cannot be written.
            Exception: Anything raised by a merge hook or the transformer; nothing
                is written in that case.
        """
        document, text = await self.render()
        await write_prefs_file(self.output_file, text)
        return document


async def generate_for_project(
    project_dir: Union[str, Path], registry: EncodingRegistry
) -> EncodingPreferences:
    """Generate the preference file at its standard location under project_dir."""
    output_file = Path(project_dir) / DEFAULT_PREFS_PATH
    return await ResourceEncodingGenerator(registry, output_file).generate()
