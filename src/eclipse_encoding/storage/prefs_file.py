"""
Reading and writing Eclipse preference files on disk.

Files are ISO-8859-1 properties text. A missing file is not an error: it means
there is no prior content. Every other failure is raised as PrefsFileError.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import aiofiles

from ..properties.codec import (
    PropertiesFormatError,
    properties_to_bytes,
    read_properties_bytes,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFS_PATH = Path(".settings") / "org.eclipse.core.resources.prefs"


class PrefsFileError(OSError):
    """Raised when a preference file cannot be read, parsed, or written."""


async def read_prefs_file(path: Union[str, Path]) -> Optional[Dict[str, str]]:
    """
    Read and parse a preference file.

    Args:
        path: Path to the .prefs file.

    Returns:
        Parsed key/value pairs, or None if the file does not exist.

    Raises:
        PrefsFileError: If the file exists but cannot be read or parsed.
    """
    path = Path(path)
    try:
        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
    except FileNotFoundError:
        logger.debug(f"No existing preference file at {path}")
        return None
    except OSError as e:
        logger.error("Could not read preference file %s: %s", path, e)
        raise PrefsFileError(f"Could not read preference file {path}: {e}") from e

    try:
        return read_properties_bytes(data)
    except PropertiesFormatError as e:
        logger.error("Malformed preference file %s: %s", path, e)
        raise PrefsFileError(f"Malformed preference file {path}: {e}") from e


async def write_prefs_file(path: Union[str, Path], text: str) -> None:
    """
    Write properties text to a preference file, creating parent directories.

    Args:
        path: Destination .prefs file.
        text: Serialized (and transformed) properties text.

    Raises:
        PrefsFileError: If the text cannot be encoded or the file cannot be written.
    """
    path = Path(path)
    try:
        data = properties_to_bytes(text)
    except UnicodeEncodeError as e:
        logger.error("Preference text for %s is not ISO-8859-1: %s", path, e)
        raise PrefsFileError(f"Preference text for {path} is not ISO-8859-1: {e}") from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)
    except OSError as e:
        logger.error("Could not write preference file %s: %s", path, e)
        raise PrefsFileError(f"Could not write preference file {path}: {e}") from e
    logger.info(f"Wrote preference file {path}")
