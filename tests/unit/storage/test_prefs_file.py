"""Unit tests for storage.prefs_file."""

from pathlib import Path

import pytest

from eclipse_encoding.storage.prefs_file import (
    PrefsFileError,
    read_prefs_file,
    write_prefs_file,
)


class TestReadPrefsFile:
    """Tests for read_prefs_file."""

    @pytest.mark.asyncio
    async def test_missing_file_returns_none(self, prefs_path: Path) -> None:
        """A missing file means no prior content, not an error."""
        assert await read_prefs_file(prefs_path) is None

    @pytest.mark.asyncio
    async def test_reads_iso_8859_1(self, prefs_path: Path) -> None:
        """Raw ISO-8859-1 bytes and \\u escapes both decode."""
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_bytes(b"eclipse.preferences.version=1\nnote=caf\xe9 \\u00e9\n")
        assert await read_prefs_file(prefs_path) == {
            "eclipse.preferences.version": "1",
            "note": "café é",
        }

    @pytest.mark.asyncio
    async def test_malformed_file_raises(self, prefs_path: Path) -> None:
        """Malformed escapes raise PrefsFileError."""
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_bytes(b"k=\\uZZZZ\n")
        with pytest.raises(PrefsFileError, match="Malformed"):
            await read_prefs_file(prefs_path)

    @pytest.mark.asyncio
    async def test_directory_raises(self, tmp_path: Path) -> None:
        """A path that cannot be read as a file raises PrefsFileError."""
        with pytest.raises(PrefsFileError):
            await read_prefs_file(tmp_path)


class TestWritePrefsFile:
    """Tests for write_prefs_file."""

    @pytest.mark.asyncio
    async def test_creates_parent_and_writes_bytes(self, prefs_path: Path) -> None:
        """The .settings directory is created and text written as ISO-8859-1."""
        await write_prefs_file(prefs_path, "k=\xe9\n")
        assert prefs_path.read_bytes() == b"k=\xe9\n"

    @pytest.mark.asyncio
    async def test_unencodable_text_raises(self, prefs_path: Path) -> None:
        """Text outside ISO-8859-1 raises PrefsFileError and writes nothing."""
        with pytest.raises(PrefsFileError, match="ISO-8859-1"):
            await write_prefs_file(prefs_path, "k=\u20ac\n")
        assert not prefs_path.exists()
