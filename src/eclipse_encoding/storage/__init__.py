"""
Storage package: preference file I/O.
"""

from .prefs_file import DEFAULT_PREFS_PATH, PrefsFileError, read_prefs_file, write_prefs_file

__all__ = ["DEFAULT_PREFS_PATH", "PrefsFileError", "read_prefs_file", "write_prefs_file"]
