# ============================================================================
# FILE: __init__.py
# RELPATH: namesafe/src/namesafe/__init__.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# ============================================================================

"""NameSafe: NTFS-safe filenames for downloads APIs."""

__version__ = "1.0.0"

from namesafe.sanitizer import (  # noqa: E402
    FilenameSanitizer,
    find_violations,
    sanitize,
    sanitize_filename,
    sanitize_many,
)

__all__ = [
    "FilenameSanitizer",
    "find_violations",
    "sanitize",
    "sanitize_filename",
    "sanitize_many",
]
