# ============================================================================
# FILE: validators.py
# RELPATH: namesafe/src/namesafe/validators.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Strict filename validation and download path handling
# ============================================================================

"""
Validators Module.

Provides the strict counterpart of the sanitizer (report or reject instead
of rewrite) and the caller-side handling of path separators that the
sanitizer deliberately leaves untouched.
"""
from typing import List, Optional

import regex

from namesafe.exceptions import (
    InvalidFilenameError,
    PathSeparatorError,
    PathTraversalError,
    ValidationError,
)
from namesafe.models import Violation
from namesafe.sanitizer import find_violations, sanitize_filename

SEPARATORS = ("/", "\\")
SEPARATOR_POLICIES = ("reject", "escape", "split")

_SPLIT_PATTERN = regex.compile(r"[/\\]")
_DRIVE_PATTERN = regex.compile(r"[A-Za-z]:")


def _traversal_reason(path: str) -> Optional[str]:
    if path.startswith(SEPARATORS) or _DRIVE_PATTERN.match(path):
        return "Absolute paths not allowed"
    for component in _SPLIT_PATTERN.split(path):
        if component in (".", ".."):
            return f"Relative component '{component}' not allowed"
    return None


class FilenameValidator:
    """
    Validates single filenames without modifying them.

    Uses the same rules and scan as the sanitizer, so a name is valid
    exactly when sanitizing it would leave it unchanged.
    """

    def find_violations(self, name: str) -> List[Violation]:
        """
        Report every disallowed run in a name.

        Args:
            name: Candidate filename

        Returns:
            Violations ordered by index (empty if the name is valid)
        """
        return find_violations(name)

    def is_valid(self, name: str) -> bool:
        return not self.find_violations(name)

    def validate(self, name: str) -> str:
        """
        Return the name unchanged or raise.

        Raises:
            InvalidFilenameError: If any rule matches
        """
        violations = self.find_violations(name)
        if violations:
            raise InvalidFilenameError(name, violations)
        return name


class PathValidator:
    """
    Handles path separators in names passed to a downloads API.

    The API treats '/' and '\\' as sub-directory separators, so a caller
    must decide what they mean before sanitizing:

      - 'reject': any separator is an error
      - 'escape': separators become '_' like any other disallowed character
      - 'split':  separators delimit sub-directories; each component is
                  sanitized on its own and the result is joined with '/'
    """

    def __init__(self, separator_policy: str = "split"):
        """
        Initialize validator.

        Args:
            separator_policy: One of 'reject', 'escape', 'split'

        Raises:
            ValueError: If the policy is unknown
        """
        if separator_policy not in SEPARATOR_POLICIES:
            raise ValueError(
                f"Unknown separator policy: {separator_policy!r}. "
                f"Must be one of {', '.join(SEPARATOR_POLICIES)}"
            )
        self.separator_policy = separator_policy

    @staticmethod
    def contains_separator(name: str) -> bool:
        return any(sep in name for sep in SEPARATORS)

    @staticmethod
    def contains_traversal_patterns(path: str) -> bool:
        """
        Check if a path escapes the download directory.

        Returns:
            True for absolute paths (leading separator or drive prefix)
            and for '.' or '..' components
        """
        return _traversal_reason(path) is not None

    def check_separators(self, name: str) -> str:
        """
        Reject names containing a path separator.

        Raises:
            PathSeparatorError: On the first separator found
        """
        match = _SPLIT_PATTERN.search(name)
        if match:
            raise PathSeparatorError(name, match.group())
        return name

    def split_components(self, path: str) -> List[str]:
        """
        Split a relative download path into its components.

        Args:
            path: Path using '/' or '\\' as separators

        Returns:
            List of raw (unsanitized) components

        Raises:
            PathTraversalError: If the path is absolute, has empty
                components, or contains '.' or '..' components

        A separator-free name whose second character is ':' ("a:b.txt")
        counts as drive-relative and is rejected as absolute.
        """
        reason = _traversal_reason(path)
        if reason is not None:
            raise PathTraversalError(path, reason)

        components = _SPLIT_PATTERN.split(path)
        if "" in components:
            raise PathTraversalError(path, "Empty path component")
        return components

    def sanitize_path(self, path: str) -> str:
        """
        Sanitize a download path according to the separator policy.

        Args:
            path: Candidate filename, possibly containing separators

        Returns:
            Sanitized path; same length as the input

        Raises:
            PathSeparatorError: Policy 'reject' and a separator is present
            PathTraversalError: Policy 'split' and the path is unsafe
        """
        if path == "":
            return path

        if self.separator_policy == "reject":
            return sanitize_filename(self.check_separators(path))

        if self.separator_policy == "escape":
            return sanitize_filename(_SPLIT_PATTERN.sub("_", path))

        return "/".join(sanitize_filename(c) for c in self.split_components(path))

    def is_safe_path(self, path: str) -> bool:
        """
        Check if a path can be sanitized under the current policy.

        Returns:
            True if sanitize_path would not raise
        """
        try:
            self.sanitize_path(path)
            return True
        except ValidationError:
            return False


# ============================================================================
# Convenience Functions
# ============================================================================

def validate_filename(name: str) -> str:
    """
    Convenience function for strict filename validation.

    Raises:
        InvalidFilenameError: If the name has any violation
    """
    return FilenameValidator().validate(name)


def sanitize_path(path: str, separator_policy: str = "split") -> str:
    """
    Convenience function for download path sanitizing.

    Args:
        path: Candidate path
        separator_policy: One of 'reject', 'escape', 'split'

    Returns:
        Sanitized path
    """
    return PathValidator(separator_policy).sanitize_path(path)


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: exceptions.py, models.py, sanitizer.py, regex
# TESTS: tests/unit/test_validators.py
# ============================================================================
