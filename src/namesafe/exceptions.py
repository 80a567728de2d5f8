# ============================================================================
# FILE: exceptions.py
# RELPATH: namesafe/src/namesafe/exceptions.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Exception hierarchy for NameSafe
# ============================================================================

"""
Exception classes for NameSafe.

The sanitizer itself never raises for string input. These exceptions cover
the layers around it: strict validation, download path handling,
configuration, and reading name lists.
"""


class NameSafeError(Exception):
    """Base exception for all NameSafe errors."""
    pass


# ============================================================================
# Validation-Related Exceptions
# ============================================================================

class ValidationError(NameSafeError):
    """Base exception for validation errors."""
    pass


class InvalidFilenameError(ValidationError):
    """
    Raised when strict validation finds disallowed code points in a name.

    Attributes:
        name: The rejected filename
        violations: List of Violation objects describing each problem
    """
    def __init__(self, name: str, violations: list = None):
        self.name = name
        self.violations = list(violations or [])

        msg = f"Invalid filename {name!r}"
        if self.violations:
            rules = sorted({v.rule for v in self.violations})
            msg += f": {len(self.violations)} violation(s) ({', '.join(rules)})"
        super().__init__(msg)


class PathSeparatorError(ValidationError):
    """
    Raised when a filename contains a path separator and the separator
    policy is 'reject'.

    Attributes:
        name: The rejected filename
        separator: The first separator found
    """
    def __init__(self, name: str, separator: str):
        self.name = name
        self.separator = separator
        super().__init__(f"Filename {name!r} contains path separator {separator!r}")


class PathTraversalError(ValidationError):
    """
    Raised when a download path would leave the downloads directory.

    Attributes:
        path: The unsafe path
        reason: Explanation of why the path is unsafe
    """
    def __init__(self, path: str, reason: str = "Path traversal detected"):
        self.path = path
        self.reason = reason
        super().__init__(f"Unsafe path {path!r}: {reason}")


# ============================================================================
# Configuration-Related Exceptions
# ============================================================================

class ConfigError(NameSafeError):
    """Base exception for configuration-related errors."""
    pass


class ConfigLoadError(ConfigError):
    """
    Raised when configuration file cannot be loaded.

    Attributes:
        config_file: Path to the configuration file
        reason: Explanation of the failure
    """
    def __init__(self, config_file: str, reason: str):
        self.config_file = config_file
        self.reason = reason
        super().__init__(f"Failed to load config '{config_file}': {reason}")


class ConfigValidationError(ConfigError):
    """
    Raised when configuration data fails validation.

    Attributes:
        key: Configuration key that failed validation
        value: The invalid value
        reason: Explanation of why validation failed
    """
    def __init__(self, key: str, value, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# ============================================================================
# I/O-Related Exceptions
# ============================================================================

class NameSafeIOError(NameSafeError):
    """Base exception for I/O errors."""
    pass


class NameListReadError(NameSafeIOError):
    """
    Raised when a file of candidate names cannot be read.

    Attributes:
        path: Path to the name list
        reason: Explanation of the failure
    """
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read name list '{path}': {reason}")


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: None (base exception definitions)
# TESTS: tests/unit/test_exceptions.py
# ============================================================================
