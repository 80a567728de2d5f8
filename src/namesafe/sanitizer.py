# ============================================================================
# FILE: sanitizer.py
# RELPATH: namesafe/src/namesafe/sanitizer.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: NTFS-safe filename sanitizer for downloads APIs
# ============================================================================

"""
Filename Sanitizer Module.

Maps an arbitrary candidate filename to one that a downloads API writing to
an NTFS-family filesystem accepts. Every disallowed code point is replaced
by a single underscore, so the output always has the same length as the
input and sanitizing twice gives the same result as sanitizing once.

Three kinds of rule are applied, in this order:

1. RESERVED_NAME: a leading device name (``CON``, ``PRN``, ``AUX``,
   ``NUL``, ``COM1``-``COM9``, ``LPT1``-``LPT9``, any case) followed by the
   end of the name or a ``.``. Each matched character becomes ``_``.
2. CATEGORY: control characters, ``: ? " * < > | ~``, Unicode Format (Cf)
   and unassigned (Cn) code points, at any position.
3. BOUNDARY: NUL, line/paragraph/space separators (Zl, Zp, Zs) and ``.``
   at the first or last position only.

Rules 2 and 3 run as one scan so each position is classified once.
Path separators are left alone; see ``namesafe.validators.PathValidator``.

Unicode categories come from the ``regex`` module's property database.
"""

import logging
import unicodedata
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Iterable, List, Optional

import regex

from namesafe.models import RuleKind, SanitizeResult, SanitizeRule, Violation

log = logging.getLogger(__name__)

REPLACEMENT = "_"

RESERVED_DEVICE_NAMES = (
    ("CON", "PRN", "AUX", "NUL")
    + tuple(f"COM{i}" for i in range(1, 10))
    + tuple(f"LPT{i}" for i in range(1, 10))
)


RESERVED_NAME_RULE = SanitizeRule(
    name="reserved_device_name",
    kind=RuleKind.RESERVED_NAME,
    pattern=regex.compile(
        r"(?:CON|PRN|AUX|NUL|COM[1-9]|LPT[1-9])(?=\.|\Z)",
        regex.IGNORECASE,
    ),
    description="Windows device name at the start, followed by '.' or end",
)

CATEGORY_RULES = (
    SanitizeRule(
        name="control",
        kind=RuleKind.CATEGORY,
        # NUL (U+0000) is only a problem at the boundaries
        pattern=regex.compile(r"[\x01-\x1f\x7f-\x9f]"),
        description="C0/C1 control characters except NUL",
    ),
    SanitizeRule(
        name="ntfs_reserved",
        kind=RuleKind.CATEGORY,
        pattern=regex.compile(r'[:?"*<>|~]'),
        description="Characters NTFS or the downloads API reserve",
    ),
    SanitizeRule(
        name="format",
        kind=RuleKind.CATEGORY,
        pattern=regex.compile(r"\p{Cf}"),
        description="Unicode Format characters (joiners, selectors, marks)",
    ),
    SanitizeRule(
        name="unassigned",
        kind=RuleKind.CATEGORY,
        pattern=regex.compile(r"\p{Cn}"),
        description="Unassigned code points and noncharacters",
    ),
)

BOUNDARY_RULE = SanitizeRule(
    name="boundary",
    kind=RuleKind.BOUNDARY,
    pattern=regex.compile(r"[\x00\p{Zl}\p{Zp}\p{Zs}.]"),
    description="NUL, separators and '.' at the first or last position",
)

RULES = (RESERVED_NAME_RULE,) + CATEGORY_RULES + (BOUNDARY_RULE,)


def _require_str(name) -> None:
    if not isinstance(name, str):
        raise TypeError(f"filename must be str, not {type(name).__name__}")


def _classify(char: str, at_boundary: bool) -> Optional[SanitizeRule]:
    for rule in CATEGORY_RULES:
        if rule.matches(char):
            return rule
    if at_boundary and BOUNDARY_RULE.matches(char):
        return BOUNDARY_RULE
    return None


def find_violations(name: str) -> List[Violation]:
    """
    Scan a candidate filename and report every disallowed run.

    The reserved device-name match (if any) is reported first and its
    characters are not classified again. Every other position is checked
    once against the category rules and, at the first and last position,
    against the boundary rule.

    Args:
        name: Candidate filename

    Returns:
        Violations ordered by index

    Raises:
        TypeError: If name is not a str
    """
    _require_str(name)

    violations: List[Violation] = []
    start = 0

    match = RESERVED_NAME_RULE.pattern.match(name)
    if match:
        violations.append(Violation(
            index=0,
            length=match.end(),
            text=match.group(),
            rule=RESERVED_NAME_RULE.name,
            kind=RESERVED_NAME_RULE.kind,
        ))
        start = match.end()

    last = len(name) - 1
    for index in range(start, len(name)):
        char = name[index]
        rule = _classify(char, index == 0 or index == last)
        if rule is not None:
            violations.append(Violation(
                index=index,
                length=1,
                text=char,
                rule=rule.name,
                kind=rule.kind,
            ))

    return violations


def _apply(name: str, violations: Iterable[Violation]) -> str:
    chars = list(name)
    for v in violations:
        chars[v.index:v.index + v.length] = REPLACEMENT * v.length
    return "".join(chars)


def sanitize_filename(name: str) -> str:
    """
    Return ``name`` with every disallowed code point replaced by ``_``.

    The result has the same length as ``name`` and is a fixed point:
    ``sanitize_filename(sanitize_filename(s)) == sanitize_filename(s)``.
    The empty string is returned unchanged.

    Raises:
        TypeError: If name is not a str
    """
    return _apply(name, find_violations(name))


def sanitize(name: str) -> SanitizeResult:
    """
    Sanitize a name and keep the violations that were repaired.

    Args:
        name: Candidate filename

    Returns:
        SanitizeResult with original, sanitized and violations
    """
    violations = find_violations(name)
    result = SanitizeResult(
        original=name,
        sanitized=_apply(name, violations),
        violations=violations,
    )
    if result.changed:
        log.debug("sanitized %r -> %r (%d violations)", name, result.sanitized, len(violations))
    return result


def sanitize_many(names: Iterable[str]) -> List[SanitizeResult]:
    """Sanitize each name independently."""
    return [sanitize(n) for n in names]


def unicode_backend() -> Dict[str, str]:
    """
    Describe the Unicode property database used for category rules.

    Category membership (Cf, Cn, Zs, ...) changes between Unicode versions,
    so results are only reproducible for the same backend versions.

    Returns:
        Dictionary with the backend module, its version and the
        interpreter's own unicodedata version for comparison
    """
    try:
        regex_version = version("regex")
    except PackageNotFoundError:
        regex_version = getattr(regex, "__version__", "unknown")
    return {
        "backend": "regex",
        "regex_version": regex_version,
        "unicodedata_version": unicodedata.unidata_version,
    }


class FilenameSanitizer:
    """
    Facade over the module-level sanitizer with optional session logging.

    The replacement character is always ``_``; it is the only replacement
    that is itself allowed at every position, which keeps the output
    idempotent.
    """

    replacement = REPLACEMENT
    rules = RULES

    def __init__(self, logger=None):
        """
        Initialize sanitizer.

        Args:
            logger: Optional StructuredLogger; changed names are recorded
                as name_sanitized events
        """
        self.logger = logger

    def find_violations(self, name: str) -> List[Violation]:
        return find_violations(name)

    def sanitize_filename(self, name: str) -> str:
        return self.sanitize(name).sanitized

    def sanitize(self, name: str) -> SanitizeResult:
        result = sanitize(name)
        if self.logger is not None and result.changed:
            self.logger.log_name_sanitized(
                original=result.original,
                sanitized=result.sanitized,
                rules=sorted({v.rule for v in result.violations}),
            )
        return result

    def sanitize_many(self, names: Iterable[str]) -> List[SanitizeResult]:
        return [self.sanitize(n) for n in names]


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: models.py, regex
# TESTS: tests/unit/test_sanitizer.py
# ============================================================================
