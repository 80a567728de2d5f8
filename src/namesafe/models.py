# ============================================================================
# SOURCEFILE: models.py
# RELPATH: namesafe/src/namesafe/models.py
# PROJECT: NameSafe Download Filename Sanitizer
# VERSION: 1.0.0
# LIFECYCLE: Proposed
# DESCRIPTION: Data models for sanitizer rules, violations and results
# ============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class RuleKind(Enum):
    """How a rule decides whether a code point is disallowed."""
    RESERVED_NAME = "reserved_name"
    CATEGORY = "category"
    BOUNDARY = "boundary"


@dataclass(frozen=True)
class SanitizeRule:
    """
    A single pattern-to-replacement rule.

    Attributes:
        name: Short identifier used in violation reports
        kind: RESERVED_NAME rules match an anchored prefix, CATEGORY rules
            match one code point anywhere, BOUNDARY rules match one code
            point at the first or last position only
        pattern: Compiled pattern (from the ``regex`` module)
        description: Human-readable summary
    """
    name: str
    kind: RuleKind
    pattern: Any
    description: str = ""

    def matches(self, text: str) -> bool:
        """Return True if the whole of ``text`` matches this rule."""
        return self.pattern.fullmatch(text) is not None


@dataclass(frozen=True)
class Violation:
    """
    One disallowed run inside a candidate filename.

    Attributes:
        index: Position of the first offending code point
        length: Number of code points covered (1 except for reserved names)
        text: The offending code point(s)
        rule: Name of the rule that matched
        kind: Kind of the rule that matched
    """
    index: int
    length: int
    text: str
    rule: str
    kind: RuleKind

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Invalid index: {self.index}. Must be non-negative")
        if self.length != len(self.text) or self.length < 1:
            raise ValueError(
                f"Invalid length: {self.length} for text {self.text!r}"
            )

    @property
    def codepoint(self) -> str:
        """``U+XXXX`` notation for the offending code point(s)."""
        return " ".join(f"U+{ord(c):04X}" for c in self.text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "length": self.length,
            "codepoint": self.codepoint,
            "rule": self.rule,
            "kind": self.kind.value,
        }


@dataclass
class SanitizeResult:
    """
    Outcome of sanitizing one candidate filename.

    Attributes:
        original: Name as supplied by the caller
        sanitized: Name with every violation replaced by underscores
        violations: Violations found in ``original``
    """
    original: str
    sanitized: str
    violations: List[Violation] = field(default_factory=list)

    def __post_init__(self):
        if len(self.original) != len(self.sanitized):
            raise ValueError("sanitized name must have the same length as the original")

    @property
    def changed(self) -> bool:
        return self.original != self.sanitized

    @property
    def is_valid(self) -> bool:
        """True if the original name needed no substitution."""
        return not self.violations

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with original, sanitized, changed and violations
        """
        return {
            "original": self.original,
            "sanitized": self.sanitized,
            "changed": self.changed,
            "violations": [v.to_dict() for v in self.violations],
        }


# ============================================================================
# LIFECYCLE STATUS: Proposed
# DEPENDENCIES: None
# TESTS: tests/unit/test_models.py
# ============================================================================
