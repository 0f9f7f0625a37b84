"""
Changed File Filtering

Path filter policy, pattern validation and the pull request head trait.
"""

from .errors import RegexSyntaxError
from .policy import FilterConfiguration, FilterDecision, DEFAULT_MATCH_ALL_REGEX
from .validation import (
    ValidationKind,
    ValidationResult,
    check_inclusion_pattern,
    check_exclusion_pattern,
    validate_patterns,
)
from .trait import PathBasedPullRequestFilterTrait

__all__ = [
    "RegexSyntaxError",
    "FilterConfiguration",
    "FilterDecision",
    "DEFAULT_MATCH_ALL_REGEX",
    "ValidationKind",
    "ValidationResult",
    "check_inclusion_pattern",
    "check_exclusion_pattern",
    "validate_patterns",
    "PathBasedPullRequestFilterTrait",
]
