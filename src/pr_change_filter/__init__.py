"""
PR Change Filter

Discovery trait that keeps GitHub pull requests whose changed files match
an inclusion pattern and not an exclusion pattern
"""

__version__ = "1.0.0"

from .filtering import (
    FilterConfiguration,
    FilterDecision,
    PathBasedPullRequestFilterTrait,
    RegexSyntaxError,
)

__all__ = [
    "FilterConfiguration",
    "FilterDecision",
    "PathBasedPullRequestFilterTrait",
    "RegexSyntaxError",
]
