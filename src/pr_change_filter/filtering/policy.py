"""
Path Filter Policy

Decides whether a pull request head is excluded by matching the paths of
its changed files against an inclusion and an exclusion pattern.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TextIO, Tuple

from ..models.pull_request import ChangedFile
from .errors import RegexSyntaxError


logger = logging.getLogger(__name__)

DEFAULT_MATCH_ALL_REGEX = ".*"

# Plain "#<number>"; the PR link the CI console wraps around it is not reproduced
BUILD_LINE = "\n    Will Build PR #{number}. Found matching file : {filename}\n"
BUILD_LINE_PREVIOUS = "\n    Will Build PR #{number}. Found matching (previous) file : {filename}\n"


@dataclass
class FilterDecision:
    """Outcome of evaluating one pull request."""
    pr_number: int
    excluded: bool
    matched_path: Optional[str] = None
    matched_previous: bool = False
    log_lines: List[str] = field(default_factory=list)


def _compile(field_name: str, pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise RegexSyntaxError(field_name, pattern, e) from e


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class FilterConfiguration:
    """
    Compiled inclusion/exclusion policy for changed-file paths.

    Both patterns are compiled once, case-insensitively, when the
    configuration is built. Instances are read-only afterwards and can be
    shared between threads evaluating different pull requests.
    """

    __slots__ = ("_inclusion_pattern", "_exclusion_pattern", "_inclusion", "_exclusion")

    def __init__(self, inclusion_pattern: str = DEFAULT_MATCH_ALL_REGEX,
                 exclusion_pattern: Optional[str] = None):
        """
        Build a configuration.

        Args:
            inclusion_pattern: Regex a changed path must fully match
            exclusion_pattern: Regex that removes a path when it fully matches;
                None or blank excludes nothing

        Raises:
            RegexSyntaxError: If either pattern does not compile
        """
        if inclusion_pattern is None:
            inclusion_pattern = DEFAULT_MATCH_ALL_REGEX
        self._inclusion_pattern = inclusion_pattern
        self._exclusion_pattern = None if _is_blank(exclusion_pattern) else exclusion_pattern

        self._inclusion = _compile("inclusion_pattern", self._inclusion_pattern)
        self._exclusion = (
            _compile("exclusion_pattern", self._exclusion_pattern)
            if self._exclusion_pattern is not None else None
        )

    @classmethod
    def build(cls, inclusion_pattern: str = DEFAULT_MATCH_ALL_REGEX,
              exclusion_pattern: Optional[str] = None) -> "FilterConfiguration":
        return cls(inclusion_pattern, exclusion_pattern)

    @property
    def inclusion_pattern(self) -> str:
        return self._inclusion_pattern

    @property
    def exclusion_pattern(self) -> Optional[str]:
        return self._exclusion_pattern

    @property
    def has_exclusion(self) -> bool:
        return self._exclusion is not None

    def should_include(self, path: Optional[str]) -> bool:
        """True if the path satisfies the inclusion pattern."""
        if not path:
            return False
        if self._inclusion_pattern == DEFAULT_MATCH_ALL_REGEX:
            return True
        return self._inclusion.fullmatch(path) is not None

    def not_excluded(self, path: Optional[str]) -> bool:
        """True unless the path fully matches the exclusion pattern."""
        if not path or self._exclusion is None:
            return True
        if self._exclusion_pattern == DEFAULT_MATCH_ALL_REGEX:
            return False
        return self._exclusion.fullmatch(path) is None

    def matches(self, path: Optional[str]) -> bool:
        return self.should_include(path) and self.not_excluded(path)

    def match_file(self, changed_file: ChangedFile) -> Optional[Tuple[str, bool]]:
        """
        Match a changed file on its current path, then its previous path.

        Returns:
            Tuple of (matching path, matched on previous path) or None
        """
        if self.matches(changed_file.path):
            return changed_file.path, False
        if self.matches(changed_file.previous_path):
            return changed_file.previous_path, True
        return None

    def evaluate(self, pr_number: int, changed_files: Iterable[ChangedFile],
                 output: Optional[TextIO] = None) -> FilterDecision:
        """
        Decide whether a pull request is excluded.

        Files are examined in order and evaluation stops at the first file
        that matches. A pull request with no matching file, including one
        with no changed files at all, is excluded.

        Args:
            pr_number: Pull request number, used in the build line
            changed_files: Changed files of the pull request
            output: Optional sink that receives the build line

        Returns:
            FilterDecision for the pull request
        """
        examined = 0
        for changed_file in changed_files:
            examined += 1
            match = self.match_file(changed_file)
            if match is None:
                continue

            path, previous = match
            template = BUILD_LINE_PREVIOUS if previous else BUILD_LINE
            line = template.format(number=pr_number, filename=path)
            if output is not None:
                output.write(line)
            logger.debug(f"PR #{pr_number} matched on {'previous ' if previous else ''}path {path}")
            return FilterDecision(
                pr_number=pr_number,
                excluded=False,
                matched_path=path,
                matched_previous=previous,
                log_lines=[line],
            )

        logger.info(f"PR #{pr_number} excluded: none of {examined} changed files matched")
        return FilterDecision(pr_number=pr_number, excluded=True)

    def is_excluded(self, pr_number: int, changed_files: Iterable[ChangedFile],
                    output: Optional[TextIO] = None) -> bool:
        return self.evaluate(pr_number, changed_files, output).excluded

    def __eq__(self, other):
        if not isinstance(other, FilterConfiguration):
            return NotImplemented
        return (self._inclusion_pattern == other._inclusion_pattern
                and self._exclusion_pattern == other._exclusion_pattern)

    def __hash__(self):
        return hash((self._inclusion_pattern, self._exclusion_pattern))

    def __repr__(self):
        return (f"FilterConfiguration(inclusion_pattern={self._inclusion_pattern!r}, "
                f"exclusion_pattern={self._exclusion_pattern!r})")
