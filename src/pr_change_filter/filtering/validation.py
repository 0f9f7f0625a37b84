"""
Pattern Validation

Checks the inclusion and exclusion patterns the way a configuration form
would, reporting errors and advisory warnings per field.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .policy import DEFAULT_MATCH_ALL_REGEX


logger = logging.getLogger(__name__)

EMPTY_INCLUSION_MESSAGE = "Cannot have empty or blank regex."
MATCH_ALL_INCLUSION_MESSAGE = "You should remove this trait instead of matching all paths"
MATCH_ALL_EXCLUSION_MESSAGE = "This will exclude all pull requests"


class ValidationKind(Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationResult:
    """Result of checking a single pattern field."""
    field: str
    kind: ValidationKind
    message: str = ""

    @property
    def is_error(self) -> bool:
        return self.kind == ValidationKind.ERROR

    @property
    def is_warning(self) -> bool:
        return self.kind == ValidationKind.WARNING

    def to_dict(self) -> dict:
        return {'field': self.field, 'kind': self.kind.value, 'message': self.message}


def _syntax_error(value: str) -> Optional[str]:
    try:
        re.compile(value, re.IGNORECASE)
    except re.error as e:
        return f"Invalid Regex : {e}"
    return None


def check_inclusion_pattern(value: Optional[str]) -> ValidationResult:
    """
    Check an inclusion pattern.

    Blank patterns and syntax errors are errors; the match-all sentinel is a
    warning since the trait then has no effect.
    """
    field = "inclusion_pattern"
    if value is None or not value.strip():
        return ValidationResult(field, ValidationKind.ERROR, EMPTY_INCLUSION_MESSAGE)

    error = _syntax_error(value)
    if error:
        return ValidationResult(field, ValidationKind.ERROR, error)

    if value == DEFAULT_MATCH_ALL_REGEX:
        return ValidationResult(field, ValidationKind.WARNING, MATCH_ALL_INCLUSION_MESSAGE)

    return ValidationResult(field, ValidationKind.OK)


def check_exclusion_pattern(value: Optional[str]) -> ValidationResult:
    """
    Check an exclusion pattern.

    Blank is valid and excludes nothing; the match-all sentinel excludes
    every pull request and is reported as a warning.
    """
    field = "exclusion_pattern"
    if value is None or not value.strip():
        return ValidationResult(field, ValidationKind.OK)

    error = _syntax_error(value)
    if error:
        return ValidationResult(field, ValidationKind.ERROR, error)

    if value == DEFAULT_MATCH_ALL_REGEX:
        return ValidationResult(field, ValidationKind.WARNING, MATCH_ALL_EXCLUSION_MESSAGE)

    return ValidationResult(field, ValidationKind.OK)


def validate_patterns(inclusion_pattern: Optional[str],
                      exclusion_pattern: Optional[str]) -> List[ValidationResult]:
    results = [
        check_inclusion_pattern(inclusion_pattern),
        check_exclusion_pattern(exclusion_pattern),
    ]
    for result in results:
        if result.kind != ValidationKind.OK:
            logger.warning(f"{result.field}: {result.message}")
    return results
