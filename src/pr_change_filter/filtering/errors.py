"""
Filter Errors
"""

import re
from typing import Optional


class RegexSyntaxError(ValueError):
    """A filter pattern does not compile."""
    def __init__(self, field: str, pattern: str, error: re.error):
        super().__init__(f"Invalid Regex : {error}")
        self.field = field
        self.pattern = pattern
        self.diagnostic = str(error)
        self.position: Optional[int] = error.pos
