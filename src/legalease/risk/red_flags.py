"""Red-flag detection.

Red flags are counted toward the overall verdict separately from category
scores, so a document can be flagged while every category scores low.
"""

import re

from legalease.models.risk import RedFlag
from legalease.risk.rules import RED_FLAG_PATTERNS, RED_FLAG_RECOMMENDATION, normalize_whitespace


def detect_red_flags(text: str) -> list[RedFlag]:
    """Return one RedFlag per matching pattern, in table order."""
    text = normalize_whitespace(text)
    return [
        RedFlag(description=flag.description, recommendation=RED_FLAG_RECOMMENDATION)
        for flag in RED_FLAG_PATTERNS
        if re.search(flag.pattern, text, re.IGNORECASE)
    ]
