"""
Risk assessment models.
"""

from enum import Enum
from typing import Literal

from pydantic import Field

from legalease.models.base import FrozenCamelModel


class RiskCategory(str, Enum):
    """The four fixed dimensions a document is scored along."""

    FINANCIAL = "financial"
    LEGAL = "legal"
    OPERATIONAL = "operational"
    PRIVACY = "privacy"


class RiskLevel(str, Enum):
    """Ordered risk levels.

    Compare with ``rank``; the inherited ``str`` ordering is alphabetical.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]


_LEVEL_RANKS = {RiskLevel.LOW: 1, RiskLevel.MEDIUM: 2, RiskLevel.HIGH: 3}


class Finding(FrozenCamelModel):
    """A single taxonomy signal that fired against the document."""

    term: str
    severity: RiskLevel
    description: str
    matched_text: list[str] | None = Field(
        default=None, description="Literal matches, for signals that capture them"
    )


class CategoryAssessment(FrozenCamelModel):
    """Score and findings for one risk category."""

    level: RiskLevel
    score: int = Field(..., ge=0)
    findings: list[Finding] = Field(default_factory=list)


class RedFlag(FrozenCamelModel):
    """High-severity pattern match, tracked apart from category scores."""

    severity: Literal["high"] = "high"
    description: str
    recommendation: str


class RiskRecommendation(FrozenCamelModel):
    """Action item derived from the document's vocabulary."""

    priority: Literal["high", "medium"]
    category: str
    text: str
    reason: str


class RiskAssessment(FrozenCamelModel):
    """Complete rule-based risk assessment for one document."""

    overall: RiskLevel
    categories: dict[RiskCategory, CategoryAssessment]
    red_flags: list[RedFlag] = Field(default_factory=list)
    recommendations: list[RiskRecommendation] = Field(default_factory=list)

    @property
    def total_score(self) -> int:
        return sum(c.score for c in self.categories.values())

    def category(self, category: RiskCategory | str) -> CategoryAssessment:
        return self.categories[RiskCategory(category)]
