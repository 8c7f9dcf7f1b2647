"""Rule-based category risk assessment.

Scans the whole document text against the category signals in
``legalease.risk.rules`` and classifies the accumulated score.
"""

from legalease.models.risk import CategoryAssessment, Finding, RiskCategory, RiskLevel
from legalease.risk.rules import (
    CATEGORY_LEVEL_THRESHOLDS,
    RiskSignal,
    normalize_whitespace,
    signals_for,
)


def level_for_score(score: int) -> RiskLevel:
    """Convert a category score to a risk level."""
    for threshold, level in CATEGORY_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.LOW


def _finding_for(signal: RiskSignal, matches: list[str]) -> Finding:
    if signal.capture_matches:
        return Finding(
            term=signal.term,
            severity=signal.severity,
            description=f"{signal.description}: {', '.join(matches)}",
            matched_text=matches,
        )
    return Finding(term=signal.term, severity=signal.severity, description=signal.description)


class CategoryRiskAssessor:
    """Scores one risk category at a time.

    Stateless: the same text and category always produce the same assessment.
    """

    def assess(self, text: str, category: RiskCategory | str) -> CategoryAssessment:
        """Assess a single category.

        Args:
            text: Document text; line breaks are treated as spaces
            category: Category to score

        Returns:
            CategoryAssessment; no matches gives score 0, level low
        """
        text = normalize_whitespace(text)
        findings = []
        score = 0

        for signal in signals_for(category):
            matches = signal.find(text)
            if not matches:
                continue
            findings.append(_finding_for(signal, matches))
            score += signal.weight

        return CategoryAssessment(
            level=level_for_score(score),
            score=score,
            findings=findings,
        )

    def assess_all(self, text: str) -> dict[RiskCategory, CategoryAssessment]:
        """Assess every category independently."""
        return {category: self.assess(text, category) for category in RiskCategory}
