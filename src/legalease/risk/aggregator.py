"""Overall risk aggregation.

Runs every category assessor and the red-flag detector, combines them into
one verdict and attaches vocabulary-triggered recommendations. This is the
terminal safety net of the risk subsystem: it never raises.
"""

import structlog

from legalease.models.analysis import DocumentAnalysis
from legalease.models.risk import (
    CategoryAssessment,
    RiskAssessment,
    RiskCategory,
    RiskLevel,
    RiskRecommendation,
)
from legalease.risk.assessor import CategoryRiskAssessor
from legalease.risk.red_flags import detect_red_flags
from legalease.risk.rules import (
    FALLBACK_RECOMMENDATION,
    OVERALL_RED_FLAG_THRESHOLDS,
    OVERALL_SCORE_THRESHOLDS,
    RECOMMENDATION_RULES,
    RecommendationRule,
    normalize_whitespace,
)

logger = structlog.get_logger(__name__)


def overall_level(total_score: int, red_flag_count: int) -> RiskLevel:
    """Most restrictive of the score verdict and the red-flag verdict."""
    for level in (RiskLevel.HIGH, RiskLevel.MEDIUM):
        if (
            total_score >= OVERALL_SCORE_THRESHOLDS[level]
            or red_flag_count >= OVERALL_RED_FLAG_THRESHOLDS[level]
        ):
            return level
    return RiskLevel.LOW


def _to_recommendation(rule: RecommendationRule) -> RiskRecommendation:
    return RiskRecommendation(
        priority=rule.priority,
        category=rule.category,
        text=rule.text,
        reason=rule.reason,
    )


def fallback_risk_assessment() -> RiskAssessment:
    """Fixed assessment used when scoring itself fails."""
    return RiskAssessment(
        overall=RiskLevel.MEDIUM,
        categories={
            RiskCategory.FINANCIAL: CategoryAssessment(level=RiskLevel.MEDIUM, score=2),
            RiskCategory.LEGAL: CategoryAssessment(level=RiskLevel.MEDIUM, score=2),
            RiskCategory.OPERATIONAL: CategoryAssessment(level=RiskLevel.LOW, score=1),
            RiskCategory.PRIVACY: CategoryAssessment(level=RiskLevel.LOW, score=1),
        },
        red_flags=[],
        recommendations=[_to_recommendation(FALLBACK_RECOMMENDATION)],
    )


class RiskAggregator:
    """Combines category scores and red flags into a RiskAssessment."""

    def __init__(self, assessor: CategoryRiskAssessor | None = None):
        self.assessor = assessor or CategoryRiskAssessor()

    def assess_risks(
        self,
        text: str,
        analysis: DocumentAnalysis | None = None,
    ) -> RiskAssessment:
        """Assess the risks in a document.

        Args:
            text: Extracted document text
            analysis: The document's analysis, if one exists. Scoring reads
                only the text; the analysis is logged for correlation.

        Returns:
            RiskAssessment, or the fixed fallback on any internal error
        """
        try:
            # Wrapped phrases must still match
            text = normalize_whitespace(text)
            categories = self.assessor.assess_all(text)
            red_flags = detect_red_flags(text)

            total_score = sum(c.score for c in categories.values())
            overall = overall_level(total_score, len(red_flags))

            recommendations = [
                _to_recommendation(rule)
                for rule in RECOMMENDATION_RULES
                if rule.applies_to(text)
            ]

            logger.info(
                "risk_assessed",
                overall=overall.value,
                total_score=total_score,
                red_flags=len(red_flags),
                document_type=analysis.document_type.value if analysis else None,
            )

            return RiskAssessment(
                overall=overall,
                categories=categories,
                red_flags=red_flags,
                recommendations=recommendations,
            )

        except Exception as e:
            logger.error("risk_assessment_failed", error=str(e))
            return fallback_risk_assessment()


_default_aggregator = RiskAggregator()


def assess_risks(text: str, analysis: DocumentAnalysis | None = None) -> RiskAssessment:
    """Convenience function to assess a document with the default aggregator."""
    return _default_aggregator.assess_risks(text, analysis)
