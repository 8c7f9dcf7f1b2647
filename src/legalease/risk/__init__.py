"""Rule-based risk assessment for legal documents."""

from legalease.risk.rules import (
    CATEGORY_SIGNALS,
    RED_FLAG_PATTERNS,
    RECOMMENDATION_RULES,
    TAXONOMY_VERSION,
    signals_for,
)
from legalease.risk.assessor import CategoryRiskAssessor, level_for_score
from legalease.risk.red_flags import detect_red_flags
from legalease.risk.aggregator import (
    RiskAggregator,
    assess_risks,
    fallback_risk_assessment,
    overall_level,
)

__all__ = [
    "CATEGORY_SIGNALS",
    "RED_FLAG_PATTERNS",
    "RECOMMENDATION_RULES",
    "TAXONOMY_VERSION",
    "signals_for",
    "CategoryRiskAssessor",
    "level_for_score",
    "detect_red_flags",
    "RiskAggregator",
    "assess_risks",
    "fallback_risk_assessment",
    "overall_level",
]
