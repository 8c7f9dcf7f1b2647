"""
Pydantic models for LegalEase.

This module contains all data models used throughout the application:
- Risk models for rule-based scoring
- Analysis models for backend-produced document analyses and chat answers
- Comparison models for two-document comparison
- Document models for templates and extracted structure
- API models for request/response schemas
"""

from legalease.models.risk import (
    CategoryAssessment,
    Finding,
    RedFlag,
    RiskAssessment,
    RiskCategory,
    RiskLevel,
    RiskRecommendation,
)
from legalease.models.analysis import (
    AnalysisTier,
    ChatAnswer,
    DocumentAnalysis,
    DocumentType,
    SimplifiedClause,
)
from legalease.models.comparison import (
    AspectComparison,
    ComparisonReport,
    ComparisonResult,
    ComparisonSummary,
    KeyDifference,
    RiskComparison,
)
from legalease.models.document import (
    CompletenessReport,
    DocumentStructure,
    LegalTemplate,
)

__all__ = [
    # Risk models
    "CategoryAssessment",
    "Finding",
    "RedFlag",
    "RiskAssessment",
    "RiskCategory",
    "RiskLevel",
    "RiskRecommendation",
    # Analysis models
    "AnalysisTier",
    "ChatAnswer",
    "DocumentAnalysis",
    "DocumentType",
    "SimplifiedClause",
    # Comparison models
    "AspectComparison",
    "ComparisonReport",
    "ComparisonResult",
    "ComparisonSummary",
    "KeyDifference",
    "RiskComparison",
    # Document models
    "CompletenessReport",
    "DocumentStructure",
    "LegalTemplate",
]
