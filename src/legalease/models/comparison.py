"""
Two-document comparison models.
"""

from typing import Literal

from pydantic import Field

from legalease.models.analysis import DocumentAnalysis
from legalease.models.base import FrozenCamelModel
from legalease.models.risk import RiskLevel

Winner = Literal["doc1", "doc2", "neutral"]


class KeyDifference(FrozenCamelModel):
    """One aspect on which the two documents differ."""

    aspect: str
    doc1: str = ""
    doc2: str = ""
    impact: str = ""


class ComparisonSummary(FrozenCamelModel):
    """Backend-written narrative comparison."""

    summary: str = Field(..., min_length=1)
    key_differences: list[KeyDifference] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class OverallRiskComparison(FrozenCamelModel):
    doc1: RiskLevel
    doc2: RiskLevel
    safer: Literal["doc1", "doc2", "similar"]


class CategoryRiskComparison(FrozenCamelModel):
    category: str
    doc1: RiskLevel
    doc2: RiskLevel


class RiskComparison(FrozenCamelModel):
    """Side-by-side rule-based risk levels."""

    overall: OverallRiskComparison
    categories: list[CategoryRiskComparison] = Field(default_factory=list)


class AspectResult(FrozenCamelModel):
    doc1_risk: RiskLevel
    doc2_risk: RiskLevel
    winner: Winner
    difference: int = Field(..., ge=0)


class AspectComparison(FrozenCamelModel):
    """Per-category winners and the overall vote."""

    aspects: dict[str, AspectResult]
    overall: Winner


class ComparedDocument(FrozenCamelModel):
    name: str
    analysis: DocumentAnalysis


class ComparedDocuments(FrozenCamelModel):
    doc1: ComparedDocument
    doc2: ComparedDocument


class ComparisonResult(FrozenCamelModel):
    """Everything produced by comparing two documents."""

    documents: ComparedDocuments
    comparison: ComparisonSummary
    risk_comparison: RiskComparison
    aspects: AspectComparison


class ImpactNote(FrozenCamelModel):
    doc1_risk: RiskLevel
    doc2_risk: RiskLevel
    recommendation: str


class KeyFinding(FrozenCamelModel):
    aspect: str
    impact: str
    recommendation: str


class ComparisonReport(FrozenCamelModel):
    """Reader-facing report derived from a ComparisonResult."""

    summary: str
    key_findings: list[KeyFinding] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    risk_analysis: RiskComparison
    financial_impact: ImpactNote
    legal_implications: ImpactNote
