"""
Two-document comparison.

Both documents are analyzed concurrently, then compared three ways: a
backend-written narrative, a side-by-side of the rule-based risk levels and a
per-category vote on which document carries less risk.
"""

import asyncio
import json
from functools import lru_cache

import structlog
from pydantic import ValidationError

from legalease.exceptions import BackendFailure, ParseFailure
from legalease.models.analysis import DocumentAnalysis
from legalease.models.comparison import (
    AspectComparison,
    AspectResult,
    CategoryRiskComparison,
    ComparedDocument,
    ComparedDocuments,
    ComparisonReport,
    ComparisonResult,
    ComparisonSummary,
    ImpactNote,
    KeyDifference,
    KeyFinding,
    OverallRiskComparison,
    RiskComparison,
    Winner,
)
from legalease.models.risk import RiskCategory, RiskLevel
from legalease.services.analysis_service import AnalysisService, get_analysis_service
from legalease.services.response_normalizer import normalize_response

logger = structlog.get_logger(__name__)

DEFAULT_ASPECTS = (RiskCategory.FINANCIAL, RiskCategory.LEGAL, RiskCategory.OPERATIONAL)

COMPARISON_SYSTEM_PROMPT = """You are a legal document comparison expert. Analyze differences between documents objectively.

Respond with ONLY valid JSON. Do not include markdown formatting, code blocks, or additional text."""

DEGRADED_SUMMARY = ComparisonSummary(
    summary="Unable to compare documents at this time",
    key_differences=[],
    recommendations=["Please review both documents carefully"],
)

# Overall vote ties resolve in this order
_VOTE_ORDER: tuple[Winner, ...] = ("doc1", "doc2", "neutral")


def _category_level(analysis: DocumentAnalysis, category: RiskCategory) -> RiskLevel:
    if analysis.risk_assessment is None:
        return RiskLevel.LOW
    assessment = analysis.risk_assessment.categories.get(category)
    return assessment.level if assessment else RiskLevel.LOW


def _category_score(analysis: DocumentAnalysis, category: RiskCategory) -> int:
    if analysis.risk_assessment is None:
        return 0
    assessment = analysis.risk_assessment.categories.get(category)
    return assessment.score if assessment else 0


def _lower_risk_note(
    doc1: DocumentAnalysis,
    doc2: DocumentAnalysis,
    category: RiskCategory,
    lower_text: str,
    similar_text: str,
) -> ImpactNote:
    score1 = _category_score(doc1, category)
    score2 = _category_score(doc2, category)

    if score1 < score2:
        recommendation = f"Document 1 {lower_text}"
    elif score2 < score1:
        recommendation = f"Document 2 {lower_text}"
    else:
        recommendation = similar_text

    return ImpactNote(
        doc1_risk=_category_level(doc1, category),
        doc2_risk=_category_level(doc2, category),
        recommendation=recommendation,
    )


def recommendation_for_difference(difference: KeyDifference) -> str:
    """Read the backend's impact wording as a positive, a concern or neither."""
    impact = difference.impact.lower()

    if "worse" in impact or "disadvantage" in impact:
        return "This may be a concern - review carefully"
    if "better" in impact or "advantage" in impact:
        return "Consider this as a positive factor in your decision"
    return "Evaluate based on your specific needs and circumstances"


class ComparisonService:
    """Compares two documents' analyses and risk assessments."""

    def __init__(self, analysis_service: AnalysisService | None = None):
        self._analysis_service = analysis_service

    @property
    def analysis_service(self) -> AnalysisService:
        if self._analysis_service is None:
            self._analysis_service = get_analysis_service()
        return self._analysis_service

    async def compare_documents(
        self,
        text_a: str,
        name_a: str,
        text_b: str,
        name_b: str,
    ) -> ComparisonResult:
        """
        Analyze and compare two documents.

        Never raises. Each analysis degrades on its own, and a failed
        narrative comparison falls back to a fixed summary.
        """
        doc1, doc2 = await asyncio.gather(
            self.analysis_service.analyze_document(text_a, name_a),
            self.analysis_service.analyze_document(text_b, name_b),
        )

        summary = await self.summarize_differences(doc1, doc2)

        result = ComparisonResult(
            documents=ComparedDocuments(
                doc1=ComparedDocument(name=name_a, analysis=doc1),
                doc2=ComparedDocument(name=name_b, analysis=doc2),
            ),
            comparison=summary,
            risk_comparison=self.compare_risks(doc1, doc2),
            aspects=self.compare_aspects(doc1, doc2),
        )

        logger.info(
            "documents_compared",
            doc1=name_a,
            doc2=name_b,
            safer=result.risk_comparison.overall.safer,
            overall=result.aspects.overall,
        )
        return result

    async def summarize_differences(
        self, doc1: DocumentAnalysis, doc2: DocumentAnalysis
    ) -> ComparisonSummary:
        """Backend-written comparison, or the degraded summary on failure."""
        prompt = f"""Compare these two legal document analyses and highlight key differences:

Document 1: {json.dumps(doc1.to_dict(), indent=2)}
Document 2: {json.dumps(doc2.to_dict(), indent=2)}

Provide comparison in JSON format:
{{
  "summary": "Brief comparison summary",
  "keyDifferences": [
    {{
      "aspect": "What aspect differs",
      "doc1": "Document 1 details",
      "doc2": "Document 2 details",
      "impact": "What this difference means"
    }}
  ],
  "recommendations": ["Which document is better and why"]
}}"""

        try:
            response, _ = await self.analysis_service.llm.generate(
                COMPARISON_SYSTEM_PROMPT, prompt
            )
            return ComparisonSummary.model_validate(normalize_response(response))
        except (BackendFailure, ParseFailure, ValidationError) as e:
            logger.warning("comparison_summary_failed", error_type=type(e).__name__, error=str(e))
            return DEGRADED_SUMMARY

    def compare_risks(self, doc1: DocumentAnalysis, doc2: DocumentAnalysis) -> RiskComparison:
        """Side-by-side risk levels; the safer document has the lower overall level."""
        overall1 = doc1.risk_assessment.overall if doc1.risk_assessment else RiskLevel.LOW
        overall2 = doc2.risk_assessment.overall if doc2.risk_assessment else RiskLevel.LOW

        if overall1.rank < overall2.rank:
            safer = "doc1"
        elif overall2.rank < overall1.rank:
            safer = "doc2"
        else:
            safer = "similar"

        return RiskComparison(
            overall=OverallRiskComparison(doc1=overall1, doc2=overall2, safer=safer),
            categories=[
                CategoryRiskComparison(
                    category=category.value,
                    doc1=_category_level(doc1, category),
                    doc2=_category_level(doc2, category),
                )
                for category in RiskCategory
            ],
        )

    def compare_aspects(
        self,
        doc1: DocumentAnalysis,
        doc2: DocumentAnalysis,
        aspects: tuple[RiskCategory | str, ...] = DEFAULT_ASPECTS,
    ) -> AspectComparison:
        """Per-category winner (lower level wins) and the overall vote."""
        results: dict[str, AspectResult] = {}

        for aspect in aspects:
            category = RiskCategory(aspect)
            level1 = _category_level(doc1, category)
            level2 = _category_level(doc2, category)

            winner: Winner = "neutral"
            if level1.rank < level2.rank:
                winner = "doc1"
            elif level2.rank < level1.rank:
                winner = "doc2"

            results[category.value] = AspectResult(
                doc1_risk=level1,
                doc2_risk=level2,
                winner=winner,
                difference=abs(level1.rank - level2.rank),
            )

        votes = {key: 0 for key in _VOTE_ORDER}
        for result in results.values():
            votes[result.winner] += 1
        top = max(votes.values())
        overall = next(key for key in _VOTE_ORDER if votes[key] == top)

        return AspectComparison(aspects=results, overall=overall)

    def build_report(self, result: ComparisonResult) -> ComparisonReport:
        """Reader-facing report: impact notes and a recommendation per difference."""
        doc1 = result.documents.doc1.analysis
        doc2 = result.documents.doc2.analysis

        return ComparisonReport(
            summary=result.comparison.summary,
            key_findings=[
                KeyFinding(
                    aspect=diff.aspect,
                    impact=diff.impact,
                    recommendation=recommendation_for_difference(diff),
                )
                for diff in result.comparison.key_differences
            ],
            recommendations=list(result.comparison.recommendations),
            risk_analysis=result.risk_comparison,
            financial_impact=_lower_risk_note(
                doc1,
                doc2,
                RiskCategory.FINANCIAL,
                "has lower financial risk",
                "Both documents have similar financial risk levels",
            ),
            legal_implications=_lower_risk_note(
                doc1,
                doc2,
                RiskCategory.LEGAL,
                "has fewer legal restrictions",
                "Both documents have similar legal implications",
            ),
        )


@lru_cache()
def get_comparison_service() -> ComparisonService:
    """Get cached comparison service instance."""
    return ComparisonService()
