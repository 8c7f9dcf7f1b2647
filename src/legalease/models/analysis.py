"""
Document analysis and question-answering models.
"""

from enum import Enum
from typing import Literal

from pydantic import Field, field_validator

from legalease.models.base import FrozenCamelModel
from legalease.models.risk import RiskAssessment


class DocumentType(str, Enum):
    """Closed classification label for a document.

    Declaration order is the tie-break order for keyword voting.
    """

    RENTAL_AGREEMENT = "rental-agreement"
    LOAN_CONTRACT = "loan-contract"
    TERMS_OF_SERVICE = "terms-of-service"
    EMPLOYMENT_CONTRACT = "employment-contract"
    PURCHASE_AGREEMENT = "purchase-agreement"
    GENERAL_CONTRACT = "general-contract"


def coerce_text_items(v: object) -> list[str]:
    """Flatten a backend-supplied list into strings.

    Object entries become their values joined by ": "; empty entries are
    dropped and a bare string becomes a one-item list.
    """
    if v is None:
        return []
    if isinstance(v, (str, dict)):
        v = [v]
    if not isinstance(v, list):
        return v

    items = []
    for entry in v:
        if isinstance(entry, dict):
            entry = ": ".join(str(value).strip() for value in entry.values() if value)
        elif entry is None:
            continue
        text = str(entry).strip()
        if text:
            items.append(text)
    return items


class AnalysisTier(str, Enum):
    """Which fallback tier produced an analysis."""

    STRUCTURED = "structured"
    TEXT_SALVAGE = "text_salvage"
    OFFLINE = "offline"


class SimplifiedClause(FrozenCamelModel):
    """A clause restated in plain language."""

    original: str
    simplified: str
    importance: str = "medium"
    category: str = "general"


class DocumentAnalysis(FrozenCamelModel):
    """
    Plain-language analysis of one document.

    Created once per uploaded document and consumed by chat and comparison.
    """

    summary: str = Field(..., min_length=1)
    document_type: DocumentType = DocumentType.GENERAL_CONTRACT
    key_points: list[str] = Field(default_factory=list)
    simplified_clauses: list[SimplifiedClause] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(
        default_factory=list, description="Concerns reported by the backend"
    )
    next_steps: list[str] = Field(default_factory=list)
    risk_assessment: RiskAssessment | None = None
    raw_response: str | None = Field(
        default=None, description="Verbatim backend text kept for audit"
    )
    tier: AnalysisTier = AnalysisTier.STRUCTURED

    coerce_text_lists = field_validator(
        "key_points", "recommendations", "red_flags", "next_steps", mode="before"
    )(coerce_text_items)

    def with_risk(self, risk_assessment: RiskAssessment) -> "DocumentAnalysis":
        """Return a copy with the rule-based risk assessment attached."""
        return self.model_copy(update={"risk_assessment": risk_assessment})


Confidence = Literal["high", "medium", "low"]


class ChatAnswer(FrozenCamelModel):
    """Answer to a follow-up question about an analyzed document."""

    answer: str = Field(..., min_length=1)
    confidence: Confidence = "medium"
    sources: list[str] = Field(default_factory=list)
    follow_up_questions: list[str] = Field(default_factory=list)
    key_insights: list[str] = Field(default_factory=list)
    document_type: DocumentType | None = None
    risk_context: str | None = None

    coerce_text_lists = field_validator(
        "sources", "follow_up_questions", "key_insights", mode="before"
    )(coerce_text_items)

    @field_validator("confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, v: object) -> str:
        """Accept any casing; unknown labels degrade to medium."""
        label = str(v).strip().lower() if v is not None else ""
        return label if label in ("high", "medium", "low") else "medium"
