"""
API request and response models.
"""

from pydantic import Field

from legalease.models.analysis import ChatAnswer, DocumentAnalysis
from legalease.models.base import CamelModel
from legalease.models.comparison import ComparisonReport, ComparisonResult
from legalease.models.document import LegalTemplate


# =============================================================================
# Analysis
# =============================================================================


class AnalyzeResponse(CamelModel):
    """Response for a single-document analysis."""

    success: bool = True
    file_name: str
    analysis: DocumentAnalysis
    document_text: str = Field(..., description="Extracted text, echoed back for chat")


# =============================================================================
# Chat
# =============================================================================


class ChatRequest(CamelModel):
    """Follow-up question about a previously analyzed document.

    The client holds the session: it sends back the document text and the
    analysis it received from ``/api/analyze``.
    """

    question: str = Field(..., min_length=1)
    document_text: str = Field(..., min_length=1)
    analysis: DocumentAnalysis | None = None


class ChatResponse(ChatAnswer):
    success: bool = True


# =============================================================================
# Comparison
# =============================================================================


class CompareResponse(CamelModel):
    success: bool = True
    result: ComparisonResult
    report: ComparisonReport


# =============================================================================
# Templates
# =============================================================================


class TemplateListResponse(CamelModel):
    templates: list[LegalTemplate]
