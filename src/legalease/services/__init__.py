"""Services for document analysis, comparison and the generative backend."""

from legalease.services.analysis_service import AnalysisService, get_analysis_service
from legalease.services.comparison_service import ComparisonService, get_comparison_service
from legalease.services.llm_service import LLMService, get_llm_service
from legalease.services.templates import TemplateLibrary, get_template_library

__all__ = [
    "AnalysisService",
    "ComparisonService",
    "LLMService",
    "TemplateLibrary",
    "get_analysis_service",
    "get_comparison_service",
    "get_llm_service",
    "get_template_library",
]
