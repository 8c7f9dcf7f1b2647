"""
Document analysis and question answering.

Both operations always return a record. Each is an ordered list of fallback
tiers run by ``run_tiers``: a structured backend answer, a salvage of the
backend's plain text, and finally an offline answer built from local text
statistics.
"""

import json
import re
from functools import lru_cache

import structlog
from pydantic import ValidationError

from legalease.config import get_settings
from legalease.exceptions import ParseFailure
from legalease.models.analysis import (
    AnalysisTier,
    ChatAnswer,
    DocumentAnalysis,
    DocumentType,
    SimplifiedClause,
)
from legalease.models.risk import RiskAssessment, RiskLevel
from legalease.risk.aggregator import RiskAggregator
from legalease.risk.rules import find_liability_terms, find_severity_keywords
from legalease.services.document_processor import classify_document_type, extract_structure
from legalease.services.fallback import Tier, run_tiers
from legalease.services.llm_service import LLMService, get_llm_service
from legalease.services.response_normalizer import normalize_response
from legalease.services.templates import TemplateLibrary, get_template_library

logger = structlog.get_logger(__name__)

ANALYSIS_SYSTEM_PROMPT = """You are a legal document analysis assistant. You explain legal documents to people who are not lawyers.

Make the language accessible while keeping it legally accurate.
Respond with ONLY valid JSON. Do not include markdown formatting, code blocks, or additional text. Start your response with { and end with }."""

CHAT_SYSTEM_PROMPT = """You are an expert legal assistant specializing in document analysis. Answer questions using the provided document analysis and text.

Respond with ONLY valid JSON. Do not include markdown formatting, code blocks, or additional text. Start your response with { and end with }."""

CHAT_TEXT_SYSTEM_PROMPT = """You are a legal assistant. Answer questions about legal documents in plain text, without JSON formatting."""

CHAT_APOLOGY = (
    "I'm sorry, I'm having trouble processing your question right now. "
    "Please try again or contact support."
)

# Keys the backend may send that are owned locally
_LOCAL_ANALYSIS_KEYS = ("riskAssessment", "risk_assessment", "rawResponse", "raw_response", "tier")

_SENTENCE_BREAK = re.compile(r"[.!?]+")


def _ellipsize(text: str, limit: int) -> str:
    return text[:limit] + "..."


class AnalysisService:
    """
    Produces plain-language analyses and answers follow-up questions.

    The backend, template library and risk aggregator are injectable so that
    tests can script the backend's behaviour.
    """

    def __init__(
        self,
        llm: LLMService | None = None,
        templates: TemplateLibrary | None = None,
        aggregator: RiskAggregator | None = None,
    ):
        self.settings = get_settings()
        self._llm = llm
        self.templates = templates or get_template_library()
        self.aggregator = aggregator or RiskAggregator()

    @property
    def llm(self) -> LLMService:
        if self._llm is None:
            self._llm = get_llm_service()
        return self._llm

    # =========================================================================
    # Document Analysis
    # =========================================================================

    async def analyze_document(self, text: str, name: str) -> DocumentAnalysis:
        """
        Analyze a document.

        Never raises: the offline tier needs nothing but the text. The
        rule-based risk assessment is attached to whichever tier answers.
        """
        document_type = classify_document_type(text)
        risk_assessment = self.aggregator.assess_risks(text)
        prompt = self._analysis_prompt(text, name, document_type)

        analysis = await run_tiers(
            "analyze_document",
            [
                Tier(
                    AnalysisTier.STRUCTURED.value,
                    lambda: self._structured_analysis(prompt, document_type),
                ),
                Tier(
                    AnalysisTier.TEXT_SALVAGE.value,
                    lambda: self._salvaged_analysis(prompt, document_type),
                    recovers_from=(ParseFailure,),
                ),
                Tier(
                    AnalysisTier.OFFLINE.value,
                    lambda: self._offline_analysis(text, name, document_type, risk_assessment),
                ),
            ],
        )

        logger.info(
            "document_analyzed",
            name=name,
            document_type=document_type.value,
            tier=analysis.tier.value,
            overall_risk=risk_assessment.overall.value,
        )
        return analysis.with_risk(risk_assessment)

    def _analysis_prompt(self, text: str, name: str, document_type: DocumentType) -> str:
        template = self.templates.template_for(document_type)
        excerpt = text[: self.settings.analysis_excerpt_chars]

        return f"""Analyze the following legal document and provide a comprehensive analysis.

Document: {name}
Type: {document_type.value} ({template.name})

Pay special attention to:
{self.templates.focus_areas(document_type)}

Content: {excerpt}

Required JSON structure:
{{
  "summary": "A 2-3 sentence summary of what this document is about",
  "documentType": "{document_type.value}",
  "keyPoints": ["5-7 most important points from the document"],
  "simplifiedClauses": [
    {{
      "original": "Original complex clause text",
      "simplified": "Clear, simple explanation",
      "importance": "high",
      "category": "payment"
    }}
  ],
  "recommendations": ["3-5 actionable recommendations for the reader"],
  "redFlags": ["Any concerning or unusual clauses"],
  "nextSteps": ["What the reader should do next"]
}}

Respond with valid JSON only."""

    async def _structured_analysis(
        self, prompt: str, document_type: DocumentType
    ) -> DocumentAnalysis:
        response, model = await self.llm.generate(ANALYSIS_SYSTEM_PROMPT, prompt)
        logger.debug("analysis_response_received", model=model, length=len(response))

        payload = normalize_response(response)
        for key in _LOCAL_ANALYSIS_KEYS:
            payload.pop(key, None)
        # Local keyword voting wins over whatever type the backend reports
        payload["documentType"] = document_type.value
        payload.pop("document_type", None)

        try:
            return DocumentAnalysis.model_validate(payload)
        except ValidationError as e:
            raise ParseFailure(f"Backend analysis failed validation: {e}", raw_text=response) from e

    async def _salvaged_analysis(
        self, prompt: str, document_type: DocumentType
    ) -> DocumentAnalysis:
        response, model = await self.llm.generate(ANALYSIS_SYSTEM_PROMPT, prompt)
        logger.debug("salvage_response_received", model=model, length=len(response))

        return DocumentAnalysis(
            summary=_ellipsize(response, self.settings.summary_salvage_chars),
            document_type=document_type,
            key_points=[
                "Analysis completed with a text response",
                "Review the summary above for key information",
                "Consider consulting with a legal professional",
                "Pay attention to dates, amounts, and obligations",
            ],
            simplified_clauses=[
                SimplifiedClause(
                    original="Text-based analysis provided",
                    simplified=_ellipsize(response, 100),
                    importance="medium",
                    category="analysis",
                )
            ],
            recommendations=[
                "Review the analysis above",
                "Ask specific questions using the chat feature",
                "Consider getting legal advice before signing",
                "Keep a copy for your records",
            ],
            next_steps=[
                "Review the analysis provided",
                "Use the chat feature for specific questions",
                "Consider professional legal review",
            ],
            raw_response=response,
            tier=AnalysisTier.TEXT_SALVAGE,
        )

    async def _offline_analysis(
        self,
        text: str,
        name: str,
        document_type: DocumentType,
        risk_assessment: RiskAssessment,
    ) -> DocumentAnalysis:
        word_count = len(text.split(" "))
        sentence_count = len(_SENTENCE_BREAK.split(text))

        key_points = [
            "Document contains legal language and terms",
            "Review all sections carefully before signing",
            "Consider consulting with a legal professional",
            "Pay attention to dates, amounts, and obligations",
            "Look for termination and cancellation clauses",
        ]

        high_risk_terms = find_severity_keywords(text)[RiskLevel.HIGH]
        if high_risk_terms:
            key_points.append(f"High-risk terms found: {', '.join(high_risk_terms)}")
        liability_terms = find_liability_terms(text)
        if liability_terms:
            key_points.append(f"Liability terms found: {', '.join(liability_terms)}")
        amounts = extract_structure(text).amounts
        if amounts:
            key_points.append(f"Monetary amounts mentioned: {', '.join(dict.fromkeys(amounts))}")

        recommendations = [
            "Read the entire document carefully",
            "Ask questions about any unclear sections",
            "Consider getting legal advice before signing",
            "Keep a copy for your records",
        ]
        recommendations.extend(self.templates.recommendations_for(document_type, risk_assessment))

        return DocumentAnalysis(
            summary=(
                f"This appears to be a legal document ({name}) with approximately "
                f"{word_count} words and {sentence_count} sentences."
            ),
            document_type=document_type,
            key_points=key_points,
            simplified_clauses=[
                SimplifiedClause(
                    original="Document contains complex legal language",
                    simplified="This document uses formal legal terms that may be difficult to understand",
                    importance="high",
                    category="general",
                )
            ],
            recommendations=recommendations,
            next_steps=[
                "Review the document thoroughly",
                "Seek clarification on unclear terms",
                "Consider professional legal review",
            ],
            tier=AnalysisTier.OFFLINE,
        )

    # =========================================================================
    # Question Answering
    # =========================================================================

    async def answer_question(
        self,
        question: str,
        text: str,
        analysis: DocumentAnalysis | None = None,
    ) -> ChatAnswer:
        """Answer a question about a document. Never raises."""
        answer = await run_tiers(
            "answer_question",
            [
                Tier("structured", lambda: self._structured_answer(question, text, analysis)),
                Tier(
                    "plain_text",
                    lambda: self._plain_text_answer(question, text),
                    recovers_from=(ParseFailure,),
                ),
                Tier("offline", self._offline_answer),
            ],
        )
        logger.info("question_answered", confidence=answer.confidence)
        return answer

    async def _structured_answer(
        self, question: str, text: str, analysis: DocumentAnalysis | None
    ) -> ChatAnswer:
        analysis_json = json.dumps(analysis.to_dict() if analysis else {}, indent=2)
        prompt = f"""DOCUMENT ANALYSIS:
{analysis_json}

ORIGINAL DOCUMENT TEXT:
{text[: self.settings.chat_excerpt_chars]}

USER QUESTION: {question}

INSTRUCTIONS:
1. Provide a clear, accurate answer based on the document content
2. Reference specific sections or clauses when possible
3. If the question cannot be answered from the document, explain why
4. Suggest relevant follow-up questions
5. Rate your confidence in the answer

Required JSON structure:
{{
  "answer": "Detailed, helpful answer with specific references",
  "confidence": "high|medium|low",
  "sources": ["Specific clauses or sections referenced"],
  "followUpQuestions": ["2-3 related questions"],
  "keyInsights": ["Important insights or warnings related to the question"]
}}

Respond with valid JSON only."""

        response, model = await self.llm.generate(CHAT_SYSTEM_PROMPT, prompt)
        logger.debug("chat_response_received", model=model, length=len(response))

        payload = normalize_response(response)
        try:
            answer = ChatAnswer.model_validate(payload)
        except ValidationError as e:
            raise ParseFailure(f"Backend answer failed validation: {e}", raw_text=response) from e

        return self._enhance_answer(answer, analysis)

    def _enhance_answer(
        self, answer: ChatAnswer, analysis: DocumentAnalysis | None
    ) -> ChatAnswer:
        """Add document-type follow-ups, risk context and pointers into the analysis."""
        if analysis is None:
            return answer

        follow_ups = list(answer.follow_up_questions)
        insights = list(answer.key_insights)
        risk_context = answer.risk_context

        if analysis.risk_assessment is not None:
            risk_context = (
                f"This document has a {analysis.risk_assessment.overall.value} risk level."
            )

        if analysis.document_type == DocumentType.RENTAL_AGREEMENT:
            follow_ups.append("What are my rights as a tenant?")
            follow_ups.append("What happens if I need to break the lease early?")
        elif analysis.document_type == DocumentType.LOAN_CONTRACT:
            follow_ups.append("What are the total costs of this loan?")
            follow_ups.append("What happens if I miss a payment?")

        if analysis.key_points:
            insights.append("Review the key points section for important information")
        if analysis.recommendations:
            insights.append("Consider the recommendations provided in the analysis")

        return answer.model_copy(
            update={
                "document_type": analysis.document_type,
                "risk_context": risk_context,
                "follow_up_questions": follow_ups,
                "key_insights": insights,
            }
        )

    async def _plain_text_answer(self, question: str, text: str) -> ChatAnswer:
        prompt = f"""Answer this question about the legal document: "{question}"

Document context: {text[: self.settings.chat_fallback_excerpt_chars]}

Provide a helpful answer in plain text."""

        response, model = await self.llm.generate(CHAT_TEXT_SYSTEM_PROMPT, prompt)
        if not response.strip():
            raise ParseFailure("Backend returned an empty answer", raw_text=response)

        return ChatAnswer(
            answer=response,
            confidence="medium",
            sources=["Document analysis"],
            follow_up_questions=[
                "Can you explain this in more detail?",
                "What are the implications of this?",
                "Are there any risks I should know about?",
            ],
            key_insights=["This response is based on document analysis"],
        )

    async def _offline_answer(self) -> ChatAnswer:
        return ChatAnswer(
            answer=CHAT_APOLOGY,
            confidence="low",
            follow_up_questions=[
                "Can you rephrase your question?",
                "Would you like me to explain a specific clause?",
                "Do you need help understanding any legal terms?",
            ],
        )


@lru_cache()
def get_analysis_service() -> AnalysisService:
    """Get cached analysis service instance."""
    return AnalysisService()