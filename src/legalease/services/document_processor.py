"""
Document text extraction and lightweight text analysis.

Extraction turns an uploaded file into plain text. The rest of the module
works on that text: whitespace cleanup, keyword voting for the document type
and regex extraction of sections, clauses, definitions, dates and amounts.
"""

import re
from pathlib import Path
from typing import Callable

import pdfplumber
import structlog
from docx import Document

from legalease.exceptions import ExtractionFailed, UnsupportedFormat
from legalease.models.analysis import DocumentType
from legalease.models.document import Definition, DocumentStructure, Section
from legalease.risk.rules import normalize_whitespace

logger = structlog.get_logger(__name__)

PDF = "application/pdf"
DOC = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT = "text/plain"

_SUFFIX_MIME_TYPES = {
    ".pdf": PDF,
    ".doc": DOC,
    ".docx": DOCX,
    ".txt": TEXT,
}

# Declared types browsers send when they do not know better
_GENERIC_MIME_TYPES = {None, "", "application/octet-stream"}


# =============================================================================
# Extraction
# =============================================================================


def _extract_pdf(path: Path) -> str:
    text_parts = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    return "\n\n".join(text_parts)


def _extract_docx(path: Path) -> str:
    doc = Document(str(path))
    paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
    return "\n".join(paragraphs)


def _extract_text_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


_EXTRACTORS: dict[str, Callable[[Path], str]] = {
    PDF: _extract_pdf,
    DOC: _extract_docx,
    DOCX: _extract_docx,
    TEXT: _extract_text_file,
}


def resolve_mime_type(filename: str | None, content_type: str | None) -> str | None:
    """Trust the declared type unless it is missing or generic; then go by suffix."""
    if content_type not in _GENERIC_MIME_TYPES:
        return content_type
    if not filename:
        return content_type
    return _SUFFIX_MIME_TYPES.get(Path(filename).suffix.lower(), content_type)


def extract_text(path: str | Path, mime_type: str | None) -> str:
    """Extract and clean the text of a document.

    Args:
        path: Path to the document on disk.
        mime_type: Declared MIME type; picks the extractor.

    Returns:
        Cleaned, non-empty document text.

    Raises:
        UnsupportedFormat: No extractor for the MIME type.
        ExtractionFailed: The extractor failed or found no text.
    """
    extractor = _EXTRACTORS.get(mime_type or "")
    if extractor is None:
        raise UnsupportedFormat(mime_type)

    path = Path(path)
    try:
        raw = extractor(path)
    except Exception as e:
        logger.error("text_extraction_failed", path=str(path), mime_type=mime_type, error=str(e))
        raise ExtractionFailed(f"Failed to extract text: {e}") from e

    text = clean_text(raw)
    if not text:
        raise ExtractionFailed("Failed to extract text: document contains no text")

    logger.info("text_extracted", path=path.name, mime_type=mime_type, length=len(text))
    return text


def clean_text(text: str | None) -> str:
    """Collapse runs of spaces and blank lines; keep single line breaks."""
    if not text:
        return ""
    text = re.sub(r"[ \t\r\f\v]+", " ", text)
    text = re.sub(r" ?\n[ \n]*", "\n", text)
    return text.strip()


# =============================================================================
# Document type
# =============================================================================

TYPE_INDICATORS: dict[DocumentType, tuple[str, ...]] = {
    DocumentType.RENTAL_AGREEMENT: (
        "lease", "tenant", "landlord", "rent", "security deposit", "premises",
        "rental agreement", "lease agreement",
    ),
    DocumentType.LOAN_CONTRACT: (
        "loan", "borrower", "lender", "principal", "interest rate", "payment",
        "loan agreement", "promissory note",
    ),
    DocumentType.TERMS_OF_SERVICE: (
        "terms of service", "user agreement", "acceptable use", "privacy policy",
        "liability", "disclaimer", "website terms",
    ),
    DocumentType.EMPLOYMENT_CONTRACT: (
        "employment", "employee", "employer", "salary", "benefits", "job description",
        "employment agreement", "offer letter",
    ),
    DocumentType.PURCHASE_AGREEMENT: (
        "purchase", "buyer", "seller", "purchase price", "closing date",
        "purchase agreement", "sales contract",
    ),
}


def classify_document_type(text: str) -> DocumentType:
    """
    Vote on the document type by keyword presence.

    Each keyword present in the text counts once. The highest count wins,
    ties go to the type declared first, and no votes at all means
    ``GENERAL_CONTRACT``.
    """
    text_lower = normalize_whitespace(text).lower()
    best_type = DocumentType.GENERAL_CONTRACT
    best_score = 0

    for doc_type, keywords in TYPE_INDICATORS.items():
        score = sum(1 for keyword in keywords if keyword in text_lower)
        if score > best_score:
            best_type, best_score = doc_type, score

    return best_type


# =============================================================================
# Structure
# =============================================================================

_SECTION = re.compile(r"(?:SECTION|ARTICLE|PART)\s+([IVX\d]+)[\s\-:]+([^\n]+)", re.IGNORECASE)
_CLAUSE = re.compile(
    r"(?:\([a-z]\)|\([0-9]+\)|\([ivx]+\)|^\d+\.)\s+([^\n]+)", re.IGNORECASE | re.MULTILINE
)
_DEFINITION = re.compile(r'"([^"]+)"\s*means?\s+([^.]+)', re.IGNORECASE)
_DATE = re.compile(
    r"\b(?:January|February|March|April|May|June|July|August|September|October|November|December)"
    r"\s+\d{1,2},?\s+\d{4}\b"
)
_AMOUNT = re.compile(r"\$[\d,]+(?:\.\d{2})?")


def extract_structure(text: str) -> DocumentStructure:
    """Pull sections, numbered clauses, definitions, dates and amounts."""
    text = text or ""
    return DocumentStructure(
        sections=[
            Section(number=m.group(1), title=m.group(2).strip()) for m in _SECTION.finditer(text)
        ],
        clauses=[m.group(1).strip() for m in _CLAUSE.finditer(text)],
        definitions=[
            Definition(term=m.group(1), definition=m.group(2).strip())
            for m in _DEFINITION.finditer(text)
        ],
        dates=_DATE.findall(text),
        amounts=_AMOUNT.findall(text),
    )
