"""Tests for legalease/services/document_processor.py — extraction, typing, structure."""

import pytest
from docx import Document

from legalease.exceptions import ExtractionFailed, UnsupportedFormat
from legalease.models.analysis import DocumentType
from legalease.models.risk import RiskCategory, RiskLevel
from legalease.risk.aggregator import assess_risks
from legalease.services.document_processor import (
    DOCX,
    PDF,
    TEXT,
    classify_document_type,
    clean_text,
    extract_structure,
    extract_text,
    resolve_mime_type,
)


class TestExtractText:

    def test_plain_text(self, tmp_path, rental_text):
        path = tmp_path / "lease.txt"
        path.write_text(rental_text, encoding="utf-8")
        assert extract_text(path, TEXT) == rental_text

    def test_docx(self, tmp_path):
        doc = Document()
        doc.add_paragraph("EMPLOYMENT AGREEMENT")
        doc.add_paragraph("")
        doc.add_paragraph("The Employee   shall receive a salary.")
        path = tmp_path / "offer.docx"
        doc.save(str(path))

        assert extract_text(path, DOCX) == "EMPLOYMENT AGREEMENT\nThe Employee shall receive a salary."

    def test_wrapped_phrases_still_score(self, tmp_path, wrapped_text):
        path = tmp_path / "contract.txt"
        path.write_text(wrapped_text, encoding="utf-8")

        text = extract_text(path, TEXT)
        result = assess_risks(text)

        assert "\n" in text
        assert result.categories[RiskCategory.LEGAL].score == 6
        assert result.overall == RiskLevel.HIGH

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG")
        with pytest.raises(UnsupportedFormat, match="Unsupported file format: image/png"):
            extract_text(path, "image/png")

    def test_missing_mime_type(self, tmp_path):
        with pytest.raises(UnsupportedFormat):
            extract_text(tmp_path / "x", None)

    def test_corrupt_pdf(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not really a pdf")
        with pytest.raises(ExtractionFailed):
            extract_text(path, PDF)

    def test_empty_document(self, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("   \n\n  ", encoding="utf-8")
        with pytest.raises(ExtractionFailed):
            extract_text(path, TEXT)


class TestResolveMimeType:

    def test_declared_type_wins(self):
        assert resolve_mime_type("notes.txt", PDF) == PDF

    @pytest.mark.parametrize("filename,expected", [
        ("contract.PDF", PDF),
        ("offer.docx", DOCX),
        ("terms.txt", TEXT),
    ])
    def test_generic_type_uses_suffix(self, filename, expected):
        assert resolve_mime_type(filename, "application/octet-stream") == expected
        assert resolve_mime_type(filename, None) == expected

    def test_unknown_suffix(self):
        assert resolve_mime_type("photo.jpg", None) is None


class TestCleanText:

    def test_collapses_whitespace(self):
        assert clean_text("  a   b\t c \n\n\n d  ") == "a b c\nd"

    def test_empty(self):
        assert clean_text(None) == ""
        assert clean_text("") == ""


class TestClassifyDocumentType:

    def test_rental(self, rental_text):
        assert classify_document_type(rental_text) == DocumentType.RENTAL_AGREEMENT

    def test_no_votes_is_general(self, plain_text):
        assert classify_document_type(plain_text) == DocumentType.GENERAL_CONTRACT

    def test_empty_is_general(self):
        assert classify_document_type("") == DocumentType.GENERAL_CONTRACT

    def test_highest_count_wins(self):
        text = "The Borrower repays the Lender the principal of this loan. The buyer signs."
        assert classify_document_type(text) == DocumentType.LOAN_CONTRACT

    def test_keyword_spanning_line_break(self):
        # three purchase keywords, three rental keywords once wrapped text is joined
        text = "The buyer and seller agree to the purchase. The landlord holds the security\ndeposit and rent."
        assert classify_document_type(text) == DocumentType.RENTAL_AGREEMENT

    def test_tie_goes_to_first_declared(self):
        # one rental keyword, one purchase keyword
        text = "The tenant and the buyer met."
        assert classify_document_type(text) == DocumentType.RENTAL_AGREEMENT


class TestExtractStructure:

    def test_structure(self):
        text = (
            "ARTICLE I - Definitions\n"
            '"Premises" means the apartment at 12 Main Street.\n'
            "1. Rent is $1,200.00 per month.\n"
            "(a) Payment is due on January 1, 2025.\n"
            "SECTION 2: Deposit of $500\n"
        )
        structure = extract_structure(text)

        assert [(s.number, s.title) for s in structure.sections] == [
            ("I", "Definitions"),
            ("2", "Deposit of $500"),
        ]
        assert structure.clauses == [
            "Rent is $1,200.00 per month.",
            "Payment is due on January 1, 2025.",
        ]
        assert structure.definitions[0].term == "Premises"
        assert structure.definitions[0].definition == "the apartment at 12 Main Street"
        assert structure.dates == ["January 1, 2025"]
        assert structure.amounts == ["$1,200.00", "$500"]

    def test_empty(self):
        structure = extract_structure("")
        assert structure.sections == []
        assert structure.amounts == []
