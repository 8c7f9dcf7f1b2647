"""Tests for legalease/services/templates.py — template bank and checks."""

import pytest
from legalease.models.analysis import DocumentType
from legalease.risk.aggregator import assess_risks
from legalease.services.templates import GENERIC_TEMPLATE, TemplateLibrary, get_template_library


@pytest.fixture
def library():
    return TemplateLibrary()


class TestLookup:

    def test_five_templates(self, library):
        ids = [t.id for t in library.all_templates()]
        assert ids == [
            "rental-agreement",
            "loan-contract",
            "terms-of-service",
            "employment-contract",
            "purchase-agreement",
        ]

    def test_template_for_enum_and_string(self, library):
        assert library.template_for(DocumentType.LOAN_CONTRACT).name == "Loan Contract"
        assert library.template_for("loan-contract").name == "Loan Contract"

    @pytest.mark.parametrize("doc_type", [DocumentType.GENERAL_CONTRACT, "unknown", ""])
    def test_missing_template_is_generic(self, library, doc_type):
        assert library.template_for(doc_type) == GENERIC_TEMPLATE

    def test_every_template_is_complete(self, library):
        for template in library.all_templates():
            assert template.common_clauses
            assert template.red_flags
            assert template.key_questions

    def test_focus_areas(self, library):
        focus = library.focus_areas(DocumentType.RENTAL_AGREEMENT)
        assert "Common Clauses to Look For:" in focus
        assert "- Security deposit terms" in focus
        assert "- Automatic renewal clauses" in focus
        assert "- Are pets allowed and what are the restrictions?" in focus

    def test_singleton(self):
        assert get_template_library() is get_template_library()


class TestRecommendations:

    def test_rental(self, library):
        recs = library.recommendations_for(DocumentType.RENTAL_AGREEMENT)
        assert recs == [
            "Review all rental agreement clauses carefully",
            "Take photos of the property condition before moving in",
            "Understand your rights regarding security deposit return",
        ]

    def test_high_risk_adds_legal_advice(self, library, high_risk_text):
        recs = library.recommendations_for(DocumentType.LOAN_CONTRACT, assess_risks(high_risk_text))
        assert recs[1] == "Consider consulting with a legal professional due to high-risk clauses"
        assert "Calculate the total cost of the loan including all fees" in recs

    def test_low_risk_no_legal_advice(self, library, plain_text):
        recs = library.recommendations_for(DocumentType.LOAN_CONTRACT, assess_risks(plain_text))
        assert len(recs) == 3

    def test_general_contract(self, library):
        recs = library.recommendations_for("not-a-type")
        assert recs == ["Review all general contract clauses carefully"]


class TestCompleteness:

    def test_partial(self, library, rental_text):
        report = library.validate_completeness(DocumentType.RENTAL_AGREEMENT, rental_text)
        # first words: security, rent, lease, maintenance, pet, utilities, late, termination
        assert report.present == [
            "Security deposit terms",
            "Rent amount and due date",
            "Lease term and renewal",
        ]
        assert len(report.missing) == 5
        assert report.completeness == pytest.approx(37.5)
        assert report.recommendation == "Document may be missing important clauses"

    def test_complete(self, library):
        text = "purchase property closing inspection title warranties default closing"
        report = library.validate_completeness("purchase-agreement", text)
        assert report.completeness == 100.0
        assert report.missing == []
        assert report.recommendation == "Document appears to contain standard clauses"

    def test_empty_text(self, library):
        report = library.validate_completeness(DocumentType.LOAN_CONTRACT, "")
        assert report.completeness == 0.0
