"""Shared pytest fixtures and mocks for the LegalEase test suite."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from legalease.exceptions import BackendFailure


# ---------------------------------------------------------------------------
# Singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_singletons():
    """Clear all @lru_cache singletons between tests."""
    from legalease.config import get_settings
    from legalease.services.analysis_service import get_analysis_service
    from legalease.services.comparison_service import get_comparison_service
    from legalease.services.llm_service import get_llm_service
    from legalease.services.templates import get_template_library

    get_settings.cache_clear()
    get_llm_service.cache_clear()
    get_analysis_service.cache_clear()
    get_comparison_service.cache_clear()
    get_template_library.cache_clear()
    yield


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep real credentials and upload directories out of tests."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    yield


# ---------------------------------------------------------------------------
# Scripted backend
# ---------------------------------------------------------------------------

@pytest.fixture
def scripted_llm():
    """Factory for a backend that plays back a fixed script.

    Each script entry is either response text or an exception instance to
    raise. ``generate`` returns ``(text, "test-model")`` like the real service.
    """
    def _make(*script):
        llm = MagicMock()
        llm.generate = AsyncMock(
            side_effect=[
                entry if isinstance(entry, Exception) else (entry, "test-model")
                for entry in script
            ]
        )
        return llm

    return _make


@pytest.fixture
def offline_llm():
    """Backend that is always unreachable."""
    llm = MagicMock()
    llm.generate = AsyncMock(side_effect=BackendFailure("connection refused"))
    return llm


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def high_risk_text():
    """Arbitration, class-action waiver and liquidated damages."""
    return (
        "This agreement includes a binding arbitration clause and a class action waiver. "
        "Liquidated damages of $500 apply."
    )


@pytest.fixture
def wrapped_text():
    """Risk phrases broken across lines the way PDF extraction leaves them."""
    return (
        "Disputes go to binding\narbitration under a class action\nwaiver. A penalty\n"
        "of $500 applies on automatic\nrenewal."
    )


@pytest.fixture
def plain_text():
    """No risk vocabulary at all."""
    return "This is a simple agreement with no special terms."


@pytest.fixture
def rental_text():
    return (
        "This Lease Agreement is made between the Landlord and the Tenant.\n"
        "Rent of $1,200 is due on the first day of each month.\n"
        "A security deposit of $1,200 is required before move-in."
    )


@pytest.fixture
def analysis_payload():
    """A well-formed structured analysis as the backend would send it."""
    return {
        "summary": "A residential lease between a landlord and a tenant.",
        "documentType": "loan-contract",
        "keyPoints": ["Rent is $1,200 per month", "Deposit is $1,200"],
        "simplifiedClauses": [
            {
                "original": "Lessee shall remit payment on the first day of each month.",
                "simplified": "Pay rent on the 1st.",
                "importance": "high",
                "category": "payment",
            }
        ],
        "recommendations": ["Photograph the unit before moving in"],
        "redFlags": [],
        "nextSteps": ["Sign after reviewing the deposit terms"],
    }


@pytest.fixture
def analysis_json(analysis_payload):
    """The structured analysis wrapped in a markdown fence with chatter."""
    return "Here is the analysis:\n```json\n" + json.dumps(analysis_payload) + "\n```\nThanks!"


@pytest.fixture
def chat_payload():
    return {
        "answer": "The deposit is $1,200 and is returned after move-out.",
        "confidence": "HIGH",
        "sources": ["Deposit clause"],
        "followUpQuestions": ["When is rent due?"],
        "keyInsights": ["The deposit equals one month of rent"],
    }
