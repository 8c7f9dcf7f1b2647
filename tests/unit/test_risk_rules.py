"""Tests for legalease/risk/rules.py — the risk taxonomy tables."""

import re

import pytest
from legalease.models.risk import RiskCategory, RiskLevel
from legalease.risk.rules import (
    CATEGORY_SIGNALS,
    FINANCIAL_RISK_TERMS,
    LIABILITY_RISK_TERMS,
    RECOMMENDATION_RULES,
    RED_FLAG_PATTERNS,
    RED_FLAG_RECOMMENDATION,
    SEVERITY_KEYWORDS,
    RecommendationRule,
    find_liability_terms,
    find_severity_keywords,
    signals_for,
)


class TestTables:

    def test_ten_financial_terms(self):
        assert len(FINANCIAL_RISK_TERMS) == 10

    def test_ten_liability_terms(self):
        assert len(LIABILITY_RISK_TERMS) == 10

    def test_three_severity_tiers(self):
        assert set(SEVERITY_KEYWORDS) == {RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW}

    def test_every_signal_has_positive_weight(self):
        for signal in CATEGORY_SIGNALS:
            assert signal.weight > 0, signal.term

    def test_every_pattern_compiles(self):
        for signal in CATEGORY_SIGNALS:
            for pattern in signal.patterns:
                re.compile(pattern)
        for flag in RED_FLAG_PATTERNS:
            re.compile(flag.pattern)

    def test_red_flag_order(self):
        names = [flag.name for flag in RED_FLAG_PATTERNS]
        assert names == [
            "rights waiver",
            "binding arbitration",
            "class action waiver",
            "liquidated damages",
            "personal guarantee",
            "automatic renewal",
            "termination without cause",
        ]

    def test_red_flag_recommendation(self):
        assert RED_FLAG_RECOMMENDATION == "Review carefully and consider legal advice"

    def test_general_recommendation_first(self):
        assert RECOMMENDATION_RULES[0].category == "general"
        assert RECOMMENDATION_RULES[0].triggers == ()


class TestSignalsFor:

    def test_every_category_has_signals(self):
        for category in RiskCategory:
            assert signals_for(category), category

    def test_accepts_string(self):
        assert signals_for("legal") == signals_for(RiskCategory.LEGAL)

    def test_financial_signals(self):
        terms = [s.term for s in signals_for(RiskCategory.FINANCIAL)]
        assert terms[:10] == list(FINANCIAL_RISK_TERMS)
        assert "penalty clauses" in terms
        assert "automatic renewal" in terms

    def test_legal_weights(self):
        weights = {s.term: s.weight for s in signals_for(RiskCategory.LEGAL)}
        assert weights == {
            "binding arbitration": 3,
            "class action waiver": 3,
            "liability limitation": 2,
            "indemnification": 3,
        }

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            signals_for("reputational")


class TestRiskSignalFind:

    def test_case_insensitive(self):
        signal = next(s for s in CATEGORY_SIGNALS if s.term == "binding arbitration")
        assert signal.find("BINDING ARBITRATION applies") == ["BINDING ARBITRATION"]

    def test_penalty_regex_captures_amounts(self):
        signal = next(s for s in CATEGORY_SIGNALS if s.term == "penalty clauses")
        matches = signal.find("A penalty of $250 applies. Another penalty of 5% applies.")
        assert matches == ["penalty of $250", "penalty of 5%"]

    def test_literal_patterns_are_escaped(self):
        signal = next(s for s in CATEGORY_SIGNALS if s.term == "automatic renewal")
        assert signal.find("the plan will auto-renew yearly") == ["auto-renew"]
        assert signal.find("autoXrenew") == []


class TestRecommendationRule:

    def test_no_triggers_always_applies(self):
        rule = RecommendationRule("general", "high", "text", "reason")
        assert rule.applies_to("")

    def test_trigger_substring(self):
        rule = RecommendationRule("privacy", "medium", "text", "reason", ("data",))
        assert rule.applies_to("We store DATABASE records")
        assert not rule.applies_to("nothing relevant")


class TestKeywordHelpers:

    def test_find_severity_keywords(self):
        found = find_severity_keywords("Governing law is Delaware. Late fees apply.")
        assert found[RiskLevel.HIGH] == ["late fees"]
        assert found[RiskLevel.MEDIUM] == ["governing law"]
        assert found[RiskLevel.LOW] == []

    def test_find_liability_terms(self):
        assert find_liability_terms("Tenant shall indemnify Landlord for damages") == [
            "indemnify",
            "damages",
        ]
