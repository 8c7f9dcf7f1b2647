"""Risk taxonomy for contract text.

Every scoring signal, red-flag pattern and recommendation trigger lives in
these tables. Adding a risk signal means appending a record here; the scan
logic in ``assessor``, ``red_flags`` and ``aggregator`` never names a term.
"""

import re
from dataclasses import dataclass, field

from legalease.models.risk import RiskCategory, RiskLevel

TAXONOMY_VERSION = "1.0"


@dataclass(frozen=True)
class RiskSignal:
    """A weighted scoring signal for one category.

    Fires at most once per document: any pattern matching anywhere in the
    text adds ``weight`` to the category score.
    """
    category: RiskCategory
    term: str
    patterns: tuple[str, ...]
    weight: int
    severity: RiskLevel
    description: str
    capture_matches: bool = False  # keep literal matches (e.g. penalty amounts)

    def find(self, text: str) -> list[str]:
        """Return every literal match of any pattern, in pattern order."""
        matches = []
        for pattern in self.patterns:
            matches.extend(m.group(0) for m in re.finditer(pattern, text, re.IGNORECASE))
        return matches


@dataclass(frozen=True)
class RedFlagPattern:
    """A high-severity pattern tracked apart from category scores."""
    name: str
    pattern: str
    description: str


@dataclass(frozen=True)
class RecommendationRule:
    """Recommendation emitted when any trigger term appears in the text.

    An empty trigger tuple means the recommendation is always emitted.
    """
    category: str
    priority: str
    text: str
    reason: str
    triggers: tuple[str, ...] = field(default_factory=tuple)

    def applies_to(self, text: str) -> bool:
        if not self.triggers:
            return True
        text_lower = normalize_whitespace(text).lower()
        return any(term in text_lower for term in self.triggers)


def _literal(*terms: str) -> tuple[str, ...]:
    return tuple(re.escape(t) for t in terms)


# =============================================================================
# Level thresholds
# =============================================================================

# Category score -> level, checked in order
CATEGORY_LEVEL_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
    (5, RiskLevel.HIGH),
    (2, RiskLevel.MEDIUM),
)

# Overall level: either the summed category score or the red-flag count
# crossing its threshold is enough
OVERALL_SCORE_THRESHOLDS: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 10,
    RiskLevel.MEDIUM: 5,
}
OVERALL_RED_FLAG_THRESHOLDS: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 3,
    RiskLevel.MEDIUM: 1,
}


# =============================================================================
# Generic keyword tables
# =============================================================================

SEVERITY_KEYWORDS: dict[RiskLevel, tuple[str, ...]] = {
    RiskLevel.HIGH: (
        "automatic renewal",
        "binding arbitration",
        "class action waiver",
        "liquidated damages",
        "personal guarantee",
        "non-compete",
        "confidentiality",
        "indemnification",
        "force majeure",
        "termination without cause",
        "late fees",
        "penalty",
        "forfeiture",
        "waiver of rights",
    ),
    RiskLevel.MEDIUM: (
        "dispute resolution",
        "governing law",
        "jurisdiction",
        "severability",
        "entire agreement",
        "modification",
        "assignment",
        "notice requirements",
        "cure period",
        "default",
    ),
    RiskLevel.LOW: (
        "definitions",
        "recitals",
        "signature blocks",
        "exhibits",
        "schedules",
        "table of contents",
    ),
}

FINANCIAL_RISK_TERMS: dict[str, str] = {
    "interest rate": "Rate at which interest accrues on outstanding amounts",
    "penalty": "Additional charges for non-compliance",
    "late fee": "Fee charged for late payments",
    "default rate": "Higher interest rate applied when in default",
    "collection costs": "Costs of collecting overdue amounts",
    "attorney fees": "Legal fees that may be recoverable",
    "court costs": "Costs of legal proceedings",
    "liquidated damages": "Pre-determined penalty amounts",
    "security deposit": "Upfront payment held as security",
    "rent increase": "Potential increase in rental amounts",
}

LIABILITY_RISK_TERMS: tuple[str, ...] = (
    "indemnify",
    "hold harmless",
    "liability",
    "damages",
    "negligence",
    "gross negligence",
    "willful misconduct",
    "strict liability",
    "product liability",
    "professional liability",
)


# =============================================================================
# Category scoring signals
# =============================================================================

CATEGORY_SIGNALS: tuple[RiskSignal, ...] = (
    # === FINANCIAL ===
    *(
        RiskSignal(
            category=RiskCategory.FINANCIAL,
            term=term,
            patterns=_literal(term),
            weight=1,
            severity=RiskLevel.MEDIUM,
            description=description,
        )
        for term, description in FINANCIAL_RISK_TERMS.items()
    ),
    RiskSignal(
        category=RiskCategory.FINANCIAL,
        term="penalty clauses",
        patterns=(r"penalty.*?(?:\$[\d,]+|\d+%)",),
        weight=3,
        severity=RiskLevel.HIGH,
        description="Document contains penalty clauses",
        capture_matches=True,
    ),
    RiskSignal(
        category=RiskCategory.FINANCIAL,
        term="automatic renewal",
        patterns=_literal("automatic renewal", "auto-renew"),
        weight=2,
        severity=RiskLevel.HIGH,
        description="Contract may renew automatically without explicit consent",
    ),

    # === LEGAL ===
    RiskSignal(
        category=RiskCategory.LEGAL,
        term="binding arbitration",
        patterns=_literal("binding arbitration", "arbitration clause"),
        weight=3,
        severity=RiskLevel.HIGH,
        description="Disputes must be resolved through arbitration, limiting court access",
    ),
    RiskSignal(
        category=RiskCategory.LEGAL,
        term="class action waiver",
        patterns=_literal("class action waiver", "waive class action"),
        weight=3,
        severity=RiskLevel.HIGH,
        description="Cannot join class action lawsuits against the other party",
    ),
    RiskSignal(
        category=RiskCategory.LEGAL,
        term="liability limitation",
        patterns=_literal("limitation of liability", "liability cap"),
        weight=2,
        severity=RiskLevel.MEDIUM,
        description="Other party's liability may be limited",
    ),
    RiskSignal(
        category=RiskCategory.LEGAL,
        term="indemnification",
        patterns=_literal("indemnify", "hold harmless"),
        weight=3,
        severity=RiskLevel.HIGH,
        description="May be required to pay for other party's legal costs and damages",
    ),

    # === OPERATIONAL ===
    RiskSignal(
        category=RiskCategory.OPERATIONAL,
        term="termination without cause",
        patterns=_literal("termination without cause", "terminate at will"),
        weight=2,
        severity=RiskLevel.MEDIUM,
        description="Contract can be terminated without specific reason",
    ),
    RiskSignal(
        category=RiskCategory.OPERATIONAL,
        term="non-compete clause",
        patterns=_literal("non-compete", "noncompete"),
        weight=3,
        severity=RiskLevel.HIGH,
        description="May restrict future business or employment opportunities",
    ),
    RiskSignal(
        category=RiskCategory.OPERATIONAL,
        term="confidentiality",
        patterns=_literal("confidential", "proprietary"),
        weight=1,
        severity=RiskLevel.MEDIUM,
        description="Must keep certain information confidential",
    ),

    # === PRIVACY ===
    RiskSignal(
        category=RiskCategory.PRIVACY,
        term="data collection",
        patterns=_literal("collect data", "personal information"),
        weight=1,
        severity=RiskLevel.MEDIUM,
        description="Personal data may be collected and used",
    ),
    RiskSignal(
        category=RiskCategory.PRIVACY,
        term="data sharing",
        patterns=_literal("share data", "third party"),
        weight=2,
        severity=RiskLevel.MEDIUM,
        description="Data may be shared with third parties",
    ),
)


# =============================================================================
# Red flags
# =============================================================================

RED_FLAG_RECOMMENDATION = "Review carefully and consider legal advice"

RED_FLAG_PATTERNS: tuple[RedFlagPattern, ...] = (
    RedFlagPattern("rights waiver", r"waive.*rights?", "Waiver of legal rights"),
    RedFlagPattern("binding arbitration", r"binding.*arbitration", "Mandatory arbitration clause"),
    RedFlagPattern("class action waiver", r"class.*action.*waiver", "Cannot join class actions"),
    RedFlagPattern("liquidated damages", r"liquidated.*damages", "Pre-determined penalty amounts"),
    RedFlagPattern("personal guarantee", r"personal.*guarantee", "Personal liability for business debts"),
    RedFlagPattern("automatic renewal", r"automatic.*renewal", "Contract renews automatically"),
    RedFlagPattern(
        "termination without cause", r"termination.*without.*cause", "Can be terminated without reason"
    ),
)


# =============================================================================
# Recommendations
# =============================================================================

RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        category="general",
        priority="high",
        text="Read the entire document carefully before signing",
        reason="Legal documents contain binding terms that affect your rights",
    ),
    RecommendationRule(
        category="financial",
        priority="high",
        text="Understand all payment terms, penalties, and fees",
        reason="Financial obligations are legally binding and can have significant impact",
        triggers=tuple(FINANCIAL_RISK_TERMS),
    ),
    RecommendationRule(
        category="legal",
        priority="high",
        text="Consider consulting with a legal professional",
        reason="Complex legal terms may limit your rights or create unexpected obligations",
        triggers=("arbitration", "waiver", "indemnify", "liability", "damages"),
    ),
    RecommendationRule(
        category="privacy",
        priority="medium",
        text="Review data collection and sharing policies",
        reason="Understand how your personal information will be used",
        triggers=("data", "personal information", "privacy", "confidential"),
    ),
)

FALLBACK_RECOMMENDATION = RecommendationRule(
    category="general",
    priority="high",
    text="Review document carefully and seek professional advice if needed",
    reason="Legal documents contain important terms that affect your rights and obligations",
)


# =============================================================================
# Lookups
# =============================================================================

def normalize_whitespace(text: str | None) -> str:
    """Collapse every whitespace run, line breaks included, to one space."""
    return re.sub(r"\s+", " ", text or "").strip()


def signals_for(category: RiskCategory | str) -> list[RiskSignal]:
    """Get the scoring signals for a category, in table order."""
    category = RiskCategory(category)
    return [s for s in CATEGORY_SIGNALS if s.category == category]


def find_severity_keywords(text: str) -> dict[RiskLevel, list[str]]:
    """Get the generic risk keywords present in the text, by severity tier."""
    text_lower = normalize_whitespace(text).lower()
    return {
        level: [kw for kw in keywords if kw in text_lower]
        for level, keywords in SEVERITY_KEYWORDS.items()
    }


def find_liability_terms(text: str) -> list[str]:
    """Get the liability terms present in the text."""
    text_lower = normalize_whitespace(text).lower()
    return [term for term in LIABILITY_RISK_TERMS if term in text_lower]
