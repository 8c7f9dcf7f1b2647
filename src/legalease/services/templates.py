"""
Reference templates per document type.

Each template lists the clauses a document of that type usually contains, the
red flags worth checking for and the questions a reader should get answered.
Templates drive the focus section of analysis prompts, type-specific
recommendations and a rough completeness check.
"""

from functools import lru_cache

from legalease.models.analysis import DocumentType
from legalease.models.document import CompletenessReport, LegalTemplate
from legalease.models.risk import RiskAssessment, RiskLevel

_TEMPLATES: tuple[LegalTemplate, ...] = (
    LegalTemplate(
        id=DocumentType.RENTAL_AGREEMENT.value,
        name="Rental Agreement",
        description="Standard residential lease agreement",
        common_clauses=[
            "Security deposit terms",
            "Rent amount and due date",
            "Lease term and renewal",
            "Maintenance responsibilities",
            "Pet policy",
            "Utilities and services",
            "Late fees and penalties",
            "Termination conditions",
        ],
        red_flags=[
            "Excessive security deposit",
            "Automatic renewal clauses",
            "Unlimited late fees",
            "Restrictive pet policies",
            "Unclear maintenance responsibilities",
        ],
        key_questions=[
            "What is the security deposit amount and when is it returned?",
            "When is rent due and what are the late fees?",
            "Who is responsible for maintenance and repairs?",
            "Are pets allowed and what are the restrictions?",
            "What happens if I need to break the lease early?",
        ],
    ),
    LegalTemplate(
        id=DocumentType.LOAN_CONTRACT.value,
        name="Loan Contract",
        description="Personal or business loan agreement",
        common_clauses=[
            "Principal amount and interest rate",
            "Payment schedule and terms",
            "Late fees and default rates",
            "Collateral requirements",
            "Prepayment penalties",
            "Default and acceleration clauses",
            "Collection costs and attorney fees",
            "Governing law and jurisdiction",
        ],
        red_flags=[
            "Excessive interest rates",
            "Balloon payments",
            "Prepayment penalties",
            "Personal guarantees",
            "Acceleration clauses",
            "Confession of judgment",
        ],
        key_questions=[
            "What is the total amount I will pay over the life of the loan?",
            "What happens if I miss a payment?",
            "Can I pay off the loan early without penalty?",
            "What collateral is required?",
            "What are the consequences of default?",
        ],
    ),
    LegalTemplate(
        id=DocumentType.TERMS_OF_SERVICE.value,
        name="Terms of Service",
        description="Website or app terms of service",
        common_clauses=[
            "User obligations and restrictions",
            "Intellectual property rights",
            "Privacy and data collection",
            "Liability limitations",
            "Dispute resolution",
            "Termination rights",
            "Content policies",
            "Service availability",
        ],
        red_flags=[
            "Binding arbitration clauses",
            "Class action waivers",
            "Excessive liability limitations",
            "Unlimited data collection",
            "One-sided termination rights",
        ],
        key_questions=[
            "How is my personal data collected and used?",
            "What are my rights if the service is terminated?",
            "How are disputes resolved?",
            "What content is prohibited?",
            "What happens to my data if I delete my account?",
        ],
    ),
    LegalTemplate(
        id=DocumentType.EMPLOYMENT_CONTRACT.value,
        name="Employment Contract",
        description="Job offer or employment agreement",
        common_clauses=[
            "Job title and responsibilities",
            "Salary and benefits",
            "Work schedule and location",
            "Non-compete agreements",
            "Confidentiality obligations",
            "Termination conditions",
            "Intellectual property rights",
            "Dispute resolution",
        ],
        red_flags=[
            "Overly broad non-compete clauses",
            "Unlimited confidentiality obligations",
            "At-will termination without cause",
            "Assignment of all intellectual property",
            "Mandatory arbitration",
        ],
        key_questions=[
            "What are my specific job responsibilities?",
            "What benefits am I entitled to?",
            "What restrictions apply after I leave?",
            "How can my employment be terminated?",
            "Who owns work I create during employment?",
        ],
    ),
    LegalTemplate(
        id=DocumentType.PURCHASE_AGREEMENT.value,
        name="Purchase Agreement",
        description="Real estate or goods purchase contract",
        common_clauses=[
            "Purchase price and payment terms",
            "Property or goods description",
            "Closing date and conditions",
            "Inspection and due diligence",
            "Title and ownership transfer",
            "Warranties and representations",
            "Default and remedies",
            "Closing costs and fees",
        ],
        red_flags=[
            "Unclear property description",
            "Excessive closing costs",
            "Limited inspection rights",
            "One-sided default remedies",
            "Unclear title transfer process",
        ],
        key_questions=[
            "What exactly am I purchasing?",
            "What are all the costs involved?",
            "What happens if the inspection reveals problems?",
            "When will I receive clear title?",
            "What are my rights if the seller defaults?",
        ],
    ),
)

GENERIC_TEMPLATE = LegalTemplate(
    id=DocumentType.GENERAL_CONTRACT.value,
    name="General Contract",
    description="Agreement that does not match a more specific template",
    common_clauses=[
        "Parties and effective date",
        "Payment terms",
        "Obligations of each party",
        "Term and termination",
        "Liability and indemnification",
        "Dispute resolution",
        "Governing law",
    ],
    red_flags=[
        "Waiver of legal rights",
        "Automatic renewal clauses",
        "One-sided termination rights",
        "Unlimited liability",
    ],
    key_questions=[
        "What am I agreeing to do, and by when?",
        "What does this cost me in total?",
        "How can either party end the agreement?",
        "What happens if something goes wrong?",
    ],
)

# Type-specific advice appended after the generic recommendations
_TYPE_RECOMMENDATIONS: dict[DocumentType, tuple[str, ...]] = {
    DocumentType.RENTAL_AGREEMENT: (
        "Take photos of the property condition before moving in",
        "Understand your rights regarding security deposit return",
    ),
    DocumentType.LOAN_CONTRACT: (
        "Calculate the total cost of the loan including all fees",
        "Understand the consequences of late payments",
    ),
    DocumentType.TERMS_OF_SERVICE: (
        "Review the privacy policy and data collection practices",
        "Understand how to terminate your account",
    ),
    DocumentType.EMPLOYMENT_CONTRACT: (
        "Negotiate any restrictive clauses before signing",
        "Understand your intellectual property rights",
    ),
    DocumentType.PURCHASE_AGREEMENT: (
        "Conduct thorough due diligence before closing",
        "Understand all closing costs and fees",
    ),
}


class TemplateLibrary:
    """Lookup and checks over the document-type templates."""

    def __init__(self, templates: tuple[LegalTemplate, ...] = _TEMPLATES):
        self._templates = {t.id: t for t in templates}

    def template_for(self, document_type: DocumentType | str) -> LegalTemplate:
        """Get the template for a type, or the generic one if none exists."""
        key = document_type.value if isinstance(document_type, DocumentType) else document_type
        return self._templates.get(key, GENERIC_TEMPLATE)

    def all_templates(self) -> list[LegalTemplate]:
        return list(self._templates.values())

    def focus_areas(self, document_type: DocumentType | str) -> str:
        """Prompt section listing what to look for in this type of document."""
        template = self.template_for(document_type)
        lines = ["Common Clauses to Look For:"]
        lines.extend(f"- {clause}" for clause in template.common_clauses)
        lines.append("")
        lines.append("Red Flags to Identify:")
        lines.extend(f"- {flag}" for flag in template.red_flags)
        lines.append("")
        lines.append("Key Questions to Address:")
        lines.extend(f"- {question}" for question in template.key_questions)
        return "\n".join(lines)

    def recommendations_for(
        self,
        document_type: DocumentType | str,
        risk_assessment: RiskAssessment | None = None,
    ) -> list[str]:
        """Recommendations specific to a document type and its risk level."""
        template = self.template_for(document_type)
        recommendations = [f"Review all {template.name.lower()} clauses carefully"]

        if risk_assessment is not None and risk_assessment.overall == RiskLevel.HIGH:
            recommendations.append(
                "Consider consulting with a legal professional due to high-risk clauses"
            )

        try:
            doc_type = DocumentType(document_type)
        except ValueError:
            doc_type = DocumentType.GENERAL_CONTRACT
        recommendations.extend(_TYPE_RECOMMENDATIONS.get(doc_type, ()))

        return recommendations

    def validate_completeness(
        self, document_type: DocumentType | str, text: str
    ) -> CompletenessReport:
        """
        Check which of the template's common clauses the text mentions.

        A clause counts as present when its first word appears anywhere in
        the text. This is a rough signal, not a legal review.
        """
        template = self.template_for(document_type)
        text_lower = (text or "").lower()

        present: list[str] = []
        missing: list[str] = []
        for clause in template.common_clauses:
            first_word = clause.lower().split(" ")[0]
            if first_word in text_lower:
                present.append(clause)
            else:
                missing.append(clause)

        total = len(template.common_clauses)
        completeness = (len(present) / total) * 100 if total else 100.0

        return CompletenessReport(
            completeness=completeness,
            present=present,
            missing=missing,
            recommendation=(
                "Document may be missing important clauses"
                if missing
                else "Document appears to contain standard clauses"
            ),
        )


@lru_cache()
def get_template_library() -> TemplateLibrary:
    """Get cached template library instance."""
    return TemplateLibrary()
