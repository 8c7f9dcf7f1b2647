"""
Models for document templates and extracted document structure.
"""

from pydantic import Field

from legalease.models.base import FrozenCamelModel


class LegalTemplate(FrozenCamelModel):
    """Reference checklist for one document type."""

    id: str
    name: str
    description: str
    common_clauses: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)
    key_questions: list[str] = Field(default_factory=list)


class CompletenessReport(FrozenCamelModel):
    """How many of a template's common clauses a document mentions."""

    completeness: float = Field(..., ge=0.0, le=100.0)
    present: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    recommendation: str


class Definition(FrozenCamelModel):
    term: str
    definition: str


class Section(FrozenCamelModel):
    number: str
    title: str


class DocumentStructure(FrozenCamelModel):
    """Lightweight structural features pulled from raw text by regex."""

    sections: list[Section] = Field(default_factory=list)
    clauses: list[str] = Field(default_factory=list)
    definitions: list[Definition] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    amounts: list[str] = Field(default_factory=list)
