"""
Document template routes.
"""

from fastapi import APIRouter

from legalease.models.api import TemplateListResponse
from legalease.models.document import LegalTemplate
from legalease.services.templates import get_template_library

router = APIRouter()


@router.get("", response_model=TemplateListResponse)
async def list_templates() -> TemplateListResponse:
    """
    List the reference templates for every supported document type.
    """
    return TemplateListResponse(templates=get_template_library().all_templates())


@router.get("/{document_type}", response_model=LegalTemplate)
async def get_template(document_type: str) -> LegalTemplate:
    """
    Get the template for one document type; unknown types get the generic template.
    """
    return get_template_library().template_for(document_type)
