"""
Document analysis, chat and comparison routes.
"""

from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import APIRouter, File, HTTPException, UploadFile

from legalease.config import get_settings
from legalease.exceptions import ExtractionFailure, UnsupportedFormat
from legalease.models.api import AnalyzeResponse, ChatRequest, ChatResponse, CompareResponse
from legalease.services.analysis_service import get_analysis_service
from legalease.services.comparison_service import get_comparison_service
from legalease.services.document_processor import extract_text, resolve_mime_type

logger = structlog.get_logger(__name__)
router = APIRouter()


async def _extract_upload(upload: UploadFile) -> str:
    """
    Save an upload to a temporary path, extract its text and remove the file.

    Raises HTTPException(400) when the file is too large or unreadable.
    """
    settings = get_settings()
    mime_type = resolve_mime_type(upload.filename, upload.content_type)

    if mime_type not in settings.allowed_mime_types:
        raise HTTPException(status_code=400, detail=str(UnsupportedFormat(mime_type)))

    suffix = Path(upload.filename or "").suffix.lower()
    temp_path = settings.upload_dir / f"{uuid4().hex}{suffix}"
    temp_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        content = await upload.read()
        if len(content) > settings.max_file_size:
            raise HTTPException(
                status_code=400,
                detail=f"File exceeds the {settings.max_file_size} byte upload limit",
            )
        temp_path.write_bytes(content)

        text = extract_text(temp_path, mime_type)
        return text[: settings.max_document_length]

    except ExtractionFailure as e:
        logger.warning("upload_extraction_failed", filename=upload.filename, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    finally:
        # Cleanup temp file
        if temp_path.exists():
            temp_path.unlink()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_document(
    document: UploadFile = File(...),
) -> AnalyzeResponse:
    """
    Upload a document and get a plain-language analysis with risk assessment.
    """
    text = await _extract_upload(document)
    file_name = document.filename or "document"

    analysis = await get_analysis_service().analyze_document(text, file_name)

    logger.info("document_upload_analyzed", filename=file_name, tier=analysis.tier.value)

    return AnalyzeResponse(file_name=file_name, analysis=analysis, document_text=text)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """
    Answer a follow-up question about a previously analyzed document.
    """
    answer = await get_analysis_service().answer_question(
        request.question,
        request.document_text,
        request.analysis,
    )
    return ChatResponse(**answer.model_dump())


@router.post("/compare", response_model=CompareResponse)
async def compare_documents(
    document1: UploadFile = File(...),
    document2: UploadFile = File(...),
) -> CompareResponse:
    """
    Upload two documents and compare their terms and risks.
    """
    text1 = await _extract_upload(document1)
    text2 = await _extract_upload(document2)

    service = get_comparison_service()
    result = await service.compare_documents(
        text1,
        document1.filename or "document1",
        text2,
        document2.filename or "document2",
    )

    return CompareResponse(result=result, report=service.build_report(result))
