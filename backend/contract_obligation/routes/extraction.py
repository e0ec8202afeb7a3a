"""Contract upload endpoint: text extraction, LLM analysis and source attribution."""

import logging
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from contract_obligation.config import settings
from contract_obligation.exceptions import (
    DocumentExtractionError,
    ObligationAnalysisError,
    UnsupportedDocumentError,
)
from contract_obligation.middleware.rate_limit import rate_limit_extract
from contract_obligation.services.analysis import ObligationAnalyzer
from contract_obligation.services.attribution import ContractSource, assemble_obligations
from contract_obligation.services.file.extraction import ExtractionService
from contract_obligation.services.file.extraction.pdf import PDF_HEADER
from contract_obligation.services.posthog import track_event
from contract_obligation.utils import format_page_info

logger = logging.getLogger(__name__)

router = APIRouter()

UNSUPPORTED_TYPE_MESSAGE = (
    "Please upload a PDF, Word document, or text file (.pdf, .docx, .doc, .txt)"
)


class ExtractionResponse(BaseModel):
    success: bool
    text: str
    obligations: list[dict]
    ai_error: str | None = None
    pages: int
    filename: str


def get_extraction_service() -> ExtractionService:
    return ExtractionService()


def get_obligation_analyzer() -> ObligationAnalyzer:
    return ObligationAnalyzer()


def _extraction_failure(filename: str, mime_type: str, size: int, error: Exception) -> JSONResponse:
    if mime_type == "application/pdf":
        suggestion = "This PDF may be password-protected, image-based, or use a complex format."
    else:
        suggestion = "This document may be corrupted or use an unsupported format."
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Failed to extract text from document",
            "details": str(error),
            "filename": filename,
            "file_size": size,
            "suggestion": suggestion,
        },
    )


@router.post("/extract", response_model=ExtractionResponse)
@rate_limit_extract()
async def extract_document(
    request: Request,
    response: Response,
    document: UploadFile | None = File(None),
    extraction: ExtractionService = Depends(get_extraction_service),
    analyzer: ObligationAnalyzer = Depends(get_obligation_analyzer),
):
    """Extract text from an uploaded contract and return located obligations."""
    if document is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    filename = document.filename or "unknown"
    # Groups this upload's events without sending the document name to analytics
    analytics_id = f"upload_{uuid.uuid4().hex}"
    mime_type = document.content_type or ""
    if not extraction.is_supported(mime_type):
        raise HTTPException(status_code=400, detail=UNSUPPORTED_TYPE_MESSAGE)

    content = await document.read()
    if len(content) > settings.max_upload_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds maximum size of {settings.max_upload_size_bytes} bytes",
        )

    logger.info(f"Processing document: {filename} Type: {mime_type} Size: {len(content)}")

    if extraction.is_pdf(mime_type) and not content.startswith(PDF_HEADER):
        raise HTTPException(status_code=400, detail="Invalid PDF file format")

    try:
        extracted = await run_in_threadpool(extraction.extract, content, mime_type)
    except UnsupportedDocumentError:
        raise HTTPException(status_code=400, detail=UNSUPPORTED_TYPE_MESSAGE) from None
    except DocumentExtractionError as e:
        logger.error(f"Document parsing error for {filename}: {e}")
        track_event(analytics_id, "extraction_failed", {"error": str(e), "file_size": len(content)})
        return _extraction_failure(filename, mime_type, len(content), e)

    obligations = []
    ai_error = None

    if extracted.has_text:
        try:
            candidates = await analyzer.analyze(extracted.text, distinct_id=analytics_id)
        except ObligationAnalysisError as e:
            logger.error(f"AI extraction error for {filename}: {e}")
            ai_error = str(e)
        else:
            contract_source = ContractSource(
                filename=filename, page_info=format_page_info(extracted.page_count)
            )
            finished = await run_in_threadpool(
                assemble_obligations,
                candidates,
                extracted.text,
                extracted.page_breaks,
                contract_source=contract_source,
            )
            obligations = [o.to_dict() for o in finished]

    track_event(
        analytics_id,
        "extraction_completed",
        {
            "source_type": extracted.source_type,
            "pages": extracted.page_count,
            "obligations_count": len(obligations),
            "ai_error": ai_error is not None,
        },
    )

    return ExtractionResponse(
        success=True,
        text=extracted.text if extracted.has_text else "No readable text content found in document",
        obligations=obligations,
        ai_error=ai_error,
        pages=extracted.page_count,
        filename=filename,
    )
