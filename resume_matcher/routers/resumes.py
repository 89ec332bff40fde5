from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from resume_matcher.helpers.parsing import extract_text
from resume_matcher.helpers.vocabulary import MANUAL_SOURCE
from resume_matcher.models.models import IngestionResult, RawDocument, SourceKind
from resume_matcher.models.schemas import IngestionResponse, ResumeListResponse, ResumeTextInput
from resume_matcher.services.db import ResumeStore, get_resume_store
from resume_matcher.services.pipeline import default_resume_extractor, ingest
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import ExceptionContext, ExtractionError, InputError
from resume_matcher.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _response(result: IngestionResult) -> IngestionResponse:
    if result.persisted:
        message = "Resume parsed and saved"
    else:
        message = f"Resume parsed but not saved: {result.persistence_error}"
    return IngestionResponse(message=message, **result.model_dump())


async def read_upload(file: UploadFile) -> str:
    """Read an uploaded file and pull its text out, enforcing the size limit."""
    data = await file.read()
    if not data:
        raise InputError("Uploaded file is empty", field="file", value=file.filename)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise InputError(
            f"Uploaded file exceeds {settings.MAX_UPLOAD_BYTES} bytes",
            field="file", value=file.filename
        )

    with ExceptionContext("extract upload text", logger, wrap_as=ExtractionError, upload=file.filename):
        return await run_in_threadpool(extract_text, data, file.content_type, file.filename)


@router.post("/upload", response_model=IngestionResponse)
async def upload_resume(
    file: UploadFile = File(...),
    store: ResumeStore = Depends(get_resume_store),
    extractor=Depends(default_resume_extractor),
):
    """Upload a resume file (.pdf, .docx, .txt or an image) and store the parsed record"""
    text = await read_upload(file)
    document = RawDocument(text=text, source_name=file.filename or MANUAL_SOURCE, source_kind=SourceKind.FILE)
    result = await ingest(document, extractor=extractor, store=store)
    return _response(result)


@router.post("/text", response_model=IngestionResponse)
async def submit_resume_text(
    payload: ResumeTextInput,
    store: ResumeStore = Depends(get_resume_store),
    extractor=Depends(default_resume_extractor),
):
    """Parse pasted resume text"""
    document = RawDocument(text=payload.text, source_name=MANUAL_SOURCE, source_kind=SourceKind.PASTED)
    result = await ingest(document, extractor=extractor, store=store, name_override=payload.name)
    return _response(result)


@router.get("", response_model=ResumeListResponse)
async def list_resumes(store: ResumeStore = Depends(get_resume_store)):
    """Get all stored resumes, newest first"""
    records = await store.fetch_all()
    return ResumeListResponse(resumes=records, count=len(records))
