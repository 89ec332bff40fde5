from fastapi import APIRouter, Depends, File, UploadFile

from resume_matcher.models.models import JobDescriptionResult
from resume_matcher.models.schemas import JDTextInput
from resume_matcher.routers.resumes import read_upload
from resume_matcher.services.pipeline import default_jd_extractor, parse_job_description

router = APIRouter()


@router.post("/parse-text", response_model=JobDescriptionResult)
async def parse_jd_text(payload: JDTextInput, extractor=Depends(default_jd_extractor)):
    """Pull the job title and skill keywords out of pasted JD text"""
    return await parse_job_description(payload.text, extractor=extractor)


@router.post("/upload", response_model=JobDescriptionResult)
async def upload_jd(file: UploadFile = File(...), extractor=Depends(default_jd_extractor)):
    text = await read_upload(file)
    return await parse_job_description(text, extractor=extractor)
