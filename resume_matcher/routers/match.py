from typing import Optional

from fastapi import APIRouter, Depends

from resume_matcher.models.models import MatchOutcome
from resume_matcher.models.schemas import MatchRequest
from resume_matcher.services.db import ResumeStore, get_resume_store
from resume_matcher.services.pipeline import (
    Evaluator,
    default_evaluator,
    evaluate_matches,
    match_against_pool,
    match_request,
)

router = APIRouter()


@router.post("", response_model=MatchOutcome)
async def match_resumes(
    payload: MatchRequest,
    store: ResumeStore = Depends(get_resume_store),
    evaluator: Optional[Evaluator] = Depends(default_evaluator),
):
    """Rank resumes against a job description.

    Supplied resumes are matched as given; otherwise the stored pool is re-fetched.
    With LLM extraction enabled each match also carries a recruiter evaluation.
    """
    if payload.resumes is not None:
        outcome = match_against_pool(payload.job_description, payload.resumes)
        return await evaluate_matches(payload.job_description, outcome, evaluator)
    return await match_request(payload.job_description, store, evaluator)
