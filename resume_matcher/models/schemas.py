from pydantic import BaseModel, Field
from typing import List, Optional

from resume_matcher.models.models import CandidateRecord

# -------- Resumes --------
class ResumeTextInput(BaseModel):
    """Pasted resume text; `name` overrides whatever is extracted"""
    text: str
    name: Optional[str] = None

class IngestionResponse(BaseModel):
    success: bool = True
    message: str
    record: CandidateRecord
    usable: bool
    structured: bool = False
    persisted: bool = False
    record_id: Optional[str] = None
    persistence_error: Optional[str] = None

class ResumeListResponse(BaseModel):
    resumes: List[CandidateRecord] = Field(default_factory=list)
    count: int = 0

# -------- Job Descriptions --------
class JDTextInput(BaseModel):
    text: str

# -------- Matching --------
class MatchRequest(BaseModel):
    job_description: str
    # when omitted, the stored resume pool is matched
    resumes: Optional[List[CandidateRecord]] = None
