from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resume_matcher.helpers.vocabulary import MANUAL_SOURCE
from resume_matcher.utils.utils import as_list, unique_ci

PREVIEW_MAX_CHARS = 1000


class SourceKind(str, Enum):
    """How the raw text reached the pipeline"""
    FILE = "file"
    PASTED = "pasted"


class RawDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    source_name: str = MANUAL_SOURCE
    source_kind: SourceKind = SourceKind.PASTED


class NormalizedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    usable: bool
    text: str


class ContactInfo(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class EducationDetails(BaseModel):
    school: Optional[str] = None
    major: Optional[str] = None
    degree: Optional[str] = None


class ExperienceEntry(BaseModel):
    company: Optional[str] = None
    title: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class CandidateRecord(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience_years: Union[List[ExperienceEntry], str, None] = None
    education: Union[EducationDetails, str, None] = None
    contact: Union[ContactInfo, str, None] = None
    raw_text_preview: str = ""
    source: str = MANUAL_SOURCE

    # Carried from the structured extraction path, never used for scoring
    total_years_experience: Optional[float] = None
    soft_skills: List[str] = Field(default_factory=list)
    process_skills: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    experience_summary: Optional[str] = None
    upload_date: Optional[datetime] = None

    @field_validator("skills", "soft_skills", "process_skills", "tools", mode="before")
    @classmethod
    def coerce_skill_list(cls, v):
        return unique_ci(as_list(v))

    @field_validator("raw_text_preview", mode="before")
    @classmethod
    def bound_preview(cls, v):
        if v is None:
            return ""
        return str(v)[:PREVIEW_MAX_CHARS]


class JobRequirements(BaseModel):
    job_title: Optional[str] = None
    skills: List[str] = Field(default_factory=list)


class HREvaluation(BaseModel):
    """Recruiter-style report written by the language model for one candidate."""
    overall_fit_score: int = Field(ge=0, le=100)
    summary: str
    potential_rating: str
    startup_fit_rating: str
    key_strengths: List[str] = Field(default_factory=list)
    key_concerns: List[str] = Field(default_factory=list)
    interview_focus_areas: List[str] = Field(default_factory=list)


class MatchResult(CandidateRecord):
    match_score: int = Field(ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list)
    # Candidate skills that did not match any JD keyword
    missing_skills: List[str] = Field(default_factory=list)
    analysis: str = ""
    # Only set when LLM extraction is enabled; never feeds match_score
    evaluation: Optional[HREvaluation] = None


class MatchOutcome(BaseModel):
    matches: List[MatchResult]
    job_requirements: JobRequirements


class JobDescriptionResult(BaseModel):
    job_requirements: JobRequirements
    structured: Optional[Dict[str, Any]] = None
    text_preview: str = ""
    usable: bool = False


class IngestionResult(BaseModel):
    record: CandidateRecord
    usable: bool
    structured: bool = False
    persisted: bool = False
    record_id: Optional[str] = None
    persistence_error: Optional[str] = None
