"""
Builds one CandidateRecord from resume text plus an optional structured
extraction result, falling back to the heuristic extractors field by field.
"""
from typing import Any, Dict, List, Optional, Union

from resume_matcher.helpers.vocabulary import MANUAL_SOURCE, NOT_DETECTED
from resume_matcher.models.models import (
    CandidateRecord,
    ContactInfo,
    EducationDetails,
    ExperienceEntry,
)
from resume_matcher.services import extraction
from resume_matcher.utils.logging_config import get_logger
from resume_matcher.utils.utils import as_list, as_text

logger = get_logger(__name__)

PREVIEW_CHARS = 500


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    """First value under any of `keys` that is not None/empty."""
    for key in keys:
        value = data.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def _contact(value: Any) -> Union[ContactInfo, str, None]:
    if isinstance(value, dict):
        phone = as_text(value.get("phone")) or None
        email = as_text(value.get("email")) or None
        if phone or email:
            return ContactInfo(phone=phone, email=email)
        return None
    return as_text(value) or None


def _education(value: Any) -> Union[EducationDetails, str, None]:
    if isinstance(value, dict):
        details = EducationDetails(
            school=as_text(value.get("school")) or None,
            major=as_text(value.get("major")) or None,
            degree=as_text(value.get("degree")) or None,
        )
        if details.school or details.major or details.degree:
            return details
        return None
    return as_text(value) or None


def _experience_entries(value: Any) -> List[ExperienceEntry]:
    if not isinstance(value, list):
        return []
    entries = []
    for item in value:
        if isinstance(item, dict):
            entries.append(ExperienceEntry(
                company=as_text(item.get("company")) or None,
                title=as_text(item.get("title")) or None,
                start_date=as_text(_pick(item, "startDate", "start_date")) or None,
                end_date=as_text(_pick(item, "endDate", "end_date")) or None,
                description=as_text(item.get("description")) or None,
            ))
        elif as_text(item):
            entries.append(ExperienceEntry(description=as_text(item)))
    return entries


def _total_years(value: Any) -> Optional[float]:
    if isinstance(value, list):
        # sometimes the model returns ["6"]; take first
        value = value[0] if value else None
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def text_preview(text: str) -> str:
    text = text or ""
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


def resolve_name(name: Optional[str], source_name: Optional[str]) -> Optional[str]:
    if name and name != NOT_DETECTED:
        return name
    if source_name and source_name != MANUAL_SOURCE:
        derived = extraction.name_from_filename(source_name)
        if derived:
            return derived
    return name or NOT_DETECTED


def assemble(
    normalized_text: str,
    source_name: Optional[str] = None,
    external_result: Optional[Dict[str, Any]] = None,
) -> CandidateRecord:
    """Compose a candidate record, preferring `external_result` where it has values."""
    text = normalized_text or ""
    data = external_result if isinstance(external_result, dict) else {}
    if data:
        logger.debug(f"Assembling {source_name or MANUAL_SOURCE} from structured result with heuristic fallback")

    name = as_text(_pick(data, "name")) or extraction.extract_name(text)

    experience = _experience_entries(_pick(data, "experienceDetails", "experience_details"))
    experience_years: Union[List[ExperienceEntry], str]
    if experience:
        experience_years = experience
    else:
        experience_years = as_text(_pick(data, "experience", "experience_years")) or extraction.extract_experience(text)

    title = as_text(_pick(data, "title"))
    if not title and experience:
        title = experience[0].title or ""
    title = title or extraction.extract_title(text)

    skills = as_list(_pick(data, "coreSkills", "core_skills", "skills"))
    if not skills:
        skills = extraction.extract_skills(text)

    contact = _contact(_pick(data, "contact")) or extraction.extract_contact(text)
    education = (
        _education(_pick(data, "educationDetails", "education_details", "education"))
        or extraction.extract_education(text)
    )

    return CandidateRecord(
        name=resolve_name(name, source_name),
        title=title,
        skills=skills,
        experience_years=experience_years,
        education=education,
        contact=contact,
        raw_text_preview=text_preview(text),
        source=source_name or MANUAL_SOURCE,
        total_years_experience=_total_years(_pick(data, "totalYearsExperience", "total_years_experience")),
        soft_skills=_pick(data, "softSkills", "soft_skills"),
        process_skills=_pick(data, "processSkills", "process_skills"),
        tools=_pick(data, "tools"),
        experience_summary=as_text(_pick(data, "experienceSummary", "experience_summary")) or None,
    )
