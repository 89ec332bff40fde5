"""
Structured extraction backed by a language model served through Ollama.

Failures surface as ServiceError; callers decide whether to fall back to the
heuristic extractors.
"""
from typing import Any, Dict, Optional

import requests

from resume_matcher.helpers.prompts import HR_EVALUATION_PROMPT, JD_EXTRACT_PROMPT, RESUME_EXTRACT_PROMPT
from resume_matcher.models.models import CandidateRecord, EducationDetails, HREvaluation
from resume_matcher.services.normalizer import MIN_USABLE_CHARS, truncate_for_extraction
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import ServiceError
from resume_matcher.utils.logging_config import get_logger
from resume_matcher.utils.utils import as_list, ollama_generate, safe_json

logger = get_logger(__name__)

SERVICE_NAME = "ollama"
JD_MIN_CHARS = 20

EMPTY_RESUME_STRUCTURE = {
    "name": None,
    "contact": None,
    "educationDetails": None,
    "experienceDetails": [],
    "totalYearsExperience": None,
    "coreSkills": [],
    "softSkills": [],
    "processSkills": [],
    "tools": [],
    "experienceSummary": None,
}

EMPTY_JD_STRUCTURE = {
    "jobTitle": None,
    "requiredSkills": [],
    "preferredSkills": [],
    "yearsExperience": None,
    "educationLevel": None,
    "responsibilitiesKeywords": [],
}


def _generate_json(prompt: str, purpose: str) -> Dict[str, Any]:
    try:
        resp = ollama_generate(prompt)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise ServiceError(
            f"Language model request for {purpose} failed: {e}",
            service_name=SERVICE_NAME, status_code=status, cause=e
        ) from e
    except requests.RequestException as e:
        raise ServiceError(
            f"Language model unreachable for {purpose}: {e}",
            service_name=SERVICE_NAME, cause=e
        ) from e

    data = safe_json(resp, fallback=None)
    if not isinstance(data, dict):
        logger.warning(f"Unparseable {purpose} response: {resp[:200]!r}")
        raise ServiceError(f"Language model returned malformed JSON for {purpose}", service_name=SERVICE_NAME)
    return data


def extract_resume_structure(text: str) -> Dict[str, Any]:
    """Ask the model for a structured resume; short text skips the call."""
    if not text or len(text.strip()) < MIN_USABLE_CHARS:
        logger.info("Resume text too short, skipping structured extraction")
        return dict(EMPTY_RESUME_STRUCTURE)

    logger.info(f"Requesting structured resume extraction from {settings.LLM_MODEL}")
    data = _generate_json(RESUME_EXTRACT_PROMPT.format(doc=truncate_for_extraction(text)), "resume")
    return {**EMPTY_RESUME_STRUCTURE, **data}


def extract_job_structure(text: str) -> Dict[str, Any]:
    """Ask the model for structured job requirements; short text skips the call."""
    if not text or len(text.strip()) < JD_MIN_CHARS:
        logger.info("JD text too short, skipping structured extraction")
        return dict(EMPTY_JD_STRUCTURE)

    logger.info(f"Requesting structured JD extraction from {settings.LLM_MODEL}")
    data = _generate_json(JD_EXTRACT_PROMPT.format(doc=truncate_for_extraction(text)), "job description")
    result = {**EMPTY_JD_STRUCTURE, **data}
    for key in ("requiredSkills", "preferredSkills", "responsibilitiesKeywords"):
        result[key] = as_list(result.get(key))
    return result


MAX_PROMPT_EXPERIENCES = 3
MAX_DESCRIPTION_CHARS = 300
UNKNOWN_RATING = "未知"


def _bullet_list(items) -> str:
    return "\n".join(f"- {item}" for item in items) if items else "无列出"


def _format_experience(candidate: CandidateRecord) -> str:
    entries = candidate.experience_years
    if isinstance(entries, str):
        return entries
    if not entries:
        return "无"

    blocks = []
    for i, exp in enumerate(entries[:MAX_PROMPT_EXPERIENCES], start=1):
        description = exp.description or "N/A"
        if len(description) > MAX_DESCRIPTION_CHARS:
            description = description[:MAX_DESCRIPTION_CHARS] + "..."
        blocks.append(
            f"--- 经历 {i} ---\n"
            f"公司: {exp.company or 'N/A'}\n"
            f"职位: {exp.title or 'N/A'}\n"
            f"时间: {exp.start_date or '?'} - {exp.end_date or '?'}\n"
            f"职责/描述: {description}"
        )
    return "\n".join(blocks)


def format_candidate(candidate: CandidateRecord) -> str:
    """Render a candidate record as the plain-text block the evaluation prompt expects."""
    education = candidate.education
    if isinstance(education, EducationDetails):
        education_lines = [
            f"- 学校: {education.school or 'N/A'}",
            f"- 专业: {education.major or 'N/A'}",
            f"- 学位: {education.degree or 'N/A'}",
        ]
    else:
        education_lines = [f"- {education or 'N/A'}"]

    years = candidate.total_years_experience
    return "\n".join([
        f"姓名: {candidate.name or UNKNOWN_RATING}",
        f"职位: {candidate.title or 'N/A'}",
        f"总工作年限 (估算): {years if years is not None else UNKNOWN_RATING} 年",
        "",
        "核心技术技能:",
        _bullet_list(candidate.skills),
        "",
        "过程/方法论技能:",
        _bullet_list(candidate.process_skills),
        "",
        "掌握的工具:",
        _bullet_list(candidate.tools),
        "",
        "软技能:",
        _bullet_list(candidate.soft_skills),
        "",
        "教育背景:",
        *education_lines,
        "",
        "工作/项目经历:",
        _format_experience(candidate),
        "",
        "经验总结:",
        candidate.experience_summary or "无",
    ])


def _failed_evaluation(summary: str, concern: str, focus: str) -> HREvaluation:
    return HREvaluation(
        overall_fit_score=0,
        summary=summary,
        potential_rating=UNKNOWN_RATING,
        startup_fit_rating=UNKNOWN_RATING,
        key_strengths=[],
        key_concerns=[concern],
        interview_focus_areas=[focus],
    )


def parse_evaluation(data: Dict[str, Any]) -> Optional[HREvaluation]:
    """Validate a raw report; None when a key is missing or has the wrong type."""
    score = data.get("overallFitScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    for key in ("summary", "potentialRating", "startupFitRating"):
        if not isinstance(data.get(key), str):
            return None
    for key in ("keyStrengths", "keyConcerns", "interviewFocusAreas"):
        if not isinstance(data.get(key), list):
            return None

    # half up, like the keyword score
    bounded = max(0, min(100, int(score + 0.5)))
    return HREvaluation(
        overall_fit_score=bounded,
        summary=data["summary"],
        potential_rating=data["potentialRating"],
        startup_fit_rating=data["startupFitRating"],
        key_strengths=[str(item) for item in data["keyStrengths"]],
        key_concerns=[str(item) for item in data["keyConcerns"]],
        interview_focus_areas=[str(item) for item in data["interviewFocusAreas"]],
    )


def evaluate_candidate(jd_text: str, candidate: CandidateRecord) -> HREvaluation:
    """Ask the model for a recruiter report on one candidate.

    Never raises for model trouble: an unreachable model or an invalid report
    yields a zero-score placeholder report that says what went wrong.
    """
    prompt = HR_EVALUATION_PROMPT.format(jd=truncate_for_extraction(jd_text), candidate=format_candidate(candidate))
    try:
        data = _generate_json(prompt, "candidate evaluation")
    except ServiceError as e:
        logger.error(f"Evaluation of {candidate.name} failed: {e.message}")
        return _failed_evaluation(f"AI评估失败: {e.message}", "AI评估API调用失败", "检查API错误日志")

    evaluation = parse_evaluation(data)
    if evaluation is None:
        logger.warning(f"Evaluation of {candidate.name} is missing fields or has wrong types: {data}")
        return _failed_evaluation("AI评估失败", "AI评估返回无效", "检查AI评估失败原因")

    logger.info(f"Evaluated {candidate.name}: fit score {evaluation.overall_fit_score}")
    return evaluation
