from typing import Iterable, List, Sequence, Tuple, Union

from resume_matcher.helpers.vocabulary import JD_SENTINEL_KEYWORD
from resume_matcher.models.models import CandidateRecord, JobRequirements, MatchOutcome, MatchResult
from resume_matcher.services.extraction import extract_skills, find_title
from resume_matcher.utils.exceptions import InputError
from resume_matcher.utils.logging_config import get_logger

logger = get_logger(__name__)

HIGH_MATCH_MIN = 80
PARTIAL_MATCH_MIN = 50
SKILL_SEPARATOR = "、"


def extract_job_requirements(jd_text: str) -> JobRequirements:
    keywords = extract_skills(jd_text)
    if not keywords:
        # keeps the score denominator non-zero; nothing ever matches it
        keywords = [JD_SENTINEL_KEYWORD]
    return JobRequirements(job_title=find_title(jd_text), skills=keywords)


def has_no_keywords(requirements: JobRequirements) -> bool:
    return requirements.skills == [JD_SENTINEL_KEYWORD]


def split_skills(candidate_skills: Iterable[str], jd_keywords: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Partition candidate skills into (matched, unmatched) by bidirectional containment."""
    lowered_keywords = [k.lower() for k in jd_keywords]
    matched, unmatched = [], []
    for skill in candidate_skills:
        s = skill.lower()
        if any(k in s or s in k for k in lowered_keywords):
            matched.append(skill)
        else:
            unmatched.append(skill)
    return matched, unmatched


def skill_score(matched_count: int, keyword_count: int) -> int:
    if keyword_count <= 0:
        return 0
    # round half up, as 100 * matched / keywords
    score = (200 * matched_count + keyword_count) // (2 * keyword_count)
    return max(0, min(100, score))


def analysis_for(name: str, score: int, matched_skills: List[str]) -> str:
    who = name or "候选人"
    skills = SKILL_SEPARATOR.join(matched_skills)
    if score >= HIGH_MATCH_MIN:
        return f"{who}与职位高度匹配，具备所需技能：{skills}"
    if score >= PARTIAL_MATCH_MIN:
        return f"{who}与职位部分匹配，熟悉{skills}，但缺少部分关键技能"
    return f"{who}与职位匹配度较低，可能需要额外培训"


def score_candidate(candidate: CandidateRecord, requirements: JobRequirements) -> MatchResult:
    if has_no_keywords(requirements):
        matched, missing = [], list(candidate.skills)
    else:
        matched, missing = split_skills(candidate.skills, requirements.skills)
    score = skill_score(len(matched), len(requirements.skills))
    # a MatchResult from an earlier ranking carries its old score fields
    base = candidate.model_dump(include=set(CandidateRecord.model_fields))
    return MatchResult(
        **base,
        match_score=score,
        matched_skills=matched,
        missing_skills=missing,
        analysis=analysis_for(candidate.name, score, matched),
    )


def match(
    jd_text: str,
    candidates: Sequence[Union[CandidateRecord, dict]],
) -> MatchOutcome:
    """Score every candidate against the JD and rank them, best first.

    Candidates with equal scores keep their input order.
    """
    if not jd_text or not jd_text.strip():
        raise InputError("Job description text cannot be empty", field="job_description")
    if not candidates:
        raise InputError("Candidate pool cannot be empty", field="candidates")

    requirements = extract_job_requirements(jd_text)
    logger.debug(f"JD keywords: {requirements.skills}, title: {requirements.job_title}")

    results = []
    for candidate in candidates:
        if not isinstance(candidate, CandidateRecord):
            candidate = CandidateRecord.model_validate(candidate)
        results.append(score_candidate(candidate, requirements))

    ranked = sorted(results, key=lambda r: r.match_score, reverse=True)
    logger.info(
        f"Matched {len(ranked)} candidates against {len(requirements.skills)} JD keywords; "
        f"top score {ranked[0].match_score}"
    )
    return MatchOutcome(matches=ranked, job_requirements=requirements)
