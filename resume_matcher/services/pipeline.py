"""
Sequences normalization, extraction, persistence and matching.

Nothing here keeps state between calls; collaborators (structured extractor,
resume store) are passed in per call.
"""
import asyncio
from typing import Any, Callable, Dict, Optional, Sequence, Union

from resume_matcher.helpers.vocabulary import MANUAL_SOURCE
from resume_matcher.models.models import (
    CandidateRecord,
    HREvaluation,
    IngestionResult,
    JobDescriptionResult,
    MatchOutcome,
    RawDocument,
)
from resume_matcher.services import llm
from resume_matcher.services.assembler import assemble
from resume_matcher.services.matching import extract_job_requirements, match
from resume_matcher.services.normalizer import normalize, truncate_for_classification
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import InputError, PersistenceError, ResumeMatcherError
from resume_matcher.utils.logging_config import get_logger, PerformanceMonitor

logger = get_logger(__name__)

StructuredExtractor = Callable[[str], Dict[str, Any]]
Evaluator = Callable[[str, CandidateRecord], HREvaluation]


def default_resume_extractor() -> Optional[StructuredExtractor]:
    return llm.extract_resume_structure if settings.USE_LLM_EXTRACTION else None


def default_jd_extractor() -> Optional[StructuredExtractor]:
    return llm.extract_job_structure if settings.USE_LLM_EXTRACTION else None


def default_evaluator() -> Optional[Evaluator]:
    return llm.evaluate_candidate if settings.USE_LLM_EXTRACTION else None


def extract_and_assemble(
    raw_text: str,
    source_name: str = MANUAL_SOURCE,
    external_result: Optional[Dict[str, Any]] = None,
) -> CandidateRecord:
    normalized = normalize(raw_text)
    if not normalized.usable:
        logger.warning(f"Text from {source_name} is under the usable length; extraction is low confidence")
    return assemble(normalized.text, source_name, external_result)


async def _try_structured(extractor: StructuredExtractor, text: str, source_name: str) -> Optional[Dict[str, Any]]:
    try:
        return await asyncio.to_thread(extractor, text)
    except ResumeMatcherError as e:
        logger.warning(f"Structured extraction failed for {source_name}, using heuristics: {e.message}")
        return None


async def ingest(
    document: RawDocument,
    extractor: Optional[StructuredExtractor] = None,
    store=None,
    name_override: Optional[str] = None,
) -> IngestionResult:
    """Turn one raw document into a candidate record and try to persist it.

    A persistence failure is reported on the result, never raised.
    """
    normalized = normalize(document.text)
    if not normalized.text:
        raise InputError("Resume text is empty", field="text")

    with PerformanceMonitor(f"ingest {document.source_name}", logger):
        external = None
        if extractor is not None and normalized.usable:
            external = await _try_structured(extractor, normalized.text, document.source_name)

        record = extract_and_assemble(normalized.text, document.source_name, external)
        if name_override and name_override.strip():
            record = record.model_copy(update={"name": name_override.strip()})

        result = IngestionResult(record=record, usable=normalized.usable, structured=external is not None)
        if store is None:
            return result

        try:
            result.record_id = await store.save(record)
            result.persisted = True
        except PersistenceError as e:
            logger.error(f"Resume from {document.source_name} parsed but not saved: {e.message}")
            result.persistence_error = e.message
        return result


def match_against_pool(jd_text: str, pool: Sequence[Union[CandidateRecord, dict]]) -> MatchOutcome:
    normalized = normalize(jd_text)
    return match(normalized.text, pool)


async def evaluate_matches(jd_text: str, outcome: MatchOutcome, evaluator: Optional[Evaluator] = None) -> MatchOutcome:
    """Attach a recruiter report to each match. Scores and order are left as they are."""
    if evaluator is None:
        return outcome

    text = normalize(jd_text).text
    with PerformanceMonitor(f"evaluate {len(outcome.matches)} candidates", logger):
        reports = await asyncio.gather(
            *(asyncio.to_thread(evaluator, text, result) for result in outcome.matches)
        )
    matches = [result.model_copy(update={"evaluation": report}) for result, report in zip(outcome.matches, reports)]
    return outcome.model_copy(update={"matches": matches})


async def match_request(jd_text: str, store, evaluator: Optional[Evaluator] = None) -> MatchOutcome:
    """Re-fetch the candidate pool from `store` and match it against the JD."""
    if not normalize(jd_text).text:
        raise InputError("Job description text cannot be empty", field="job_description")
    pool = await store.fetch_all()
    return await evaluate_matches(jd_text, match_against_pool(jd_text, pool), evaluator)


async def parse_job_description(jd_text: str, extractor: Optional[StructuredExtractor] = None) -> JobDescriptionResult:
    normalized = normalize(jd_text)
    if not normalized.text:
        raise InputError("Job description text cannot be empty", field="text")

    structured = None
    if extractor is not None:
        structured = await _try_structured(extractor, normalized.text, "job description")

    return JobDescriptionResult(
        job_requirements=extract_job_requirements(normalized.text),
        structured=structured,
        text_preview=truncate_for_classification(normalized.text),
        usable=normalized.usable,
    )
