"""
Bulk import of a resume folder, optionally ranked against one JD file.

    python -m resume_matcher.services.batch ./data/cvs --jd ./data/jd.txt
"""
import argparse
import asyncio
from pathlib import Path
from typing import List, Optional, TypedDict

from langgraph.graph import StateGraph, END

from resume_matcher.helpers.parsing import extract_text, load_folder
from resume_matcher.models.models import CandidateRecord, MatchOutcome, RawDocument
from resume_matcher.services.pipeline import default_resume_extractor, extract_and_assemble, match_against_pool
from resume_matcher.services.reports import write_reports
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import InputError, PersistenceError, ResumeMatcherError
from resume_matcher.utils.logging_config import configure_for_environment, get_logger

logger = get_logger(__name__)


class BatchState(TypedDict, total=False):
    cv_dir: str
    jd_name: Optional[str]
    jd_text: Optional[str]
    persist: bool
    docs: List[RawDocument]
    records: List[CandidateRecord]
    saved_ids: List[str]
    outcome: Optional[MatchOutcome]
    report_paths: List[str]


def node_load(state: BatchState):
    cv_dir = state["cv_dir"]
    if not Path(cv_dir).is_dir():
        raise InputError(f"Folder not found: {cv_dir}. Update CV_DIR in .env", field="cv_dir", value=cv_dir)
    docs = load_folder(cv_dir)
    logger.info(f"Loaded {len(docs)} documents from {cv_dir}")
    return {"docs": docs}


def node_extract(state: BatchState):
    extractor = default_resume_extractor()
    records = []
    for d in state.get("docs", []):
        external = None
        if extractor is not None:
            try:
                external = extractor(d.text)
            except ResumeMatcherError as e:
                logger.warning(f"Structured extraction failed for {d.source_name}, using heuristics: {e.message}")
        records.append(extract_and_assemble(d.text, d.source_name, external))
    return {"records": records}


async def node_persist(state: BatchState):
    if not state.get("persist"):
        return {"saved_ids": []}

    from resume_matcher.services.db import ResumeStore
    store = ResumeStore()
    saved = []
    for record in state.get("records", []):
        try:
            saved.append(await store.save(record))
        except PersistenceError as e:
            logger.error(f"Could not save {record.source}: {e.message}")
    return {"saved_ids": saved}


def node_match(state: BatchState):
    jd_text = state.get("jd_text")
    records = state.get("records", [])
    if not jd_text or not records:
        return {"outcome": None}
    return {"outcome": match_against_pool(jd_text, records)}


def node_report(state: BatchState):
    outcome = state.get("outcome")
    if outcome is None:
        return {"report_paths": []}
    csv_path, md_path = write_reports(state.get("jd_name") or "jd", outcome)
    logger.info(f"Reports written: {csv_path}, {md_path}")
    return {"report_paths": [csv_path, md_path]}


def build_graph():
    g = StateGraph(BatchState)
    g.add_node("load", node_load)
    g.add_node("extract", node_extract)
    g.add_node("persist", node_persist)
    g.add_node("match", node_match)
    g.add_node("report", node_report)
    g.set_entry_point("load")
    g.add_edge("load", "extract")
    g.add_edge("extract", "persist")
    g.add_edge("persist", "match")
    g.add_edge("match", "report")
    g.add_edge("report", END)
    return g.compile()


async def run_batch(cv_dir: str, jd_path: Optional[str] = None, persist: bool = True) -> BatchState:
    state: BatchState = {"cv_dir": cv_dir, "persist": persist}
    if jd_path:
        p = Path(jd_path)
        state["jd_name"] = p.stem
        state["jd_text"] = extract_text(p.read_bytes(), filename=p.name)
    return await build_graph().ainvoke(state)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a folder of resumes and optionally rank them against a JD")
    parser.add_argument("cv_dir", nargs="?", default=settings.CV_DIR)
    parser.add_argument("--jd", dest="jd_path", help="job description file (.txt, .pdf, .docx)")
    parser.add_argument("--no-save", dest="persist", action="store_false", help="skip writing to MongoDB")
    args = parser.parse_args(argv)

    configure_for_environment()
    final = asyncio.run(run_batch(args.cv_dir, args.jd_path, args.persist))
    print(f"Imported {len(final.get('records', []))} resumes, saved {len(final.get('saved_ids', []))}")
    for path in final.get("report_paths", []):
        print(f"Report: {path}")


if __name__ == "__main__":
    main()
