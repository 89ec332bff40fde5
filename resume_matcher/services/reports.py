import os
import re
from pathlib import Path
from typing import Tuple

import pandas as pd

from resume_matcher.models.models import MatchOutcome
from resume_matcher.utils import settings

REPORT_COLUMNS = [
    "rank", "name", "source", "title", "match_score",
    "matched_skills", "missing_skills", "analysis",
]


def _slug(name: str) -> str:
    return re.sub(r"[^\w.-]+", "_", name).strip("_") or "jd"


def outcome_frame(outcome: MatchOutcome) -> pd.DataFrame:
    data = [{
        "rank": i,
        "name": m.name,
        "source": m.source,
        "title": m.title,
        "match_score": m.match_score,
        "matched_skills": ", ".join(m.matched_skills),
        "missing_skills": ", ".join(m.missing_skills),
        "analysis": m.analysis,
    } for i, m in enumerate(outcome.matches, start=1)]
    return pd.DataFrame(data, columns=REPORT_COLUMNS)


def write_reports(jd_name: str, outcome: MatchOutcome, report_dir: str = None) -> Tuple[str, str]:
    """Write the ranked matches as CSV plus a Markdown top-10 summary."""
    report_dir = report_dir or settings.REPORT_DIR
    Path(report_dir).mkdir(parents=True, exist_ok=True)
    slug = _slug(jd_name)

    # matches are already ranked; keep that order
    df = outcome_frame(outcome)
    csv_path = os.path.join(report_dir, f"{slug}_report.csv")
    df.to_csv(csv_path, index=False, encoding="utf-8-sig")

    reqs = outcome.job_requirements
    md_lines = [f"# {jd_name}: Top Matches"]
    md_lines.append(f"**Job title**: {reqs.job_title or '未指定'}")
    md_lines.append(f"**JD keywords**: {', '.join(reqs.skills)}\n")

    if len(df):
        md_lines += [
            "| Rank | Name | Source | Score | Matched skills |",
            "|---:|---|---|---:|---|",
        ]
        for r in df.head(10).itertuples():
            md_lines.append(f"| {r.rank} | {r.name} | {r.source} | {r.match_score} | {r.matched_skills} |")
        md_lines.append("\n---\nAnalysis (top-5):")
        for r in df.head(5).itertuples():
            md_lines.append(f"- **{r.name}**: {r.analysis}")
    else:
        md_lines.append("> No candidates matched this JD.\n")

    md_path = os.path.join(report_dir, f"{slug}_top.md")
    Path(md_path).write_text("\n".join(md_lines), encoding="utf-8")
    return csv_path, md_path
