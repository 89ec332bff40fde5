import csv
import pytest

from resume_matcher.models.models import CandidateRecord, JobRequirements, MatchOutcome
from resume_matcher.services import batch
from resume_matcher.services.matching import match
from resume_matcher.services.reports import REPORT_COLUMNS, outcome_frame, write_reports
from resume_matcher.utils import settings
from resume_matcher.utils.exceptions import InputError

JD = "招聘前端开发工程师，熟悉React与Vue"


@pytest.fixture
def outcome():
    pool = [
        CandidateRecord(name="李四", skills=["Python"], source="李四.pdf"),
        CandidateRecord(name="张三", skills=["React", "Vue"], source="张三的简历.pdf"),
    ]
    return match(JD, pool)


class TestReports:
    """Test cases for CSV and Markdown match reports"""

    def test_outcome_frame(self, outcome):
        df = outcome_frame(outcome)
        assert list(df.columns) == REPORT_COLUMNS
        assert list(df["name"]) == ["张三", "李四"]
        assert list(df["rank"]) == [1, 2]

    def test_write_reports(self, outcome, tmp_path):
        csv_path, md_path = write_reports("前端 JD", outcome, report_dir=str(tmp_path))

        with open(csv_path, encoding="utf-8-sig") as f:
            rows = list(csv.DictReader(f))
        assert rows[0]["name"] == "张三"
        assert rows[0]["matched_skills"] == "React, Vue"

        md = open(md_path, encoding="utf-8").read()
        assert md.startswith("# 前端 JD: Top Matches")
        assert "| 1 | 张三 | 张三的简历.pdf |" in md
        assert "**Job title**: 前端开发工程师" in md

    def test_empty_outcome(self, tmp_path):
        empty = MatchOutcome(matches=[], job_requirements=JobRequirements(skills=["技能"]))
        _, md_path = write_reports("jd", empty, report_dir=str(tmp_path))
        assert "No candidates matched" in open(md_path, encoding="utf-8").read()


class TestBatch:
    """Test cases for the folder import graph"""

    @pytest.mark.asyncio
    async def test_run_batch_without_saving(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "USE_LLM_EXTRACTION", False)
        monkeypatch.setattr(settings, "REPORT_DIR", str(tmp_path / "reports"))

        cv_dir = tmp_path / "cvs"
        cv_dir.mkdir()
        (cv_dir / "张三的简历.txt").write_text("个人简历\n熟悉React和Vue，拥有5年前端开发经验的工程师", encoding="utf-8")
        (cv_dir / "李四.txt").write_text("李四\n熟悉Python", encoding="utf-8")
        jd_path = tmp_path / "frontend.txt"
        jd_path.write_text(JD, encoding="utf-8")

        final = await batch.run_batch(str(cv_dir), str(jd_path), persist=False)

        assert len(final["records"]) == 2
        assert final["saved_ids"] == []
        assert final["outcome"].matches[0].name == "张三"
        assert final["outcome"].matches[0].match_score == 100
        assert len(final["report_paths"]) == 2

    @pytest.mark.asyncio
    async def test_run_batch_without_jd(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "USE_LLM_EXTRACTION", False)
        (tmp_path / "李四.txt").write_text("李四\n熟悉Python", encoding="utf-8")

        final = await batch.run_batch(str(tmp_path), persist=False)

        assert [r.name for r in final["records"]] == ["李四"]
        assert final["outcome"] is None
        assert final["report_paths"] == []

    def test_missing_folder(self, tmp_path):
        with pytest.raises(InputError):
            batch.node_load({"cv_dir": str(tmp_path / "nope")})
