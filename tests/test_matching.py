import pytest

from resume_matcher.helpers.vocabulary import JD_SENTINEL_KEYWORD
from resume_matcher.models.models import CandidateRecord
from resume_matcher.services.matching import (
    analysis_for,
    extract_job_requirements,
    match,
    skill_score,
    split_skills,
)
from resume_matcher.utils.exceptions import InputError

REACT_PYTHON_JD = "We need a React and Python developer with 3 years experience"
FIVE_SKILL_JD = "岗位要求：熟悉 Python, Docker, Redis, Linux, Git"


class TestJobRequirements:
    """Test cases for JD keyword extraction"""

    def test_keywords_in_vocabulary_order(self):
        reqs = extract_job_requirements(REACT_PYTHON_JD)
        assert reqs.skills == ["React", "Python"]
        assert reqs.job_title is None

    def test_title_detected(self):
        reqs = extract_job_requirements("招聘后端开发工程师，熟悉Java")
        assert reqs.job_title == "后端开发工程师"
        assert "Java" in reqs.skills

    def test_sentinel_when_no_keywords(self):
        reqs = extract_job_requirements("我们需要一位沟通能力强的同事")
        assert reqs.skills == [JD_SENTINEL_KEYWORD]


class TestScoring:
    """Test cases for score arithmetic and analysis text"""

    @pytest.mark.parametrize("matched,total,expected", [
        (1, 2, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (0, 5, 0),
        (3, 2, 100),
        (1, 0, 0),
    ])
    def test_skill_score(self, matched, total, expected):
        assert skill_score(matched, total) == expected

    def test_bidirectional_containment(self):
        matched, unmatched = split_skills(["MySQL", "Vue"], ["SQL"])
        assert matched == ["MySQL"]
        assert unmatched == ["Vue"]

        matched, _ = split_skills(["SQL"], ["MySQL"])
        assert matched == ["SQL"]

    def test_analysis_bands(self):
        assert analysis_for("张三", 80, ["React", "Vue"]) == "张三与职位高度匹配，具备所需技能：React、Vue"
        assert analysis_for("张三", 50, ["React"]) == "张三与职位部分匹配，熟悉React，但缺少部分关键技能"
        assert analysis_for("张三", 49, []) == "张三与职位匹配度较低，可能需要额外培训"
        assert analysis_for(None, 10, []).startswith("候选人")


class TestMatch:
    """Test cases for ranking candidates against a JD"""

    def test_react_python_scenario(self):
        candidate = CandidateRecord(name="张三", skills=["React", "Vue"])
        outcome = match(REACT_PYTHON_JD, [candidate])

        assert outcome.job_requirements.skills == ["React", "Python"]
        result = outcome.matches[0]
        assert result.match_score == 50
        assert result.matched_skills == ["React"]
        assert result.missing_skills == ["Vue"]
        assert result.analysis == "张三与职位部分匹配，熟悉React，但缺少部分关键技能"
        assert result.name == "张三"

    def test_ties_keep_input_order(self):
        pool = [
            CandidateRecord(name="B", skills=["Redis", "Linux", "Git"]),
            CandidateRecord(name="C", skills=["Python"]),
            CandidateRecord(name="A", skills=["Python", "Docker", "Git"]),
        ]
        outcome = match(FIVE_SKILL_JD, pool)

        assert [m.name for m in outcome.matches] == ["B", "A", "C"]
        assert [m.match_score for m in outcome.matches] == [60, 60, 20]

    def test_sentinel_jd_scores_zero(self):
        pool = [
            CandidateRecord(name="张三", skills=["Python"]),
            CandidateRecord(name="李四", skills=["专业技能", "沟通技能"]),
            CandidateRecord(name="王五", skills=["技能"]),
        ]
        outcome = match("我们需要一位沟通能力强的同事", pool)

        assert [m.match_score for m in outcome.matches] == [0, 0, 0]
        assert all(m.matched_skills == [] for m in outcome.matches)
        assert outcome.matches[1].missing_skills == ["专业技能", "沟通技能"]
        assert outcome.matches[0].analysis == "张三与职位匹配度较低，可能需要额外培训"

    def test_rerank_previous_results(self):
        first = match(REACT_PYTHON_JD, [CandidateRecord(name="张三", skills=["React", "Docker"])])

        second = match("熟悉Docker", first.matches)

        result = second.matches[0]
        assert result.match_score == 100
        assert result.matched_skills == ["Docker"]
        assert result.missing_skills == ["React"]
        assert result.name == "张三"

    def test_candidate_without_skills(self):
        outcome = match(REACT_PYTHON_JD, [CandidateRecord(name="王五")])
        assert outcome.matches[0].match_score == 0
        assert outcome.matches[0].missing_skills == []

    def test_accepts_plain_dicts(self):
        outcome = match(REACT_PYTHON_JD, [{"name": "李四", "skills": "React, Python"}])
        assert outcome.matches[0].match_score == 100
        assert outcome.matches[0].analysis == "李四与职位高度匹配，具备所需技能：React、Python"

    def test_idempotent(self, candidate_pool):
        first = match(REACT_PYTHON_JD, candidate_pool)
        second = match(REACT_PYTHON_JD, candidate_pool)
        assert first.model_dump() == second.model_dump()

    def test_inputs_not_mutated(self, candidate_pool):
        before = [c.model_dump() for c in candidate_pool]
        match(REACT_PYTHON_JD, candidate_pool)
        assert [c.model_dump() for c in candidate_pool] == before

    def test_empty_jd_rejected(self, candidate_pool):
        with pytest.raises(InputError) as exc_info:
            match("   ", candidate_pool)
        assert exc_info.value.details["field"] == "job_description"

    def test_empty_pool_rejected(self):
        with pytest.raises(InputError):
            match(REACT_PYTHON_JD, [])
