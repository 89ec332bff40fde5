import os

# must be set before resume_matcher.main configures logging
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest

from resume_matcher.models.models import CandidateRecord
from resume_matcher.utils.exceptions import PersistenceError

SAMPLE_RESUME = """张三
电话：13800138000
邮箱：zhangsan@example.com
求职意向：前端开发工程师
5年前端开发经验，熟悉JavaScript、React、Vue、HTML、CSS
教育背景：本科 北京大学 计算机科学
"""


class FakeResumeStore:
    """In-memory stand-in for ResumeStore"""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.saved = []

    async def save(self, record):
        self.saved.append(record)
        self.records.append(record)
        return f"rec-{len(self.saved)}"

    async def fetch_all(self):
        return list(self.records)


class FailingResumeStore:
    async def save(self, record):
        raise PersistenceError("Failed to save resume", operation="insert_one", collection="resumes")

    async def fetch_all(self):
        raise PersistenceError("Failed to fetch resumes", operation="find", collection="resumes")


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def fake_store():
    return FakeResumeStore()


@pytest.fixture
def failing_store():
    return FailingResumeStore()


@pytest.fixture
def candidate_pool():
    return [
        CandidateRecord(name="李四", skills=["Python", "Docker"], source="李四.pdf"),
        CandidateRecord(name="张三", skills=["React", "Vue"], source="张三的简历.pdf"),
    ]
