"""
Heuristic field extraction for resumes and job descriptions.

Every function here is total: a field that cannot be found comes back as a
sentinel (NOT_DETECTED, None or an empty list) instead of raising.
"""
import re
from typing import List, Optional

from resume_matcher.helpers.vocabulary import (
    DEFAULT_TITLE,
    EDUCATION_LEVELS,
    NAME_HEADER_WORDS,
    NOT_DETECTED,
    SCHOOL_SUFFIXES,
    SKILL_KEYWORDS,
    TITLE_KEYWORDS,
)

NAME_LABEL_RE = re.compile(r"(姓\s*名|名\s*字)\s*[：:]\s*([^\n\r,，.。、]+)")
PHONE_RE = re.compile(r"([0-9]{11})|([0-9]{3}[-\s]?[0-9]{4}[-\s]?[0-9]{4})")
EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
EXPERIENCE_RE = re.compile(r"([0-9]+)\s*年.*经验")
SCHOOL_RES = tuple(
    re.compile(r"([^\s,，.。、]{2,15}" + suffix + ")") for suffix in SCHOOL_SUFFIXES
)
FILENAME_NAME_RES = (
    re.compile(r"^(.+?)的?简历"),
    re.compile(r"简历[-_\s]+(.+)"),
)

NAME_SCAN_LINES = 5
NAME_MAX_CHARS = 10


def extract_name(text: str) -> str:
    text = text or ""
    m = NAME_LABEL_RE.search(text)
    if m and m.group(2).strip():
        return m.group(2).strip()

    # fall back to a short line near the top of the document
    for line in text.split("\n")[:NAME_SCAN_LINES]:
        line = line.strip()
        if line and len(line) < NAME_MAX_CHARS and not any(w in line for w in NAME_HEADER_WORDS):
            return line

    return NOT_DETECTED


def extract_phone(text: str) -> Optional[str]:
    m = PHONE_RE.search(text or "")
    return m.group(0) if m else None


def extract_email(text: str) -> Optional[str]:
    m = EMAIL_RE.search(text or "")
    return m.group(0) if m else None


def extract_contact(text: str) -> str:
    parts = []
    phone = extract_phone(text)
    if phone:
        parts.append(f"电话: {phone}")
    email = extract_email(text)
    if email:
        parts.append(f"邮箱: {email}")
    return ", ".join(parts) or NOT_DETECTED


def find_title(text: str) -> Optional[str]:
    """First title from the vocabulary that occurs verbatim in the text."""
    text = text or ""
    for title in TITLE_KEYWORDS:
        if title in text:
            return title
    return None


def extract_title(text: str) -> str:
    return find_title(text) or DEFAULT_TITLE


def extract_skills(text: str) -> List[str]:
    lowered = (text or "").lower()
    return [skill for skill in SKILL_KEYWORDS if skill.lower() in lowered]


def extract_experience(text: str) -> str:
    m = EXPERIENCE_RE.search(text or "")
    if m:
        return f"{m.group(1)}年"
    return NOT_DETECTED


def extract_education(text: str) -> str:
    text = text or ""
    for level in EDUCATION_LEVELS:
        if level not in text:
            continue
        for school_re in SCHOOL_RES:
            m = school_re.search(text)
            if m:
                return f"{level} - {m.group(1)}"
        return level
    return NOT_DETECTED


def name_from_filename(filename: str) -> str:
    """Derive a candidate name from names like '张三的简历.pdf' or '简历-李四.docx'."""
    stem = re.sub(r"\.[^/.]+$", "", filename or "")
    for pattern in FILENAME_NAME_RES:
        m = pattern.search(stem)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return stem.strip()
