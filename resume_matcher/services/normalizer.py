from typing import Optional

from resume_matcher.models.models import NormalizedText

MIN_USABLE_CHARS = 50
EXTRACTION_MAX_CHARS = 15000
CLASSIFICATION_MAX_CHARS = 4000


def normalize(raw_text: Optional[str]) -> NormalizedText:
    """Trim raw text and flag whether it is long enough to extract from.

    Empty input is a valid, unusable result rather than an error.
    """
    text = (raw_text or "").strip()
    return NormalizedText(usable=len(text) >= MIN_USABLE_CHARS, text=text)


def truncate_for_extraction(text: str) -> str:
    return (text or "")[:EXTRACTION_MAX_CHARS]


def truncate_for_classification(text: str) -> str:
    return (text or "")[:CLASSIFICATION_MAX_CHARS]
