import json
import re
from typing import Any, List, Optional

import requests

from resume_matcher.utils import settings

_LIST_SEPARATORS = re.compile(r"[,;，；]")


def ollama_generate(prompt: str, model: str = None, temperature: float = 0.1, json_mode: bool = True) -> str:
    model = model or settings.LLM_MODEL
    url = f"{settings.OLLAMA_BASE_URL}/api/generate"
    payload = {
        "model": model,
        "prompt": prompt,
        "options": {"temperature": temperature},
        "stream": False  # important
    }
    if json_mode:
        payload["format"] = "json"
    resp = requests.post(url, json=payload, timeout=settings.LLM_TIMEOUT)
    resp.raise_for_status()
    return resp.json().get("response", "") or ""


def safe_json(s: str, fallback: Optional[dict]):
    try:
        # heuristics to find JSON inside
        start = s.find("{")
        end = s.rfind("}")
        if start >= 0 and end >= 0:
            return json.loads(s[start:end+1])
        return fallback
    except (ValueError, TypeError):
        return fallback


def as_text(x: Any) -> str:
    if x is None:
        return ""
    if isinstance(x, list):
        # join list of sentences or tokens into one paragraph
        return " ".join([str(t).strip() for t in x if str(t).strip()])
    return str(x).strip()


def as_list(x: Any) -> List[str]:
    """Coerce a comma-joined string or a sequence into a list of trimmed strings."""
    if x is None:
        return []
    if isinstance(x, str):
        parts = [p.strip() for p in _LIST_SEPARATORS.split(x)]
        return [p for p in parts if p]
    if isinstance(x, (list, tuple)):
        return [str(t).strip() for t in x if t is not None and str(t).strip()]
    return []


def unique_ci(items: List[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping the first spelling seen."""
    seen = set()
    out = []
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out
