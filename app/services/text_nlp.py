"""Small dependency-free text helpers for intent detection + keyword extraction.

Not an ML model: lowercase / punctuation stripping, whitespace tokenization,
stop-word filtering and a Jaccard overlap score. All functions are pure.
"""
from __future__ import annotations
from typing import Iterable, List
import re

from app.domain import chatbot_schema as schema

PUNCT_RE = re.compile(r"[\u200c\u200f\u202a-\u202e\u060c\u061b\u061f!\"#$%&'()*+,\-./:;<=>?@\[\]\\^_`{|}~]")
SPACE_RE = re.compile(r"\s+")
NUMERIC_RE = re.compile(r"[0-9]+")  # ASCII 숫자만 (۲۰۴ 같은 페르시아 숫자는 유지)

DEFAULT_MAX_KEYWORDS = 6


def normalize_text(text: str) -> str:
    lowered = (text or "").lower()
    return SPACE_RE.sub(" ", PUNCT_RE.sub(" ", lowered)).strip()


def tokenize(text: str) -> List[str]:
    norm = normalize_text(text)
    if not norm:
        return []
    return [t for t in norm.split(" ") if t]


def is_keyword_candidate(token: str) -> bool:
    if len(token) < 2:
        return False
    if token in schema.STOPWORDS:
        return False
    if NUMERIC_RE.fullmatch(token):
        return False
    return True


def extract_keywords(text: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> List[str]:
    """Return up to ``max_keywords`` distinct non-stopword tokens in first-occurrence order."""
    if max_keywords < 1:
        raise ValueError("max_keywords must be >= 1")
    out: List[str] = []
    seen = set()
    for t in tokenize(text):
        if not is_keyword_candidate(t) or t in seen:
            continue
        seen.add(t)
        out.append(t)
        if len(out) >= max_keywords:
            break
    return out


def token_overlap_score(a_tokens: Iterable[str], b_tokens: Iterable[str]) -> float:
    """Jaccard similarity of the two token sets (0 when either side is empty)."""
    a = set(a_tokens)
    b = set(b_tokens)
    if not a or not b:
        return 0.0
    inter = len(a & b)
    return inter / len(a | b)


def contains_any(normalized: str, phrases: Iterable[str]) -> bool:
    """Substring containment against phrases normalized the same way as the message."""
    for p in phrases:
        np_ = normalize_text(p)
        if np_ and np_ in normalized:
            return True
    return False
