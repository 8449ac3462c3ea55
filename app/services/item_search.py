"""Keyword-driven item search for the chatbot.

Pipeline:
  keywords (cap 8) -> desired type (opposite of what the user describes)
  -> tag resolution (cap 10) -> candidate fetch (cap 50, most recent first)
  -> in-memory scoring -> sort (score desc, id desc) -> top N

Scoring heuristic, per keyword (additive, not normalized):
    +2 title contains keyword
    +1 description contains keyword
    +1 any tag name contains keyword

The sum is unbounded, so items with long descriptions / many hits float up.
Store failures (ItemStoreError) propagate to the caller untouched.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.domain import chatbot_schema as schema
from app.services import text_nlp
from app.services.item_store import BaseItemStore, CandidateFilter, SearchCandidateItem
from app.scripts.logging_config import get_logger, log_search_summary
from config import settings

logger = get_logger("chatbot.search")

SEARCH_MAX_KEYWORDS: int = getattr(settings, "CHATBOT_SEARCH_MAX_KEYWORDS", 8)
TAG_LOOKUP_LIMIT: int = getattr(settings, "CHATBOT_TAG_LOOKUP_LIMIT", 10)
CANDIDATE_LIMIT: int = getattr(settings, "CHATBOT_CANDIDATE_LIMIT", 50)
SNIPPET_MAX_CHARS: int = getattr(settings, "CHATBOT_SNIPPET_MAX_CHARS", 140)
DEFAULT_MAX_RESULTS = 5

TITLE_WEIGHT = 2
DESCRIPTION_WEIGHT = 1
TAG_WEIGHT = 1


@dataclass(frozen=True)
class ScoredSuggestion:
    id: int
    title: str
    type: str
    image_url: Optional[str]
    description_snippet: str
    score: int
    link: str


@dataclass(frozen=True)
class SearchOutcome:
    keywords: Tuple[str, ...]
    desired_type: Optional[str] = None
    results: Tuple[ScoredSuggestion, ...] = ()
    tag_ids: Tuple[int, ...] = ()


def guess_desired_type(message: str) -> Optional[str]:
    """User LOST something -> show FOUND posts; user FOUND something -> show LOST posts."""
    m = text_nlp.normalize_text(message)
    if text_nlp.contains_any(m, schema.all_phrases(schema.LOST_SIDE_HINTS)):
        return schema.ITEM_TYPE_FOUND
    if text_nlp.contains_any(m, schema.all_phrases(schema.FOUND_SIDE_HINTS)):
        return schema.ITEM_TYPE_LOST
    return None


def make_snippet(text: str, max_len: int = SNIPPET_MAX_CHARS) -> str:
    t = text_nlp.SPACE_RE.sub(" ", text or "").strip()
    if len(t) <= max_len:
        return t
    return t[: max_len - len(schema.SNIPPET_ELLIPSIS)] + schema.SNIPPET_ELLIPSIS


def item_link(item_id: int) -> str:
    return schema.ITEM_LINK_TEMPLATE.format(id=item_id)


def score_candidate(candidate: SearchCandidateItem, keywords: List[str]) -> int:
    title = text_nlp.normalize_text(candidate.title)
    desc = text_nlp.normalize_text(candidate.description)
    tags = [text_nlp.normalize_text(t) for t in candidate.tag_names]
    score = 0
    for raw in keywords:
        k = text_nlp.normalize_text(raw)
        if not k:
            continue
        if k in title:
            score += TITLE_WEIGHT
        if k in desc:
            score += DESCRIPTION_WEIGHT
        if any(k in tg for tg in tags):
            score += TAG_WEIGHT
    return score


def rank_candidates(candidates: List[SearchCandidateItem], keywords: List[str],
                    max_results: int = DEFAULT_MAX_RESULTS) -> List[ScoredSuggestion]:
    scored = [
        ScoredSuggestion(
            id=c.id,
            title=c.title,
            type=c.type,
            image_url=c.first_image_url,
            description_snippet=make_snippet(c.description),
            score=score_candidate(c, keywords),
            link=item_link(c.id),
        )
        for c in candidates
    ]
    # 동점이면 id 가 큰(최근 등록) 항목 우선
    scored.sort(key=lambda s: (s.score, s.id), reverse=True)
    return scored[:max_results]


def search_items_from_message(message: str, store: BaseItemStore,
                              max_results: int = DEFAULT_MAX_RESULTS) -> SearchOutcome:
    keywords = text_nlp.extract_keywords(message, SEARCH_MAX_KEYWORDS)
    desired_type = guess_desired_type(message)

    if not keywords:
        logger.info("search skipped: no keywords desired_type=%s", desired_type)
        return SearchOutcome(keywords=(), desired_type=desired_type)

    tag_matches = store.find_tags_by_name_substring(keywords, limit=TAG_LOOKUP_LIMIT)
    tag_ids = tuple(t.id for t in tag_matches)

    candidates = store.find_item_candidates(
        CandidateFilter(keywords_any=tuple(keywords), tag_ids_any=tag_ids, type=desired_type),
        limit=CANDIDATE_LIMIT,
    )
    results = rank_candidates(candidates, keywords, max_results=max_results)

    log_search_summary(keywords, desired_type, list(tag_ids), len(candidates), [r.id for r in results])
    return SearchOutcome(
        keywords=tuple(keywords),
        desired_type=desired_type,
        results=tuple(results),
        tag_ids=tag_ids,
    )
