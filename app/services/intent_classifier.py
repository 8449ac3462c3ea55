"""Rule + token-overlap intent classifier.

Decision order:
  1. too-short message -> never a search
  2. feature/help wording -> not a search (wins over item words)
  3. lost/found wording, item nouns, or >=3 keywords -> search_items
  4. otherwise best Jaccard match against the pre-tokenized corpus, else fallback

The corpus is tokenized once in ``IntentCorpus.build`` and shared read-only
between requests.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from app.domain import chatbot_schema as schema
from app.domain import intents as intent_defs
from app.domain.intents import Intent
from app.services import text_nlp
from app.scripts.logging_config import get_logger
from config import settings

logger = get_logger("chatbot.classifier")

INTENT_MIN_SCORE: float = getattr(settings, "CHATBOT_INTENT_MIN_SCORE", 0.2)
SEARCH_MIN_LENGTH: int = getattr(settings, "CHATBOT_SEARCH_MIN_LENGTH", 6)
HEURISTIC_MIN_KEYWORDS: int = getattr(settings, "CHATBOT_HEURISTIC_MIN_KEYWORDS", 3)
HEURISTIC_MAX_KEYWORDS = 8


@dataclass(frozen=True)
class TrainedExample:
    intent: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class IntentCorpus:
    intents: Tuple[Intent, ...]
    examples: Tuple[TrainedExample, ...]

    @classmethod
    def build(cls, intents: Tuple[Intent, ...] = intent_defs.INTENTS) -> "IntentCorpus":
        """'Training' step: tokenize every example exactly once."""
        names = [i.name for i in intents]
        if len(names) != len(set(names)):
            raise ValueError("duplicate_intent_name")
        if intent_defs.INTENT_FALLBACK not in names:
            raise ValueError("fallback_intent_missing")
        examples = []
        for intent in intents:
            for ex in intent.examples:
                tokens = tuple(text_nlp.tokenize(ex))
                if tokens:
                    examples.append(TrainedExample(intent=intent.name, tokens=tokens))
        logger.info("intent corpus built intents=%d examples=%d", len(intents), len(examples))
        return cls(intents=tuple(intents), examples=tuple(examples))

    def get(self, name: str) -> Intent:
        found = intent_defs.find_intent(self.intents, name)
        if found is None:
            found = intent_defs.find_intent(self.intents, intent_defs.INTENT_FALLBACK)
        return found


@dataclass(frozen=True)
class IntentMatch:
    intent: str
    score: float
    reason: str  # too_short | feature_hint | lost_found_hint | item_word | keyword_heuristic | overlap | fallback


class IntentClassifier:
    def __init__(self, corpus: IntentCorpus, min_score: float = INTENT_MIN_SCORE):
        self.corpus = corpus
        self.min_score = min_score
        self._feature_hints = schema.all_phrases(schema.FEATURE_HINTS)
        self._lost_found_hints = schema.all_phrases(schema.LOST_FOUND_HINTS)
        self._item_words = schema.all_phrases(schema.ITEM_WORDS)

    def search_reason(self, message: str) -> Optional[str]:
        """Return why the message should trigger an item search, or None."""
        m = text_nlp.normalize_text(message)
        if len(m) < SEARCH_MIN_LENGTH:
            return None
        if text_nlp.contains_any(m, self._feature_hints):
            return None
        if text_nlp.contains_any(m, self._lost_found_hints):
            return "lost_found_hint"
        if text_nlp.contains_any(m, self._item_words):
            return "item_word"
        kws = text_nlp.extract_keywords(message, HEURISTIC_MAX_KEYWORDS)
        if len(kws) >= HEURISTIC_MIN_KEYWORDS:
            return "keyword_heuristic"
        return None

    def should_search_items(self, message: str) -> bool:
        return self.search_reason(message) is not None

    def match(self, message: str) -> IntentMatch:
        reason = self.search_reason(message)
        if reason is not None:
            return IntentMatch(intent=intent_defs.INTENT_SEARCH_ITEMS, score=1.0, reason=reason)

        msg_tokens = text_nlp.tokenize(message)
        if not msg_tokens:
            return IntentMatch(intent=intent_defs.INTENT_FALLBACK, score=0.0, reason="fallback")

        best_intent = intent_defs.INTENT_FALLBACK
        best_score = 0.0
        for ex in self.corpus.examples:
            score = text_nlp.token_overlap_score(msg_tokens, ex.tokens)
            # strict '>' keeps the first registered intent on ties
            if score > best_score:
                best_score = score
                best_intent = ex.intent

        if best_score >= self.min_score:
            return IntentMatch(intent=best_intent, score=best_score, reason="overlap")
        return IntentMatch(intent=intent_defs.INTENT_FALLBACK, score=best_score, reason="fallback")

    def classify(self, message: str) -> str:
        return self.match(message).intent
