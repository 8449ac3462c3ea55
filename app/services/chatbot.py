"""Chatbot entry point: classify -> (search) -> assemble reply.

Replies are a small tagged union so callers branch on type instead of probing
optional keys:
    FixedReply(intent, text)                         canned intent response
    SearchReply(intent, text, keywords, suggestions) item search result
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from app.domain import chatbot_schema as schema
from app.domain import intents as intent_defs
from app.services.intent_classifier import IntentClassifier, IntentCorpus
from app.services.item_search import ScoredSuggestion, search_items_from_message
from app.services.item_store import BaseItemStore
from app.scripts.logging_config import get_logger, log_chatbot_event, preview
from config import settings

logger = get_logger("chatbot")

MAX_SUGGESTIONS: int = getattr(settings, "CHATBOT_MAX_SUGGESTIONS", 6)


@dataclass(frozen=True)
class FixedReply:
    intent: str
    text: str


@dataclass(frozen=True)
class SearchReply:
    intent: str
    text: str
    keywords: Tuple[str, ...]
    suggestions: Tuple[ScoredSuggestion, ...]


ChatbotReply = Union[FixedReply, SearchReply]


def suggestion_to_dict(s: ScoredSuggestion) -> Dict:
    return {
        "id": s.id,
        "title": s.title,
        "type": s.type,
        "imageUrl": s.image_url,
        "descriptionSnippet": s.description_snippet,
        "score": s.score,
        "link": s.link,
    }


def reply_to_payload(reply: ChatbotReply) -> Dict:
    """JSON-ready dict in the wire shape consumed by the frontend."""
    if isinstance(reply, SearchReply):
        return {
            "intent": reply.intent,
            "reply": reply.text,
            "keywords": list(reply.keywords),
            "suggestions": [suggestion_to_dict(s) for s in reply.suggestions],
        }
    return {"intent": reply.intent, "reply": reply.text}


class Chatbot:
    def __init__(self, corpus: IntentCorpus, store: BaseItemStore, max_suggestions: int = MAX_SUGGESTIONS):
        self.corpus = corpus
        self.classifier = IntentClassifier(corpus)
        self.store = store
        self.max_suggestions = max_suggestions

    def _search(self, message: str, empty_text: str, results_text: str) -> SearchReply:
        outcome = search_items_from_message(message, self.store, max_results=self.max_suggestions)
        text = results_text if outcome.results else empty_text
        return SearchReply(
            intent=intent_defs.INTENT_SEARCH_ITEMS,
            text=text,
            keywords=outcome.keywords,
            suggestions=outcome.results,
        )

    def handle_message(self, message: str) -> ChatbotReply:
        match = self.classifier.match(message)
        log_chatbot_event("intent", {
            "intent": match.intent,
            "score": round(match.score, 3),
            "reason": match.reason,
            "message": preview(message),
        })
        if match.intent == intent_defs.INTENT_SEARCH_ITEMS:
            return self._search(message, schema.SEARCH_EMPTY_REPLY, schema.SEARCH_RESULTS_REPLY)
        definition = self.corpus.get(match.intent)
        return FixedReply(intent=definition.name, text=definition.response)

    def search(self, message: str) -> SearchReply:
        """Always run an item search, skipping classification (/chatbot/search)."""
        return self._search(message, schema.DIRECT_SEARCH_EMPTY_REPLY, schema.DIRECT_SEARCH_RESULTS_REPLY)


def build_chatbot(store: BaseItemStore, intents=intent_defs.INTENTS) -> Chatbot:
    """Built once by the process entry point; the corpus is shared read-only afterwards."""
    return Chatbot(IntentCorpus.build(intents), store)


def handle_chat_message(chatbot: Chatbot, message: str) -> Dict:
    return reply_to_payload(chatbot.handle_message(message))
