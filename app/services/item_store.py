"""Item / tag data access used by the chatbot search.

Usage:
  from app.services.item_store import get_item_store
  store = get_item_store()
  tags = store.find_tags_by_name_substring(["wallet"], limit=10)

Backends:
    - FirestoreItemStore: `items` + `tags` collections (default)
    - InMemoryItemStore: list backed, for tests/local

Firestore document shapes:
  tags/{tid}   { tid, tagname, color }
  items/{iid}  { iid, title, description, type: lost|found, add_date,
                 image_urls: [..] (upload order), tag_ids: [..], tag_names: [..] }

Firestore has no substring operator, so FirestoreItemStore reads the most
recent FIRESTORE_SCAN_LIMIT documents (optionally filtered by type) and applies
keyword / tag containment in memory.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
import abc

from app.domain import chatbot_schema as schema
from app.scripts.logging_config import get_logger
from config import settings

logger = get_logger("item_store")

SCAN_LIMIT: int = getattr(settings, "FIRESTORE_SCAN_LIMIT", 500)


class ItemStoreError(RuntimeError):
    """Backing store unavailable or query failed."""


@dataclass(frozen=True)
class TagRecord:
    id: int
    name: str


@dataclass(frozen=True)
class CandidateFilter:
    keywords_any: Tuple[str, ...]
    tag_ids_any: Tuple[int, ...] = ()
    type: Optional[str] = None  # lost | found | None (no filter)


@dataclass(frozen=True)
class SearchCandidateItem:
    id: int
    title: str
    description: str
    type: str
    first_image_url: Optional[str] = None
    tag_names: Tuple[str, ...] = ()


def _matches_filter(title: str, description: str, tag_ids: Sequence[int], flt: CandidateFilter) -> bool:
    title_l = (title or "").lower()
    desc_l = (description or "").lower()
    for k in flt.keywords_any:
        kl = k.lower()
        if kl and (kl in title_l or kl in desc_l):
            return True
    if flt.tag_ids_any and any(t in flt.tag_ids_any for t in tag_ids):
        return True
    return False


class BaseItemStore(abc.ABC):
    name: str

    @abc.abstractmethod
    def find_tags_by_name_substring(self, keywords: Sequence[str], limit: int) -> List[TagRecord]:
        """Tags whose name contains any keyword (case-insensitive), at most ``limit``."""
        ...

    @abc.abstractmethod
    def find_item_candidates(self, flt: CandidateFilter, limit: int) -> List[SearchCandidateItem]:
        """Items matching ``flt``, most recent first, at most ``limit``."""
        ...

    def ping(self) -> None:
        """Raise ItemStoreError when the store cannot be reached."""
        self.find_tags_by_name_substring([], limit=1)


@dataclass
class StoredItem:
    id: int
    title: str
    description: str
    type: str
    add_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    image_urls: List[str] = field(default_factory=list)
    tag_ids: List[int] = field(default_factory=list)


class InMemoryItemStore(BaseItemStore):
    name = "memory"

    def __init__(self, tags: Optional[Sequence[TagRecord]] = None, items: Optional[Sequence[StoredItem]] = None):
        self.tags: List[TagRecord] = list(tags or [])
        self.items: List[StoredItem] = list(items or [])
        # 테스트에서 조회 호출 여부를 확인하기 위한 카운터
        self.tag_lookups = 0
        self.candidate_fetches = 0

    def add_tag(self, tid: int, name: str) -> TagRecord:
        tag = TagRecord(id=tid, name=name)
        self.tags.append(tag)
        return tag

    def add_item(self, item: StoredItem) -> StoredItem:
        if item.type not in schema.ITEM_TYPES:
            raise ValueError("invalid_item_type")
        self.items.append(item)
        return item

    def _tag_names(self, tag_ids: Sequence[int]) -> Tuple[str, ...]:
        by_id = {t.id: t.name for t in self.tags}
        return tuple(by_id[t] for t in tag_ids if t in by_id)

    def find_tags_by_name_substring(self, keywords: Sequence[str], limit: int) -> List[TagRecord]:
        self.tag_lookups += 1
        kws = [k.lower() for k in keywords if k]
        out: List[TagRecord] = []
        for tag in self.tags:
            if any(k in tag.name.lower() for k in kws):
                out.append(tag)
                if len(out) >= limit:
                    break
        return out

    def find_item_candidates(self, flt: CandidateFilter, limit: int) -> List[SearchCandidateItem]:
        self.candidate_fetches += 1
        ordered = sorted(self.items, key=lambda it: it.add_date, reverse=True)
        out: List[SearchCandidateItem] = []
        for it in ordered:
            if flt.type and it.type != flt.type:
                continue
            if not _matches_filter(it.title, it.description, it.tag_ids, flt):
                continue
            out.append(SearchCandidateItem(
                id=it.id,
                title=it.title,
                description=it.description,
                type=it.type,
                first_image_url=it.image_urls[0] if it.image_urls else None,
                tag_names=self._tag_names(it.tag_ids),
            ))
            if len(out) >= limit:
                break
        return out


class FirestoreItemStore(BaseItemStore):
    name = "firestore"

    def __init__(self, db=None, items_collection: Optional[str] = None, tags_collection: Optional[str] = None,
                 scan_limit: int = SCAN_LIMIT):
        self._db = db
        self.items_collection = items_collection or settings.ITEMS_COLLECTION
        self.tags_collection = tags_collection or settings.TAGS_COLLECTION
        self.scan_limit = scan_limit

    def get_db(self):
        if self._db is None:
            from firebase_admin import firestore  # 지연 import (Firebase 초기화 이후)
            self._db = firestore.client()
        return self._db

    def find_tags_by_name_substring(self, keywords: Sequence[str], limit: int) -> List[TagRecord]:
        kws = [k.lower() for k in keywords if k]
        out: List[TagRecord] = []
        try:
            for snap in self.get_db().collection(self.tags_collection).stream():
                d = snap.to_dict() or {}
                name = d.get("tagname") or ""
                if not any(k in name.lower() for k in kws):
                    continue
                try:
                    tid = int(d.get("tid", snap.id))
                except (TypeError, ValueError):
                    # 숫자가 아닌 tid 문서 하나 때문에 전체 조회를 실패시키지 않음
                    logger.warning("firestore.query op=tags skip doc=%s tid=%r", snap.id, d.get("tid"))
                    continue
                out.append(TagRecord(id=tid, name=name))
                if len(out) >= limit:
                    break
        except Exception as e:
            logger.error("firestore.query op=tags collection=%s err=%s", self.tags_collection, e)
            raise ItemStoreError(f"tag_lookup_failed: {e}") from e
        logger.info("firestore.query op=tags collection=%s keywords=%s hits=%d", self.tags_collection, kws, len(out))
        return out

    def _to_candidate(self, d: Dict) -> SearchCandidateItem:
        images = d.get("image_urls") or []
        return SearchCandidateItem(
            id=int(d.get("iid")),
            title=d.get("title") or "",
            description=d.get("description") or "",
            type=d.get("type") or "",
            first_image_url=images[0] if images else None,
            tag_names=tuple(d.get("tag_names") or []),
        )

    def find_item_candidates(self, flt: CandidateFilter, limit: int) -> List[SearchCandidateItem]:
        from firebase_admin import firestore
        from google.cloud.firestore_v1 import FieldFilter
        out: List[SearchCandidateItem] = []
        scanned = 0
        try:
            q = self.get_db().collection(self.items_collection)
            if flt.type:
                q = q.where(filter=FieldFilter("type", "==", flt.type))
            q = q.order_by("add_date", direction=firestore.Query.DESCENDING).limit(self.scan_limit)
            logger.info(
                "firestore.query op=find collection=%s type=%s keywords=%s tag_ids=%s scan_limit=%d limit=%d",
                self.items_collection, flt.type, list(flt.keywords_any), list(flt.tag_ids_any), self.scan_limit, limit,
            )
            for snap in q.stream():
                scanned += 1
                d = snap.to_dict() or {}
                d.setdefault("iid", snap.id)
                if not _matches_filter(d.get("title"), d.get("description"), d.get("tag_ids") or [], flt):
                    continue
                try:
                    cand = self._to_candidate(d)
                except (TypeError, ValueError):
                    logger.warning("firestore.query op=find skip doc=%s iid=%r", snap.id, d.get("iid"))
                    continue
                out.append(cand)
                if len(out) >= limit:
                    break
        except Exception as e:
            logger.error("firestore.query op=find collection=%s err=%s", self.items_collection, e)
            raise ItemStoreError(f"candidate_fetch_failed: {e}") from e
        logger.debug("firestore.query op=find scanned=%d matched=%d", scanned, len(out))
        return out

    def ping(self) -> None:
        try:
            list(self.get_db().collection(self.tags_collection).limit(1).stream())
        except Exception as e:
            raise ItemStoreError(f"ping_failed: {e}") from e


_singleton: Optional[BaseItemStore] = None


def get_item_store() -> BaseItemStore:
    global _singleton
    if _singleton:
        return _singleton
    backend = (settings.ITEM_STORE_BACKEND or "firestore").lower()
    if backend == "memory":
        _singleton = InMemoryItemStore()
    else:
        _singleton = FirestoreItemStore()
    logger.info("item store initialized backend=%s", _singleton.name)
    return _singleton
