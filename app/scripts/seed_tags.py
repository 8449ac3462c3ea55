"""Seed / update the default tag vocabulary in Firestore.

Run:
  python -m app.scripts.seed_tags

Upserts tags/{tid} = {tid, tagname, color} for every entry in
chatbot_schema.DEFAULT_TAGS. Existing documents keep any extra fields.
"""
from __future__ import annotations
from typing import Dict, List

from app.domain import chatbot_schema as schema
from app.scripts.logging_config import get_logger, setup_logging
from config import settings

logger = get_logger("seed_tags")


def seed_tags(db, tags: List[Dict] = schema.DEFAULT_TAGS, collection: str | None = None) -> int:
    col = db.collection(collection or settings.TAGS_COLLECTION)
    count = 0
    for t in tags:
        col.document(str(t["tid"])).set(
            {"tid": t["tid"], "tagname": t["tagname"], "color": t["color"]},
            merge=True,
        )
        count += 1
        logger.info("firestore.write op=set doc=%s/%s tagname=%s", col.id, t["tid"], t["tagname"])
    return count


def main() -> int:
    setup_logging()
    from app.services.firebase_app import init_firebase
    from firebase_admin import firestore
    if not init_firebase():
        logger.error("seed aborted: firebase not initialized")
        return 1
    n = seed_tags(firestore.client())
    logger.info("Tag colors updated. count=%d", n)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
