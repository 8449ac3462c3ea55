import os

# 테스트는 Firestore 없이 메모리 저장소 사용 (config import 이전에 설정)
os.environ.setdefault("ITEM_STORE_BACKEND", "memory")

from datetime import datetime, timedelta, timezone

import pytest

from app.services.item_store import InMemoryItemStore, StoredItem, TagRecord

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_store() -> InMemoryItemStore:
    store = InMemoryItemStore(tags=[
        TagRecord(1, "wallet"),
        TagRecord(2, "phone"),
        TagRecord(3, "keys"),
        TagRecord(4, "bag"),
        TagRecord(5, "clothes"),
    ])
    store.add_item(StoredItem(
        id=1, type="found", title="Black wallet",
        description="Found a black leather wallet near the central library entrance.",
        add_date=BASE_TIME, image_urls=["/uploads/w1.jpg", "/uploads/w1b.jpg"], tag_ids=[1],
    ))
    store.add_item(StoredItem(
        id=2, type="found", title="Blue backpack",
        description="Blue bag with laptop stickers",
        add_date=BASE_TIME + timedelta(hours=1), tag_ids=[4],
    ))
    store.add_item(StoredItem(
        id=3, type="lost", title="Lost black wallet",
        description="My black wallet, lost in the cafeteria",
        add_date=BASE_TIME + timedelta(hours=2), tag_ids=[1],
    ))
    store.add_item(StoredItem(
        id=4, type="found", title="Phone charger",
        description="white   charger\nleft in room 204",
        add_date=BASE_TIME + timedelta(hours=3), tag_ids=[2],
    ))
    return store


@pytest.fixture
def store():
    return make_store()
