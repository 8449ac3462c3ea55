from datetime import timedelta

import pytest

from app.domain import chatbot_schema as schema
from app.services import item_search
from app.services.item_store import InMemoryItemStore, ItemStoreError, SearchCandidateItem, StoredItem

from conftest import BASE_TIME


def test_lost_message_searches_found_items(store):
    outcome = item_search.search_items_from_message("I lost my black wallet near the library", store, max_results=5)
    assert outcome.desired_type == "found"
    assert outcome.keywords == ("lost", "black", "wallet", "near", "library")
    assert outcome.tag_ids == (1,)
    assert [r.id for r in outcome.results] == [1]
    top = outcome.results[0]
    # title: black+2 wallet+2 / desc: black, wallet, near, library +1 each / tag wallet +1
    assert top.score == 9
    assert top.type == "found"
    assert top.image_url == "/uploads/w1.jpg"
    assert top.link == "/items/1"


def test_found_message_searches_lost_items(store):
    outcome = item_search.search_items_from_message("I found a black wallet in the cafeteria", store)
    assert outcome.desired_type == "lost"
    assert [r.id for r in outcome.results] == [3]
    assert outcome.results[0].image_url is None


def test_no_type_hint_searches_both_types(store):
    outcome = item_search.search_items_from_message("black wallet", store)
    assert outcome.desired_type is None
    # same score (title 4 + desc 2 + tag 1); larger id first
    assert [r.id for r in outcome.results] == [3, 1]
    assert outcome.results[0].score == outcome.results[1].score


@pytest.mark.parametrize("message, expected", [
    ("I lost my phone", "found"),
    ("my keys are missing", "found"),
    ("کیفم رو گم کردم", "found"),
    ("I found a phone", "lost"),
    ("یک گوشی پیدا کردم", "lost"),
    ("blue umbrella", None),
])
def test_guess_desired_type(message, expected):
    assert item_search.guess_desired_type(message) == expected


@pytest.mark.parametrize("message", ["", "the is a", "  ?? "])
def test_empty_keywords_skip_the_store(message, store):
    outcome = item_search.search_items_from_message(message, store)
    assert outcome.results == ()
    assert outcome.keywords == ()
    assert store.tag_lookups == 0
    assert store.candidate_fetches == 0


def test_no_candidates_is_not_an_error(store):
    outcome = item_search.search_items_from_message("purple scarf", store)
    assert outcome.results == ()
    assert store.candidate_fetches == 1


def test_snippet_truncation():
    long = "x" * 200
    snip = item_search.make_snippet(long)
    assert len(snip) == 140
    assert snip.endswith(schema.SNIPPET_ELLIPSIS)
    short = "y" * 50
    assert item_search.make_snippet(short) == short
    assert item_search.make_snippet("white   charger\nleft  here") == "white charger left here"


def test_equal_scores_larger_id_first():
    a = SearchCandidateItem(id=7, title="red umbrella", description="", type="found")
    b = SearchCandidateItem(id=12, title="red umbrella", description="", type="found")
    ranked = item_search.rank_candidates([a, b], ["umbrella"])
    assert [r.id for r in ranked] == [12, 7]


def test_score_is_additive_per_keyword():
    c = SearchCandidateItem(
        id=1, title="Black Wallet", description="black wallet, brown strap",
        type="found", tag_names=("wallet", "accessories"),
    )
    assert item_search.score_candidate(c, ["black"]) == 3
    assert item_search.score_candidate(c, ["wallet"]) == 4
    assert item_search.score_candidate(c, ["black", "wallet", "strap"]) == 8
    assert item_search.score_candidate(c, ["keys"]) == 0


def test_max_results_truncates():
    store = InMemoryItemStore()
    for i in range(1, 11):
        store.add_item(StoredItem(id=i, type="found", title="umbrella", description="",
                                  add_date=BASE_TIME + timedelta(minutes=i)))
    outcome = item_search.search_items_from_message("umbrella", store, max_results=3)
    assert [r.id for r in outcome.results] == [10, 9, 8]


def _umbrella_store(newer_count: int) -> InMemoryItemStore:
    store = InMemoryItemStore()
    # oldest item is the most relevant one
    store.add_item(StoredItem(
        id=1, type="found", title="red umbrella red umbrella",
        description="red umbrella with wooden handle", add_date=BASE_TIME,
    ))
    for i in range(newer_count):
        store.add_item(StoredItem(
            id=100 + i, type="found", title="umbrella", description="umbrella",
            add_date=BASE_TIME + timedelta(minutes=i + 1),
        ))
    return store


def test_old_relevant_item_ranks_first_within_candidate_window():
    store = _umbrella_store(newer_count=10)
    outcome = item_search.search_items_from_message("red umbrella wooden handle", store)
    assert outcome.results[0].id == 1
    assert outcome.results[0].score == 8


def test_candidate_cap_drops_older_items():
    # 55 newer matches fill the 50-item recent window before the relevant old one
    store = _umbrella_store(newer_count=55)
    outcome = item_search.search_items_from_message("red umbrella wooden handle", store)
    ids = [r.id for r in outcome.results]
    assert 1 not in ids
    assert ids[0] == 154
    assert all(r.score == 3 for r in outcome.results)


class _BrokenStore(InMemoryItemStore):
    def find_item_candidates(self, flt, limit):
        raise ItemStoreError("candidate_fetch_failed: unavailable")


def test_store_failure_propagates():
    with pytest.raises(ItemStoreError):
        item_search.search_items_from_message("black wallet", _BrokenStore())
