import threading
import time

import pytest

from servible.enrichment import PageBlocks, build_search_query, collect_image_slots
from servible.enrichment.pipeline import assign_images, group_slots_by_query, image_title
from servible.enrichment.pool import parallel_map
from servible.enrichment.query import MAX_QUERY_WORDS, STOP_WORDS
from servible.enrichment.slots import ImageSlot
from servible.integrations.freepik import StockImage


def test_build_search_query_keeps_first_four_meaningful_words() -> None:
    query = build_search_query(["<b>Expert</b> Plumbing & Heating", "for your home, all year round"])
    assert query == "expert plumbing heating home"


def test_build_search_query_can_be_empty() -> None:
    assert build_search_query(["a an the", "<p></p>"]) == ""


HEADINGS = [
    "Welcome to our family-run bakery in the heart of the city",
    "<h1>We are <em>the</em> best</h1> at what we do",
    "24/7 Emergency Locksmith & Security Services!!!",
    "I, me, my, you, your, they, them: it is all about us",
    "Fresh, local, organic: produce delivered to your door every week",
    "Über-fast café Wi-Fi for remote workers and digital nomads",
    "A",
    "",
]


@pytest.mark.parametrize("heading", HEADINGS)
def test_build_search_query_never_keeps_stop_words_or_more_than_four_words(heading) -> None:
    words = build_search_query([heading, "Trusted by thousands of happy customers"]).split()

    assert len(words) <= MAX_QUERY_WORDS
    for word in words:
        assert word not in STOP_WORDS
        assert len(word) > 2
        assert word == word.lower()
        assert "<" not in word and ">" not in word


def test_collect_image_slots_covers_hero_image_and_columns() -> None:
    blocks = [
        {"id": "h1", "type": "hero", "data": {"heading": "Leak repairs", "variant": "split"}},
        {"id": "h2", "type": "hero", "data": {"heading": "Boilers", "backgroundImage": ""}},
        {"id": "h3", "type": "hero", "data": {"heading": "Done", "backgroundImage": "x.jpg"}},
        {"id": "h4", "type": "hero", "data": {}},
        {"id": "i1", "type": "image", "data": {}},
        {
            "id": "c1",
            "type": "columns",
            "data": {
                "heading": "Services",
                "items": [
                    {"heading": "Drains", "image": None},
                    {"heading": "Pipes", "image": "p.jpg"},
                    {"image": ""},
                    {"text": "Water heaters"},
                ],
            },
        },
        {"id": "t1", "type": "text", "data": {"content": "<p>hi</p>"}},
    ]

    slots = collect_image_slots([PageBlocks("p1", blocks)])

    assert [(s.block_id, s.field_path) for s in slots] == [
        ("h1", "image"),
        ("h2", "backgroundImage"),
        ("i1", "src"),
        ("c1", "items.0.image"),
        ("c1", "items.3.image"),
    ]
    assert slots[2].text_parts == ("professional business",)
    assert slots[3].text_parts == ("Drains", "Services")


def _slot(block_id, field_path="src", *parts):
    return ImageSlot("p1", block_id, field_path, parts or ("plumber at work",))


def test_slots_with_the_same_query_share_one_search() -> None:
    slots = [_slot("a"), _slot("b"), _slot("c", "src", "roof repair"), _slot("d", "src", "the")]
    groups = group_slots_by_query(slots)
    assert list(groups) == ["plumber work", "roof repair"]
    assert [s.block_id for s in groups["plumber work"]] == ["a", "b"]


def test_assignment_never_reuses_an_image() -> None:
    groups = [("plumber work", [_slot("a"), _slot("b")]), ("roof repair", [_slot("c"), _slot("d")])]
    results = [
        [StockImage(1), StockImage(2)],
        [StockImage(2), StockImage(3)],
    ]

    assignments = assign_images(groups, results)

    assert [(a.slot.block_id, a.image.id) for a in assignments] == [("a", 1), ("b", 2), ("c", 3)]


def test_assignment_leaves_slots_empty_when_results_run_out() -> None:
    groups = [("plumber work", [_slot("a"), _slot("b"), _slot("c")])]
    assignments = assign_images(groups, [[StockImage(7)]])
    assert [a.slot.block_id for a in assignments] == ["a"]
    assert assign_images(groups, [[]]) == []


def test_image_title_names_the_slot_kind() -> None:
    assert image_title(ImageSlot("p", "b", "items.0.image", ("Drains",))) == "Column image - Drains"
    assert image_title(ImageSlot("p", "b", "src", ("x" * 80,))) == "Image image - " + "x" * 50
    assert image_title(ImageSlot("p", "b", "backgroundImage", ())) == "Hero image - Stock photo"


def test_parallel_map_preserves_order_and_bounds_concurrency() -> None:
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}

    def work(n):
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.01)
        with lock:
            state["active"] -= 1
        return n * 2

    results = parallel_map(list(range(12)), work, 3)

    assert results == [n * 2 for n in range(12)]
    assert state["peak"] <= 3


def test_parallel_map_handles_empty_input() -> None:
    assert parallel_map([], lambda n: n, 3) == []
