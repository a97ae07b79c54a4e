import json
import threading

import pytest
from sqlalchemy import text

from servible.enrichment import enrich_site_images, start_enrichment
from servible.enrichment import pipeline
from servible.extensions import db
from servible.integrations.freepik import StockImage, StockImageError, StockSearchResult
from servible.integrations.media_store import LocalMediaStore
from servible.models import File, Page


class FakeStockClient:
    def __init__(self, results, failing_queries=(), failing_downloads=()):
        self.results = results
        self.failing_queries = set(failing_queries)
        self.failing_downloads = set(failing_downloads)
        self.searches = []
        self._lock = threading.Lock()

    def search(self, query, *, page=1, limit=20, orientation=None, license=None):
        with self._lock:
            self.searches.append((query, limit, license))
        if query in self.failing_queries:
            raise StockImageError("search unavailable")
        return StockSearchResult(images=[StockImage(id=i, title=f"Photo {i}") for i in self.results.get(query, [])])

    def download_link(self, resource_id, size="medium"):
        if resource_id in self.failing_downloads:
            raise StockImageError("download refused")
        return f"photo-{resource_id}.jpg", f"https://cdn.example.test/{resource_id}.jpg"

    def fetch_bytes(self, url):
        return b"\xff\xd8fake-jpeg", "image/jpeg"


HOME_BLOCKS = [
    {"id": "hero", "type": "hero", "data": {"heading": "Emergency plumbing repairs"}},
    {"id": "photo", "type": "image", "data": {"alt": "Plumber fixing sink"}},
    {"id": "copy", "type": "text", "data": {"content": "<p>Since 1998</p>"}},
]

RESULTS = {
    "emergency plumbing repairs": [101, 102],
    "plumber fixing sink": [101, 103],
}


@pytest.fixture
def store(tmp_path):
    return LocalMediaStore(str(tmp_path / "media"), "/uploads")


def _blocks(page_id):
    page = db.session.get(Page, page_id, populate_existing=True)
    return {block["id"]: block["data"] for block in page.content["blocks"]}


def test_enrichment_fills_empty_slots_without_reusing_images(site, make_page, store) -> None:
    page = make_page(site, blocks=HOME_BLOCKS)
    client = FakeStockClient(RESULTS)

    report = enrich_site_images(site.id, client=client, store=store)

    assert (report.slots, report.queries, report.assigned, report.imported) == (2, 2, 2, 2)
    assert report.pages_updated == 1 and report.pages_failed == 0
    assert sorted(q for q, _, _ in client.searches) == sorted(RESULTS)
    assert all(limit == 3 and license == "freemium" for _, limit, license in client.searches)

    data = _blocks(page.id)
    hero_url, photo_url = data["hero"]["backgroundImage"], data["photo"]["src"]
    assert hero_url.startswith(f"/uploads/{site.organization_id}/media/stock/")
    assert photo_url.startswith(f"/uploads/{site.organization_id}/media/stock/")
    assert hero_url != photo_url

    files = File.query.filter_by(organization_id=site.organization_id).all()
    assert len(files) == 2
    assert all(f.tags == ["stock", "freepik"] and f.folder == "stock" for f in files)
    assert {f.name for f in files} == {
        "Hero image - Emergency plumbing repairs",
        "Image image - Plumber fixing sink",
    }


def test_failed_search_and_import_only_affect_their_slots(site, make_page, store) -> None:
    page = make_page(site, blocks=HOME_BLOCKS)
    client = FakeStockClient(
        {"emergency plumbing repairs": [201], "plumber fixing sink": [202]},
        failing_downloads={202},
    )

    report = enrich_site_images(site.id, client=client, store=store)

    assert report.assigned == 2
    assert report.imported == 1
    data = _blocks(page.id)
    assert data["hero"]["backgroundImage"]
    assert "src" not in data["photo"]

    client = FakeStockClient(RESULTS, failing_queries={"plumber fixing sink"})
    report = enrich_site_images(site.id, client=client, store=store)
    assert report.slots == 1
    assert report.assigned == 0
    assert "src" not in _blocks(page.id)["photo"]


def test_nothing_to_do_makes_no_calls(site, make_page, store) -> None:
    make_page(site, blocks=[{"id": "copy", "type": "text", "data": {"content": "Hi"}}])
    client = FakeStockClient(RESULTS)

    report = enrich_site_images(site.id, client=client, store=store)

    assert report.slots == 0
    assert client.searches == []


def test_concurrent_edit_is_kept_and_write_is_retried(app, site, make_page, store, monkeypatch) -> None:
    page = make_page(site, blocks=HOME_BLOCKS)
    page_id = page.id
    original_set_path = pipeline.set_path
    raced = []

    def set_path_during_concurrent_save(data, path, value):
        if not raced:
            raced.append(path)
            edited = {
                "blocks": [
                    {"id": "hero", "type": "hero", "data": {"heading": "Edited while enriching"}},
                    HOME_BLOCKS[1],
                    HOME_BLOCKS[2],
                ]
            }
            with db.engine.begin() as conn:
                conn.execute(
                    text("UPDATE pages SET content = :content, version = version + 1 WHERE id = :id"),
                    {"content": json.dumps(edited), "id": page_id},
                )
        original_set_path(data, path, value)

    monkeypatch.setattr(pipeline, "set_path", set_path_during_concurrent_save)

    report = enrich_site_images(site.id, client=FakeStockClient(RESULTS), store=store)

    assert raced
    assert report.pages_updated == 1
    data = _blocks(page_id)
    assert data["hero"]["heading"] == "Edited while enriching"
    assert data["hero"]["backgroundImage"]
    assert data["photo"]["src"]


def test_fields_filled_in_the_meantime_are_not_overwritten(site, make_page) -> None:
    page = make_page(site, blocks=[{"id": "photo", "type": "image", "data": {"src": "mine.jpg"}}])

    changed = pipeline.apply_page_updates(page.id, [pipeline.FieldUpdate("photo", "src", "/uploads/stock.jpg")])

    assert changed is False
    assert _blocks(page.id)["photo"]["src"] == "mine.jpg"


SITE_RESULTS = {**RESULTS, "bathroom renovation experts": [301]}


def _page_with_odd_block(site, make_page):
    return make_page(site, blocks=[
        {"id": ["weird"], "type": "text", "data": {"content": "Hi"}},
        {"id": {}, "type": "hero", "data": {"heading": "Ignored hero"}},
        HOME_BLOCKS[0],
    ])


def _services_page(site, make_page):
    return make_page(
        site,
        blocks=[{"id": "hero", "type": "hero", "data": {"heading": "Bathroom renovation experts"}}],
        title="Services", slug="services", is_homepage=False,
    )


def test_blocks_with_odd_ids_do_not_stop_the_run(site, make_page, store) -> None:
    odd = _page_with_odd_block(site, make_page)
    good = _services_page(site, make_page)

    report = enrich_site_images(site.id, client=FakeStockClient(SITE_RESULTS), store=store)

    assert report.slots == 2
    assert report.pages_updated == 2 and report.pages_failed == 0
    odd_blocks = db.session.get(Page, odd.id, populate_existing=True).content["blocks"]
    assert odd_blocks[0]["id"] == ["weird"]
    assert "backgroundImage" not in odd_blocks[1]["data"]
    assert odd_blocks[2]["data"]["backgroundImage"]
    assert _blocks(good.id)["hero"]["backgroundImage"]


def test_one_failing_page_leaves_other_pages_written(app, site, make_page, store, monkeypatch) -> None:
    from servible.signals import site_content_changed

    broken = make_page(site, blocks=HOME_BLOCKS)
    good = _services_page(site, make_page)
    broken_id = broken.id
    original_apply = pipeline.apply_page_updates

    def apply_or_break(page_id, updates, *args, **kwargs):
        if page_id == broken_id:
            raise TypeError("corrupt page content")
        return original_apply(page_id, updates, *args, **kwargs)

    monkeypatch.setattr(pipeline, "apply_page_updates", apply_or_break)
    received = []

    def listener(sender, site_id=None, **extra):
        received.append(site_id)

    with site_content_changed.connected_to(listener, sender=app):
        report = enrich_site_images(site.id, client=FakeStockClient(SITE_RESULTS), store=store)

    assert report.pages_failed == 1
    assert report.pages_updated == 1
    assert _blocks(good.id)["hero"]["backgroundImage"]
    assert "backgroundImage" not in _blocks(broken_id)["hero"]
    assert received == [site.id]


def test_enrichment_signals_content_change(app, site, make_page, store) -> None:
    from servible.signals import site_content_changed

    make_page(site, blocks=HOME_BLOCKS)
    received = []

    def listener(sender, site_id=None, **extra):
        received.append(site_id)

    with site_content_changed.connected_to(listener, sender=app):
        enrich_site_images(site.id, client=FakeStockClient(RESULTS), store=store)

    assert received == [site.id]


def test_start_enrichment_runs_in_background(app, site, make_page, store) -> None:
    page = make_page(site, blocks=HOME_BLOCKS)
    page_id = page.id

    thread = start_enrichment(app, site.id, client=FakeStockClient(RESULTS), store=store)
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert thread.daemon
    assert _blocks(page_id)["hero"]["backgroundImage"]
