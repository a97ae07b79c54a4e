"""
Fill empty image fields of a site's pages with stock photos.

The run searches once per distinct query, hands out each photo at most
once, copies the chosen photos into the tenant's media store and writes
the URLs back page by page. Failures of a single search, import or page
are logged and skipped; the rest of the run carries on.
"""
import copy
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from servible.extensions import db
from servible.integrations.freepik import FreepikClient, StockImage
from servible.integrations.media_store import LocalMediaStore
from servible.models import File, Page, Site
from servible.rendering.paths import get_path, set_path
from servible.signals import site_content_changed

from .importer import STOCK_FOLDER, STOCK_TAGS, ImportedImage, import_stock_image
from .pool import parallel_map
from .query import build_search_query
from .slots import ImageSlot, PageBlocks, collect_image_slots, is_empty

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 3
SEARCH_LICENSE = "freemium"
WRITE_ATTEMPTS = 3


@dataclass
class EnrichmentReport:
    site_id: str
    slots: int = 0
    queries: int = 0
    assigned: int = 0
    imported: int = 0
    pages_updated: int = 0
    pages_failed: int = 0


@dataclass(frozen=True)
class Assignment:
    slot: ImageSlot
    image: StockImage
    title: str


@dataclass(frozen=True)
class FieldUpdate:
    block_id: str
    field_path: str
    url: str


def group_slots_by_query(slots: Sequence[ImageSlot]) -> "OrderedDict[str, List[ImageSlot]]":
    groups: "OrderedDict[str, List[ImageSlot]]" = OrderedDict()
    for slot in slots:
        query = build_search_query(slot.text_parts)
        if not query:
            continue
        groups.setdefault(query, []).append(slot)
    return groups


def image_title(slot: ImageSlot) -> str:
    if "items" in slot.field_path:
        kind = "Column"
    elif slot.field_path == "src":
        kind = "Image"
    else:
        kind = "Hero"
    subject = slot.text_parts[0][:50] if slot.text_parts else ""
    return f"{kind} image - {subject or 'Stock photo'}"


def assign_images(groups: Sequence[Tuple[str, List[ImageSlot]]], results: Sequence[List[StockImage]]) -> List[Assignment]:
    """
    Pair slots with search results, never using a photo twice.

    Groups are walked in order; within a group each slot takes the next
    photo not yet used anywhere in the run. Slots left without a photo
    stay empty.
    """
    used_ids = set()
    assignments: List[Assignment] = []

    for (_, slots), images in zip(groups, results):
        images = images or []
        position = 0
        for slot in slots:
            while position < len(images) and images[position].id in used_ids:
                position += 1
            if position >= len(images):
                break

            image = images[position]
            used_ids.add(image.id)
            position += 1
            assignments.append(Assignment(slot, image, image_title(slot)))

    return assignments


def _search(client, query: str) -> List[StockImage]:
    try:
        return list(client.search(query, limit=SEARCH_LIMIT, license=SEARCH_LICENSE).images)
    except Exception:
        logger.exception("Stock image search failed for %r", query)
        return []


def _import(client, store, organization_id: str, assignment: Assignment) -> Optional[ImportedImage]:
    try:
        return import_stock_image(client, store, assignment.image.id, organization_id, assignment.title)
    except Exception:
        logger.exception("Importing stock image %s failed", assignment.image.id)
        return None


def _record_files(organization_id: str, store, imports: Sequence[ImportedImage]) -> None:
    for imported in imports:
        db.session.add(File(
            organization_id=organization_id,
            name=imported.name,
            file_name=imported.file_name,
            url=imported.url,
            mime_type=imported.mime_type,
            size=imported.size,
            folder=STOCK_FOLDER,
            tags=list(STOCK_TAGS),
            storage_provider=getattr(store, "provider", "LOCAL"),
            storage_public_id=imported.public_id,
        ))
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Recording %d imported stock images failed", len(imports))


def apply_page_updates(page_id: str, updates: Sequence[FieldUpdate], attempts: int = WRITE_ATTEMPTS) -> bool:
    """
    Write image URLs into a page, re-reading it on every attempt.

    A concurrent save bumps the page version and makes the commit raise
    ``StaleDataError``; the write is then retried against the fresh
    content. Fields that were filled in the meantime are left alone.
    Returns whether the page was changed.
    """
    for attempt in range(1, attempts + 1):
        page = db.session.get(Page, page_id, populate_existing=True)
        if page is None:
            return False

        content = copy.deepcopy(page.content) if isinstance(page.content, dict) else None
        blocks = content.get("blocks") if content else None
        if not isinstance(blocks, list):
            return False

        by_id = {
            block["id"]: block
            for block in blocks
            if isinstance(block, dict) and isinstance(block.get("id"), str)
        }
        changed = False

        for update in updates:
            block = by_id.get(update.block_id)
            if block is None:
                continue
            if not isinstance(block.get("data"), dict):
                block["data"] = {}
            if not is_empty(get_path(block["data"], update.field_path)):
                continue
            set_path(block["data"], update.field_path, update.url)
            changed = True

        if not changed:
            return False

        page.content = content
        try:
            db.session.commit()
            return True
        except StaleDataError:
            db.session.rollback()
            logger.info("Page %s changed during enrichment, retrying (%d/%d)", page_id, attempt, attempts)

    raise StaleDataError(f"Page {page_id} kept changing during enrichment")


def enrich_site_images(site_id: str, *, client=None, store=None, concurrency: Optional[int] = None) -> EnrichmentReport:
    site = db.session.get(Site, site_id)
    if site is None:
        raise ValueError(f"Site {site_id} not found")

    report = EnrichmentReport(site_id=site_id)
    pages = Page.query.filter_by(site_id=site_id).order_by(Page.created_at).all()
    slots = collect_image_slots([PageBlocks(page.id, page.blocks) for page in pages])
    report.slots = len(slots)
    if not slots:
        return report

    groups = list(group_slots_by_query(slots).items())
    report.queries = len(groups)
    if not groups:
        return report

    client = client or FreepikClient.from_config(current_app.config)
    store = store or LocalMediaStore.from_app(current_app)
    concurrency = concurrency or current_app.config.get("ENRICHMENT_CONCURRENCY", 3)
    organization_id = site.organization_id

    results = parallel_map(groups, lambda group: _search(client, group[0]), concurrency)

    assignments = assign_images(groups, results)
    report.assigned = len(assignments)
    if not assignments:
        return report

    imports = parallel_map(
        assignments,
        lambda assignment: _import(client, store, organization_id, assignment),
        concurrency,
    )

    updates: Dict[str, List[FieldUpdate]] = OrderedDict()
    succeeded = []
    for assignment, imported in zip(assignments, imports):
        if imported is None:
            continue
        succeeded.append(imported)
        slot = assignment.slot
        updates.setdefault(slot.page_id, []).append(FieldUpdate(slot.block_id, slot.field_path, imported.url))

    report.imported = len(succeeded)
    if succeeded:
        _record_files(organization_id, store, succeeded)

    for page_id, page_updates in updates.items():
        try:
            if apply_page_updates(page_id, page_updates):
                report.pages_updated += 1
        except Exception:
            db.session.rollback()
            report.pages_failed += 1
            logger.exception("Failed to update page %s with stock images", page_id)

    site_content_changed.send(current_app._get_current_object(), site_id=site_id)

    logger.info(
        "Stock image enrichment for site %s: %d slots, %d queries, %d assigned, %d imported, %d pages updated, %d failed",
        site_id, report.slots, report.queries, report.assigned, report.imported,
        report.pages_updated, report.pages_failed,
    )
    return report


def start_enrichment(app, site_id: str, **kwargs) -> threading.Thread:
    """Run ``enrich_site_images`` on a daemon thread and return immediately."""

    def run():
        with app.app_context():
            try:
                enrich_site_images(site_id, **kwargs)
            except Exception:
                logger.exception("Stock image enrichment failed for site %s", site_id)

    thread = threading.Thread(target=run, name=f"enrich-{site_id}", daemon=True)
    thread.start()
    return thread
