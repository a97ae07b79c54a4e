from .pipeline import EnrichmentReport, enrich_site_images, start_enrichment
from .query import build_search_query
from .slots import ImageSlot, PageBlocks, collect_image_slots

__all__ = [
    "EnrichmentReport",
    "enrich_site_images",
    "start_enrichment",
    "build_search_query",
    "ImageSlot",
    "PageBlocks",
    "collect_image_slots",
]
