from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from . import blocks


@dataclass(frozen=True)
class BlockType:
    name: str
    prepare: Callable[[Mapping[str, Any]], Dict[str, Any]]
    required: Tuple[str, ...] = ()
    variants: Tuple[str, ...] = ()

    @property
    def template(self) -> str:
        return f"blocks/{self.name}.html"


BLOCK_REGISTRY: Dict[str, BlockType] = {
    block_type.name: block_type
    for block_type in (
        BlockType("hero", blocks.prepare_hero, required=("heading",), variants=blocks.HERO_VARIANTS),
        BlockType("text", blocks.prepare_text, required=("content",)),
        BlockType("columns", blocks.prepare_columns, required=("items",)),
        BlockType("image", blocks.prepare_image),
        BlockType("faq", blocks.prepare_faq, required=("items",)),
        BlockType("stats", blocks.prepare_stats, required=("stats",), variants=blocks.STATS_VARIANTS),
        BlockType("pricing", blocks.prepare_pricing, required=("plans",)),
        BlockType("testimonials", blocks.prepare_testimonials, required=("testimonials",)),
        BlockType("process", blocks.prepare_process, required=("steps",)),
        BlockType("cta", blocks.prepare_cta, required=("heading",), variants=blocks.CTA_VARIANTS),
        BlockType("features", blocks.prepare_features, required=("features",), variants=blocks.FEATURES_VARIANTS),
        BlockType("services", blocks.prepare_services, required=("services",), variants=blocks.SERVICES_VARIANTS),
        BlockType("logos", blocks.prepare_logos, required=("logos",)),
        BlockType("contact", blocks.prepare_contact),
    )
}


def get_block_type(name: Any) -> Optional[BlockType]:
    if not isinstance(name, str):
        return None
    return BLOCK_REGISTRY.get(name)
