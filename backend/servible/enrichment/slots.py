from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from servible.rendering.paths import get_path

GENERIC_IMAGE_TEXT = "professional business"


@dataclass(frozen=True)
class PageBlocks:
    page_id: str
    blocks: Sequence[Any]


@dataclass(frozen=True)
class ImageSlot:
    page_id: str
    block_id: str
    field_path: str
    text_parts: Tuple[str, ...]


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def _texts(*values: Any) -> Tuple[str, ...]:
    return tuple(v for v in values if isinstance(v, str) and v.strip())


def _hero_slots(page_id, block_id, data) -> List[ImageSlot]:
    field_path = "image" if data.get("variant") == "split" else "backgroundImage"
    if not is_empty(get_path(data, field_path)):
        return []

    parts = _texts(data.get("heading"), data.get("subheading"))
    if not parts:
        return []
    return [ImageSlot(page_id, block_id, field_path, parts)]


def _image_slots(page_id, block_id, data) -> List[ImageSlot]:
    if not is_empty(data.get("src")):
        return []
    parts = _texts(data.get("alt"), data.get("caption"), data.get("heading")) or (GENERIC_IMAGE_TEXT,)
    return [ImageSlot(page_id, block_id, "src", parts)]


def _columns_slots(page_id, block_id, data) -> List[ImageSlot]:
    items = data.get("items")
    if not isinstance(items, list):
        return []

    section_parts = _texts(data.get("heading"), data.get("subheading"))
    slots = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping) or not is_empty(item.get("image")):
            continue
        item_parts = _texts(item.get("heading"), item.get("text"))
        if not item_parts:
            continue
        slots.append(ImageSlot(page_id, block_id, f"items.{index}.image", item_parts + section_parts))
    return slots


_COLLECTORS = {
    "hero": _hero_slots,
    "image": _image_slots,
    "columns": _columns_slots,
}


def collect_image_slots(pages: Iterable[PageBlocks]) -> List[ImageSlot]:
    """List every empty image field that has enough text to search for."""
    slots: List[ImageSlot] = []
    for page in pages:
        for block in page.blocks or ():
            if not isinstance(block, Mapping):
                continue
            collector = _COLLECTORS.get(block.get("type"))
            block_id = block.get("id")
            data = block.get("data")
            if collector is None or not isinstance(block_id, str) or not block_id or not isinstance(data, Mapping):
                continue
            slots.extend(collector(page.page_id, block_id, data))
    return slots
