import uuid
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List


def new_block_id() -> str:
    return uuid.uuid4().hex[:12]


def normalize_generated_blocks(blocks: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Turn generated ``{"type": ..., **fields}`` blocks into stored
    ``{"id", "type", "data"}`` blocks with fresh ids.

    Blocks that already carry a ``data`` mapping keep it. Entries
    without a type are dropped.
    """
    normalized = []
    for block in blocks or ():
        if not isinstance(block, Mapping) or not isinstance(block.get("type"), str):
            continue

        if isinstance(block.get("data"), Mapping):
            data = dict(block["data"])
        else:
            data = {k: v for k, v in block.items() if k not in ("id", "type")}

        normalized.append({"id": new_block_id(), "type": block["type"], "data": data})
    return normalized
