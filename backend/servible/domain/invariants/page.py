from collections.abc import Mapping

from .block import assert_block
from .exceptions import InvariantViolation


def assert_page_content(content):
    """
    Validate a page document before it is stored.

    Rendering tolerates broken blocks; writes do not.
    """
    if not isinstance(content, Mapping):
        raise InvariantViolation("Page content must be an object.")

    blocks = content.get("blocks", [])
    if not isinstance(blocks, list):
        raise InvariantViolation("Page content blocks must be a list.")

    seen = set()
    for index, block in enumerate(blocks):
        assert_block(block, index)
        if block["id"] in seen:
            raise InvariantViolation(f"Duplicate block id: {block['id']}")
        seen.add(block["id"])


def assert_single_homepage(page, siblings):
    if not page.is_homepage:
        return

    others = [p for p in siblings if p.is_homepage and p.id != page.id]
    if others:
        raise InvariantViolation("Site already has a homepage.")
