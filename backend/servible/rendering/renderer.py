"""
Page content renderer.

Turns ``{"blocks": [{"id", "type", "data"}, ...]}`` into HTML, one
``<section>`` per recognised block, in document order.
"""
import logging
from typing import Any, Iterable, Mapping, Optional

from jinja2 import ChainableUndefined, Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from .registry import get_block_type

logger = logging.getLogger(__name__)

_env = Environment(
    loader=PackageLoader("servible", "templates"),
    autoescape=select_autoescape(["html", "xml"], default_for_string=True),
    undefined=ChainableUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_block(block: Any) -> Optional[Markup]:
    """Render one block, or return None when it cannot be rendered."""
    if not isinstance(block, Mapping):
        logger.warning("Skipping malformed block: %r", block)
        return None

    block_type = get_block_type(block.get("type"))
    if block_type is None:
        logger.warning("Unknown block type: %s", block.get("type"))
        return None

    data = block.get("data")
    context = block_type.prepare(data if isinstance(data, Mapping) else {})

    template = _env.get_template(block_type.template)
    return Markup(template.render(
        block_id=block.get("id") or "",
        block_type=block_type.name,
        **context,
    ))


def render_blocks(blocks: Iterable[Any]) -> Markup:
    rendered = [html for html in (render_block(block) for block in blocks or ()) if html is not None]
    return Markup("\n").join(rendered)


def render_page(content: Any) -> Markup:
    blocks = content.get("blocks") if isinstance(content, Mapping) else None
    if not isinstance(blocks, list):
        return Markup("")
    return render_blocks(blocks)
