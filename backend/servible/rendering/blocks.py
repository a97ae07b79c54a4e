"""
View preparation for each block type.

Block data is a loosely typed bag written by the editor or the site
generator. Every function here turns whatever it gets into a template
context with safe fallbacks, so a malformed block renders what it can
instead of raising.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from markupsafe import Markup

from .backgrounds import Background, resolve_background

HERO_VARIANTS = ("centered", "split", "minimal", "left", "background")
STATS_VARIANTS = ("default", "gradient", "cards")
CTA_VARIANTS = ("default", "dark", "gradient")
FEATURES_VARIANTS = ("cards", "list", "icons")
SERVICES_VARIANTS = ("cards", "numbered")
COLUMN_LAYOUTS = ("equal", "wide-left", "wide-right")
ALIGNMENTS = ("left", "center", "right")

DEFAULT_CTA_HREF = "/contact"


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def mappings(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def strings(value: Any) -> List[str]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return []
    return [item for item in (text(v) for v in value) if item]


def choice(value: Any, allowed: Sequence[Any], default: Any) -> Any:
    return value if value in allowed else default


def link(value: Any, default_label: Optional[str] = None) -> Optional[Dict[str, str]]:
    if not isinstance(value, Mapping):
        return None
    label = text(value.get("label")) or default_label
    if not label:
        return None
    return {"label": label, "href": text(value.get("href")) or DEFAULT_CTA_HREF}


def grid_columns(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return value if value in (2, 3, 4) else default


def section_header(data: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    return {
        "heading": text(data.get("heading")),
        "subheading": text(data.get("subheading")),
    }


def split_highlight(heading: Optional[str], word: Any) -> Optional[tuple]:
    """Split ``heading`` around the first case-insensitive match of ``word``."""
    word = text(word)
    if not heading or not word:
        return None
    index = heading.lower().find(word.lower())
    if index == -1:
        return None
    end = index + len(word)
    return heading[:index], heading[index:end], heading[end:]


def _css_url(url: str) -> str:
    return 'url("' + url.replace('"', "%22") + '")'


# ---------------------------------------------------------------------------
# Block types
# ---------------------------------------------------------------------------

def prepare_hero(data: Mapping[str, Any]) -> Dict[str, Any]:
    variant = choice(data.get("variant"), HERO_VARIANTS, "centered")
    background_image = text(data.get("backgroundImage"))
    if variant != "split" and background_image:
        variant = "background"

    primary_cta = link(data.get("primaryCta"))
    if primary_cta is None and text(data.get("ctaText")):
        primary_cta = {
            "label": text(data.get("ctaText")),
            "href": text(data.get("ctaLink")) or DEFAULT_CTA_HREF,
        }

    heading = text(data.get("heading"))

    if variant == "background":
        declarations = {"--btn-primary-bg": "white", "--btn-primary-color": "var(--color-primary-700)"}
        if background_image:
            declarations = {
                "background-image": _css_url(background_image),
                "background-size": "cover",
                "background-position": "center",
                **declarations,
            }
        background = Background("hero hero-background bg-primary-900", declarations)
    else:
        background = Background(f"hero hero-{variant}")

    return {
        "variant": variant,
        "heading": heading,
        "highlight": split_highlight(heading, data.get("highlightWord")),
        "subheading": text(data.get("subheading")),
        "description": text(data.get("description")),
        "badge": text(data.get("badge")),
        "stats": [
            {"value": text(s.get("value")), "label": text(s.get("label"))}
            for s in mappings(data.get("stats"))
            if text(s.get("value"))
        ],
        "primary_cta": primary_cta,
        "secondary_cta": link(data.get("secondaryCta")),
        "image": text(data.get("image")) if variant == "split" else None,
        "background": background,
    }


def prepare_text(data: Mapping[str, Any]) -> Dict[str, Any]:
    content = text(data.get("content"))
    return {
        "heading": text(data.get("heading")),
        # Produced by the editor, which is the sanitizing boundary
        "content": Markup(content) if content else None,
        "align": choice(data.get("align"), ALIGNMENTS, "left"),
        "background": resolve_background(data.get("background")),
    }


def prepare_columns(data: Mapping[str, Any]) -> Dict[str, Any]:
    items = []
    for item in mappings(data.get("items")):
        items.append({
            "heading": text(item.get("heading")),
            "text": text(item.get("text")),
            "image": text(item.get("image")),
            "image_size": choice(item.get("imageSize"), ("sm", "md", "lg", "full"), "full"),
            "image_shape": choice(item.get("imageShape"), ("auto", "circle", "rounded"), "auto"),
            "icon": text(item.get("icon")),
            "text_align": choice(item.get("textAlign"), ALIGNMENTS, "left"),
            "list": strings(item.get("list")),
            "cta": link(item.get("cta")),
        })

    layout = choice(data.get("layout"), COLUMN_LAYOUTS, "equal")
    # Asymmetric layouts are always two columns
    columns = grid_columns(data.get("columns"), 2) if layout == "equal" else 2
    return {
        **section_header(data),
        "columns": columns,
        "layout": layout,
        "gap": choice(data.get("gap"), ("sm", "md", "lg"), "md"),
        "vertical_align": choice(data.get("verticalAlign"), ("top", "center", "bottom"), "top"),
        "items": items,
        "background": resolve_background(data.get("background")),
    }


def prepare_image(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "heading": text(data.get("heading")),
        "src": text(data.get("src")),
        "alt": text(data.get("alt")) or "",
        "caption": text(data.get("caption")),
        "full_width": data.get("fullWidth") is True,
        "background": resolve_background(data.get("background")),
    }


def prepare_faq(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        **section_header(data),
        "items": [
            {"question": text(item.get("question")), "answer": text(item.get("answer"))}
            for item in mappings(data.get("items"))
            if text(item.get("question"))
        ],
        "background": resolve_background(data.get("background")),
    }


def prepare_stats(data: Mapping[str, Any]) -> Dict[str, Any]:
    variant = choice(data.get("variant"), STATS_VARIANTS, "default")
    if variant == "gradient":
        background = Background("section-padding bg-gradient", {"background": "var(--gradient-accent)"})
    else:
        background = resolve_background("muted")

    return {
        "heading": text(data.get("heading")),
        "variant": variant,
        "stats": [
            {"value": text(s.get("value")), "label": text(s.get("label"))}
            for s in mappings(data.get("stats"))
            if text(s.get("value"))
        ],
        "background": background,
    }


def _pricing_feature(feature: Any) -> Optional[Dict[str, Any]]:
    if isinstance(feature, Mapping):
        label = text(feature.get("text"))
        return {"text": label, "included": feature.get("included", True) is not False} if label else None
    label = text(feature)
    return {"text": label, "included": True} if label else None


def prepare_pricing(data: Mapping[str, Any]) -> Dict[str, Any]:
    plans = []
    for plan in mappings(data.get("plans")):
        features = plan.get("features")
        if not isinstance(features, Sequence) or isinstance(features, str):
            features = []
        plans.append({
            "name": text(plan.get("name")),
            "description": text(plan.get("description")),
            "price": text(plan.get("price")),
            "period": text(plan.get("period")),
            "features": [f for f in (_pricing_feature(f) for f in features) if f],
            "cta_text": text(plan.get("ctaText")) or "Get Started",
            "cta_link": text(plan.get("ctaLink")) or DEFAULT_CTA_HREF,
            "highlighted": plan.get("highlighted") is True,
        })

    return {
        **section_header(data),
        "plans": plans,
        "narrow": len(plans) <= 2,
        "background": resolve_background("muted"),
    }


def prepare_testimonials(data: Mapping[str, Any]) -> Dict[str, Any]:
    testimonials = []
    for item in mappings(data.get("testimonials")):
        if not text(item.get("quote")):
            continue
        author = text(item.get("author"))
        testimonials.append({
            "quote": text(item.get("quote")),
            "author": author,
            "initial": author[0].upper() if author else None,
            "role": text(item.get("role")),
            "company": text(item.get("company")),
            "avatar": text(item.get("avatar")),
        })

    return {
        **section_header(data),
        "testimonials": testimonials,
        "background": resolve_background(data.get("background")),
    }


def prepare_process(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        **section_header(data),
        "steps": [
            {
                "number": index,
                "title": text(step.get("title")),
                "description": text(step.get("description")),
                "icon": text(step.get("icon")),
            }
            for index, step in enumerate(mappings(data.get("steps")), start=1)
        ],
        "background": resolve_background("default"),
    }


def prepare_cta(data: Mapping[str, Any]) -> Dict[str, Any]:
    variant = choice(data.get("variant"), CTA_VARIANTS, None) or choice(data.get("style"), CTA_VARIANTS, "default")

    primary = data.get("primaryCta") if isinstance(data.get("primaryCta"), Mapping) else {}
    primary_cta = {
        "label": text(primary.get("label")) or text(data.get("ctaText")) or "Get Started",
        "href": text(primary.get("href")) or text(data.get("ctaLink")) or DEFAULT_CTA_HREF,
    }

    backgrounds = {
        "default": resolve_background("muted"),
        "dark": resolve_background("accent"),
        "gradient": resolve_background("gradient"),
    }

    return {
        **section_header(data),
        "description": text(data.get("description")),
        "variant": variant,
        "primary_cta": primary_cta,
        "secondary_cta": link(data.get("secondaryCta")),
        "background": backgrounds[variant],
    }


def prepare_features(data: Mapping[str, Any]) -> Dict[str, Any]:
    variant = choice(data.get("variant"), FEATURES_VARIANTS, "cards")
    default_background = "default" if variant == "list" else "muted"
    return {
        **section_header(data),
        "variant": variant,
        "columns": grid_columns(data.get("columns"), 3),
        "features": [
            {
                "title": text(f.get("title")),
                "description": text(f.get("description")),
                "icon": text(f.get("icon")),
            }
            for f in mappings(data.get("features"))
            if text(f.get("title"))
        ],
        "background": resolve_background(data.get("background"), default=default_background),
    }


def prepare_services(data: Mapping[str, Any]) -> Dict[str, Any]:
    services = []
    for index, item in enumerate(mappings(data.get("services")), start=1):
        name = text(item.get("name")) or text(item.get("title"))
        if not name:
            continue
        services.append({
            "number": index,
            "name": name,
            "description": text(item.get("description")),
            "price": text(item.get("price")),
            "icon": text(item.get("icon")),
            "href": text(item.get("href")) or text(item.get("link")),
        })

    return {
        **section_header(data),
        "variant": choice(data.get("variant"), SERVICES_VARIANTS, "cards"),
        "columns": grid_columns(data.get("columns"), 3),
        "show_prices": data.get("showPrices", True) is not False,
        "services": services,
        "background": resolve_background(data.get("background")),
    }


def prepare_logos(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "heading": text(data.get("heading")),
        "logos": [
            {"name": text(logo.get("name")), "src": text(logo.get("src"))}
            for logo in mappings(data.get("logos"))
            if text(logo.get("name")) or text(logo.get("src"))
        ],
        "background": resolve_background(data.get("background")),
    }


def prepare_contact(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        **section_header(data),
        "description": text(data.get("description")),
        "show_form": data.get("showForm", True) is not False,
        "show_info": data.get("showInfo", True) is not False,
        "show_map": data.get("showMap") is True,
        "email": text(data.get("email")),
        "phone": text(data.get("phone")),
        "address": text(data.get("address")),
        "background": resolve_background(data.get("background")),
    }
