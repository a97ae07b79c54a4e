import re
from typing import Any, Dict

from flask import current_app
from servible.extensions import db
from servible.models.theme import Theme
from servible.domain.invariants.exceptions import InvariantViolation
from servible.signals import site_content_changed
from servible.theming.color import InvalidColor, parse_color
from servible.theming.presets import TOKEN_PRESETS
from servible.utils.audit import log_action
from servible.utils.transaction import transactional

COLOR_FIELDS = ("primary_color", "secondary_color")
THEME_FIELDS = ("template", "color_mode", "font_heading", "font_body", "token_preset", "design_tokens")
COLOR_MODES = ("light", "dark")

_TOKEN_KEY_RE = re.compile(r"^(--)?[a-z0-9][a-z0-9-]*$")
_UNSAFE_VALUE_RE = re.compile(r"[;{}<>]")


def _clean_color(field, value):
    if value in (None, ""):
        return None
    try:
        parse_color(value)
    except InvalidColor as exc:
        raise InvariantViolation(f"Invalid {field}: {value!r}") from exc
    return value.strip()


def _clean_tokens(tokens):
    if tokens is None:
        return {}
    if not isinstance(tokens, dict):
        raise InvariantViolation("design_tokens must be an object")

    cleaned = {}
    for key, value in tokens.items():
        if not isinstance(key, str) or not _TOKEN_KEY_RE.match(key):
            raise InvariantViolation(f"Invalid design token name: {key!r}")
        if not isinstance(value, str) or not value.strip() or _UNSAFE_VALUE_RE.search(value):
            raise InvariantViolation(f"Invalid value for design token {key!r}")
        cleaned[key.lstrip("-")] = value.strip()
    return cleaned


def validate_theme_data(data: Dict[str, Any]) -> Dict[str, Any]:
    values = {}

    for field in COLOR_FIELDS:
        if field in data:
            values[field] = _clean_color(field, data[field])

    if "color_mode" in data and data["color_mode"] not in COLOR_MODES:
        raise InvariantViolation(f"color_mode must be one of {', '.join(COLOR_MODES)}")

    if data.get("token_preset") not in (None, "") and data["token_preset"] not in TOKEN_PRESETS:
        raise InvariantViolation(f"Unknown token preset: {data['token_preset']!r}")

    for field in ("template", "color_mode", "font_heading", "font_body", "token_preset"):
        if field in data:
            value = data[field]
            if value is not None and not isinstance(value, str):
                raise InvariantViolation(f"{field} must be a string")
            values[field] = value or None

    if values.get("template", "") is None:
        raise InvariantViolation("template cannot be empty")
    if values.get("color_mode", "") is None:
        raise InvariantViolation("color_mode cannot be empty")

    if "design_tokens" in data:
        values["design_tokens"] = _clean_tokens(data["design_tokens"])

    return values


def update_theme(*, site, data: Dict[str, Any]):
    """
    Update brand colors (stored on the site) and theme settings.

    Values are validated before anything is written; an unusable color
    or token is rejected rather than stored.
    """
    values = validate_theme_data(data)
    if not values:
        raise InvariantViolation("No valid fields provided for update")

    with transactional():
        theme = site.theme
        if theme is None:
            theme = Theme()
            theme.site_id = site.id
            db.session.add(theme)
            site.theme = theme

        for field, value in values.items():
            target = site if field in COLOR_FIELDS else theme
            setattr(target, field, value)

        log_action(
            action="site.theme.update",
            entity_type="site",
            entity_id=site.id,
            payload={"fields": sorted(values)},
        )

    site_content_changed.send(current_app._get_current_object(), site_id=site.id)
    return theme
