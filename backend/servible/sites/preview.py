"""
Preview capability tokens.

A token is derived from the site's id and creation instant, so it is
stable for the life of the site and anyone holding it can preview that
one unpublished site. Published sites never need preview.
"""
import hashlib
import hmac
import re
from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from servible.models.site import SITE_PUBLISHED

DEFAULT_PREVIEW_SALT = "servible-preview"
TOKEN_LENGTH = 32

_TOKEN_RE = re.compile(r"^[0-9a-f]{32}$")


def iso_timestamp(value: datetime) -> str:
    """UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def generate_preview_token(site, salt: str = DEFAULT_PREVIEW_SALT) -> str:
    payload = f"{site.id}:{iso_timestamp(site.created_at)}:{salt}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:TOKEN_LENGTH]


def looks_like_token(value) -> bool:
    return isinstance(value, str) and bool(_TOKEN_RE.match(value))


def is_preview(site, token, salt: str = DEFAULT_PREVIEW_SALT) -> bool:
    if site is None or not token or site.status == SITE_PUBLISHED:
        return False
    expected = generate_preview_token(site, salt)
    return hmac.compare_digest(str(token).encode("utf-8"), expected.encode("utf-8"))


def preview_url(site_url: str, token: str) -> str:
    parts = urlsplit(site_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "preview"]
    query.append(("preview", token))
    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", urlencode(query), parts.fragment))
