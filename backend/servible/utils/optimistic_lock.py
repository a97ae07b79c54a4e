from flask import request, abort
from datetime import timezone
from dateutil.parser import parse


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _parse_version(header):
    value = header.strip()
    if value.startswith("W/"):
        value = value[2:]
    value = value.strip('"')
    if not value.isdigit():
        abort(400, description="Invalid If-Match header")
    return int(value)


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking.

    ``If-Match`` carries the entity version the client last saw;
    ``If-Unmodified-Since`` is accepted for entities without one.
    Raises 409 Conflict if the entity has been modified since.
    """
    if_match = request.headers.get("If-Match")
    if if_match and hasattr(entity, "version"):
        if _parse_version(if_match) != entity.version:
            abort(409, description="Conflict detected. Resource has been modified.")
        return

    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ValueError, OverflowError):
        abort(400, description="Invalid If-Unmodified-Since header")

    server_ts = normalize_ts(entity.updated_at)

    if server_ts > client_ts:
        abort(
            409,
            description="Conflict detected. Resource has been modified."
        )
