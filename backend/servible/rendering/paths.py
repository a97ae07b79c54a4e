"""
Dot/array-index addressing inside block data, e.g. ``items.2.image``.
"""
from typing import Any, List, Mapping, MutableMapping, MutableSequence


def split_path(path: str) -> List[str]:
    parts = path.split(".") if isinstance(path, str) else []
    if not parts or any(part == "" for part in parts):
        raise ValueError(f"Invalid field path: {path!r}")
    return parts


def get_path(data: Any, path: str, default: Any = None) -> Any:
    current = data
    for part in split_path(path):
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def _child(container: Any, key: str) -> Any:
    if isinstance(container, MutableMapping):
        return container.get(key)
    if isinstance(container, MutableSequence) and key.isdigit():
        index = int(key)
        return container[index] if index < len(container) else None
    return None


def _assign(container: Any, key: str, value: Any) -> None:
    if isinstance(container, MutableMapping):
        container[key] = value
        return

    if isinstance(container, MutableSequence):
        if not key.isdigit():
            raise ValueError(f"List index expected, got {key!r}")
        index = int(key)
        while len(container) <= index:
            container.append(None)
        container[index] = value
        return

    raise ValueError(f"Cannot set {key!r} on {type(container).__name__}")


def set_path(data: MutableMapping, path: str, value: Any) -> None:
    """
    Set ``value`` at ``path``, creating missing containers on the way.

    A missing intermediate becomes a list when the next segment is
    numeric and a dict otherwise.
    """
    parts = split_path(path)
    current: Any = data

    for part, next_part in zip(parts, parts[1:]):
        child = _child(current, part)
        if child is None:
            child = [] if next_part.isdigit() else {}
            _assign(current, part, child)
        current = child

    _assign(current, parts[-1], value)
