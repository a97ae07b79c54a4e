import threading
from typing import Dict, Optional, Tuple

from servible.signals import site_content_changed

CACHE_EXTENSION = "servible.render_cache"


class RenderCache:
    """Rendered public pages keyed by ``(site_id, slug)``."""

    def __init__(self):
        self._entries: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def get(self, site_id: str, slug: str) -> Optional[str]:
        with self._lock:
            return self._entries.get((site_id, slug))

    def set(self, site_id: str, slug: str, html: str) -> None:
        with self._lock:
            self._entries[(site_id, slug)] = html

    def invalidate_site(self, site_id: str) -> int:
        with self._lock:
            stale = [key for key in self._entries if key[0] == site_id]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._entries)


def init_render_cache(app) -> RenderCache:
    cache = RenderCache()
    app.extensions[CACHE_EXTENSION] = cache
    return cache


@site_content_changed.connect
def invalidate_render_cache(sender, site_id=None, **extra):
    cache = getattr(sender, "extensions", {}).get(CACHE_EXTENSION)
    if cache is not None and site_id:
        cache.invalidate_site(site_id)
