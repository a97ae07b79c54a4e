"""
Freepik stock photo API client.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

DEFAULT_BASE_URL = "https://api.freepik.com/v1"


class StockImageError(Exception):
    pass


@dataclass(frozen=True)
class StockImage:
    id: int
    title: str = ""
    url: str = ""
    thumbnail_url: str = ""
    author: str = ""
    licenses: Tuple[str, ...] = ("freemium",)
    orientation: str = "landscape"


@dataclass(frozen=True)
class StockSearchResult:
    images: List[StockImage] = field(default_factory=list)
    current_page: int = 1
    last_page: int = 1
    total: int = 0


def _parse_image(item: Dict[str, Any]) -> Optional[StockImage]:
    try:
        image_id = int(item["id"])
    except (KeyError, TypeError, ValueError):
        return None

    source = (item.get("image") or {}).get("source") or {}
    licenses = item.get("licenses")
    if isinstance(licenses, list):
        license_types = tuple(str(lic.get("type")) for lic in licenses if isinstance(lic, dict) and lic.get("type"))
    else:
        license_types = ("freemium",)

    return StockImage(
        id=image_id,
        title=item.get("title") or "",
        url=item.get("url") or "",
        thumbnail_url=source.get("url") or "",
        author=(item.get("author") or {}).get("name") or "",
        licenses=license_types or ("freemium",),
        orientation=item.get("orientation") or "landscape",
    )


class FreepikClient:
    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 20.0, session=None):
        if not api_key:
            raise StockImageError("FREEPIK_API_KEY environment variable not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "FreepikClient":
        return cls(
            api_key=config.get("FREEPIK_API_KEY"),
            base_url=config.get("FREEPIK_BASE_URL", DEFAULT_BASE_URL),
            timeout=config.get("STOCK_API_TIMEOUT", 20.0),
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "x-freepik-api-key": self.api_key,
            "Accept": "application/json",
        }

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            r = self.session.get(f"{self.base_url}{path}", params=params, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise StockImageError(f"Freepik request failed: {exc}") from exc

        if not r.ok:
            raise StockImageError(f"Freepik API error {r.status_code}: {r.text[:200]}")

        try:
            return r.json()
        except ValueError as exc:
            raise StockImageError("Freepik returned invalid JSON") from exc

    def search(
        self,
        query: str,
        *,
        page: int = 1,
        limit: int = 20,
        orientation: Optional[str] = None,
        license: Optional[str] = None,
    ) -> StockSearchResult:
        params = {
            "term": query,
            "page": page,
            "limit": limit,
            "filters[content_type][photo]": 1,
        }
        if orientation:
            params[f"filters[orientation][{orientation}]"] = 1
        if license:
            params[f"filters[license][{license}]"] = 1

        data = self._get_json("/resources", params)
        images = [img for img in (_parse_image(item) for item in data.get("data") or []) if img]
        meta = data.get("meta") or {}

        return StockSearchResult(
            images=images,
            current_page=meta.get("current_page") or page,
            last_page=meta.get("last_page") or 1,
            total=meta.get("total") or len(images),
        )

    def download_link(self, resource_id: int, size: str = "medium") -> Tuple[str, str]:
        """Return ``(filename, url)`` of a signed download for the resource."""
        data = self._get_json(f"/resources/{resource_id}/download", {"size": size}).get("data") or {}
        url = data.get("url")
        if not url:
            raise StockImageError(f"No download URL returned for resource {resource_id}")
        return data.get("filename") or f"freepik-{resource_id}.jpg", url

    def fetch_bytes(self, url: str) -> Tuple[bytes, str]:
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StockImageError(f"Image download failed: {exc}") from exc
        if not r.ok:
            raise StockImageError(f"Image download failed with status {r.status_code}")
        return r.content, r.headers.get("Content-Type") or "image/jpeg"
