"""
Copy a stock photo into the tenant's media store.

Runs on enrichment worker threads, so nothing here touches the
database session; the caller records the resulting ``File`` rows.
"""
import re
import secrets
from dataclasses import dataclass
from typing import Optional

from servible.integrations.images import shrink_image

STOCK_FOLDER = "stock"
STOCK_TAGS = ("stock", "freepik")


@dataclass(frozen=True)
class ImportedImage:
    resource_id: int
    name: str
    file_name: str
    url: str
    mime_type: str
    size: int
    public_id: str


def slugify(text: str, max_length: int = 60) -> str:
    text = re.sub(r"[^\w\s-]", "", text.lower())
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text).strip("-")
    return text[:max_length]


def seo_filename(resource_id: int, title: Optional[str], source_name: Optional[str]) -> str:
    suffix = secrets.token_hex(2)
    ext = source_name.rsplit(".", 1)[-1] if source_name and "." in source_name else "jpg"
    slug = slugify(title) if title else ""
    if slug:
        return f"{slug}-{suffix}.{ext}"
    return f"freepik-{resource_id}-{suffix}.{ext}"


def import_stock_image(client, store, resource_id: int, organization_id: str, title: Optional[str] = None) -> ImportedImage:
    source_name, download_url = client.download_link(resource_id, size="small")
    file_name = seo_filename(resource_id, title, source_name)

    data, mime_type = client.fetch_bytes(download_url)
    data, converted_type = shrink_image(data, store.max_bytes)
    if converted_type:
        mime_type = converted_type
        file_name = file_name.rsplit(".", 1)[0] + ".jpg"

    stored = store.upload(
        data,
        folder=f"{organization_id}/media/{STOCK_FOLDER}",
        filename=file_name,
        content_type=mime_type,
    )

    return ImportedImage(
        resource_id=resource_id,
        name=title or file_name,
        file_name=file_name,
        url=stored.url,
        mime_type=mime_type,
        size=stored.bytes,
        public_id=stored.public_id,
    )
