import os
import posixpath
from dataclasses import dataclass
from werkzeug.utils import secure_filename


class MediaStoreError(Exception):
    pass


@dataclass(frozen=True)
class StoredMedia:
    url: str
    bytes: int
    public_id: str


class LocalMediaStore:
    """
    Filesystem media store.

    Files land under ``root/<folder>/<filename>`` and are served from
    ``base_url``. Uploads larger than ``max_bytes`` are refused.
    """

    provider = "LOCAL"

    def __init__(self, root, base_url="/uploads", max_bytes=10 * 1024 * 1024):
        self.root = root
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    @classmethod
    def from_app(cls, app):
        root = app.config.get("UPLOAD_FOLDER", "uploads")
        if not os.path.isabs(root):
            root = os.path.join(app.instance_path, root)
        return cls(
            root=root,
            base_url=app.config.get("MEDIA_BASE_URL", "/uploads"),
            max_bytes=app.config.get("MEDIA_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        )

    def upload(self, data: bytes, *, folder: str, filename: str, content_type: str = None) -> StoredMedia:
        if len(data) > self.max_bytes:
            raise MediaStoreError(f"Upload of {len(data)} bytes exceeds the {self.max_bytes} byte limit")

        safe_name = secure_filename(filename)
        if not safe_name:
            raise MediaStoreError(f"Unusable file name: {filename!r}")

        safe_folder = "/".join(secure_filename(part) for part in folder.split("/") if secure_filename(part))
        public_id = posixpath.join(safe_folder, safe_name) if safe_folder else safe_name

        file_path = os.path.join(self.root, *public_id.split("/"))
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with open(file_path, "wb") as fh:
            fh.write(data)

        return StoredMedia(url=f"{self.base_url}/{public_id}", bytes=len(data), public_id=public_id)

    def delete(self, public_id: str) -> bool:
        file_path = os.path.join(self.root, *public_id.split("/"))
        if not os.path.exists(file_path):
            return False
        os.remove(file_path)
        return True
