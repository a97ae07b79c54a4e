import io
from typing import Optional, Tuple
from PIL import Image

MAX_WIDTH = 2048
JPEG_QUALITY = 85


def shrink_image(data: bytes, max_bytes: int, max_width: int = MAX_WIDTH) -> Tuple[bytes, Optional[str]]:
    """
    Re-encode an oversized image as JPEG no wider than ``max_width``.

    Returns the bytes and the new content type, or the input unchanged
    with ``None`` when it already fits.
    """
    if len(data) <= max_bytes:
        return data, None

    with Image.open(io.BytesIO(data)) as img:
        img = img.convert("RGB")
        if img.width > max_width:
            height = max(1, round(img.height * max_width / img.width))
            img = img.resize((max_width, height), Image.Resampling.LANCZOS)

        out = io.BytesIO()
        img.save(out, "JPEG", quality=JPEG_QUALITY, optimize=True)

    return out.getvalue(), "image/jpeg"
