import io

import pytest
import requests
from PIL import Image

from servible.integrations.freepik import FreepikClient, StockImageError
from servible.integrations.images import shrink_image
from servible.integrations.media_store import LocalMediaStore, MediaStoreError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b"", headers=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload
        self.content = content
        self.text = str(payload)
        self.headers = headers or {}

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_client_requires_an_api_key() -> None:
    with pytest.raises(StockImageError):
        FreepikClient("")


def test_search_sends_filters_and_parses_results() -> None:
    session = FakeSession(FakeResponse(payload={
        "data": [
            {"id": 11, "title": "Plumber", "image": {"source": {"url": "https://img/11.jpg"}}, "author": {"name": "Ann"},
             "licenses": [{"type": "freemium"}]},
            {"title": "no id"},
        ],
        "meta": {"current_page": 1, "last_page": 4, "total": 40},
    }))
    client = FreepikClient("key", base_url="https://api.test/v1", timeout=5, session=session)

    result = client.search("plumber work", limit=3, license="freemium")

    call = session.calls[0]
    assert call["url"] == "https://api.test/v1/resources"
    assert call["headers"]["x-freepik-api-key"] == "key"
    assert call["timeout"] == 5
    assert call["params"]["term"] == "plumber work"
    assert call["params"]["limit"] == 3
    assert call["params"]["filters[content_type][photo]"] == 1
    assert call["params"]["filters[license][freemium]"] == 1
    assert [image.id for image in result.images] == [11]
    assert result.images[0].thumbnail_url == "https://img/11.jpg"
    assert result.last_page == 4


def test_http_and_network_failures_become_stock_image_errors() -> None:
    client = FreepikClient("key", session=FakeSession(FakeResponse(status_code=429, payload={"message": "slow down"})))
    with pytest.raises(StockImageError, match="429"):
        client.search("roof")

    client = FreepikClient("key", session=FakeSession(requests.ConnectionError("boom")))
    with pytest.raises(StockImageError):
        client.search("roof")


def test_download_link_and_bytes() -> None:
    session = FakeSession(
        FakeResponse(payload={"data": {"filename": "roof.jpg", "url": "https://dl.test/roof.jpg"}}),
        FakeResponse(content=b"jpeg", headers={"Content-Type": "image/jpeg"}),
    )
    client = FreepikClient("key", session=session)

    assert client.download_link(5, size="small") == ("roof.jpg", "https://dl.test/roof.jpg")
    assert session.calls[0]["params"] == {"size": "small"}
    assert client.fetch_bytes("https://dl.test/roof.jpg") == (b"jpeg", "image/jpeg")


def test_download_link_without_url_fails() -> None:
    client = FreepikClient("key", session=FakeSession(FakeResponse(payload={"data": {}})))
    with pytest.raises(StockImageError):
        client.download_link(5)


def test_local_media_store_writes_under_folder(tmp_path) -> None:
    store = LocalMediaStore(str(tmp_path), "/media/", max_bytes=100)

    stored = store.upload(b"abc", folder="org-1/media/stock", filename="Roof Repair.jpg")

    assert stored.url == "/media/org-1/media/stock/Roof_Repair.jpg"
    assert stored.bytes == 3
    assert (tmp_path / "org-1" / "media" / "stock" / "Roof_Repair.jpg").read_bytes() == b"abc"
    assert store.delete(stored.public_id) is True
    assert store.delete(stored.public_id) is False


def test_local_media_store_rejects_oversized_uploads(tmp_path) -> None:
    store = LocalMediaStore(str(tmp_path), max_bytes=2)
    with pytest.raises(MediaStoreError):
        store.upload(b"abc", folder="x", filename="a.jpg")


def _png(width, height):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (200, 30, 30)).save(buffer, "PNG")
    return buffer.getvalue()


def test_shrink_image_leaves_small_images_alone() -> None:
    data = _png(10, 10)
    assert shrink_image(data, max_bytes=len(data)) == (data, None)


def test_shrink_image_reencodes_and_limits_width() -> None:
    data = _png(300, 150)

    shrunk, content_type = shrink_image(data, max_bytes=10, max_width=100)

    assert content_type == "image/jpeg"
    with Image.open(io.BytesIO(shrunk)) as img:
        assert img.format == "JPEG"
        assert img.size == (100, 50)
