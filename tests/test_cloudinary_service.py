import hashlib
import json
from urllib.parse import parse_qs

import httpx
import pytest

from app.core.exceptions import ImageDeleteError, ImageUploadError
from app.infrastructure.cloudinary import CloudinaryService

pytestmark = pytest.mark.anyio


def _service(handler) -> CloudinaryService:
    return CloudinaryService(transport=httpx.MockTransport(handler))


async def test_upload_image_returns_url_and_public_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(
            200,
            json={
                "secure_url": "https://res.cloudinary.com/demo/image/upload/avatars/abc.png",
                "public_id": "avatars/abc",
            },
        )

    uploaded = await _service(handler).upload_image(b"png-bytes", "me.png", "image/png")

    assert uploaded.public_id == "avatars/abc"
    assert uploaded.secure_url.endswith("avatars/abc.png")
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b'name="signature"' in seen["body"]
    assert b"png-bytes" in seen["body"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(400, json={"error": {"message": "Invalid image file"}}),
        httpx.Response(200, json={"secure_url": "https://x"}),
        httpx.Response(200, text="<html>gateway</html>"),
        httpx.Response(200, json=["avatars/abc"]),
    ],
)
async def test_upload_image_failures_raise(response):
    with pytest.raises(ImageUploadError):
        await _service(lambda request: response).upload_image(b"png")


async def test_upload_image_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(ImageUploadError):
        await _service(handler).upload_image(b"png")


async def test_delete_image_sends_signed_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["form"] = {k: v[0] for k, v in parse_qs(request.read().decode()).items()}
        return httpx.Response(200, json={"result": "ok"})

    service = _service(handler)
    await service.delete_image("avatars/old")

    form = seen["form"]
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/destroy"
    assert form["public_id"] == "avatars/old"
    assert form["api_key"] == "123456"
    expected = hashlib.sha1(
        f"public_id=avatars/old&timestamp={form['timestamp']}shhh".encode()
    ).hexdigest()
    assert form["signature"] == expected


async def test_delete_image_not_found_counts_as_deleted():
    await _service(lambda request: httpx.Response(200, json={"result": "not found"})).delete_image(
        "avatars/gone"
    )


async def test_delete_image_failure_raises():
    with pytest.raises(ImageDeleteError):
        await _service(
            lambda request: httpx.Response(401, text=json.dumps({"error": "bad key"}))
        ).delete_image("avatars/old")


async def test_delete_image_unreadable_response_raises():
    with pytest.raises(ImageDeleteError) as exc_info:
        await _service(lambda request: httpx.Response(200, text="oops")).delete_image(
            "avatars/old"
        )

    assert isinstance(exc_info.value.__cause__, ValueError)
