import io

import pytest
from PIL import Image

from models import StoredObject


def make_event(
    uri: str = "/test-image.jpg",
    querystring: str = "",
    headers: dict | None = None,
    status: str = "200",
    bucket: str = "test-bucket",
    region: str | None = None,
) -> dict:
    """Build a CloudFront origin-response event for an S3 origin."""
    domain = f"{bucket}.s3.{region}.amazonaws.com" if region else f"{bucket}.s3.amazonaws.com"
    return {
        "Records": [
            {
                "cf": {
                    "request": {
                        "uri":         uri,
                        "querystring": querystring,
                        "headers":     headers or {},
                        "origin": {
                            "s3": {
                                "domainName": domain,
                                "authMethod": "none",
                                "path":       "",
                                "port":       443,
                                "protocol":   "https",
                                "region":     region or "us-east-1",
                            }
                        },
                    },
                    "response": {
                        "status":            status,
                        "statusDescription": "OK",
                        "headers": {
                            "content-type": [{"key": "Content-Type", "value": "image/jpeg"}],
                        },
                    },
                }
            }
        ]
    }


def webp_accept() -> dict:
    return {"accept": [{"key": "Accept", "value": "image/webp,image/*"}]}


def encode(image: Image.Image, fmt: str, **options) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **options)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class FakeStorage:
    """In-memory stand-in for S3Storage."""

    def __init__(self, objects: dict[str, StoredObject] | None = None, error: Exception | None = None):
        self.objects = objects or {}
        self.error   = error
        self.calls: list[tuple] = []

    def fetch(self, location, key):
        self.calls.append((location, key))
        if self.error is not None:
            raise self.error
        return self.objects[key]


@pytest.fixture(scope="session")
def jpeg_bytes() -> bytes:
    return encode(Image.new("RGB", (300, 200), (255, 0, 0)), "JPEG")


@pytest.fixture(scope="session")
def png_bytes() -> bytes:
    return encode(Image.new("RGBA", (240, 120), (0, 128, 255, 200)), "PNG")


@pytest.fixture(scope="session")
def gif_bytes() -> bytes:
    return encode(Image.new("RGB", (200, 200), (0, 255, 0)).convert("P"), "GIF")


@pytest.fixture(scope="session")
def animated_gif_bytes() -> bytes:
    frames = [
        Image.new("RGB", (50, 50), color).convert("P")
        for color in ((255, 0, 0), (0, 255, 0), (0, 0, 255))
    ]
    return encode(frames[0], "GIF", save_all=True, append_images=frames[1:], duration=100, loop=0)


@pytest.fixture(scope="session")
def webp_bytes() -> bytes:
    return encode(Image.new("RGB", (400, 300), (0, 0, 255)), "WEBP")


@pytest.fixture
def storage(jpeg_bytes, png_bytes, gif_bytes, animated_gif_bytes, webp_bytes) -> FakeStorage:
    return FakeStorage({
        "test-image.jpg":  StoredObject(content_type="image/jpeg", body=jpeg_bytes),
        "test-image.png":  StoredObject(content_type="image/png", body=png_bytes),
        "test-image.gif":  StoredObject(content_type="image/gif", body=gif_bytes),
        "animated.gif":    StoredObject(content_type="image/gif", body=animated_gif_bytes),
        "test-image.webp": StoredObject(content_type="image/webp", body=webp_bytes),
        "document.pdf":    StoredObject(content_type="application/pdf", body=b"%PDF-1.4"),
        "no-type.jpg":     StoredObject(content_type=None, body=jpeg_bytes),
        "my images/photo 1.jpg": StoredObject(content_type="image/jpeg", body=jpeg_bytes),
    })
