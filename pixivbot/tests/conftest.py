"""Pytest fixtures for pixivbot tests."""

import io
import os

import pytest
from PIL import Image


def encode(img, format, **params):
    output = io.BytesIO()
    img.save(output, format=format, **params)
    return output.getvalue()


@pytest.fixture
def encode_image():
    return encode


@pytest.fixture
def noise_image():
    """64x64 RGB noise; compresses poorly so quality changes the size a lot."""
    return Image.frombytes("RGB", (64, 64), os.urandom(64 * 64 * 3))


@pytest.fixture
def png_bytes():
    def _make(size=(32, 32), mode="RGB", color=(200, 30, 30)):
        return encode(Image.new(mode, size, color), "PNG")

    return _make


@pytest.fixture
def jpeg_bytes(noise_image):
    return encode(noise_image, "JPEG", quality=100)


@pytest.fixture
def illust_payload():
    return {
        "error": False,
        "message": "",
        "body": {
            "illustId": "92065303",
            "illustTitle": "夏の風景",
            "illustComment": "first line<br />second line",
            "id": "92065303",
            "illustType": 0,
            "userId": "1234",
            "userName": "artist",
            "pageCount": 1,
            "width": 5000,
            "height": 3000,
            "urls": {
                "mini": "https://i.pximg.net/c/48x48/img-master/img/2021/08/20/00/00/00/92065303_p0_square1200.jpg",
                "thumb": "https://i.pximg.net/c/250x250_80_a2/img-master/img/2021/08/20/00/00/00/92065303_p0_square1200.jpg",
                "small": "https://i.pximg.net/c/540x540_70/img-master/img/2021/08/20/00/00/00/92065303_p0_master1200.jpg",
                "regular": "https://i.pximg.net/img-master/img/2021/08/20/00/00/00/92065303_p0_master1200.jpg",
                "original": "https://i.pximg.net/img-original/img/2021/08/20/00/00/00/92065303_p0.png",
            },
            "tags": {
                "tags": [
                    {"tag": "風景", "locked": True, "translation": {"en": "landscape"}},
                    {"tag": "オリジナル", "locked": True, "translation": {"zh": "原创"}},
                    {"tag": "夏"},
                ]
            },
        },
    }
