"""pixiv identifier helpers."""

import re
from urllib.parse import urlparse

from ..exceptions import ParseError

ARTWORK_PATH_PATTERN = re.compile(r"^/(?:[a-z]{2}(?:-[a-z]+)?/)?artworks/(\d+)/?$", re.IGNORECASE)
PIXIV_HOSTS = {"pixiv.net", "www.pixiv.net"}


def parse_illust_id(value: str) -> int:
    """
    Extract an illustration ID from a bare number or an artwork URL.

    Accepts:
        92065303
        https://www.pixiv.net/artworks/92065303
        https://www.pixiv.net/en/artworks/92065303

    Raises:
        ParseError: If value is neither
    """
    text = (value or "").strip()
    if text.isdigit():
        return int(text)

    parsed = urlparse(text)
    if parsed.scheme in ("http", "https") and parsed.hostname in PIXIV_HOSTS:
        match = ARTWORK_PATH_PATTERN.match(parsed.path)
        if match:
            return int(match.group(1))

    raise ParseError(f"Not a pixiv illustration ID or artwork URL: {value!r}")


def is_ascii(value: str) -> bool:
    return all(ord(char) < 128 for char in value)
