"""
HTTP image fetching.

Handles downloading images from pximg hosts with:
- The mandatory Referer header (hot-link protection)
- Content type extraction
- Error mapping to NetworkError

Exactly one request is made per call. Retries belong to the transport.
"""

import logging

import requests

from ... import config
from ...exceptions import NetworkError
from .context import FetchedImage
from .normalize import normalize_content_type

logger = logging.getLogger(__name__)


def get_image_headers() -> dict[str, str]:
    """
    Get HTTP headers for image fetching.

    Returns:
        Dict of HTTP headers, always including Referer
    """
    return {
        "User-Agent": config.USER_AGENT,
        "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
        "Referer": config.REFERER,
    }


def fetch_image(
    url: str,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> FetchedImage:
    """
    Fetch a single image with one GET request.

    Args:
        url: Resolved image URL
        session: Optional requests session (a shared transport)
        timeout: Request timeout in seconds; defaults to config.HTTP_TIMEOUT

    Returns:
        FetchedImage with the full body and the declared content type

    Raises:
        NetworkError: On request construction, transport, or HTTP status failure
    """
    if timeout is None:
        timeout = config.HTTP_TIMEOUT
    http = session if session is not None else requests

    logger.debug(f"Fetching image from {url}")
    try:
        response = http.get(url, headers=get_image_headers(), timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status_code = e.response.status_code if e.response is not None else None
        logger.warning(f"HTTP {status_code} fetching {url}")
        raise NetworkError(str(e), url=url, status_code=status_code, original_error=e) from e
    except requests.exceptions.RequestException as e:
        logger.warning(f"Error fetching image {url}: {e}")
        raise NetworkError(str(e), url=url, original_error=e) from e

    content_type = normalize_content_type(response.headers.get("Content-Type"))
    data = response.content
    logger.debug(f"Fetched image ({len(data)} bytes, {content_type or 'no content type'}): {url}")
    return FetchedImage(data=data, content_type=content_type, url=url)
