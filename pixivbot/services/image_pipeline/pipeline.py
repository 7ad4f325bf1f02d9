"""
Image transcoding pipeline orchestrator.

reference -> resolved URL -> raw bytes -> (decode/resize) -> (encode search) -> final bytes

Every call is independent: buffers and rasters are created and dropped
within a single request, so concurrent calls share no state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from ... import config
from .assembler import OutboundFile
from .context import FetchedImage, ImageSource
from .encoder import BudgetEncoder
from .fetcher import fetch_image
from .normalize import (
    decode_image,
    fit_within,
    needs_transcode,
    normalize_content_type,
    prepare_for_jpeg,
)

if TYPE_CHECKING:
    from .strategies import DeliveryStrategy

logger = logging.getLogger(__name__)


def transcode(
    image: FetchedImage,
    max_size: int | None = None,
    max_dimension: int | None = None,
) -> bytes:
    """
    Bring fetched bytes within the channel limits.

    Process:
    1. Pass through non-PNG bodies that already fit max_size
    2. Decode with Pillow
    3. Downscale once to max_dimension
    4. Search for the highest JPEG quality under max_size

    Args:
        image: Fetched body and declared content type
        max_size: Byte budget (defaults to config.MAX_IMG_SIZE)
        max_dimension: Longest side (defaults to config.MAX_DIMENSION)

    Returns:
        Bytes whose length never exceeds max_size

    Raises:
        DecodeError: If the body cannot be decoded
        EncodeExhausted: If no quality level fits the budget
    """
    if max_size is None:
        max_size = config.MAX_IMG_SIZE

    if not needs_transcode(image.content_type, len(image.data), max_size):
        logger.debug(
            f"Passing through {image.content_type or 'unknown type'} ({len(image.data)} bytes)"
        )
        return image.data

    if normalize_content_type(image.content_type) != config.TRANSCODE_CONTENT_TYPE:
        logger.info(
            f"{image.content_type or 'Unknown type'} image of {len(image.data)} bytes "
            f"exceeds {max_size} bytes, forcing re-encode"
        )

    img = decode_image(image.data)
    # Convert first: Pillow resizes palette images with NEAREST regardless of filter
    img = fit_within(prepare_for_jpeg(img), max_dimension)
    result = BudgetEncoder(max_size=max_size).encode(img)

    logger.debug(
        f"Transcoded image: {len(image.data)}b -> {len(result.data)}b (quality {result.quality})"
    )
    return result.data


def fetch_transcoded(
    url: str,
    session: requests.Session | None = None,
    max_size: int | None = None,
    max_dimension: int | None = None,
) -> FetchedImage:
    """
    Fetch url once and return channel-compliant bytes with their content type.

    Pass-through bodies keep the declared type; re-encoded bodies are image/jpeg.
    """
    fetched = fetch_image(url, session=session)
    data = transcode(fetched, max_size=max_size, max_dimension=max_dimension)
    content_type = fetched.content_type if data is fetched.data else "image/jpeg"
    return FetchedImage(data=data, content_type=content_type, url=url)


def fetch_and_transcode(
    url: str,
    session: requests.Session | None = None,
    max_size: int | None = None,
    max_dimension: int | None = None,
) -> bytes:
    """Fetch url once and return channel-compliant bytes (all-or-nothing)."""
    return fetch_transcoded(
        url, session=session, max_size=max_size, max_dimension=max_dimension
    ).data


class ImageFetcher:
    """
    Picks the small or original variant of an image source and hands it
    to the configured delivery strategy.
    """

    def __init__(self, method: DeliveryStrategy, original: bool = False):
        self.method = method
        self.original = original

    def select_url(self, source: ImageSource) -> str:
        if self.original:
            return source.get_original_image()
        return source.get_small_image()

    def fetch_image(self, source: ImageSource) -> OutboundFile:
        url = self.select_url(source)
        logger.debug(f"ImageFetcher: {self.method.__class__.__name__} for {url}")
        return self.method.from_url(url)


class InlineImageFetcher(ImageFetcher):
    """Resolution only, for inline results where the chat server fetches the image."""

    def get_image_url(self, source: ImageSource) -> str:
        return self.method.transform_url(self.select_url(source))
