"""
Adaptive image transcoding pipeline.

Provides functionality for:
- Resolving stored image URLs (direct or through a proxy host)
- HTTP image fetching with the mandatory Referer header
- Pass-through, decode and resize normalization
- JPEG encoding under a hard byte budget
"""

from .assembler import OutboundFile, assemble
from .context import EncodeResult, FetchedImage, ImageReference, ImageSource
from .encoder import BudgetEncoder, encode_within_budget
from .fetcher import fetch_image
from .pipeline import (
    ImageFetcher,
    InlineImageFetcher,
    fetch_and_transcode,
    fetch_transcoded,
    transcode,
)
from .strategies import (
    DELIVERY_MODES,
    UPLOAD_METHODS,
    DeliveryStrategy,
    DirectURL,
    Download,
    ProxiedURL,
    build_delivery_strategy,
    build_resolver,
)

__all__ = [
    "DELIVERY_MODES",
    "UPLOAD_METHODS",
    "BudgetEncoder",
    "DeliveryStrategy",
    "DirectURL",
    "Download",
    "EncodeResult",
    "FetchedImage",
    "ImageFetcher",
    "ImageReference",
    "ImageSource",
    "InlineImageFetcher",
    "OutboundFile",
    "ProxiedURL",
    "assemble",
    "build_delivery_strategy",
    "build_resolver",
    "encode_within_budget",
    "fetch_and_transcode",
    "fetch_transcoded",
    "fetch_image",
    "transcode",
]
