"""
Decode and normalize utilities.

Handles:
- The pass-through decision (skip decoding for already compliant assets)
- Decoding raw bytes with Pillow
- One-shot downscaling to the maximum dimension
- Mode conversion for JPEG output
"""

import io
import logging

from PIL import Image, UnidentifiedImageError

from ... import config
from ...exceptions import DecodeError

logger = logging.getLogger(__name__)


def normalize_content_type(content_type: str | None) -> str:
    """Strip MIME parameters and lower-case ('image/PNG; q=1' -> 'image/png')."""
    if not content_type:
        return ""
    return content_type.split(";")[0].strip().lower()


def needs_transcode(content_type: str | None, size: int, max_size: int | None = None) -> bool:
    """
    Decide whether an asset must be decoded and re-encoded.

    PNG always goes through the encoder. Any other type passes through
    untouched when it already fits the budget. Oversized non-PNG assets are
    transcoded as well, since passing them through would break the channel limit.

    Args:
        content_type: Declared MIME type
        size: Body length in bytes
        max_size: Byte budget (defaults to config.MAX_IMG_SIZE)

    Returns:
        True if the bytes must go through decode/resize/encode
    """
    if max_size is None:
        max_size = config.MAX_IMG_SIZE
    if normalize_content_type(content_type) == config.TRANSCODE_CONTENT_TYPE:
        return True
    return size > max_size


def decode_image(data: bytes) -> Image.Image:
    """
    Decode bytes into a fully loaded raster image.

    Raises:
        DecodeError: If the data is malformed or in an unsupported format
    """
    try:
        img = Image.open(io.BytesIO(data))
        # Force pixel decoding now so truncated files fail here, not in the encoder
        img.load()
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode safely: {e}", original_error=e) from e
    except UnidentifiedImageError as e:
        raise DecodeError(f"Unsupported image data: {e}", original_error=e) from e
    except Exception as e:
        # Truncated or corrupt payloads surface as OSError, SyntaxError, struct.error...
        raise DecodeError(f"Cannot decode image data: {e}", original_error=e) from e

    logger.debug(f"Decoded {img.format} image {img.width}x{img.height} ({img.mode})")
    return img


def fit_within(img: Image.Image, max_dimension: int | None = None) -> Image.Image:
    """
    Downscale to fit a max_dimension square box, preserving aspect ratio.

    Images already within bounds are returned as the same object. Never upscales
    and never re-checks after resizing.
    """
    if max_dimension is None:
        max_dimension = config.MAX_DIMENSION

    width, height = img.size
    if width <= max_dimension and height <= max_dimension:
        return img

    ratio = min(max_dimension / width, max_dimension / height)
    new_width = max(1, round(width * ratio))
    new_height = max(1, round(height * ratio))
    resized = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    logger.debug(f"Resized image from {width}x{height} to {new_width}x{new_height}")
    return resized


def prepare_for_jpeg(img: Image.Image) -> Image.Image:
    """Convert to RGB, flattening any transparency onto white."""
    if img.mode == "RGB":
        return img

    if img.mode == "P":
        img = img.convert("RGBA" if "transparency" in img.info else "RGB")
    elif img.mode in ("LA", "PA"):
        img = img.convert("RGBA")

    if img.mode == "RGBA":
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background

    # 16-bit greyscale: a plain convert clips everything above 255 to white
    if img.mode == "I" or img.mode.startswith("I;16"):
        img = img.convert("I").point(lambda v: v * (1 / 256)).convert("L")

    return img.convert("RGB")
