"""
Budget-constrained JPEG encoder.

Finds the highest JPEG quality whose output fits a byte budget:

1. Encode at quality 100 into a ScratchBuffer of capacity max_size
2. If the buffer overflows mid-write, reset it and retry 10 points lower
3. Stop at the first attempt that fits
4. Give up (EncodeExhausted) once the next quality would be 0 or below

The overflow aborts the encode as soon as the budget is crossed, so
doomed attempts never run to completion and memory stays bounded.
"""

import logging

from PIL import Image

from ... import config
from ...exceptions import CapacityExceeded, EncodeExhausted
from .buffer import ScratchBuffer
from .context import EncodeResult

logger = logging.getLogger(__name__)


class BudgetEncoder:
    """Quality search over a single reusable scratch buffer."""

    def __init__(
        self,
        max_size: int | None = None,
        initial_quality: int | None = None,
        quality_step: int | None = None,
    ):
        self.max_size = config.MAX_IMG_SIZE if max_size is None else max_size
        self.initial_quality = (
            config.INITIAL_QUALITY if initial_quality is None else initial_quality
        )
        self.quality_step = config.QUALITY_STEP if quality_step is None else quality_step
        if self.quality_step <= 0:
            raise ValueError(f"quality_step must be positive, got {self.quality_step}")

    def qualities(self) -> list[int]:
        """Quality levels in the order they are tried: 100, 90, ..., 10."""
        return list(range(self.initial_quality, 0, -self.quality_step))

    def _try_encode(self, img: Image.Image, quality: int, buffer: ScratchBuffer) -> bytes:
        buffer.reset()
        img.save(buffer, format="JPEG", quality=quality)
        return buffer.getvalue()

    def encode(self, img: Image.Image) -> EncodeResult:
        """
        Encode img as JPEG at the highest quality that fits max_size.

        Args:
            img: RGB raster (see normalize.prepare_for_jpeg)

        Returns:
            EncodeResult with the bytes, the winning quality and all attempts

        Raises:
            EncodeExhausted: If even the lowest quality overflows the budget
        """
        buffer = ScratchBuffer(self.max_size)
        attempts: list[int] = []

        for quality in self.qualities():
            attempts.append(quality)
            try:
                data = self._try_encode(img, quality, buffer)
            except CapacityExceeded:
                logger.debug(f"Quality {quality} exceeds {self.max_size} bytes, stepping down")
                continue

            logger.debug(
                f"Encoded JPEG at quality {quality}: {len(data)} bytes "
                f"({len(attempts)} attempt(s))"
            )
            return EncodeResult(data=data, quality=quality, attempts=attempts)

        logger.warning(f"No JPEG quality fits {self.max_size} bytes (tried {attempts})")
        raise EncodeExhausted(self.max_size, attempts)


def encode_within_budget(img: Image.Image, max_size: int | None = None) -> bytes:
    """Encode img under max_size bytes and return only the data."""
    return BudgetEncoder(max_size=max_size).encode(img).data
