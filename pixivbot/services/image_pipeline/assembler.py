"""
Outbound file assembly.

Wraps final image bytes (or a URL the chat server fetches itself) into
the upload descriptor handed to the message-delivery layer.
"""

import io
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundFile:
    """Either a remote URL or an in-memory reader, never both."""

    url: str | None = None
    reader: io.BytesIO | None = None
    content_type: str | None = None

    @classmethod
    def from_url(cls, url: str) -> "OutboundFile":
        return cls(url=url)

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str | None = None) -> "OutboundFile":
        return cls(reader=io.BytesIO(data), content_type=content_type)

    @property
    def is_remote(self) -> bool:
        return self.url is not None

    def read(self) -> bytes:
        """Return the full payload of an in-memory file."""
        if self.reader is None:
            raise ValueError("OutboundFile points to a URL and has no local payload")
        return self.reader.getvalue()


def assemble(data: bytes, content_type: str | None = None) -> OutboundFile:
    """Wrap bytes in a readable handle for upload. No transformation."""
    logger.debug(f"Assembled outbound file ({len(data)} bytes, {content_type})")
    return OutboundFile.from_bytes(data, content_type)
