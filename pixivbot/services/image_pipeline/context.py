"""
Image pipeline data structures.

Dataclasses passed between the resolution, fetch and encode stages.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class ImageSource(ABC):
    """Anything that can hand out a small and an original image URL."""

    @abstractmethod
    def get_small_image(self) -> str:
        pass

    @abstractmethod
    def get_original_image(self) -> str:
        pass


@dataclass(frozen=True)
class ImageReference(ImageSource):
    """Pair of image URLs supplied per request."""

    small_url: str
    original_url: str

    def get_small_image(self) -> str:
        return self.small_url

    def get_original_image(self) -> str:
        return self.original_url


@dataclass
class FetchedImage:
    """Data returned from the fetcher."""

    data: bytes  # Raw response body
    content_type: str  # Declared MIME type, parameters stripped (e.g. 'image/png')
    url: str | None = None  # URL the body was fetched from


@dataclass
class EncodeResult:
    """Data returned from the budget encoder."""

    data: bytes  # Encoded JPEG bytes
    quality: int  # Quality level that fit the budget
    attempts: list[int] = field(default_factory=list)  # Every quality tried, in order
