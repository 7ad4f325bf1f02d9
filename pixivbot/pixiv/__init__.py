"""
pixiv metadata retrieval.

Supplies image references (regular and original URLs) to the image pipeline.
"""

from .client import PixivClient
from .types import IllustData, IllustResponse, IllustTag, IllustUrls
from .utils import is_ascii, parse_illust_id

__all__ = [
    "IllustData",
    "IllustResponse",
    "IllustTag",
    "IllustUrls",
    "PixivClient",
    "is_ascii",
    "parse_illust_id",
]
