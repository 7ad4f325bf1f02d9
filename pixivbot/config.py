"""
Configuration for the image relay.

Centralized configuration for transcoding limits, HTTP requests, and delivery mode.
Settings can be overridden via environment variables (PIXIVBOT_* variables).
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """Typed settings read from PIXIVBOT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PIXIVBOT_",
        extra="ignore",
    )

    # ==================== Transcoding Limits ====================

    max_img_size: int = Field(
        default=10 * 1024 * 1024, gt=0, description="Hard byte ceiling of the chat channel"
    )
    max_dimension: int = Field(default=2560, gt=0, description="Longest side after normalization")
    initial_quality: int = Field(default=100, ge=1, le=100)
    quality_step: int = Field(default=10, gt=0)

    # ==================== HTTP Settings ====================

    # pximg hosts reject hot-linked requests without this
    referer: str = "https://www.pixiv.net/"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    )
    # Unset means block until the transport finishes
    http_timeout: float | None = None

    # ==================== Delivery ====================

    delivery_mode: Literal["direct", "proxied"] = "direct"
    upload_method: Literal["url", "download"] = "download"
    proxy_host: str | None = Field(default=None, description="Replacement host, e.g. i.pixiv.cat")
    use_original: bool = False

    # ==================== pixiv API ====================

    pixiv_api_base: str = "https://www.pixiv.net"
    accept_language: str = "zh-CN,zh"


settings = RelaySettings()

MAX_IMG_SIZE = settings.max_img_size
MAX_DIMENSION = settings.max_dimension
INITIAL_QUALITY = settings.initial_quality
QUALITY_STEP = settings.quality_step

# The one declared format that always goes through decode/encode
TRANSCODE_CONTENT_TYPE = "image/png"

REFERER = settings.referer
USER_AGENT = settings.user_agent
HTTP_TIMEOUT = settings.http_timeout

DELIVERY_MODE = settings.delivery_mode
UPLOAD_METHOD = settings.upload_method
PROXY_HOST = settings.proxy_host
USE_ORIGINAL = settings.use_original

PIXIV_API_BASE = settings.pixiv_api_base
PIXIV_SITE_BASE = "https://www.pixiv.net"
ACCEPT_LANGUAGE = settings.accept_language
