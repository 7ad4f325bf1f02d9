"""
Delivery strategies using Strategy Pattern.

Decide how a stored image URL reaches the chat server:
1. DirectURL - hand the URL over unchanged
2. ProxiedURL - swap the host for a configured reverse proxy
3. Download - fetch the bytes ourselves, transcode, and upload the payload

The strategy is chosen once at configuration time (build_delivery_strategy),
never per request.
"""

import logging
from abc import ABC, abstractmethod
from urllib.parse import urlsplit, urlunsplit

import requests

from ... import config
from ...exceptions import ConfigError, ParseError
from .assembler import OutboundFile, assemble
from .pipeline import fetch_transcoded

logger = logging.getLogger(__name__)

DELIVERY_MODES = ("direct", "proxied")
UPLOAD_METHODS = ("url", "download")


class DeliveryStrategy(ABC):
    """Base class for delivery strategies."""

    @abstractmethod
    def transform_url(self, source: str) -> str:
        """Turn a stored image URL into the URL that will actually be fetched."""
        pass

    def from_url(self, source: str) -> OutboundFile:
        """Build the outbound file for an image URL."""
        return OutboundFile.from_url(self.transform_url(source))


class DirectURL(DeliveryStrategy):
    """Strategy that uses the stored URL as-is."""

    def transform_url(self, source: str) -> str:
        return source


class ProxiedURL(DeliveryStrategy):
    """Strategy that routes requests through a reverse proxy host."""

    def __init__(self, proxy_host: str):
        if not proxy_host:
            raise ConfigError("ProxiedURL requires a proxy host")
        self.proxy_host = proxy_host

    def transform_url(self, source: str) -> str:
        """
        Replace the host component of source with the proxy host.

        Scheme, path, query and fragment are kept; user info is kept as well.

        Raises:
            ParseError: If source is not an absolute URL
        """
        try:
            parts = urlsplit(source)
            # Accessing port validates it (raises ValueError for garbage)
            parts.port
        except (ValueError, TypeError, AttributeError) as e:
            raise ParseError(f"Invalid image URL {source!r}: {e}", original_error=e) from e

        if not parts.scheme or not parts.hostname:
            raise ParseError(f"Invalid image URL {source!r}: missing scheme or host")

        userinfo, sep, _ = parts.netloc.rpartition("@")
        netloc = f"{userinfo}{sep}{self.proxy_host}"
        return urlunsplit(parts._replace(netloc=netloc))


class Download(DeliveryStrategy):
    """
    Strategy that fetches the image and uploads its bytes.

    URL resolution is delegated to a wrapped DirectURL or ProxiedURL.
    """

    def __init__(
        self,
        resolver: DeliveryStrategy | None = None,
        session: requests.Session | None = None,
        max_size: int | None = None,
        max_dimension: int | None = None,
    ):
        self.resolver = resolver if resolver is not None else DirectURL()
        self.session = session
        self.max_size = max_size
        self.max_dimension = max_dimension

    def transform_url(self, source: str) -> str:
        return self.resolver.transform_url(source)

    def from_url(self, source: str) -> OutboundFile:
        url = self.transform_url(source)
        asset = fetch_transcoded(
            url,
            session=self.session,
            max_size=self.max_size,
            max_dimension=self.max_dimension,
        )
        return assemble(asset.data, asset.content_type)


def build_resolver(mode: str | None = None, proxy_host: str | None = None) -> DeliveryStrategy:
    """
    Build the URL resolution strategy for a delivery mode.

    Args:
        mode: 'direct' or 'proxied' (defaults to config.DELIVERY_MODE)
        proxy_host: Proxy host for proxied mode (defaults to config.PROXY_HOST)

    Raises:
        ConfigError: On an unknown mode or a proxied mode without a host
    """
    mode = (mode or config.DELIVERY_MODE).lower()
    if mode == "direct":
        return DirectURL()
    if mode == "proxied":
        host = proxy_host or config.PROXY_HOST
        if not host:
            raise ConfigError("Proxied delivery mode requires PIXIVBOT_PROXY_HOST")
        return ProxiedURL(host)
    raise ConfigError(f"Unknown delivery mode {mode!r}, expected one of {DELIVERY_MODES}")


def build_delivery_strategy(
    mode: str | None = None,
    proxy_host: str | None = None,
    upload: str | None = None,
    session: requests.Session | None = None,
) -> DeliveryStrategy:
    """
    Build the delivery strategy used for every request of this process.

    Args:
        mode: URL resolution mode, 'direct' or 'proxied'
        proxy_host: Proxy host for proxied mode
        upload: 'url' to let the chat server fetch the URL, 'download' to
            fetch and transcode locally (defaults to config.UPLOAD_METHOD)
        session: Optional requests session for download mode

    Raises:
        ConfigError: On an unknown mode or upload method
    """
    resolver = build_resolver(mode, proxy_host)
    upload = (upload or config.UPLOAD_METHOD).lower()
    if upload == "url":
        strategy = resolver
    elif upload == "download":
        strategy = Download(resolver, session=session)
    else:
        raise ConfigError(f"Unknown upload method {upload!r}, expected one of {UPLOAD_METHODS}")

    logger.info(f"Delivery strategy: {strategy.__class__.__name__} ({resolver.__class__.__name__})")
    return strategy
