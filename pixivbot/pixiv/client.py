"""pixiv ajax API client."""

import logging

import requests
from pydantic import ValidationError

from .. import config
from ..exceptions import NetworkError, PixivAPIError
from .types import IllustData, IllustResponse

logger = logging.getLogger(__name__)


class PixivClient:
    """
    Minimal client for the public pixiv ajax endpoints.

    Supplies the image references consumed by the image pipeline.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        language: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.session = session if session is not None else requests.Session()
        self.language = language or config.ACCEPT_LANGUAGE
        self.base_url = (base_url or config.PIXIV_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT

    def _get(self, path: str) -> bytes:
        """Execute a GET request against the ajax API and return the raw body."""
        url = f"{self.base_url}{path}"
        headers = {"accept-language": self.language, "User-Agent": config.USER_AGENT}
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"pixiv API request failed at {path}: {e}")
            raise NetworkError(f"failed to request url: {e}", url=url, original_error=e) from e
        # Error responses still carry a JSON envelope, so the status is not checked here
        return response.content

    def get_illust(self, illust_id: int) -> IllustData:
        """
        Fetch illustration details.

        Args:
            illust_id: Numeric illustration ID

        Returns:
            IllustData for the illustration

        Raises:
            NetworkError: On transport failure
            PixivAPIError: On an undecodable payload or an API-level error
        """
        data = self._get(f"/ajax/illust/{illust_id}")
        try:
            response = IllustResponse.model_validate_json(data)
        except ValidationError as e:
            logger.debug(f"Unparsable pixiv response: {data[:200]!r}")
            raise PixivAPIError("failed to parse json", original_error=e) from e

        error = response.get_error()
        if error is not None:
            raise error
        if response.body is None:
            raise PixivAPIError(f"empty response body for illustration {illust_id}")

        logger.debug(f"Fetched illustration {illust_id}: {response.body.title!r}")
        return response.body
