from unittest.mock import MagicMock, patch

import pytest
import requests

from pixivbot import config
from pixivbot.exceptions import NetworkError
from pixivbot.services.image_pipeline.fetcher import fetch_image, get_image_headers

IMAGE_URL = "https://i.pximg.net/img-original/img/2021/08/20/00/00/00/92065303_p0.png"


def _response(content=b"data", content_type="image/png"):
    response = MagicMock()
    response.content = content
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.raise_for_status.return_value = None
    return response


class TestGetImageHeaders:
    def test_referer_is_site_root(self):
        headers = get_image_headers()
        assert headers["Referer"] == "https://www.pixiv.net/"
        assert "User-Agent" in headers


class TestFetchImage:
    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_fetch_success(self, mock_get):
        mock_get.return_value = _response(b"\x89PNG body", "image/png; charset=binary")

        result = fetch_image(IMAGE_URL)

        assert result.data == b"\x89PNG body"
        assert result.content_type == "image/png"
        assert result.url == IMAGE_URL
        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args == (IMAGE_URL,)
        assert kwargs["headers"]["Referer"] == config.REFERER
        assert kwargs["timeout"] == config.HTTP_TIMEOUT

    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_missing_content_type(self, mock_get):
        mock_get.return_value = _response(b"body", None)
        assert fetch_image(IMAGE_URL).content_type == ""

    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_explicit_timeout(self, mock_get):
        mock_get.return_value = _response()
        fetch_image(IMAGE_URL, timeout=5)
        assert mock_get.call_args.kwargs["timeout"] == 5

    def test_uses_session_when_given(self):
        session = MagicMock()
        session.get.return_value = _response(b"jpeg", "image/jpeg")

        result = fetch_image(IMAGE_URL, session=session)

        assert result.content_type == "image/jpeg"
        session.get.assert_called_once()

    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_http_error_is_network_error(self, mock_get):
        error_response = MagicMock(status_code=403)
        response = _response()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            "403 Client Error: Forbidden", response=error_response
        )
        mock_get.return_value = response

        with pytest.raises(NetworkError, match="403 Client Error") as exc_info:
            fetch_image(IMAGE_URL)

        assert exc_info.value.status_code == 403
        assert exc_info.value.url == IMAGE_URL
        assert isinstance(exc_info.value.original_error, requests.exceptions.HTTPError)

    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_transport_failure_not_retried(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(NetworkError, match="Connection refused") as exc_info:
            fetch_image(IMAGE_URL)

        assert mock_get.call_count == 1
        assert exc_info.value.status_code is None

    @patch("pixivbot.services.image_pipeline.fetcher.requests.get")
    def test_invalid_url_is_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.MissingSchema("Invalid URL 'nope'")

        with pytest.raises(NetworkError):
            fetch_image("nope")
