"""
Pipeline exceptions.

Custom exceptions used throughout the image relay for error handling
and transcoding flow control.
"""


class PipelineError(Exception):
    """
    Base exception for all relay errors.

    Attributes:
        message: Error description
        original_error: Original exception that caused this error
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class NetworkError(PipelineError):
    """
    Exception raised when a request cannot be built or the transport fails.

    The original requests exception is kept on ``original_error`` and its
    message is reused verbatim.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.url = url
        self.status_code = status_code


class DecodeError(PipelineError):
    """Exception raised when image data is malformed or unsupported."""

    pass


class CapacityExceeded(PipelineError):
    """
    Raised by ScratchBuffer when a write would overflow its capacity.

    Only the quality search loop handles this. It never leaves the encoder.
    """

    def __init__(self, capacity: int, requested: int):
        super().__init__(f"write of {requested} bytes exceeds capacity {capacity}")
        self.capacity = capacity
        self.requested = requested


class EncodeExhausted(PipelineError):
    """
    Exception raised when no quality level fits the size budget.

    Attributes:
        max_size: Byte budget that could not be met
        attempts: Quality levels tried, in order
    """

    def __init__(self, max_size: int, attempts: list[int]):
        super().__init__(
            f"cannot produce a compliant asset: no quality in {attempts} fits {max_size} bytes"
        )
        self.max_size = max_size
        self.attempts = attempts


class ParseError(PipelineError):
    """Exception raised when a URL or identifier cannot be parsed."""

    pass


class PixivAPIError(PipelineError):
    """Exception raised for pixiv API errors."""

    pass


class ConfigError(PipelineError):
    """Exception raised for invalid configuration."""

    pass
