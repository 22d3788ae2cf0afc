# src/api/errors.py

"""Error taxonomy raised by the store API client."""


class ApiError(Exception):
    """Base class for every failure raised by the API client."""


class NetworkError(ApiError):
    """The request never produced an HTTP response (DNS, connect, reset)."""


class HttpStatusError(ApiError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class DeserializationError(ApiError):
    """The response body is not JSON or does not have the expected shape."""
