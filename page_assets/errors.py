"""Exceptions raised while resolving and probing page assets."""

from __future__ import annotations


class InvalidBaseURLError(ValueError):
    """The base URL handed to an extractor is not an absolute URL."""

    def __init__(self, base_url: str) -> None:
        super().__init__(f"Base URL must be absolute: {base_url!r}")
        self.base_url = base_url


class ProbeError(Exception):
    """A HEAD probe did not produce a usable image response."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class ProbeTimeoutError(ProbeError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"Timeout while fetching image: {url}")


class ProbeTransportError(ProbeError):
    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(url, f"Failed to send request for {url}: {cause}")
        self.cause = cause


class NonImageContentError(ProbeError):
    def __init__(self, url: str, content_type: str) -> None:
        super().__init__(
            url, f"Non-image content type for {url}: {content_type or '(none)'}"
        )
        self.content_type = content_type
