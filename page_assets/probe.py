"""HEAD probes that characterize a remote image without downloading it."""

from __future__ import annotations

import asyncio
import logging
import re
from concurrent.futures import Executor
from typing import NamedTuple, Optional

import requests

from .config import DEFAULT_PROBE_TIMEOUT
from .errors import NonImageContentError, ProbeTimeoutError, ProbeTransportError

logger = logging.getLogger("page_assets")

BYTES_PER_KB = 1024
_DIGITS = re.compile(r"[0-9]+")


class ProbeOutcome(NamedTuple):
    """What a reachable server said about an image URL."""

    size_kb: int
    content_type: str
    status_code: int


def size_in_kb(content_length: Optional[str]) -> int:
    """Convert a Content-Length header to whole kilobytes, truncating.

    Missing or unparseable values count as zero bytes.
    """
    if not content_length or not _DIGITS.fullmatch(content_length.strip()):
        return 0
    return int(content_length) // BYTES_PER_KB


def classify_response(url: str, response: requests.Response) -> ProbeOutcome:
    """Turn a HEAD response into a probe outcome.

    Non-200 statuses are reported as observed with a size of zero. A 200 that
    does not declare an image content type raises ``NonImageContentError``.
    """
    status_code = response.status_code
    content_type = response.headers.get("Content-Type", "")

    content_length = None
    if status_code == requests.codes.ok:
        if "image" not in content_type:
            raise NonImageContentError(url, content_type)
        content_length = response.headers.get("Content-Length")

    return ProbeOutcome(size_in_kb(content_length), content_type, status_code)


def _send_head(session: requests.Session, url: str, timeout: float) -> requests.Response:
    return session.head(url, timeout=timeout, allow_redirects=True)


async def probe_image(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    executor: Optional[Executor] = None,
) -> ProbeOutcome:
    """Fetch size, content type and status code of an image with one HEAD request.

    The whole exchange, connection setup included, is bounded by ``timeout``
    seconds. The blocking request runs on ``executor`` (the loop's default
    executor when omitted).
    """
    loop = asyncio.get_running_loop()
    owns_session = session is None
    if session is None:
        session = requests.Session()

    try:
        response = await asyncio.wait_for(
            loop.run_in_executor(executor, _send_head, session, url, timeout),
            timeout,
        )
    except asyncio.TimeoutError:
        raise ProbeTimeoutError(url) from None
    except requests.Timeout as exc:
        raise ProbeTimeoutError(url) from exc
    except requests.RequestException as exc:
        raise ProbeTransportError(url, exc) from exc
    finally:
        if owns_session:
            session.close()

    logger.debug(
        "HEAD %s -> %s (%s)",
        url,
        response.status_code,
        response.headers.get("Content-Type", "-"),
    )
    return classify_response(url, response)
