"""Concurrent verification of the images referenced by a page."""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import requests

from .config import ProbeConfig
from .errors import ProbeError
from .extract import extract_image_urls_and_alts
from .models import ImageAsset, ImageProbeResult
from .probe import probe_image

logger = logging.getLogger("page_assets")


async def verify_images(
    assets: Sequence[ImageAsset],
    config: Optional[ProbeConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[ImageProbeResult]:
    """Probe every asset concurrently and return one result per asset, in order.

    A failed probe yields a zeroed record and a warning; it never removes the
    asset from the output or aborts the batch.
    """
    if not assets:
        return []
    config = config or ProbeConfig()

    owns_session = session is None
    if session is None:
        session = requests.Session()
    # One worker per asset: a timed-out request holds its thread until
    # requests itself gives up.
    executor = ThreadPoolExecutor(
        max_workers=len(assets), thread_name_prefix="page-assets-probe"
    )
    limiter = (
        asyncio.Semaphore(config.max_concurrency)
        if config.max_concurrency is not None
        else None
    )

    async def _probe(asset: ImageAsset) -> ImageProbeResult:
        try:
            outcome = await probe_image(
                asset.url,
                session=session,
                timeout=config.timeout,
                executor=executor,
            )
        except ProbeError as exc:
            logger.warning("%s", exc)
            return ImageProbeResult.failed_probe(asset)
        return ImageProbeResult(
            url=asset.url,
            alt_text=asset.alt_text,
            size_kb=outcome.size_kb,
            content_type=outcome.content_type,
            status_code=outcome.status_code,
        )

    async def _verify(asset: ImageAsset) -> ImageProbeResult:
        if limiter is None:
            return await _probe(asset)
        async with limiter:
            return await _probe(asset)

    start = time.perf_counter()
    try:
        results = await asyncio.gather(*(_verify(asset) for asset in assets))
    finally:
        executor.shutdown(wait=False)
        if owns_session:
            session.close()

    failures = sum(1 for result in results if result.failed)
    logger.info(
        "Verified %d image(s) in %.2fs (%d probe(s) failed)",
        len(results),
        time.perf_counter() - start,
        failures,
    )
    return list(results)


async def extract_images_with_sizes_and_alts(
    html: str,
    base_url: str,
    config: Optional[ProbeConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[ImageProbeResult]:
    """Extract images from HTML and report size, content type and status for each.

    Raises ``InvalidBaseURLError`` before any network activity when
    ``base_url`` is not absolute. Individual probe failures are absorbed.
    """
    assets = extract_image_urls_and_alts(html, base_url)
    logger.debug("Found %d image(s) on %s", len(assets), base_url)
    return await verify_images(assets, config=config, session=session)
