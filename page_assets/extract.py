"""HTML extraction of image references and PDF links."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from .models import ImageAsset, PdfLinkSet
from .urls import parse_absolute_url, require_base_url, resolve_url

logger = logging.getLogger("page_assets")

IMAGE_SELECTOR = "img"
IMAGE_SOURCE_ATTRS = ("src", "data-src")
PDF_LINK_SELECTOR = "a[href$='.pdf']"


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _first_present(tag, attrs) -> Optional[str]:
    """Return the first attribute that exists on ``tag``, even if blank."""
    for attr in attrs:
        value = tag.get(attr)
        if value is not None:
            return value
    return None


def extract_image_urls_and_alts(html: str, base_url: str) -> List[ImageAsset]:
    """Extract image URLs and alt text from HTML in document order.

    ``src`` wins over the lazy-load ``data-src`` attribute whenever it is
    present. Elements with neither attribute, or whose URL cannot be resolved
    against ``base_url``, are skipped.
    """
    base = require_base_url(base_url)
    soup = _parse(html)

    assets: List[ImageAsset] = []
    skipped = 0
    for img in soup.select(IMAGE_SELECTOR):
        src = _first_present(img, IMAGE_SOURCE_ATTRS)
        if src is None:
            continue
        url = resolve_url(base, src)
        if url is None:
            skipped += 1
            continue
        assets.append(ImageAsset(url=url, alt_text=img.get("alt", "")))

    if skipped:
        logger.debug("Skipped %d image(s) with unresolvable URLs on %s", skipped, base)
    return assets


def extract_pdf_links(html: str, base_url: str) -> Optional[PdfLinkSet]:
    """Collect absolute links to PDF documents.

    Returns ``None`` when the page links to no PDFs at all.
    """
    base = require_base_url(base_url)
    soup = _parse(html)

    links: List[str] = []
    for anchor in soup.select(PDF_LINK_SELECTOR):
        href = anchor.get("href")
        if href is None:
            continue
        url = parse_absolute_url(href) or resolve_url(base, href)
        if url is None:
            logger.debug("Skipping unresolvable PDF link %r on %s", href, base)
            continue
        links.append(url)

    if not links:
        return None
    return PdfLinkSet(links=links)
