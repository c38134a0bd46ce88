"""Command-line entry point for page asset extraction."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import ProbeConfig, is_valid_timeout
from .errors import InvalidBaseURLError
from .extract import extract_image_urls_and_alts, extract_pdf_links
from .verify import extract_images_with_sizes_and_alts

logger = logging.getLogger("page_assets.cli")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        help="Path to an HTML file, or '-' to read HTML from STDIN",
    )
    parser.add_argument(
        "--base-url",
        required=True,
        help="Absolute URL of the page, used to resolve relative references",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_image_arguments(parser: argparse.ArgumentParser) -> None:
    _add_common_arguments(parser)
    parser.add_argument(
        "--probe",
        action="store_true",
        help="Send a HEAD request for each image to report size, type and status",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-image probe timeout in seconds (default: 5)",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Maximum number of probes in flight at once (default: unlimited)",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="List images and PDF links referenced by an HTML page.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    images_parser = subparsers.add_parser(
        "images", help="Extract image URLs and alt text, optionally probing each"
    )
    _add_image_arguments(images_parser)

    pdfs_parser = subparsers.add_parser("pdfs", help="Extract links to PDF documents")
    _add_common_arguments(pdfs_parser)

    args = parser.parse_args(argv)
    if getattr(args, "timeout", None) is not None and not is_valid_timeout(args.timeout):
        parser.error("--timeout must be a positive finite number")
    if getattr(args, "max_concurrency", None) is not None and args.max_concurrency < 1:
        parser.error("--max-concurrency must be at least 1")
    args.parser = parser
    return args


def _read_html(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _build_config(args: argparse.Namespace) -> ProbeConfig:
    config = ProbeConfig.from_env()
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.max_concurrency is not None:
        config.max_concurrency = args.max_concurrency
    return config


def _run_images(args: argparse.Namespace, html: str) -> object:
    if not args.probe:
        assets = extract_image_urls_and_alts(html, args.base_url)
        return [{"url": asset.url, "alt_text": asset.alt_text} for asset in assets]

    config = _build_config(args)
    results = asyncio.run(
        extract_images_with_sizes_and_alts(html, args.base_url, config=config)
    )
    return [result.to_dict() for result in results]


def _run_pdfs(args: argparse.Namespace, html: str) -> object:
    links = extract_pdf_links(html, args.base_url)
    return links.to_dict() if links is not None else None


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    try:
        html = _read_html(args.source)
    except OSError as exc:
        args.parser.error(f"cannot read {args.source}: {exc}")

    start = time.perf_counter()
    try:
        if args.command == "images":
            payload = _run_images(args, html)
            found = len(payload)
        else:
            payload = _run_pdfs(args, html)
            found = len(payload["pdf_links"]) if payload else 0
    except InvalidBaseURLError as exc:
        args.parser.error(str(exc))
    logger.info(
        "Found %d %s on %s in %.2fs",
        found,
        "image(s)" if args.command == "images" else "PDF link(s)",
        args.base_url,
        time.perf_counter() - start,
    )

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    sys.stdout.flush()


if __name__ == "__main__":
    main()
