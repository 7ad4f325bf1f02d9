"""Command-line entry point for relaying a single pixiv illustration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import config
from .exceptions import PipelineError
from .pixiv import PixivClient, parse_illust_id
from .services.image_pipeline import (
    DELIVERY_MODES,
    UPLOAD_METHODS,
    ImageFetcher,
    build_delivery_strategy,
)

logger = logging.getLogger("pixivbot.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pixivbot",
        description="Fetch a pixiv illustration and produce a chat-compliant image",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Fetch one illustration")
    fetch.add_argument("illust", help="Illustration ID or https://www.pixiv.net/artworks/<id> URL")
    fetch.add_argument(
        "--original",
        action=argparse.BooleanOptionalAction,
        default=config.USE_ORIGINAL,
        help="Use the original image instead of the regular-size one",
    )
    fetch.add_argument(
        "--mode",
        choices=DELIVERY_MODES,
        default=config.DELIVERY_MODE,
        help="How image URLs are resolved",
    )
    fetch.add_argument(
        "--proxy-host",
        default=config.PROXY_HOST,
        help="Replacement host for proxied mode",
    )
    fetch.add_argument(
        "--upload",
        choices=UPLOAD_METHODS,
        default=config.UPLOAD_METHOD,
        help="'url' prints the resolved URL, 'download' fetches and transcodes it",
    )
    fetch.add_argument(
        "--output",
        type=Path,
        help="Where to write the image (download mode, defaults to <id>.<ext>)",
    )
    fetch.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _guess_extension(data: bytes) -> str:
    if data.startswith(b"\xff\xd8"):
        return "jpg"
    if data.startswith(b"\x89PNG"):
        return "png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    return "bin"


def _run_fetch(args: argparse.Namespace) -> int:
    illust_id = parse_illust_id(args.illust)
    illust = PixivClient().get_illust(illust_id)
    if illust.is_ugoira:
        logger.error(f"Illustration {illust_id} is an ugoira; animated images are not supported")
        return 1

    strategy = build_delivery_strategy(args.mode, args.proxy_host, args.upload)
    outbound = ImageFetcher(strategy, original=args.original).fetch_image(illust)

    if outbound.is_remote:
        sys.stdout.write(f"{outbound.url}\n")
        return 0

    data = outbound.read()
    output = args.output or Path(f"{illust_id}.{_guess_extension(data)}")
    output.write_bytes(data)
    logger.info(f"Saved {illust.title!r} by {illust.user_name} to {output} ({len(data)} bytes)")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        return _run_fetch(args)
    except PipelineError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
