#!/usr/bin/env python3
"""
Download champion avatars and rewrite avatar_url to local paths.

Images land in IMAGE_DIR as <slug>.<ext>; champions whose image cannot be
downloaded point at /champions/placeholder.svg.

Usage:
    uv run python backend/scripts/download_images.py --image-dir frontend/public/champions
"""

import argparse
import asyncio
import logging
from pathlib import Path

from raid_codex.config import settings
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.catalog_pipeline import CatalogPipeline
from raid_codex.services.champion_sources import ChampionSourceClient

REPO_ROOT = Path(__file__).parents[2]


async def run(data_dir: Path, image_dir: Path) -> None:
    repository = CatalogRepository(data_dir)
    async with ChampionSourceClient(settings) as client:
        summary = await CatalogPipeline(repository, client, settings).download_images(image_dir)
    print(f"Downloaded {summary.filled} images, {summary.empty + summary.failed} failed")
    print(f"Images in {image_dir}")


def main():
    parser = argparse.ArgumentParser(description="Download champion avatars")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    parser.add_argument("--image-dir", type=Path, default=REPO_ROOT / settings.image_dir)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    asyncio.run(run(args.data_dir, args.image_dir))


if __name__ == "__main__":
    main()
