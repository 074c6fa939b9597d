#!/usr/bin/env python3
"""
Refresh champion ratings from HellHades without touching skills or stats.

Usage:
    uv run python backend/scripts/patch_ratings.py --data-dir data
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


async def run(data_dir: Path) -> None:
    repository = CatalogRepository(data_dir)
    async with ChampionSourceClient(settings) as client:
        updated = await CatalogPipeline(repository, client, settings).patch_ratings()
    total = len(repository.get_all_champions())
    print(f"Updated ratings for {updated}/{total} champions")


def main():
    parser = argparse.ArgumentParser(description="Patch champion ratings")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    asyncio.run(run(args.data_dir))


if __name__ == "__main__":
    main()
