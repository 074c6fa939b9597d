#!/usr/bin/env python3
"""
Scrape skills from InTeleria detail pages for champions still missing them.

Run after backfill_skills.py to cover champions HellHades has no skills for.

Usage:
    uv run python backend/scripts/scrape_skills.py --data-dir data
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
        summary = await CatalogPipeline(repository, client, settings).scrape_skills()
    print(f"Scraped skills for {summary.filled}/{summary.attempted} champions "
          f"({summary.empty} pages without skills, {summary.failed} failed)")


def main():
    parser = argparse.ArgumentParser(description="Scrape skills from InTeleria")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    asyncio.run(run(args.data_dir))


if __name__ == "__main__":
    main()
