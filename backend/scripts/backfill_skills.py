#!/usr/bin/env python3
"""
Fill missing skills from the HellHades skills endpoint.

Only champions with no skills are fetched, and progress is saved every
SAVE_INTERVAL champions, so an interrupted run can simply be restarted.

Usage:
    uv run python backend/scripts/backfill_skills.py --data-dir data
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
        summary, not_found = await CatalogPipeline(repository, client, settings).backfill_skills()

    still_missing = sum(1 for c in repository.get_all_champions() if not c.skills)
    print("\n=== Backfill summary ===")
    print(f"  Filled:          {summary.filled}")
    print(f"  Empty response:  {summary.empty}")
    print(f"  Failed:          {summary.failed}")
    print(f"  Not in HellHades: {not_found}")
    print(f"  Still missing:   {still_missing}")


def main():
    parser = argparse.ArgumentParser(description="Backfill missing champion skills")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    asyncio.run(run(args.data_dir))


if __name__ == "__main__":
    main()
