#!/usr/bin/env python3
"""
Build data/champions.json from both champion sources.

Fetches the InTeleria stats list and the HellHades ratings list, reconciles
them into one catalog, then fetches skills from HellHades for every matched
champion. Aborts only when both sources fail.

Usage:
    uv run python backend/scripts/seed_champions.py
    uv run python backend/scripts/seed_champions.py --data-dir data --batch-size 10
"""

import argparse
import asyncio
import logging
from pathlib import Path

from raid_codex.config import settings
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.catalog_pipeline import CatalogPipeline
from raid_codex.services.champion_sources import ChampionSourceClient, SourceFetchError

REPO_ROOT = Path(__file__).parents[2]


async def run(data_dir: Path) -> int:
    async with ChampionSourceClient(settings) as client:
        pipeline = CatalogPipeline(CatalogRepository(data_dir), client, settings)
        try:
            report = await pipeline.seed()
        except SourceFetchError as e:
            print(f"Seed aborted: {e}")
            return 1

    summary = report.reconcile
    print("\n=== Seed summary ===")
    for name in report.failed_sources:
        print(f"  WARNING: {name} source failed, catalog is partial")
    print(f"  InTeleria records:     {summary.source_a_count}")
    print(f"  HellHades records:     {summary.source_b_count}")
    print(f"  Matched:               {summary.matched}")
    print(f"  InTeleria only:        {summary.unmatched_a}")
    print(f"  HellHades only:        {summary.source_b_only}")
    print(f"  Skipped duplicates:    {summary.skipped_duplicates}")
    print(f"  Skipped unnamed:       {summary.skipped_unnamed}")
    print(f"  Skills filled:         {report.skills.filled}/{report.skills.attempted}")
    print(f"  Total champions:       {report.champion_count}")
    print(f"\nWrote {report.output_path}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Seed the champion catalog")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    parser.add_argument("--batch-size", type=int, default=None, help="Concurrent skill fetches")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    if args.batch_size:
        settings.enrichment_batch_size = args.batch_size
    raise SystemExit(asyncio.run(run(args.data_dir)))


if __name__ == "__main__":
    main()
