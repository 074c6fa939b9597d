#!/usr/bin/env python3
"""
Generate data/guides.json from the champion catalog.

Usage:
    uv run python backend/scripts/generate_guides.py --data-dir data
"""

import argparse
import logging
from collections import Counter
from pathlib import Path

from raid_codex.config import settings
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.catalog_pipeline import CatalogPipeline

REPO_ROOT = Path(__file__).parents[2]


def main():
    parser = argparse.ArgumentParser(description="Generate champion build guides")
    parser.add_argument("--data-dir", type=Path, default=REPO_ROOT / settings.data_dir)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)
    repository = CatalogRepository(args.data_dir)
    # Guide generation makes no HTTP calls
    guides = CatalogPipeline(repository, client=None, settings=settings).generate_guides()

    by_area = Counter(g.content_area.value for entries in guides.values() for g in entries)
    print(f"Generated guides for {len(guides)} champions")
    for area, count in by_area.most_common():
        print(f"  {area}: {count}")
    print(f"\nWrote {repository.guides_path}")


if __name__ == "__main__":
    main()
