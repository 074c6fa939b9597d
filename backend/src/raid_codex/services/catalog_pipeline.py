"""Offline pipeline steps that build and refresh the catalog snapshot.

Each step loads what it needs from the repository, talks to the sources
through `ChampionSourceClient`, and writes the snapshot back. Steps are
resumable: enrichment only touches champions still missing the data, and
progress is saved every `save_interval` champions.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from raid_codex.config import Settings, get_settings
from raid_codex.models.champion import ChampionRecord, ChampionSkill
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.champion_sources import ChampionSourceClient, SourceFetchError
from raid_codex.services.enrichment import EnrichmentSummary, run_enrichment
from raid_codex.services.guide_synthesizer import GuideSynthesizer
from raid_codex.services.identity_reconciler import (
    NameMatcher,
    ReconcileSummary,
    normalize_name,
    patch_ratings,
    reconcile,
    skills_from_source_b,
)
from raid_codex.utils.html_text import extract_detail_slug, extract_name_from_html

logger = logging.getLogger(__name__)

PLACEHOLDER_AVATAR = "/champions/placeholder.svg"
# Files smaller than this are treated as failed earlier downloads
MIN_IMAGE_BYTES = 100
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "webp", "gif", "svg")


@dataclass
class SeedReport:
    """Outcome of a full seed run."""

    reconcile: ReconcileSummary
    skills: EnrichmentSummary
    champion_count: int
    output_path: Optional[Path] = None
    failed_sources: list[str] = field(default_factory=list)


def _skill_source_id(record: dict):
    # Post id resolves on the skills endpoint; heroId is a last resort
    return record.get("id") or record.get("heroId")


def _needs_skills(champion: ChampionRecord) -> bool:
    return not champion.skills


class CatalogPipeline:
    """Runs the catalog build steps against one repository."""

    def __init__(
        self,
        repository: CatalogRepository,
        client: Optional[ChampionSourceClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.client = client
        self.settings = settings or get_settings()

    def _progress_saver(self, champions: list[ChampionRecord]):
        interval = max(1, self.settings.save_interval)
        state = {"last_saved": 0}

        def on_batch_complete(processed: int) -> None:
            if processed - state["last_saved"] >= interval:
                self.repository.save_champions(champions)
                state["last_saved"] = processed
                logger.info(f"Saved progress ({processed} processed)")

        return on_batch_complete

    async def _fill_skills_from_ratings_source(
        self,
        champions: list[ChampionRecord],
        source_records: dict[str, dict],
    ) -> EnrichmentSummary:
        targets = [c for c in champions if _needs_skills(c) and c.slug in source_records]

        async def fetch(champion: ChampionRecord) -> list[dict]:
            source_id = _skill_source_id(source_records[champion.slug])
            if source_id is None:
                return []
            return await self.client.fetch_skills(source_id)

        def apply(champion: ChampionRecord, raw_skills: list[dict]) -> None:
            champion.skills = skills_from_source_b(raw_skills)

        return await run_enrichment(
            targets,
            fetch,
            apply,
            batch_size=self.settings.enrichment_batch_size,
            batch_delay=self.settings.enrichment_batch_delay,
            on_batch_complete=self._progress_saver(champions),
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    async def seed(self) -> SeedReport:
        """Fetch both sources, reconcile, fetch skills and write the catalog.

        Raises:
            SourceFetchError: if neither source could be fetched
        """
        failed_sources = []
        try:
            stats_source = await self.client.fetch_stats_source()
        except SourceFetchError as e:
            logger.error(str(e))
            stats_source = []
            failed_sources.append("stats")
        try:
            ratings_source = await self.client.fetch_ratings_source()
        except SourceFetchError as e:
            logger.error(str(e))
            ratings_source = []
            failed_sources.append("ratings")

        if not stats_source and not ratings_source:
            raise SourceFetchError("Both champion sources failed; nothing to seed")

        result = reconcile(stats_source, ratings_source)
        self.repository.save_champions(result.champions)

        skills = await self._fill_skills_from_ratings_source(result.champions, result.source_b_by_slug)
        output_path = self.repository.save_champions(result.champions)

        return SeedReport(
            reconcile=result.summary,
            skills=skills,
            champion_count=len(result.champions),
            output_path=output_path,
            failed_sources=failed_sources,
        )

    async def patch_ratings(self) -> int:
        """Refresh ratings only; skills and stats are left alone."""
        ratings_source = await self.client.fetch_ratings_source()
        champions = self.repository.get_all_champions()
        updated = patch_ratings(champions, ratings_source)
        self.repository.save_champions(champions)
        return updated

    async def backfill_skills(self) -> tuple[EnrichmentSummary, int]:
        """Fill skills from the ratings source for champions missing them.

        Returns:
            (enrichment summary, number of champions with no ratings-source match)
        """
        champions = self.repository.get_all_champions()
        missing = [c for c in champions if _needs_skills(c)]
        logger.info(f"Champions missing skills: {len(missing)}/{len(champions)}")
        if not missing:
            return EnrichmentSummary(), 0

        matcher = NameMatcher(await self.client.fetch_ratings_source())
        source_records: dict[str, dict] = {}
        not_found = 0
        for champion in missing:
            match = matcher.match(champion.name)
            if match is None:
                not_found += 1
            else:
                source_records[champion.slug] = match

        summary = await self._fill_skills_from_ratings_source(champions, source_records)
        self.repository.save_champions(champions)
        return summary, not_found

    async def scrape_skills(self) -> EnrichmentSummary:
        """Scrape skills from stats-source detail pages for champions missing them.

        Champions without a detail-page mapping are tried under their own slug.
        """
        champions = self.repository.get_all_champions()
        missing = [c for c in champions if _needs_skills(c)]
        if not missing:
            return EnrichmentSummary()

        detail_slugs: dict[str, str] = {}
        for raw in await self.client.fetch_stats_source():
            markup = str(raw.get("name") or "")
            name = extract_name_from_html(markup)
            detail_slug = extract_detail_slug(markup)
            if name and detail_slug:
                detail_slugs.setdefault(normalize_name(name), detail_slug)

        async def fetch(champion: ChampionRecord) -> list[dict]:
            detail_slug = detail_slugs.get(normalize_name(champion.name), champion.slug)
            return await self.client.fetch_detail_skills(detail_slug)

        def apply(champion: ChampionRecord, raw_skills: list[dict]) -> None:
            champion.skills = [ChampionSkill.from_dict(s) for s in raw_skills]

        summary = await run_enrichment(
            missing,
            fetch,
            apply,
            batch_size=self.settings.enrichment_batch_size,
            batch_delay=self.settings.enrichment_batch_delay,
            on_batch_complete=self._progress_saver(champions),
        )
        self.repository.save_champions(champions)
        return summary

    async def download_images(self, image_dir: Path) -> EnrichmentSummary:
        """Download remote avatars into `image_dir` and point the catalog at them.

        Champions without a URL, or whose download fails, get the placeholder.
        Files already on disk are reused.
        """
        image_dir = Path(image_dir)
        image_dir.mkdir(parents=True, exist_ok=True)
        champions = self.repository.get_all_champions()
        pending: list[ChampionRecord] = []

        for champion in champions:
            url = champion.avatar_url
            if not url or not url.startswith(("http://", "https://")):
                if not url:
                    champion.avatar_url = PLACEHOLDER_AVATAR
                continue
            filename = f"{champion.slug}.{image_extension(url)}"
            existing = image_dir / filename
            if existing.exists() and existing.stat().st_size > MIN_IMAGE_BYTES:
                champion.avatar_url = f"/champions/{filename}"
                continue
            pending.append(champion)

        async def fetch(champion: ChampionRecord) -> Optional[str]:
            filename = f"{champion.slug}.{image_extension(champion.avatar_url)}"
            content = await self.client.download_file(champion.avatar_url)
            if not content:
                return None
            (image_dir / filename).write_bytes(content)
            return f"/champions/{filename}"

        def apply(champion: ChampionRecord, local_path: str) -> None:
            champion.avatar_url = local_path

        summary = await run_enrichment(
            pending,
            fetch,
            apply,
            batch_size=self.settings.enrichment_batch_size,
            batch_delay=self.settings.enrichment_batch_delay,
            on_batch_complete=self._progress_saver(champions),
        )
        for champion in pending:
            if champion.avatar_url.startswith(("http://", "https://")):
                champion.avatar_url = PLACEHOLDER_AVATAR
        self.repository.save_champions(champions)
        return summary

    def generate_guides(self) -> dict:
        """Regenerate guides.json from the current catalog."""
        guides = GuideSynthesizer().generate_all(self.repository.get_all_champions())
        self.repository.save_guides(guides)
        return guides


def image_extension(url: str) -> str:
    """File extension of an image URL, defaulting to png."""
    path = url.split("?", 1)[0].lower()
    suffix = path.rsplit(".", 1)[-1] if "." in path.rsplit("/", 1)[-1] else ""
    return suffix if suffix in IMAGE_EXTENSIONS else "png"
