"""REST endpoints for the champion catalog."""

from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from raid_codex.models.champion import ChampionRecord
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.similarity_ranker import DEFAULT_RESULT_COUNT, SimilarityRanker

router = APIRouter(prefix="/api/champions", tags=["champions"])


class ChampionSummary(BaseModel):
    """Champion fields shown in list views."""

    id: str
    name: str
    slug: str
    faction: str
    affinity: str
    rarity: str
    role: str
    avatar_url: str
    overall: float | None = None


class ChampionListResponse(BaseModel):
    champions: list[ChampionSummary]
    total: int


class FilterOptionsResponse(BaseModel):
    factions: list[str]
    affinities: list[str]
    rarities: list[str]
    roles: list[str]


class SimilarChampion(BaseModel):
    champion: ChampionSummary
    score: float
    shared_strengths: list[str]


class SimilarChampionsResponse(BaseModel):
    slug: str
    similar: list[SimilarChampion]


def _summary(champion: ChampionRecord) -> ChampionSummary:
    return ChampionSummary(
        id=champion.id,
        name=champion.name,
        slug=champion.slug,
        faction=champion.faction,
        affinity=champion.affinity,
        rarity=champion.rarity,
        role=champion.role,
        avatar_url=champion.avatar_url,
        overall=champion.ratings.get("overall"),
    )


def _get_champion_or_404(repo: CatalogRepository, slug: str) -> ChampionRecord:
    champion = repo.get_champion_by_slug(slug)
    if champion is None:
        raise HTTPException(404, f"Champion not found: {slug}")
    return champion


@router.get("", response_model=ChampionListResponse)
def list_champions(
    request: Request,
    faction: Optional[str] = None,
    affinity: Optional[str] = None,
    rarity: Optional[str] = None,
    role: Optional[str] = None,
):
    """List champions, optionally filtered by exact attribute values."""
    repo: CatalogRepository = request.app.state.repository
    filters = {"faction": faction, "affinity": affinity, "rarity": rarity, "role": role}
    champions = [
        c for c in repo.get_all_champions()
        if all(value is None or getattr(c, attr) == value for attr, value in filters.items())
    ]
    return ChampionListResponse(
        champions=[_summary(c) for c in champions],
        total=len(champions),
    )


@router.get("/filters", response_model=FilterOptionsResponse)
def get_filter_options(request: Request):
    """Distinct attribute values present in the catalog."""
    repo: CatalogRepository = request.app.state.repository
    return FilterOptionsResponse(
        factions=repo.get_unique_factions(),
        affinities=repo.get_unique_affinities(),
        rarities=repo.get_unique_rarities(),
        roles=repo.get_unique_roles(),
    )


@router.get("/{slug}")
def get_champion(request: Request, slug: str):
    """Full champion record."""
    champion = _get_champion_or_404(request.app.state.repository, slug)
    return champion.to_dict()


@router.get("/{slug}/guides")
def get_champion_guides(request: Request, slug: str, filtered: bool = False):
    """Generated guides; `filtered` keeps General plus qualifying content areas."""
    repo: CatalogRepository = request.app.state.repository
    champion = _get_champion_or_404(repo, slug)
    if filtered:
        guides = repo.get_filtered_guides_for_champion(slug, champion.ratings)
    else:
        guides = repo.get_guides_for_champion(slug)
    return {"slug": slug, "guides": [g.to_dict() for g in guides]}


@router.get("/{slug}/similar", response_model=SimilarChampionsResponse)
def get_similar_champions(
    request: Request,
    slug: str,
    count: Annotated[int, Query(ge=1, le=20)] = DEFAULT_RESULT_COUNT,
):
    """Champions with a similar rating profile."""
    repo: CatalogRepository = request.app.state.repository
    champion = _get_champion_or_404(repo, slug)
    results = SimilarityRanker(repo.get_all_champions()).get_similar_champions(champion, count)
    return SimilarChampionsResponse(
        slug=slug,
        similar=[
            SimilarChampion(
                champion=_summary(r.champion),
                score=round(r.score, 4),
                shared_strengths=r.shared_strengths,
            )
            for r in results
        ],
    )
