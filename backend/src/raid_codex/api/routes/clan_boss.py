"""REST endpoints for the Clan Boss simulator."""

import random
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from raid_codex.models.clan_boss import CB_DIFFICULTIES, CBSlot, get_difficulty
from raid_codex.services.clan_boss_simulator import (
    DAMAGE_ESTIMATE_ACTIONS,
    TURN_ORDER_PREVIEW_ACTIONS,
    InvalidSpeedError,
    estimate_damage,
    format_damage,
    simulate_turn_order,
)

router = APIRouter(prefix="/api/clan-boss", tags=["clan-boss"])


class SlotRequest(BaseModel):
    """One team slot."""

    name: str
    speed: int
    role: Literal["DPS", "Support", "Debuffer", "Tank"] = "DPS"
    damage_per_hit: float = Field(default=20000, ge=0)
    hits_per_turn: int = Field(default=1, ge=0)
    poison_chance: float = Field(default=0, ge=0, le=100)
    poison_count: int = Field(default=0, ge=0)
    champion_id: Optional[str] = None

    def to_slot(self) -> CBSlot:
        return CBSlot(**self.model_dump())


class TurnOrderRequest(BaseModel):
    slots: list[SlotRequest] = Field(max_length=5)
    difficulty: str = "Ultra-Nightmare"
    total_actions: int = Field(default=TURN_ORDER_PREVIEW_ACTIONS, ge=1, le=500)


class EstimateRequest(BaseModel):
    slots: list[SlotRequest] = Field(max_length=5)
    difficulty: str = "Ultra-Nightmare"
    turns_to_simulate: int = Field(default=DAMAGE_ESTIMATE_ACTIONS, ge=1, le=1000)
    seed: Optional[int] = None


def _difficulty_or_404(name: str):
    difficulty = get_difficulty(name)
    if difficulty is None:
        raise HTTPException(404, f"Unknown difficulty: {name}")
    return difficulty


@router.get("/difficulties")
def list_difficulties():
    return {
        "difficulties": [
            {"name": d.name, "speed": d.speed, "hp": d.hp} for d in CB_DIFFICULTIES
        ]
    }


@router.post("/turn-order")
def turn_order(body: TurnOrderRequest):
    """Preview who acts when against the chosen boss."""
    difficulty = _difficulty_or_404(body.difficulty)
    try:
        turns = simulate_turn_order(
            [s.to_slot() for s in body.slots], difficulty.speed, body.total_actions
        )
    except InvalidSpeedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "difficulty": difficulty.name,
        "turns": [
            {
                "turn": t.turn,
                "actor": t.actor,
                "actor_index": t.actor_index,
                "is_boss": t.is_boss,
            }
            for t in turns
        ],
    }


@router.post("/estimate")
def estimate(body: EstimateRequest):
    """Estimate team damage and keys needed.

    Pass `seed` for a repeatable poison roll.
    """
    difficulty = _difficulty_or_404(body.difficulty)
    rng = random.Random(body.seed) if body.seed is not None else None
    try:
        result = estimate_damage(
            [s.to_slot() for s in body.slots], difficulty, body.turns_to_simulate, rng=rng
        )
    except InvalidSpeedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "difficulty": difficulty.name,
        "total_damage": result.total_damage,
        "total_damage_label": format_damage(result.total_damage),
        "boss_turns": result.boss_turns,
        "estimated_keys": result.estimated_keys,
        "per_champion": [
            {
                "name": c.name,
                "direct_damage": c.direct_damage,
                "poison_damage": c.poison_damage,
                "total": c.total,
            }
            for c in result.per_champion
        ],
    }
