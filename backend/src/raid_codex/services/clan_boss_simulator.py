"""Clan Boss speed-tune and damage simulator.

Uses the simplified speed-bar model: every tick each entity gains its speed
in turn meter, and whoever reaches 1000 acts and spends 1000 (keeping any
overflow). Damage is a flat per-hit estimate plus poison ticks on the boss.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from raid_codex.models.clan_boss import (
    CBSlot,
    ChampionDamage,
    ClanBossDifficulty,
    DamageEstimate,
    TurnEntry,
)

TURN_METER_THRESHOLD = 1000
BOSS_NAME = "Clan Boss"
BOSS_INDEX = -1
# Each poison stack deals this fraction of boss max HP per boss turn
POISON_HP_FRACTION = 0.025
# Poisons are wiped every this many boss turns
POISON_CLEAR_INTERVAL = 2

TURN_ORDER_PREVIEW_ACTIONS = 30
DAMAGE_ESTIMATE_ACTIONS = 100


class InvalidSpeedError(ValueError):
    """Raised when an entity's speed would stall the simulation."""


@dataclass
class _Entity:
    name: str
    speed: int
    index: int
    is_boss: bool
    turn_meter: int = 0


def _validate_speed(name: str, speed) -> None:
    if isinstance(speed, bool) or not isinstance(speed, int) or speed <= 0:
        raise InvalidSpeedError(f"Speed for '{name}' must be a positive integer, got {speed!r}")


def simulate_turn_order(
    slots: Sequence[CBSlot],
    boss_speed: int,
    total_actions: int,
) -> list[TurnEntry]:
    """Simulate the first `total_actions` actions of a fight.

    Entities that reach the threshold on the same tick act in order of turn
    meter, then speed, then slot order (the boss last).

    Raises:
        InvalidSpeedError: if any speed is not a positive integer
    """
    for slot in slots:
        _validate_speed(slot.name, slot.speed)
    _validate_speed(BOSS_NAME, boss_speed)

    entities = [
        _Entity(name=slot.name, speed=slot.speed, index=i, is_boss=False)
        for i, slot in enumerate(slots)
    ]
    entities.append(_Entity(name=BOSS_NAME, speed=boss_speed, index=BOSS_INDEX, is_boss=True))

    turns: list[TurnEntry] = []
    while len(turns) < total_actions:
        ticks = min(
            max(0, math.ceil((TURN_METER_THRESHOLD - e.turn_meter) / e.speed))
            for e in entities
        )
        for entity in entities:
            entity.turn_meter += entity.speed * ticks

        ready = sorted(
            (e for e in entities if e.turn_meter >= TURN_METER_THRESHOLD),
            key=lambda e: (-e.turn_meter, -e.speed),
        )
        for actor in ready:
            if len(turns) >= total_actions:
                break
            turns.append(
                TurnEntry(
                    turn=len(turns) + 1,
                    actor=actor.name,
                    actor_index=actor.index,
                    is_boss=actor.is_boss,
                )
            )
            actor.turn_meter -= TURN_METER_THRESHOLD

    return turns


def estimate_damage(
    slots: Sequence[CBSlot],
    difficulty: ClanBossDifficulty,
    turns_to_simulate: int = DAMAGE_ESTIMATE_ACTIONS,
    rng: Optional[random.Random] = None,
) -> DamageEstimate:
    """Estimate per-champion and total damage over a simulated fight.

    Poison procs are random; pass a seeded `rng` for repeatable results.
    """
    rng = rng or random.Random()
    turn_order = simulate_turn_order(slots, difficulty.speed, turns_to_simulate)

    poison_tick = difficulty.hp * POISON_HP_FRACTION
    per_champion = [ChampionDamage(name=slot.name) for slot in slots]
    # One entry per active poison stack: the slot that placed it
    active_poison_owners: list[int] = []
    boss_turns = 0

    for turn in turn_order:
        if turn.is_boss:
            boss_turns += 1
            for owner in active_poison_owners:
                per_champion[owner].poison_damage += poison_tick
            if boss_turns % POISON_CLEAR_INTERVAL == 0:
                active_poison_owners = []
            continue

        slot = slots[turn.actor_index]
        per_champion[turn.actor_index].direct_damage += slot.damage_per_hit * slot.hits_per_turn
        if slot.poison_chance > 0 and rng.random() * 100 < slot.poison_chance:
            active_poison_owners.extend([turn.actor_index] * slot.poison_count)

    total_damage = sum(c.total for c in per_champion)
    estimated_keys = max(1, math.ceil(difficulty.hp / max(total_damage, 1)))

    return DamageEstimate(
        total_damage=total_damage,
        boss_turns=boss_turns,
        estimated_keys=estimated_keys,
        per_champion=per_champion,
    )


def format_damage(n: float) -> str:
    """Compact damage label: 1.2M, 350K, 999."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.0f}K"
    return f"{n:.0f}"
