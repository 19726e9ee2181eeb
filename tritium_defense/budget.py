"""Round number -> threat budget, population cap and boss quota."""

from __future__ import annotations

from .config import GameConfig
from .models import RoundContext


def threat_budget(round_number: int, config: GameConfig) -> int:
    """Quadratic growth: initial + factor * round^2 / 2, truncated."""
    return config.initial_budget + config.budget_increment_factor * round_number * round_number // 2


def population_cap(round_number: int, config: GameConfig) -> int:
    scaled = round(config.population_cap_base * round_number / config.population_cap_divisor)
    return max(config.population_cap_floor, scaled)


def boss_quota(round_number: int, config: GameConfig) -> int:
    """
    Number of bosses required this round.

    Bosses come every ``boss_round_interval`` rounds, but only once the
    boss type is unlocked: round 5 with a round-7 unlock yields 0.
    """
    interval = config.boss_round_interval
    if round_number % interval != 0 or round_number < config.boss_unlock_round:
        return 0
    return round_number // interval


def round_context(round_number: int, config: GameConfig) -> RoundContext:
    return RoundContext(
        round_number=round_number,
        threat_budget=threat_budget(round_number, config),
        population_cap=population_cap(round_number, config),
        boss_quota=boss_quota(round_number, config),
    )
