"""Lightweight data models used across the game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pygame


class EnemyType(str, Enum):
    """Tags of the hostile unit types."""
    REGULAR = "regular"
    FAST = "fast"
    ATTACK = "attack"
    ARMORED = "armored"
    EXPLODER = "exploder"
    TELEPORTER = "teleporter"
    BOSS = "boss"


class GamePhase(str, Enum):
    BUILDING = "building"
    DEFENSE = "defense"


class GameState(str, Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Resolution(str, Enum):
    """How a spawned unit left the field."""
    ARRIVED = "arrived"
    KILLED = "killed"


@dataclass(frozen=True)
class UnitTypeSpec:
    """
    Static description of one hostile unit type.

    Attributes
    ----------
    tag : EnemyType
        The unit type.
    threat_cost : int
        Price in threat-budget terms; also the tritium reward on kill.
    unlock_round : int
        First round (inclusive) in which the type may be composed into a wave.
    """
    tag: EnemyType
    threat_cost: int
    unlock_round: int

    def is_unlocked(self, round_number: int) -> bool:
        return self.unlock_round <= round_number


@dataclass(frozen=True)
class RoundContext:
    """Budget figures derived once at round start."""
    round_number: int
    threat_budget: int
    population_cap: int
    boss_quota: int


@dataclass(frozen=True)
class SpawnPoint:
    """
    A single spawn location for one round.

    Attributes
    ----------
    pos : tuple[float, float]
        The (x, y) world position of this spawn point.
    radius : float
        Local scatter radius used to jitter instantiation positions.
    assigned : tuple[EnemyType, ...]
        The contiguous slice of the wave allocation released from here.
    """
    pos: tuple[float, float]
    radius: float
    assigned: tuple[EnemyType, ...] = ()

    @property
    def assigned_count(self) -> int:
        return len(self.assigned)

    @property
    def vector(self) -> pygame.Vector2:
        return pygame.Vector2(self.pos)
