from __future__ import annotations

import math
import random

import pygame

from .config import GameConfig
from .models import EnemyType, SpawnPoint


class SpawnPointAllocator:
    """
    Responsible for where a round's units come from.
    Supports round-based growth of the number of spawn points.

    Notes
    - Spawn points sit evenly on a circle around the world origin, the
      first one at the anchor angle of the marker the player can see.
    - Units are split evenly over the points; earlier points take the extras.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config

    def point_count(self, round_number: int) -> int:
        """
        Number of spawn points used in ``round_number``; one more every interval.
        """
        interval = self.config.spawn_point_round_interval
        return max(1, (round_number - 1) // interval + 1)

    def generate_positions(
        self,
        round_number: int,
        anchor_angle: float,
        radius: float | None = None,
        scatter_radius: float | None = None,
    ) -> list[SpawnPoint]:
        """
        Place the round's spawn points on a circle.

        Parameters
        ----------
        round_number : int
            Round the points are for.
        anchor_angle : float
            Angle in degrees of the first point.
        radius : float | None
            Circle radius; the configured spawner circle radius when omitted.
        scatter_radius : float | None
            Local scatter radius recorded on each point.

        Returns
        -------
        list[SpawnPoint]
            Points with nothing assigned yet.
        """
        count = self.point_count(round_number)
        radius = self.config.spawner_circle_radius if radius is None else radius
        scatter = self.config.spawn_scatter_radius if scatter_radius is None else scatter_radius
        step = 360.0 / count

        points = []
        for i in range(count):
            pos = pygame.Vector2(radius, 0).rotate(anchor_angle + i * step)
            points.append(SpawnPoint((pos.x, pos.y), radius=scatter))
        return points

    def partition(self, allocation: list[EnemyType], points: list[SpawnPoint]) -> list[SpawnPoint]:
        """
        Assign a contiguous slice of ``allocation`` to each point.

        The first ``len(allocation) % len(points)`` points receive one extra unit.
        """
        if not points:
            raise ValueError("at least one spawn point is required")

        base, remainder = divmod(len(allocation), len(points))
        assigned = []
        start = 0
        for index, point in enumerate(points):
            size = base + 1 if index < remainder else base
            assigned.append(SpawnPoint(point.pos, point.radius, tuple(allocation[start:start + size])))
            start += size
        return assigned

    def scatter(self, point: SpawnPoint, rng: random.Random) -> pygame.Vector2:
        """Uniform random position inside the point's scatter radius."""
        angle = rng.uniform(0, 2 * math.pi)
        distance = point.radius * math.sqrt(rng.random())
        return point.vector + pygame.Vector2(math.cos(angle) * distance, math.sin(angle) * distance)

    def release_schedule(self, point: SpawnPoint, rng: random.Random) -> list[tuple[int, EnemyType]]:
        """
        Offsets (ms from round start) at which each assigned unit is released.

        Units leave one at a time with a random gap between them; the first
        leaves immediately.
        """
        schedule = []
        offset = 0
        for i, tag in enumerate(point.assigned):
            if i > 0:
                offset += rng.randint(self.config.min_spawn_delay_ms, self.config.max_spawn_delay_ms)
            schedule.append((offset, tag))
        return schedule


def anchor_angle_of(position: tuple[float, float]) -> float:
    """Angle in degrees of a world position around the origin."""
    return math.degrees(math.atan2(position[1], position[0]))
