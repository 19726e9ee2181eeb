from __future__ import annotations

# enables forward references and delayed evaluation of type annotations.

from typing import Callable

import pygame

from .constants import UNIT_TYPES, FLASH_COLOR
from .models import EnemyType


class Enemy:
    """
    Represents one hostile unit walking towards a defended structure.

    Lifecycle:
    - SPAWNING:     scales up for a "pop" effect.
    - ACTIVE:       moves towards its target until it arrives or is killed.
    - DESPAWN:      scales down and is removed.

    Timings are driven via pause-aware game time in ms (frame-rate independent).
    """

    SPAWN_ANIM_MS = 150
    DESPAWN_ANIM_MS = 250
    HIT_FLASH_MS = 120

    ARRIVAL_DISTANCE = 0.05
    BASE_RADIUS_PX = 7

    def __init__(self, tag: EnemyType, position: pygame.Vector2, target: pygame.Vector2, born_at_ms: int) -> None:
        stats = UNIT_TYPES[tag.value]
        self.tag = tag
        self.pos = pygame.Vector2(position)
        self.target = pygame.Vector2(target)
        self.born_at = born_at_ms
        self.max_health = float(stats["max_health"])
        self.health = self.max_health
        self.speed = float(stats["speed"])          # world units per second
        self.damage = float(stats["damage"])
        self.color = stats["color"]
        self.size = 2.0 if tag is EnemyType.BOSS else 1.0

        self.arrived = False
        self.killed = False
        self.dead = False
        self.hit_time: int | None = None
        self.despawn_start: int | None = None

    # ------------------------------- Update & State ----------------------------------

    def is_active(self) -> bool:
        return not self.arrived and not self.killed

    def update(self, now_ms: int, dt_ms: int) -> bool:
        """Move towards the target; returns True on the frame the unit arrives."""
        arrived_now = False

        if self.is_active():
            step = self.speed * dt_ms / 1000.0
            self.pos.move_towards_ip(self.target, step)
            if self.pos.distance_squared_to(self.target) <= self.ARRIVAL_DISTANCE ** 2:
                self.arrived = True
                self.despawn_start = now_ms
                arrived_now = True

        if self.despawn_start is not None \
            and now_ms - self.despawn_start >= self.DESPAWN_ANIM_MS:
                self.dead = True

        return arrived_now

    def take_damage(self, amount: float, now_ms: int) -> bool:
        """Apply damage; returns True if this hit killed the unit."""
        if not self.is_active():
            return False
        self.health = max(0.0, self.health - amount)
        self.hit_time = now_ms
        if self.health <= 0:
            self.killed = True
            self.despawn_start = now_ms
            return True
        return False

    # ------------------------------- Rendering ---------------------------------------

    def get_scale(self, now_ms: int) -> float:
        elapsed = now_ms - self.born_at
        if elapsed < self.SPAWN_ANIM_MS:
            return max(0.1, elapsed / self.SPAWN_ANIM_MS)
        if self.despawn_start is not None:
            progress = (now_ms - self.despawn_start) / self.DESPAWN_ANIM_MS
            return max(0.0, 1.0 - progress)
        return 1.0

    def screen_radius(self, now_ms: int) -> int:
        return max(1, int(self.BASE_RADIUS_PX * self.size * self.get_scale(now_ms)))

    def draw(self, surf: pygame.Surface, now_ms: int, to_screen: Callable[[pygame.Vector2], tuple[int, int]]) -> None:
        center = to_screen(self.pos)
        radius = self.screen_radius(now_ms)
        if radius <= 1 and self.despawn_start is not None:
            return

        flashing = self.hit_time is not None and now_ms - self.hit_time < self.HIT_FLASH_MS
        color = FLASH_COLOR if flashing else self.color
        pygame.draw.circle(surf, color, center, radius)
        pygame.draw.circle(surf, (20, 20, 20), center, radius, 1)

    def contains_point(self, point: tuple[int, int], now_ms: int, to_screen: Callable[[pygame.Vector2], tuple[int, int]]) -> bool:
        """Check if a screen point is within the unit's clickable area."""
        if not self.is_active():
            return False
        cx, cy = to_screen(self.pos)
        # padded hit area
        r = self.screen_radius(now_ms) + 4
        return (point[0] - cx) ** 2 + (point[1] - cy) ** 2 <= r * r
