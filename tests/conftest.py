from __future__ import annotations

import random

import pygame
import pytest

from tritium_defense.catalog import UnitCatalog
from tritium_defense.config import GameConfig
from tritium_defense.events import EventBus
from tritium_defense.lifecycle import RoundLifecycle
from tritium_defense.logger import GameLogger


class FakeMarker:
    def __init__(self, pos: tuple[float, float], spawn_radius: float) -> None:
        self.pos = pos
        self.spawn_radius = spawn_radius


class FakeUnit:
    def __init__(self, tag, position, target) -> None:
        self.tag = tag
        self.position = position
        self.target = target


class FakeSpawner:
    """Records markers and units instead of instantiating anything."""

    def __init__(self, fail_markers: bool = False, missing_tags=()) -> None:
        self.fail_markers = fail_markers
        self.missing_tags = set(missing_tags)
        self.markers: list[FakeMarker] = []
        self.units: list[FakeUnit] = []

    def place_spawner(self, pos):
        if self.fail_markers:
            return None
        marker = FakeMarker(pos, spawn_radius=1.5)
        self.markers.append(marker)
        return marker

    def clear_spawners(self) -> None:
        self.markers.clear()

    def spawn_unit(self, tag, position, target):
        if tag in self.missing_tags:
            return None
        unit = FakeUnit(tag, position, target)
        self.units.append(unit)
        return unit


class FakeStructures:
    def nearest_defended_structure(self, position):
        return pygame.Vector2(0, 0)


class FakeRewards:
    def __init__(self) -> None:
        self.granted: list[int] = []

    def grant_round_completion_reward(self, round_number: int) -> None:
        self.granted.append(round_number)


class Recorder:
    """Subscribes to every named event and keeps (name, args) in order."""

    def __init__(self, events: EventBus, names) -> None:
        self.seen: list[tuple] = []
        for name in names:
            events.subscribe(name, lambda *args, _name=name: self.seen.append((_name, args)))

    def names(self) -> list[str]:
        return [name for name, _ in self.seen]


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def catalog(config: GameConfig) -> UnitCatalog:
    return UnitCatalog.from_config(config)


@pytest.fixture
def spawner() -> FakeSpawner:
    return FakeSpawner()


@pytest.fixture
def rewards() -> FakeRewards:
    return FakeRewards()


@pytest.fixture
def logger(tmp_path) -> GameLogger:
    return GameLogger(str(tmp_path / "log.md"))


@pytest.fixture
def lifecycle(config, catalog, spawner, rewards, logger) -> RoundLifecycle:
    return RoundLifecycle(
        config, catalog, spawner, FakeStructures(), rewards,
        rng=random.Random(7), logger=logger,
    )
