from __future__ import annotations

"""Configuration surface: every tuning knob, loaded once at startup.

Defaults come from ``constants``; a JSON file may override any field and
the per-type ``cost``/``unlock_round`` of the enemy roster.
"""

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict

from .constants import (
    INITIAL_BUDGET, BUDGET_INCREMENT_FACTOR,
    POPULATION_CAP_BASE, POPULATION_CAP_FLOOR, POPULATION_CAP_DIVISOR,
    BOSS_ROUND_INTERVAL, SPAWN_POINT_ROUND_INTERVAL,
    BUILD_PHASE_MIN_DURATION_MS, DEFENSE_PHASE_END_DELAY_MS,
    SPAWNER_CIRCLE_RADIUS, SPAWN_SCATTER_RADIUS,
    MIN_SPAWN_DELAY_MS, MAX_SPAWN_DELAY_MS,
    STARTING_TRITIUM, TRITIUM_PER_ROUND, UNIT_TYPES,
)
from .models import EnemyType, UnitTypeSpec


class ConfigError(Exception):
    """Raised when configuration data is invalid or inconsistent."""


def default_unit_specs() -> tuple[UnitTypeSpec, ...]:
    return tuple(
        UnitTypeSpec(EnemyType(tag), int(raw["cost"]), int(raw["unlock_round"]))
        for tag, raw in UNIT_TYPES.items()
    )


@dataclass(frozen=True)
class GameConfig:
    initial_budget: int = INITIAL_BUDGET
    budget_increment_factor: int = BUDGET_INCREMENT_FACTOR
    population_cap_base: int = POPULATION_CAP_BASE
    population_cap_floor: int = POPULATION_CAP_FLOOR
    population_cap_divisor: int = POPULATION_CAP_DIVISOR
    boss_round_interval: int = BOSS_ROUND_INTERVAL
    spawn_point_round_interval: int = SPAWN_POINT_ROUND_INTERVAL
    build_phase_min_duration_ms: int = BUILD_PHASE_MIN_DURATION_MS
    defense_phase_end_delay_ms: int = DEFENSE_PHASE_END_DELAY_MS
    spawner_circle_radius: float = SPAWNER_CIRCLE_RADIUS
    spawn_scatter_radius: float = SPAWN_SCATTER_RADIUS
    min_spawn_delay_ms: int = MIN_SPAWN_DELAY_MS
    max_spawn_delay_ms: int = MAX_SPAWN_DELAY_MS
    starting_tritium: int = STARTING_TRITIUM
    tritium_per_round: int = TRITIUM_PER_ROUND
    unit_specs: tuple[UnitTypeSpec, ...] = field(default_factory=default_unit_specs)

    def __post_init__(self) -> None:
        for name in ("population_cap_divisor", "boss_round_interval", "spawn_point_round_interval"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        for name in ("budget_increment_factor", "population_cap_base"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.population_cap_floor < 0:
            raise ConfigError("population_cap_floor must not be negative")
        if self.build_phase_min_duration_ms < 0 or self.defense_phase_end_delay_ms < 0:
            raise ConfigError("phase durations must not be negative")
        if self.min_spawn_delay_ms < 0 or self.min_spawn_delay_ms > self.max_spawn_delay_ms:
            raise ConfigError(
                f"spawn delay range invalid: {self.min_spawn_delay_ms}..{self.max_spawn_delay_ms}"
            )
        for spec in self.unit_specs:
            if spec.threat_cost <= 0:
                raise ConfigError(f"{spec.tag.value}: threat cost must be positive, got {spec.threat_cost}")
            if spec.unlock_round < 1:
                raise ConfigError(f"{spec.tag.value}: unlock round must be >= 1, got {spec.unlock_round}")

        regular = self.unit_spec(EnemyType.REGULAR)
        if regular is None:
            raise ConfigError("unit roster is missing the regular unit type")
        if regular.unlock_round != 1:
            raise ConfigError(f"regular unit must unlock at round 1, got {regular.unlock_round}")

    def unit_spec(self, tag: EnemyType) -> UnitTypeSpec | None:
        for spec in self.unit_specs:
            if spec.tag is tag:
                return spec
        return None

    @property
    def boss_unlock_round(self) -> int:
        """Round from which boss quotas apply; bosses never come if the type is absent."""
        spec = self.unit_spec(EnemyType.BOSS)
        return spec.unlock_round if spec is not None else 10**9


def _coerce(name: str, value: Any, kind: type) -> Any:
    # no bools; floats only for float fields
    allowed = (int, float) if kind is float else (int,)
    if isinstance(value, bool) or not isinstance(value, allowed):
        raise ConfigError(f"{name}: expected {kind.__name__}, got {value!r}")
    return kind(value)


def _merge_units(base: tuple[UnitTypeSpec, ...], raw_units: Any) -> tuple[UnitTypeSpec, ...]:
    if not isinstance(raw_units, dict):
        raise ConfigError("'units' must be an object keyed by unit tag")

    specs: Dict[EnemyType, UnitTypeSpec] = {spec.tag: spec for spec in base}
    for tag_name, raw in raw_units.items():
        try:
            tag = EnemyType(tag_name)
        except ValueError:
            raise ConfigError(f"unknown unit tag: {tag_name!r}") from None
        if not isinstance(raw, dict):
            raise ConfigError(f"{tag_name}: unit entry must be an object")
        unknown = set(raw) - {"cost", "unlock_round"}
        if unknown:
            raise ConfigError(f"{tag_name}: unknown unit keys {sorted(unknown)}")

        current = specs.get(tag)
        cost = _coerce(f"{tag_name}.cost", raw.get("cost", current.threat_cost if current else 0), int)
        unlock = _coerce(
            f"{tag_name}.unlock_round", raw.get("unlock_round", current.unlock_round if current else 1), int
        )
        specs[tag] = UnitTypeSpec(tag, cost, unlock)
    return tuple(specs.values())


def load_config(path: str | Path, base: GameConfig | None = None) -> GameConfig:
    """
    Load a JSON configuration file on top of ``base`` (defaults when omitted).

    Raises
    ------
    ConfigError
        If the file cannot be read or holds unknown keys or invalid values.
    """
    base = base or GameConfig()
    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("config root must be a JSON object")

    known = {f.name for f in fields(GameConfig)} - {"unit_specs"}
    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "units":
            overrides["unit_specs"] = _merge_units(base.unit_specs, value)
        elif key in known:
            overrides[key] = _coerce(key, value, type(getattr(base, key)))
        else:
            raise ConfigError(f"unknown config key: {key!r}")

    return replace(base, **overrides)
