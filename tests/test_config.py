import json

import pytest

from tritium_defense.catalog import UnitCatalog
from tritium_defense.config import ConfigError, GameConfig, load_config
from tritium_defense.models import EnemyType, UnitTypeSpec


def write(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_cover_every_unit_type() -> None:
    config = GameConfig()
    assert {spec.tag for spec in config.unit_specs} == set(EnemyType)
    assert config.unit_spec(EnemyType.REGULAR).unlock_round == 1


def test_load_overrides_fields_and_units(tmp_path) -> None:
    path = write(tmp_path, {
        "initial_budget": 80,
        "build_phase_min_duration_ms": 1000,
        "units": {"boss": {"unlock_round": 5}, "fast": {"cost": 12}},
    })

    config = load_config(path)

    assert config.initial_budget == 80
    assert config.build_phase_min_duration_ms == 1000
    assert config.boss_unlock_round == 5
    assert config.unit_spec(EnemyType.FAST) == UnitTypeSpec(EnemyType.FAST, 12, 2)
    assert config.budget_increment_factor == GameConfig().budget_increment_factor


@pytest.mark.parametrize("data", [
    {"no_such_knob": 1},
    {"units": {"dragon": {"cost": 5}}},
    {"units": {"fast": {"cost": 0}}},
    {"units": {"fast": {"unlock_round": 0}}},
    {"units": {"fast": {"speed": 3}}},
    {"units": {"regular": {"unlock_round": 2}}},
    {"units": {"fast": {"cost": 1.9}}},
    {"units": {"fast": {"unlock_round": "3"}}},
    {"initial_budget": True},
    {"budget_increment_factor": -5},
    {"population_cap_base": -100},
    {"units": ["regular"]},
    {"min_spawn_delay_ms": 3000},
    {"initial_budget": "lots"},
    ["not", "an", "object"],
])
def test_invalid_config_rejected(tmp_path, data) -> None:
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, data))


def test_unreadable_config_rejected(tmp_path) -> None:
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(bad))
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.json"))


def test_catalog_requires_regular_type() -> None:
    with pytest.raises(ConfigError):
        UnitCatalog([UnitTypeSpec(EnemyType.FAST, 15, 1)])
    with pytest.raises(ConfigError):
        UnitCatalog([UnitTypeSpec(EnemyType.REGULAR, 10, 2)])


def test_catalog_unlocked_excludes_boss(catalog) -> None:
    assert [s.tag for s in catalog.unlocked(1)] == [EnemyType.REGULAR]
    assert EnemyType.BOSS not in [s.tag for s in catalog.unlocked(100)]
    assert catalog.boss.unlock_round == 7
    assert len(catalog.unlocked(6)) == 6


def test_float_fields_accept_integers(tmp_path) -> None:
    config = load_config(write(tmp_path, {"spawner_circle_radius": 20}))
    assert config.spawner_circle_radius == 20.0
    assert isinstance(config.spawner_circle_radius, float)


def test_roster_without_round_one_regular_rejected() -> None:
    config = GameConfig()
    without_regular = tuple(s for s in config.unit_specs if s.tag is not EnemyType.REGULAR)
    with pytest.raises(ConfigError):
        GameConfig(unit_specs=without_regular)
    with pytest.raises(ConfigError):
        GameConfig(budget_increment_factor=-1)
