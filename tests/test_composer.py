import random

import pytest

from tritium_defense.budget import round_context
from tritium_defense.catalog import UnitCatalog
from tritium_defense.composer import WaveComposer, compose_wave
from tritium_defense.models import EnemyType, UnitTypeSpec


class FirstChoiceRng:
    """Always picks the first candidate, in catalog order."""

    def choice(self, seq):
        return seq[0]


def test_single_type_stops_when_nothing_affordable() -> None:
    catalog = UnitCatalog([UnitTypeSpec(EnemyType.REGULAR, 10, 1)])
    composer = WaveComposer(catalog, random.Random(1))

    allocation = composer.compose(1, budget=25, cap=10, boss_quota=0)

    assert allocation == [EnemyType.REGULAR, EnemyType.REGULAR]
    assert composer.last_remaining_budget == 5


def test_bosses_come_first_and_are_free(catalog) -> None:
    allocation = compose_wave(10, budget=0, cap=20, boss_quota=2, catalog=catalog, rng=random.Random(3))
    assert allocation == [EnemyType.BOSS, EnemyType.BOSS]


def test_bosses_are_clamped_to_cap(catalog) -> None:
    allocation = compose_wave(25, budget=500, cap=3, boss_quota=5, catalog=catalog, rng=random.Random(3))
    assert allocation == [EnemyType.BOSS] * 3


def test_fill_never_picks_boss(catalog) -> None:
    allocation = compose_wave(30, budget=5000, cap=40, boss_quota=0, catalog=catalog, rng=random.Random(5))
    assert EnemyType.BOSS not in allocation


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_cap_unlock_and_boss_invariants(config, catalog, seed) -> None:
    composer = WaveComposer(catalog, random.Random(seed))
    for round_number in range(1, 41):
        context = round_context(round_number, config)
        allocation = composer.compose_for(context)

        assert len(allocation) <= context.population_cap
        assert allocation.count(EnemyType.BOSS) == context.boss_quota
        for tag in allocation:
            if tag is not EnemyType.BOSS:
                assert catalog.get(tag).unlock_round <= round_number


def test_same_seed_same_wave(config, catalog) -> None:
    context = round_context(12, config)
    first = WaveComposer(catalog, random.Random(42)).compose_for(context)
    second = WaveComposer(catalog, random.Random(42)).compose_for(context)
    assert first == second


def test_upgrade_pass_spends_leftover_when_capped() -> None:
    catalog = UnitCatalog([
        UnitTypeSpec(EnemyType.REGULAR, 10, 1),
        UnitTypeSpec(EnemyType.FAST, 15, 1),
    ])
    composer = WaveComposer(catalog, FirstChoiceRng())

    allocation = composer.compose(1, budget=27, cap=2, boss_quota=0)

    # fill: R, R (7 left); upgrade first R -> F (2 left); no delta fits 2
    assert allocation == [EnemyType.FAST, EnemyType.REGULAR]
    assert composer.last_remaining_budget == 2


def test_upgrade_pass_reaches_strongest_type() -> None:
    catalog = UnitCatalog([
        UnitTypeSpec(EnemyType.REGULAR, 10, 1),
        UnitTypeSpec(EnemyType.ARMORED, 25, 1),
    ])
    for seed in range(5):
        composer = WaveComposer(catalog, random.Random(seed))
        allocation = composer.compose(1, budget=100, cap=2, boss_quota=0)
        assert allocation == [EnemyType.ARMORED, EnemyType.ARMORED]
        assert composer.last_remaining_budget == 50


def test_upgrade_pass_leaves_bosses_alone() -> None:
    catalog = UnitCatalog([
        UnitTypeSpec(EnemyType.REGULAR, 10, 1),
        UnitTypeSpec(EnemyType.ARMORED, 25, 1),
        UnitTypeSpec(EnemyType.BOSS, 100, 1),
    ])
    composer = WaveComposer(catalog, FirstChoiceRng())

    allocation = composer.compose(5, budget=200, cap=3, boss_quota=1)

    assert allocation[0] is EnemyType.BOSS
    assert allocation[1:] == [EnemyType.ARMORED, EnemyType.ARMORED]


def test_no_upgrade_when_fill_ends_under_cap() -> None:
    catalog = UnitCatalog([
        UnitTypeSpec(EnemyType.REGULAR, 10, 1),
        UnitTypeSpec(EnemyType.ARMORED, 25, 1),
    ])
    composer = WaveComposer(catalog, FirstChoiceRng())

    allocation = composer.compose(1, budget=35, cap=10, boss_quota=0)

    assert allocation == [EnemyType.REGULAR] * 3
    assert composer.last_remaining_budget == 5


def test_no_unlocked_types_yields_only_bosses(catalog) -> None:
    allocation = compose_wave(0, budget=100, cap=10, boss_quota=1, catalog=catalog, rng=random.Random(0))
    assert allocation == [EnemyType.BOSS]
