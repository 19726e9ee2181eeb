"""Registry of hostile unit types: threat cost and unlock round per tag."""

from __future__ import annotations

from typing import Iterable, Iterator

from .config import ConfigError, GameConfig
from .models import EnemyType, UnitTypeSpec


class UnitCatalog:
    """
    Immutable lookup of ``UnitTypeSpec`` by tag, in configuration order.

    The regular type must be present and unlocked from round 1; the boss
    type is optional and is never returned by ``unlocked``.
    """

    def __init__(self, specs: Iterable[UnitTypeSpec]) -> None:
        self._specs: dict[EnemyType, UnitTypeSpec] = {}
        for spec in specs:
            self._specs[spec.tag] = spec

        regular = self._specs.get(EnemyType.REGULAR)
        if regular is None:
            raise ConfigError("unit catalog is missing the regular unit type")
        if regular.unlock_round != 1:
            raise ConfigError(f"regular unit must unlock at round 1, got {regular.unlock_round}")

    @classmethod
    def from_config(cls, config: GameConfig) -> UnitCatalog:
        return cls(config.unit_specs)

    def __iter__(self) -> Iterator[UnitTypeSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, tag: object) -> bool:
        return tag in self._specs

    def get(self, tag: EnemyType) -> UnitTypeSpec | None:
        return self._specs.get(tag)

    @property
    def boss(self) -> UnitTypeSpec | None:
        return self._specs.get(EnemyType.BOSS)

    def unlocked(self, round_number: int) -> list[UnitTypeSpec]:
        """Non-boss types available in ``round_number``."""
        return [
            spec for spec in self._specs.values()
            if spec.tag is not EnemyType.BOSS and spec.is_unlocked(round_number)
        ]
