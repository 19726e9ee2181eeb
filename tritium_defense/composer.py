from __future__ import annotations

"""Turns a round's threat budget into a concrete list of unit tags.

Bosses are placed first, then a greedy random fill spends the budget, and
when the population cap cuts the fill short, an upgrade pass swaps the
weakest units for stronger ones while budget remains.
"""

import random

from .catalog import UnitCatalog
from .models import EnemyType, RoundContext, UnitTypeSpec


class WaveComposer:
    """
    Composes wave allocations from a unit catalog.

    Notes
    - All randomness comes from the injected ``rng`` so a seeded
      ``random.Random`` makes composition reproducible.
    - This is a greedy heuristic; leftover budget is accepted.
    """

    def __init__(self, catalog: UnitCatalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.last_remaining_budget = 0

    def compose_for(self, context: RoundContext) -> list[EnemyType]:
        return self.compose(
            context.round_number, context.threat_budget, context.population_cap, context.boss_quota
        )

    def compose(self, round_number: int, budget: int, cap: int, boss_quota: int) -> list[EnemyType]:
        """
        Build the ordered unit allocation for one round.

        Parameters
        ----------
        round_number : int
            Round being composed; gates which types are unlocked.
        budget : int
            Threat budget to spend on non-boss units.
        cap : int
            Hard limit on the allocation length, bosses included.
        boss_quota : int
            Bosses to place unconditionally (free of budget).

        Returns
        -------
        list[EnemyType]
            Bosses first, then budget-filled units (upgrades applied in place).
        """
        allocation: list[EnemyType] = [EnemyType.BOSS] * max(0, min(boss_quota, cap))
        first_regular = len(allocation)

        unlocked = self.catalog.unlocked(round_number)
        remaining = budget

        while remaining > 0 and len(allocation) < cap:
            affordable = [spec for spec in unlocked if spec.threat_cost <= remaining]
            if not affordable:
                break
            pick = self.rng.choice(affordable)
            allocation.append(pick.tag)
            remaining -= pick.threat_cost

        if len(allocation) >= cap and remaining > 0:
            remaining = self._upgrade(allocation, first_regular, unlocked, remaining)

        self.last_remaining_budget = remaining
        return allocation

    def _upgrade(
        self,
        allocation: list[EnemyType],
        first_regular: int,
        unlocked: list[UnitTypeSpec],
        remaining: int,
    ) -> int:
        # Swap the cheapest non-boss entry for the strongest affordable type until stuck
        by_cost_desc = sorted(unlocked, key=lambda spec: spec.threat_cost, reverse=True)
        while first_regular < len(allocation):
            weakest_index = min(
                range(first_regular, len(allocation)),
                key=lambda i: self._cost(allocation[i]),
            )
            weakest_cost = self._cost(allocation[weakest_index])

            candidate = None
            for spec in by_cost_desc:
                delta = spec.threat_cost - weakest_cost
                if 0 < delta <= remaining:
                    candidate = spec
                    break
            if candidate is None:
                break

            allocation[weakest_index] = candidate.tag
            remaining -= candidate.threat_cost - weakest_cost
        return remaining

    def _cost(self, tag: EnemyType) -> int:
        spec = self.catalog.get(tag)
        return spec.threat_cost if spec is not None else 0


def compose_wave(
    round_number: int,
    budget: int,
    cap: int,
    boss_quota: int,
    catalog: UnitCatalog,
    rng: random.Random | None = None,
) -> list[EnemyType]:
    return WaveComposer(catalog, rng).compose(round_number, budget, cap, boss_quota)
