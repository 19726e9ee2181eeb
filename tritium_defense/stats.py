from __future__ import annotations

from dataclasses import dataclass

from .config import GameConfig
from .models import UnitTypeSpec


@dataclass(frozen=True)
class GameSummary:
    """Final statistics shown on the game over screen."""
    final_round: int
    total_kills: int
    tritium: int


class PlayerStats:
    """
    Tritium economy and kill counter; the round-completion reward sink.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.summary: GameSummary | None = None
        self.reset()

    def reset(self) -> None:
        self.tritium = self.config.starting_tritium
        self.kills = 0
        self.rounds_rewarded = 0
        self.summary = None

    def grant_round_completion_reward(self, round_number: int) -> None:
        self.rounds_rewarded += 1
        self.add_tritium(self.config.tritium_per_round)

    def record_kill(self, spec: UnitTypeSpec) -> None:
        """A killed unit pays out its threat cost."""
        self.kills += 1
        self.add_tritium(spec.threat_cost)

    def add_tritium(self, amount: int) -> None:
        self.tritium += max(0, amount)

    # Spending side of the economy, for structure placement. The frontend has
    # no build menu, so only the round and kill rewards move the balance in play.
    def can_afford(self, cost: int) -> bool:
        return self.tritium >= cost

    def try_spend(self, amount: int) -> bool:
        if not self.can_afford(amount):
            print(f"PlayerStats: Not enough tritium. Have: {self.tritium}, Need: {amount}")
            return False
        self.tritium -= amount
        return True

    def record_game_over(self, final_round: int) -> GameSummary:
        self.summary = GameSummary(final_round, self.kills, self.tritium)
        return self.summary
