"""Minimum-duration gate for leaving the building phase."""


class PhaseGate:
    """Opens once the building phase has lasted at least ``minimum_ms``."""

    def __init__(self, minimum_ms: int) -> None:
        self.minimum_ms = minimum_ms

    def can_start_defense(self, elapsed_ms: int, minimum_ms: int | None = None) -> bool:
        minimum = self.minimum_ms if minimum_ms is None else minimum_ms
        return elapsed_ms >= minimum

    def remaining_ms(self, elapsed_ms: int) -> int:
        return max(0, self.minimum_ms - elapsed_ms)
