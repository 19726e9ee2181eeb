from __future__ import annotations

"""Round lifecycle: phase state machine, wave start and completion tracking.

Collaborators are duck-typed and injected at the composition root:

- unit spawner: ``place_spawner(pos) -> handle | None`` (the handle may
  expose ``spawn_radius``), ``clear_spawners()``, and
  ``spawn_unit(tag, position, target) -> unit handle | None``
- structures: ``nearest_defended_structure(position) -> Vector2``
- rewards: ``grant_round_completion_reward(round_number)``

The unit spawner reports back through ``report_unit_resolved`` and the
structures through ``on_all_structures_destroyed``.
"""

import random
from typing import Any

from .budget import round_context
from .catalog import UnitCatalog
from .composer import WaveComposer
from .config import GameConfig
from .events import (
    EventBus, GAME_STARTED, GAME_OVER, PHASE_CHANGED, ROUND_STARTED,
    ROUND_COMPLETED, DEFENSE_REJECTED, SPAWN_POINTS_CHANGED,
)
from .logger import GameLogger
from .models import EnemyType, GamePhase, GameState, Resolution, RoundContext, SpawnPoint
from .phase_gate import PhaseGate
from .scheduler import ScheduledAction, Scheduler
from .spawner import SpawnPointAllocator


class RoundLifecycle:
    """
    Owns the round counter, the phase and the population in flight.

    Lifecycle:
    - NOT_STARTED:        waiting for a new-game request.
    - PLAYING/BUILDING:   next round's spawn points are staged and visible.
    - PLAYING/DEFENSE:    the wave is out; waits for every unit to resolve.
    - GAME_OVER:          terminal until ``restart_game`` (or ``start_new_game``).

    Timings are driven by ``update(now_ms)`` with pause-aware game time.
    """

    def __init__(
        self,
        config: GameConfig,
        catalog: UnitCatalog,
        unit_spawner: Any,
        structures: Any,
        rewards: Any,
        rng: random.Random | None = None,
        logger: GameLogger | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog
        self.unit_spawner = unit_spawner
        self.structures = structures
        self.rewards = rewards
        self.rng = rng if rng is not None else random.Random()
        self.logger = logger
        self.events = events if events is not None else EventBus(logger)

        self.composer = WaveComposer(catalog, self.rng)
        self.allocator = SpawnPointAllocator(config)
        self.gate = PhaseGate(config.build_phase_min_duration_ms)
        self.scheduler = Scheduler()

        self.state = GameState.NOT_STARTED
        self.phase = GamePhase.BUILDING
        self.completed_rounds = 0
        self.population_in_flight = 0
        self.round_context: RoundContext | None = None
        self.allocation: list[EnemyType] = []
        self.spawn_points: list[SpawnPoint] = []
        self.anchor_angle = 0.0
        self.build_phase_start_ms = 0

        self._spawner_handles: list[Any] = []
        self._in_flight: set[Any] = set()
        self._return_action: ScheduledAction | None = None

    # ------------------------------- Queries -----------------------------------------

    @property
    def now_ms(self) -> int:
        return self.scheduler.now_ms

    @property
    def next_round(self) -> int:
        return self.completed_rounds + 1

    @property
    def current_round(self) -> int:
        """Round being fought, or the last one fought; 0 before the first."""
        return self.round_context.round_number if self.round_context else 0

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    @property
    def returning_to_building(self) -> bool:
        return self._return_action is not None and self._return_action.pending

    def build_phase_elapsed_ms(self) -> int:
        return self.now_ms - self.build_phase_start_ms

    def can_start_defense(self) -> bool:
        return (
            self.is_playing
            and self.phase is GamePhase.BUILDING
            and self.gate.can_start_defense(self.build_phase_elapsed_ms())
        )

    def build_phase_remaining_ms(self) -> int:
        if not self.is_playing or self.phase is not GamePhase.BUILDING:
            return 0
        return self.gate.remaining_ms(self.build_phase_elapsed_ms())

    # ------------------------------- Transitions -------------------------------------

    def update(self, now_ms: int) -> None:
        """Advance the simulation clock and fire any due deferred actions."""
        self.scheduler.update(now_ms)

    def reset(self) -> None:
        """Drop the current game, cancelling every pending action."""
        self.scheduler.cancel_all()
        self._return_action = None
        self._in_flight.clear()
        self._spawner_handles = []
        self.unit_spawner.clear_spawners()

        self.state = GameState.NOT_STARTED
        self.phase = GamePhase.BUILDING
        self.completed_rounds = 0
        self.population_in_flight = 0
        self.round_context = None
        self.allocation = []
        self.spawn_points = []

    def start_new_game(self, now_ms: int | None = None) -> bool:
        if now_ms is not None:
            self.update(now_ms)
        if self.state is GameState.PLAYING:
            self._warn("RoundLifecycle: Game already in progress")
            return False

        self.reset()
        self.state = GameState.PLAYING
        self.phase = GamePhase.BUILDING
        self.build_phase_start_ms = self.now_ms
        if self.logger:
            self.logger.log_event("NEW GAME", self.next_round, "Game started")

        self.events.emit(GAME_STARTED)
        self.events.emit(PHASE_CHANGED, self.phase)
        self._stage_next_round()
        return True

    def restart_game(self, now_ms: int | None = None) -> bool:
        if now_ms is not None:
            self.update(now_ms)
        self.reset()
        return self.start_new_game()

    def request_start_defense(self, now_ms: int | None = None) -> bool:
        """
        Try to leave the building phase and launch the next round.

        Parameters
        ----------
        now_ms : int | None
            Current game time; the clock is advanced to it first when given.

        Returns
        -------
        bool
            True if the round started. Rejections leave the state unchanged.
        """
        if now_ms is not None:
            self.update(now_ms)

        if self.state is not GameState.PLAYING:
            return self._reject("Cannot start defense phase - game not playing")
        if self.phase is not GamePhase.BUILDING:
            return self._reject("Cannot start defense phase - not in building phase")
        elapsed = self.build_phase_elapsed_ms()
        if not self.gate.can_start_defense(elapsed):
            remaining = self.gate.remaining_ms(elapsed) / 1000.0
            return self._reject(f"Must wait {remaining:.1f} more seconds before starting defense phase")

        return self._start_defense()

    def report_unit_resolved(self, handle: Any, resolution: Resolution) -> bool:
        """Count one unit as gone (arrived or killed). Unknown or repeated handles are ignored."""
        if self.state is not GameState.PLAYING or self.phase is not GamePhase.DEFENSE:
            return False
        if handle not in self._in_flight:
            return False
        self._in_flight.discard(handle)
        self._resolve_one()
        return True

    def on_all_structures_destroyed(self) -> None:
        if self.state is not GameState.PLAYING:
            return

        self.state = GameState.GAME_OVER
        self.scheduler.cancel_all()
        self._return_action = None
        self._in_flight.clear()

        final_round = max(self.current_round, self.completed_rounds)
        if self.logger:
            self.logger.log_event("GAME OVER", final_round, "All defended structures destroyed")
        self.events.emit(GAME_OVER, final_round)

    # ------------------------------- Internals ---------------------------------------

    def _start_defense(self) -> bool:
        round_number = self.next_round
        points = self.allocator.generate_positions(round_number, self.anchor_angle)

        if len(self._spawner_handles) == len(points) and len(self.spawn_points) == len(points):
            placed = self.spawn_points
        else:
            placed = self._place_spawners(points)
            if placed is None:
                return self._reject("Failed to create spawner; cannot start round")

        context = round_context(round_number, self.config)
        allocation = self.composer.compose_for(context)
        assigned = self.allocator.partition(allocation, placed)

        self.round_context = context
        self.allocation = allocation
        self.spawn_points = assigned
        self.phase = GamePhase.DEFENSE
        self.population_in_flight = len(allocation)
        self._in_flight = set()

        if self.logger:
            self.logger.log_round_started(
                round_number, context.threat_budget, context.population_cap,
                context.boss_quota, len(allocation),
            )
            self.logger.log_phase_changed(round_number, self.phase.value)
        self.events.emit(PHASE_CHANGED, self.phase)
        self.events.emit(ROUND_STARTED, round_number)
        self.events.emit(SPAWN_POINTS_CHANGED, list(self.spawn_points))

        for point in assigned:
            for offset_ms, tag in self.allocator.release_schedule(point, self.rng):
                if offset_ms <= 0:
                    self._release(point, tag)
                else:
                    self.scheduler.schedule(offset_ms, self._release, point, tag)

        if not allocation:
            self._round_defeated()
        return True

    def _release(self, point: SpawnPoint, tag: EnemyType) -> None:
        if self.state is not GameState.PLAYING or self.phase is not GamePhase.DEFENSE:
            return

        position = self.allocator.scatter(point, self.rng)
        target = self.structures.nearest_defended_structure(position)
        handle = self.unit_spawner.spawn_unit(tag, position, target)
        if handle is None:
            self._warn(f"RoundLifecycle: No unit mapping for '{tag.value}'; skipping")
            self._resolve_one()
            return
        self._in_flight.add(handle)

    def _resolve_one(self) -> None:
        if self.population_in_flight <= 0:
            return
        self.population_in_flight -= 1
        if self.population_in_flight == 0:
            self._round_defeated()

    def _round_defeated(self) -> None:
        round_number = self.current_round
        self.completed_rounds += 1
        self.rewards.grant_round_completion_reward(round_number)

        if self.logger:
            self.logger.log_round_completed(round_number)
        self.events.emit(ROUND_COMPLETED, round_number)

        self._return_action = self.scheduler.schedule(
            self.config.defense_phase_end_delay_ms, self._return_to_building
        )

    def _return_to_building(self) -> None:
        self._return_action = None
        if self.state is not GameState.PLAYING:
            return

        self.phase = GamePhase.BUILDING
        self.build_phase_start_ms = self.now_ms
        if self.logger:
            self.logger.log_phase_changed(self.next_round, self.phase.value)

        # Stage the next spawner so players can see where enemies will come from
        self._stage_next_round()
        self.events.emit(PHASE_CHANGED, self.phase)

    def _stage_next_round(self) -> None:
        self.anchor_angle = self.rng.uniform(0.0, 360.0)
        points = self.allocator.generate_positions(self.next_round, self.anchor_angle)
        placed = self._place_spawners(points)
        self.spawn_points = placed if placed is not None else points
        self.events.emit(SPAWN_POINTS_CHANGED, list(self.spawn_points))

    def _place_spawners(self, points: list[SpawnPoint]) -> list[SpawnPoint] | None:
        """Put a spawner on every point; None (and nothing kept) if any fails."""
        self.unit_spawner.clear_spawners()
        self._spawner_handles = []

        placed = []
        handles = []
        for point in points:
            handle = self.unit_spawner.place_spawner(point.pos)
            if handle is None:
                self._warn(f"RoundLifecycle: No spawner could be placed at {point.pos}")
                self.unit_spawner.clear_spawners()
                return None
            radius = getattr(handle, "spawn_radius", None) or point.radius
            placed.append(SpawnPoint(point.pos, radius))
            handles.append(handle)

        self._spawner_handles = handles
        return placed

    def _reject(self, reason: str) -> bool:
        if self.logger:
            self.logger.log_rejected(self.next_round, reason)
        else:
            print(f"RoundLifecycle: {reason}")
        self.events.emit(DEFENSE_REJECTED, reason)
        return False

    def _warn(self, message: str) -> None:
        if self.logger:
            self.logger.log_warning(self.next_round, message)
        else:
            print(message)
