"""Game entry point: pygame window, input, and the composition root."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass

import pygame

from .catalog import UnitCatalog
from .config import ConfigError, GameConfig, load_config
from .constants import (
    WIDTH, HEIGHT, FPS, BG_COLOR, TEXT_COLOR, MARKER_COLOR, MARKER_RING,
    BASE_COLOR, BASE_DAMAGED_COLOR, HUD_PADDING, FONT_NAME, FONT_SIZE_MEDIUM,
    FONT_SIZE_LARGE, PIXELS_PER_UNIT, BASE_MAX_HEALTH, BASE_RADIUS, CLICK_DAMAGE,
    LOG_FILE,
)
from .enemy import Enemy
from .events import EventBus, GAME_STARTED, GAME_OVER, DEFENSE_REJECTED, ROUND_COMPLETED
from .lifecycle import RoundLifecycle
from .logger import GameLogger
from .models import EnemyType, GamePhase, GameState, Resolution
from .stats import PlayerStats
from .ui import HUD, GameOverScreen

REJECTION_MESSAGE_MS = 1500


@dataclass
class SpawnMarker:
    """Visible spawner entity standing on a spawn point."""
    pos: pygame.Vector2
    spawn_radius: float


@dataclass
class Base:
    """A defended structure; the game is lost when every base is destroyed."""
    pos: pygame.Vector2
    health: float = BASE_MAX_HEALTH

    @property
    def destroyed(self) -> bool:
        return self.health <= 0


class Game:
    """
    Main game controller: initializes subsystems, runs the loop, handles input,
    updates entities, and draws the frame.

    Also acts as the unit-spawning and structure collaborator of the
    round lifecycle.
    """

    def __init__(self, config: GameConfig | None = None, seed: int | None = None) -> None:
        """Initialize subsystems and wire the round lifecycle."""
        pygame.init()
        pygame.display.set_caption("Tritium Defense")

        self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.Font(FONT_NAME, FONT_SIZE_MEDIUM)
        self.font_big = pygame.font.Font(FONT_NAME, FONT_SIZE_LARGE)

        self.config = config or GameConfig()
        self.catalog = UnitCatalog.from_config(self.config)
        self.logger = GameLogger(LOG_FILE)
        self.events = EventBus(self.logger)
        self.stats = PlayerStats(self.config)

        self.enemies: list[Enemy] = []
        self.markers: list[SpawnMarker] = []
        self.bases: list[Base] = self.make_bases()

        self.lifecycle = RoundLifecycle(
            self.config, self.catalog,
            unit_spawner=self, structures=self, rewards=self.stats,
            rng=random.Random(seed), logger=self.logger, events=self.events,
        )
        self.events.subscribe(GAME_STARTED, self.on_game_started)
        self.events.subscribe(GAME_OVER, self.on_game_over)
        self.events.subscribe(DEFENSE_REJECTED, self.on_defense_rejected)
        self.events.subscribe(ROUND_COMPLETED, self.on_round_completed)

        self.paused = False
        self.show_fps = False
        self.fps_samples = []
        self.message = ""
        self.message_until = 0

        # Pause-aware timing
        self.total_pause_time = 0
        self.pause_start_time = None
        self.last_game_time = 0

        self.hud = HUD(self.font_small)
        self.game_over_screen = GameOverScreen(self.font_big, self.font_small)

    def make_bases(self) -> list[Base]:
        return [
            Base(pygame.Vector2(0, 0)),
            Base(pygame.Vector2(-4, 3)),
            Base(pygame.Vector2(4, -3)),
        ]

    def get_game_time(self) -> int:
        """
        Get the current game time in milliseconds, excluding time spent paused.
        """
        wall_time = pygame.time.get_ticks()
        if self.paused and self.pause_start_time is not None:
            current_pause_duration = wall_time - self.pause_start_time
            return wall_time - self.total_pause_time - current_pause_duration
        return wall_time - self.total_pause_time

    def to_screen(self, world: pygame.Vector2) -> tuple[int, int]:
        width, height = self.screen.get_size()
        return (int(width / 2 + world.x * PIXELS_PER_UNIT), int(height / 2 - world.y * PIXELS_PER_UNIT))

    # ------------------------------- Collaborators ----------------------------------

    def place_spawner(self, position: tuple[float, float]) -> SpawnMarker | None:
        marker = SpawnMarker(pygame.Vector2(position), self.config.spawn_scatter_radius)
        self.markers.append(marker)
        return marker

    def clear_spawners(self) -> None:
        self.markers.clear()

    def spawn_unit(self, tag: EnemyType, position: pygame.Vector2, target: pygame.Vector2) -> Enemy | None:
        if self.catalog.get(tag) is None:
            return None
        enemy = Enemy(tag, position, target, born_at_ms=self.last_game_time)
        self.enemies.append(enemy)
        return enemy

    def nearest_defended_structure(self, position: pygame.Vector2) -> pygame.Vector2:
        standing = [base for base in self.bases if not base.destroyed]
        if not standing:
            return pygame.Vector2(0, 0)
        nearest = min(standing, key=lambda base: base.pos.distance_squared_to(position))
        return pygame.Vector2(nearest.pos)

    # ------------------------------- Event listeners --------------------------------

    def on_game_started(self) -> None:
        self.stats.reset()
        self.enemies = []
        self.bases = self.make_bases()

    def on_game_over(self, final_round: int) -> None:
        summary = self.stats.record_game_over(final_round)
        self.logger.log_game_over(final_round, summary.total_kills)

    def on_defense_rejected(self, reason: str) -> None:
        self.message = reason
        self.message_until = self.last_game_time + REJECTION_MESSAGE_MS

    def on_round_completed(self, round_number: int) -> None:
        self.message = f"Round {round_number} defended! +{self.config.tritium_per_round} tritium"
        self.message_until = self.last_game_time + self.config.defense_phase_end_delay_ms

    # --------------------------------- Loop -----------------------------------------

    def run(self) -> None:
        """Main game loop: process events, update, render; exits on quit request."""
        self.last_game_time = self.get_game_time()
        self.lifecycle.start_new_game(self.last_game_time)

        running = True
        while running:
            current_fps = self.clock.get_fps()
            self.fps_samples.append(current_fps)
            if len(self.fps_samples) > 10:
                self.fps_samples.pop(0)
            avg_fps = sum(self.fps_samples) / len(self.fps_samples) if self.fps_samples else 0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE and not self.paused:
                        self.lifecycle.request_start_defense(self.get_game_time())
                    elif event.key == pygame.K_r and self.lifecycle.state is GameState.GAME_OVER:
                        self.lifecycle.restart_game(self.get_game_time())
                    elif event.key == pygame.K_p:
                        self.toggle_pause()
                    elif event.key == pygame.K_f:
                        self.show_fps = not self.show_fps
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not self.paused:
                    self.handle_click(event.pos, self.get_game_time())

            if not self.paused and self.lifecycle.is_playing:
                game_time = self.get_game_time()
                dt_ms = game_time - self.last_game_time
                self.last_game_time = game_time
                self.update(game_time, dt_ms)

            self.draw(self.get_game_time(), avg_fps)
            self.clock.tick(FPS)

        pygame.quit()

    def update(self, now_ms: int, dt_ms: int) -> None:
        self.lifecycle.update(now_ms)

        for enemy in self.enemies:
            if enemy.update(now_ms, dt_ms):
                self.damage_base_at(enemy.target, enemy.damage)
                self.lifecycle.report_unit_resolved(enemy, Resolution.ARRIVED)

        self.enemies = [e for e in self.enemies if not e.dead]

        if self.lifecycle.is_playing and all(base.destroyed for base in self.bases):
            self.lifecycle.on_all_structures_destroyed()

    def damage_base_at(self, target: pygame.Vector2, damage: float) -> None:
        for base in self.bases:
            if not base.destroyed and base.pos.distance_to(target) < BASE_RADIUS:
                base.health = max(0.0, base.health - damage)
                return

    # --------------------------------- Input ----------------------------------------

    def handle_click(self, pos: tuple[int, int], now_ms: int) -> None:
        """Left-click damages the top-most hostile under the cursor."""
        if not self.lifecycle.is_playing:
            return
        for enemy in reversed(self.enemies):
            if enemy.contains_point(pos, now_ms, self.to_screen):
                if enemy.take_damage(CLICK_DAMAGE, now_ms):
                    spec = self.catalog.get(enemy.tag)
                    if spec is not None:
                        self.stats.record_kill(spec)
                    self.lifecycle.report_unit_resolved(enemy, Resolution.KILLED)
                return

    def toggle_pause(self) -> None:
        if self.lifecycle.state is GameState.GAME_OVER:
            return
        if self.paused:
            if self.pause_start_time is not None:
                self.total_pause_time += pygame.time.get_ticks() - self.pause_start_time
                self.pause_start_time = None
            self.paused = False
        else:
            self.pause_start_time = pygame.time.get_ticks()
            self.paused = True

    # --------------------------------- Rendering ------------------------------------

    def draw_world(self, surf: pygame.Surface) -> None:
        surf.fill(BG_COLOR)

        if self.lifecycle.phase is GamePhase.BUILDING:
            for marker in self.markers:
                center = self.to_screen(marker.pos)
                r = max(4, int(marker.spawn_radius * PIXELS_PER_UNIT))
                pygame.draw.circle(surf, MARKER_RING, center, r + 4)
                pygame.draw.circle(surf, MARKER_COLOR, center, r, 2)

        for base in self.bases:
            if base.destroyed:
                continue
            center = self.to_screen(base.pos)
            r = int(BASE_RADIUS * PIXELS_PER_UNIT)
            color = BASE_COLOR if base.health > BASE_MAX_HEALTH / 3 else BASE_DAMAGED_COLOR
            pygame.draw.circle(surf, color, center, r)
            pygame.draw.circle(surf, TEXT_COLOR, center, r, 2)

    def draw(self, now_ms: int, fps: float) -> None:
        """
        Compose the frame: world -> enemies -> HUD -> message -> game over.
        """
        self.draw_world(self.screen)

        for enemy in self.enemies:
            enemy.draw(self.screen, now_ms, self.to_screen)

        lifecycle = self.lifecycle
        round_number = lifecycle.current_round if lifecycle.phase is GamePhase.DEFENSE else lifecycle.next_round
        self.hud.draw(self.screen, round_number, lifecycle.phase, self.stats.tritium,
                      lifecycle.population_in_flight, lifecycle.build_phase_remaining_ms(),
                      self.show_fps, fps, self.paused)

        if self.message and now_ms < self.message_until:
            text = self.font_small.render(self.message, True, (255, 220, 120))
            rect = text.get_rect(center=(self.screen.get_width() // 2, self.screen.get_height() - HUD_PADDING * 3))
            self.screen.blit(text, rect)

        if lifecycle.state is GameState.GAME_OVER:
            self.game_over_screen.draw(self.screen, self.stats.summary)

        pygame.display.flip()


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    config = GameConfig()
    if argv:
        try:
            config = load_config(argv[0])
        except ConfigError as e:
            print(f"Failed to load config, using defaults: {e}")
    Game(config).run()
