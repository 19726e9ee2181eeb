"""HUD and Game Over screen"""

import pygame

from .constants import HUD_PADDING, TEXT_COLOR, FONT_NAME, FONT_SIZE_SMALL
from .models import GamePhase
from .stats import GameSummary


class HUD:
    """Heads-Up Display with left/right split layout."""

    def __init__(self, font: pygame.font.Font) -> None:
        self.font = font
        self.small_font = pygame.font.Font(FONT_NAME, FONT_SIZE_SMALL)

    def draw(self, surf: pygame.Surface, round_number: int, phase: GamePhase,
             tritium: int, in_flight: int, build_remaining_ms: int,
             show_fps: bool = False, fps: float = 0.0, paused: bool = False) -> None:
        """Render round/phase on the left and economy stats on the right."""
        current_width = surf.get_width()
        current_height = surf.get_height()

        responsive_padding = max(8, int(HUD_PADDING * (min(current_width, current_height) / 540)))
        left_x = responsive_padding
        left_y = responsive_padding

        # LEFT SIDE: Round and Phase
        round_text = self.font.render(f"Round: {round_number}", True, TEXT_COLOR)
        surf.blit(round_text, (left_x, left_y))
        left_y += round_text.get_height() + 4

        if phase is GamePhase.BUILDING:
            phase_color = (120, 220, 120)
            if build_remaining_ms > 0:
                phase_line = f"Building - ready in {build_remaining_ms / 1000:.1f}s"
            else:
                phase_line = "Building - press SPACE to start"
        else:
            phase_color = (255, 140, 100)
            phase_line = f"Defense - {in_flight} hostiles left"
        phase_surf = self.small_font.render(phase_line, True, phase_color)
        surf.blit(phase_surf, (left_x, left_y))

        # RIGHT SIDE: Economy and optional indicators
        right_stats = [f"Tritium: {tritium}"]
        stats_width = max(self.font.size(line)[0] for line in right_stats)
        right_x = current_width - stats_width - responsive_padding
        right_y = responsive_padding

        for line in right_stats:
            text_surf = self.font.render(line, True, TEXT_COLOR)
            surf.blit(text_surf, (right_x, right_y))
            right_y += text_surf.get_height() + 4

        if show_fps:
            right_y += 4
            fps_color = (0, 255, 0) if fps >= 55 else (255, 255, 0) if fps >= 30 else (255, 0, 0)
            fps_text = self.small_font.render(f"FPS: {fps:.1f}", True, fps_color)
            surf.blit(fps_text, (right_x, right_y))

        if paused:
            pause_text = self.font.render("PAUSED", True, (255, 255, 100))
            pause_y = max(80, int(current_height * 0.15))  # 15% from top, minimum 80px
            text_rect = pause_text.get_rect(center=(current_width // 2, pause_y))
            bg_rect = text_rect.inflate(20, 10)
            bg_surf = pygame.Surface(bg_rect.size, pygame.SRCALPHA)
            bg_surf.fill((0, 0, 0, 128))
            surf.blit(bg_surf, bg_rect)
            surf.blit(pause_text, text_rect)


class GameOverScreen:
    """Game over screen with final stats and restart option."""
    def __init__(self, font_big: pygame.font.Font, font_small: pygame.font.Font):
        self.font_big = font_big
        self.font_small = font_small

    def draw(self, surf: pygame.Surface, summary: GameSummary | None) -> None:
        """
        Draw game over screen.
        """
        current_width = surf.get_width()
        current_height = surf.get_height()

        # Semi-transparent overlay
        overlay = pygame.Surface((current_width, current_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        surf.blit(overlay, (0, 0))

        game_over_text = self.font_big.render("GAME OVER", True, (255, 100, 100))
        title_y = max(80, int(current_height * 0.25))  # 25% from top, minimum 80px
        game_over_rect = game_over_text.get_rect(center=(current_width // 2, title_y))
        surf.blit(game_over_text, game_over_rect)

        stats_lines = []
        if summary is not None:
            stats_lines = [
                f"Round Reached: {summary.final_round}",
                f"Kills: {summary.total_kills}",
                f"Tritium: {summary.tritium}",
            ]

        y_offset = max(title_y + 80, int(current_height * 0.4))  # 40% from top or below title
        for line in stats_lines:
            text_surf = self.font_small.render(line, True, TEXT_COLOR)
            text_rect = text_surf.get_rect(center=(current_width // 2, y_offset))
            surf.blit(text_surf, text_rect)
            y_offset += 30

        inst_text = self.font_small.render("Press R to restart or ESC to quit", True, (150, 150, 150))
        inst_rect = inst_text.get_rect(center=(current_width // 2, y_offset + 30))
        surf.blit(inst_text, inst_rect)
