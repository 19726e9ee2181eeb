"""Markdown logger for round lifecycle events (rounds, phases, rejections)."""

import datetime


class GameLogger:
    """Handles logging of game events to markdown file."""

    def __init__(self, log_file: str):
        """
        Initialize the game logger.

        Parameters
        ----------
        log_file : str
            Path to the log file
        """
        self.log_file = log_file
        self.setup_log()

    def setup_log(self) -> None:
        """Initialize the log file with headers."""
        try:
            with open(self.log_file, 'w', encoding='utf-8') as f:
                f.write("# Tritium Defense Game Log\n\n")
                f.write(f"Log started at: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
                f.write("## Round Events\n\n")
                f.write("| Timestamp | Event | Round | Details |\n")
                f.write("|-----------|-------|-------|---------|\n")
        except Exception as e:
            print(f"Failed to initialize log file: {e}")

    def log_event(self, event: str, round_number: int, details: str = "") -> None:
        """
        Append one row to the event table.

        Parameters
        ----------
        event : str
            Short upper-case event name
        round_number : int
            Round the event belongs to
        details : str, optional
            Additional details about the event
        """
        try:
            timestamp = datetime.datetime.now().strftime('%H:%M:%S.%f')[:-3]  # Include milliseconds

            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"| {timestamp} | {event} | {round_number} | {details} |\n")

        except Exception as e:
            print(f"Failed to log {event}: {e}")

    def log_round_started(self, round_number: int, budget: int, cap: int, bosses: int, units: int) -> None:
        self.log_event(
            "ROUND START", round_number,
            f"budget {budget}, cap {cap}, bosses {bosses}, units {units}",
        )

    def log_round_completed(self, round_number: int) -> None:
        self.log_event("ROUND CLEAR", round_number, "All units resolved")

    def log_phase_changed(self, round_number: int, phase: str) -> None:
        self.log_event("PHASE", round_number, f"Entered {phase} phase")

    def log_rejected(self, round_number: int, reason: str) -> None:
        self.log_event("REJECTED", round_number, reason)

    def log_warning(self, round_number: int, message: str) -> None:
        """Log a warning and echo it to stdout."""
        print(message)
        self.log_event("WARNING", round_number, message)

    def log_game_over(self, round_number: int, kills: int) -> None:
        self.log_event("GAME OVER", round_number, f"Total kills {kills}")
