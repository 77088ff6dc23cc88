"""
Game session configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from chess_opponent.policy.difficulty import Difficulty

COLOR_NAMES = ("white", "black")


@dataclass
class SessionConfig:
    """Configuration for a human-vs-engine game session.

    Search depths are fixed per difficulty tier and are not configurable here.
    """

    difficulty: str = "easy"
    """Default difficulty tier: 'easy', 'medium' or 'hard' (aliases 'low', 'high')"""

    player_color: str = "white"
    """Colour the human plays: 'white' or 'black'"""

    think_delay: float = 0.0
    """Seconds the background engine waits before searching"""

    random_seed: Optional[int] = None
    """Seed for the random tier (None for nondeterministic play)"""

    log_file: Optional[Path] = None
    """Log to this file instead of stderr when set"""

    debug: bool = False
    """Log at DEBUG level"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        # Raises ValueError for unknown labels
        self.difficulty = Difficulty.from_label(self.difficulty).value

        self.player_color = str(self.player_color).strip().lower()
        if self.player_color not in COLOR_NAMES:
            raise ValueError(
                f"player_color should be 'white' or 'black', got {self.player_color!r}"
            )

        if self.think_delay < 0:
            raise ValueError(f"think_delay must be non-negative, got {self.think_delay}")

        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"SessionConfig(\n"
            f"  Opponent: difficulty={self.difficulty}, think_delay={self.think_delay}s\n"
            f"  Player: {self.player_color}\n"
            f"  Random seed: {self.random_seed}\n"
            f"  Logging: file={self.log_file}, debug={self.debug}\n"
            f")"
        )
