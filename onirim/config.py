"""
Configuration for a game instance.

Values come from (lowest to highest priority):
1. Defaults below
2. Environment: ONIRIM_SEED, ONIRIM_LOG_LEVEL
3. CLI flags
"""

from __future__ import annotations
import os
import time
from dataclasses import dataclass

HAND_SIZE = 5
DOORS_TO_WIN = 8


@dataclass
class GameConfig:
    """Configuration for one game."""

    seed: int | None = None
    hand_size: int = HAND_SIZE
    doors_to_win: int = DOORS_TO_WIN
    log_level: str = "WARNING"

    def __post_init__(self):
        """Derive a seed from the clock if none was given."""
        if self.seed is None:
            self.seed = time.time_ns() & 0xFFFFFFFF

    @classmethod
    def from_env(cls, **overrides) -> GameConfig:
        """Build a config from environment variables plus explicit overrides."""
        seed_env = os.getenv("ONIRIM_SEED")
        values = {
            "seed": int(seed_env) if seed_env else None,
            "log_level": os.getenv("ONIRIM_LOG_LEVEL", "WARNING").upper(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
