"""
Session Module - Runs games.

- game_loop: play a game to the end against one port, or simulate
  many bot games
- manager: host several independent games, each on its own worker
  thread with its own channels

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameResult, SimulationSummary, play_game, play_bot_game, simulate

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameResult",
    "SimulationSummary",
    "play_game",
    "play_bot_game",
    "simulate",
]
