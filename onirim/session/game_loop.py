"""
Game Loop - Runs complete games to the end.

Two entry points:
- play_game(): one game against any InteractionPort (terminal, bot)
- simulate(): many bot games for statistics
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from ..config import GameConfig
from ..engine_core.machine import TurnMachine
from ..engine_core.state import GameState
from ..interact.port import InteractionPort
from ..bots.interaction import PolicyInteraction
from ..bots.policy import ChoicePolicy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """
    Outcome of a finished game.

    Contains the final flags and a few numbers for statistics.
    """
    won: bool
    seed: int
    turns: int
    doors: int
    cards_remaining: int
    steps: int = 0


@dataclass
class SimulationSummary:
    """Aggregate over many simulated games."""
    policy: str
    results: list[GameResult] = field(default_factory=list)

    @property
    def games(self) -> int:
        return len(self.results)

    @property
    def wins(self) -> int:
        return sum(1 for r in self.results if r.won)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0

    @property
    def average_doors(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.doors for r in self.results) / self.games


def play_game(
    port: InteractionPort,
    config: GameConfig | None = None,
    state: GameState | None = None,
) -> GameResult:
    """Create (or take) a game and run it against port until it ends."""
    config = config or GameConfig()
    state = state or GameState.new(config)
    machine = TurnMachine(state, port)
    machine.run()

    result = GameResult(
        won=state.won,
        seed=state.config.seed,
        turns=state.turn_number,
        doors=state.door_count,
        cards_remaining=state.deck.count,
        steps=len(machine.transitions),
    )
    logger.info(
        "Game %s after %d turns with %d doors (seed %s)",
        "won" if result.won else "lost", result.turns, result.doors, result.seed,
    )
    return result


def play_bot_game(policy: ChoicePolicy, config: GameConfig | None = None) -> GameResult:
    """Run one game answered entirely by policy."""
    state = GameState.new(config or GameConfig())
    return play_game(PolicyInteraction(policy, state), state=state)


def simulate(
    policy_factory: Callable[[int], ChoicePolicy],
    games: int,
    seed: int = 0,
) -> SimulationSummary:
    """
    Play games bot games with consecutive seeds.

    policy_factory receives the game's seed so random policies stay
    reproducible.
    """
    summary: SimulationSummary | None = None
    for i in range(games):
        game_seed = seed + i
        policy = policy_factory(game_seed)
        if summary is None:
            summary = SimulationSummary(policy=policy.get_name())
        summary.results.append(play_bot_game(policy, GameConfig(seed=game_seed)))
    return summary or SimulationSummary(policy="none")
