"""
Game State - The mutable state of one Onirim game.

Design principles:
- One pile per collection; each card lives in exactly one pile
  (or in the drawn slot while it awaits resolution)
- Mutated only by the turn machine's phase handlers
- Owned by a single game; nothing is shared between games
- Ephemeral: no persistence, discarded when the game ends
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from enum import Enum

from .cards import Card
from .deck import fill_hand, make_deck
from .pile import Pile
from ..config import GameConfig


class GamePhase(Enum):
    """Turn machine phases."""
    START_OF_TURN = "startOfTurn"
    PLAY_OR_DISCARD = "playOrDiscard"
    PROPHECY = "prophecy"
    END_OF_TURN = "endOfTurn"
    DOOR_DRAWN = "doorDrawn"
    DREAM_DRAWN = "dreamDrawn"
    END_OF_GAME = "endOfGame"


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    found_door holds the instance ids of row cards already used to
    discover a door.
    """
    deck: Pile = field(default_factory=lambda: Pile(name="deck"))
    hand: Pile = field(default_factory=lambda: Pile(name="hand"))
    row: Pile = field(default_factory=lambda: Pile(name="row"))
    discard: Pile = field(default_factory=lambda: Pile(name="discard"))
    limbo: Pile = field(default_factory=lambda: Pile(name="limbo"))
    doors: Pile = field(default_factory=lambda: Pile(name="doors"))

    drawn: Card | None = None
    found_door: set[int] = field(default_factory=set)

    phase: GamePhase = GamePhase.START_OF_TURN
    done: bool = False
    won: bool = False
    turn_number: int = 1

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def new(cls, config: GameConfig | None = None) -> GameState:
        """Build and shuffle the deck, then fill the opening hand."""
        config = config or GameConfig()
        rng = random.Random(config.seed)
        state = cls(config=config, rng=rng)
        state.deck = make_deck(rng)
        fill_hand(state.deck, state.hand, state.limbo, rng, hand_size=config.hand_size)
        return state

    @property
    def piles(self) -> list[Pile]:
        return [self.deck, self.hand, self.row, self.discard, self.limbo, self.doors]

    @property
    def door_count(self) -> int:
        return self.doors.count

    @property
    def hand_is_full(self) -> bool:
        return self.hand.count >= self.config.hand_size

    def all_cards(self) -> list[Card]:
        """Every card in play, including the drawn slot."""
        cards = [card for pile in self.piles for card in pile]
        if self.drawn is not None:
            cards.append(self.drawn)
        return cards
