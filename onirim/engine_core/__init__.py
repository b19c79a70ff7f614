"""
Engine Core - Onirim game state and turn resolution.

The engine:
1. Builds and shuffles the 76-card deck
2. Fills the opening hand (Limbo diversion)
3. Runs the turn machine phase by phase
4. Asks the player for decisions through an InteractionPort
5. Projects board snapshots for observers
"""

from .cards import Card, CardClass, Color, Symbol
from .pile import Pile
from .deck import make_deck, fill_hand, sort_draws, draw_hand, shuffle_limbo_into_deck
from .state import GameState, GamePhase
from .board import BoardSnapshot, get_board
from .machine import TurnMachine

__all__ = [
    "Card",
    "CardClass",
    "Color",
    "Symbol",
    "Pile",
    "make_deck",
    "fill_hand",
    "sort_draws",
    "draw_hand",
    "shuffle_limbo_into_deck",
    "GameState",
    "GamePhase",
    "BoardSnapshot",
    "get_board",
    "TurnMachine",
]
