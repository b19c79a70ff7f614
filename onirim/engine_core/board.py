"""
Board Snapshot - Read-only projection of the game for observers.

Each card becomes a short token (LRK = Labyrinth Red Key, RB = Blue
Door, DN = Nightmare). The snapshot is a pure function of the state
and must never be used to drive game logic.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .state import GameState


class BoardSnapshot(BaseModel):
    """Visible board state. Serializes with PascalCase aliases."""
    hand: list[str] = Field(default_factory=list, alias="Hand")
    discard: list[str] = Field(default_factory=list, alias="Discard")
    doors: list[str] = Field(default_factory=list, alias="Doors")
    row: list[str] = Field(default_factory=list, alias="Row")
    cards_remaining: int = Field(0, alias="CardsRemaining")
    done: bool = Field(False, alias="Done")
    won: bool = Field(False, alias="Won")

    model_config = {"populate_by_name": True, "frozen": True}

    def render(self) -> str:
        """Plain-text summary printed at the end of each turn."""
        def line(label: str, keys: list[str]) -> str:
            listing = ", ".join(f"{i + 1}-{key}" for i, key in enumerate(keys))
            return f"{label:<8}: {listing}"

        return "\n".join([
            line("Hand", self.hand),
            line("Row", self.row),
            line("Discard", self.discard),
            line("Doors", self.doors),
            f"Deck    : {self.cards_remaining} cards",
        ])


def get_board(state: GameState) -> BoardSnapshot:
    """Project the current state into a BoardSnapshot."""
    return BoardSnapshot(
        hand=[card.key for card in state.hand],
        discard=[card.key for card in state.discard],
        doors=[card.key for card in state.doors],
        row=[card.key for card in state.row],
        cards_remaining=state.deck.count,
        done=state.done,
        won=state.won,
    )
