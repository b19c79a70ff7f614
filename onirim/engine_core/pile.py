"""
Pile - An ordered, mutable sequence of cards.

Used for every card collection in the game: the deck, hand, row,
discard pile, Limbo and discovered doors. The front of the pile
(index 0) is the top of the deck.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .cards import Card
from ..errors import EmptyPileError


@dataclass
class Pile:
    """
    A named, ordered collection of cards.

    Hand and Doors are unordered in play, but keep an order here so
    choice menus can address cards by index.
    """
    name: str
    cards: list[Card] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __str__(self) -> str:
        return ", ".join(f"{i + 1}-{card}" for i, card in enumerate(self.cards))

    def append(self, card: Card) -> None:
        """Add a card at the end (bottom of the deck)."""
        self.cards.append(card)

    def extend(self, cards: Iterable[Card]) -> None:
        self.cards.extend(cards)

    def prepend(self, card: Card) -> None:
        """Place a card on top (front) of the pile."""
        self.cards.insert(0, card)

    def draw(self) -> Card:
        """Remove and return the front card."""
        if not self.cards:
            raise EmptyPileError(self.name)
        return self.cards.pop(0)

    def remove_at(self, index: int) -> Card:
        """
        Remove and return the card at index, keeping the rest in order.

        The index must come from a prior listing of this pile.
        """
        return self.cards.pop(index)

    def peek_last(self) -> Card | None:
        """Last card, or None if the pile is empty."""
        return self.cards[-1] if self.cards else None

    def take_all(self) -> list[Card]:
        """Remove and return every card."""
        cards, self.cards = self.cards, []
        return cards

    def shuffle(self, rng: random.Random) -> None:
        """In-place Fisher-Yates shuffle."""
        cards = self.cards
        n = len(cards)
        for i in range(n):
            j = rng.randint(i, n - 1)
            cards[i], cards[j] = cards[j], cards[i]
