"""
Deck - Deck factory and hand filling.

This module handles:
- Building the 76-card Onirim deck
- Filling the hand with Labyrinth cards, diverting the rest to Limbo
- Drawing N cards and sorting them by class (Nightmare deck discard)
"""

from __future__ import annotations
import logging
import random
from typing import Callable

from .cards import Card, CardClass, Color, Symbol
from ..errors import DeckExhaustedError, EmptyPileError
from .pile import Pile
from ..config import HAND_SIZE

logger = logging.getLogger(__name__)

DECK_SIZE = 76

# Labyrinth composition per color: 3 Key, 4 Moon, N Sun
KEYS_PER_COLOR = 3
MOONS_PER_COLOR = 4
DECK_COMPOSITION = {
    Color.RED: 9,
    Color.BLUE: 8,
    Color.GREEN: 7,
    Color.BROWN: 6,
}
DOORS_PER_COLOR = 2
DREAM_COUNT = 10

MoveCallback = Callable[[str], None]


def build_cards() -> list[Card]:
    """Create the deck contents in canonical (unshuffled) order."""
    cards: list[Card] = []

    def add(card_class: CardClass, color: Color = Color.NONE, symbol: Symbol = Symbol.NONE):
        cards.append(Card(card_class, color, symbol, instance_id=len(cards)))

    for color, sun_count in DECK_COMPOSITION.items():
        for _ in range(KEYS_PER_COLOR):
            add(CardClass.LABYRINTH, color, Symbol.KEY)
        for _ in range(MOONS_PER_COLOR):
            add(CardClass.LABYRINTH, color, Symbol.MOON)
        for _ in range(sun_count):
            add(CardClass.LABYRINTH, color, Symbol.SUN)

    for color in DECK_COMPOSITION:
        for _ in range(DOORS_PER_COLOR):
            add(CardClass.DOOR, color)

    for _ in range(DREAM_COUNT):
        add(CardClass.DREAM)

    return cards


def make_deck(rng: random.Random) -> Pile:
    """Build the standard deck and shuffle it once."""
    deck = Pile(name="deck", cards=build_cards())
    deck.shuffle(rng)
    return deck


def shuffle_limbo_into_deck(deck: Pile, limbo: Pile, rng: random.Random) -> bool:
    """
    Move every Limbo card into the deck and shuffle.

    Returns False when Limbo was empty (deck untouched).
    """
    if limbo.is_empty:
        return False
    deck.extend(limbo.take_all())
    deck.shuffle(rng)
    logger.debug("Shuffled Limbo into deck (%d cards)", deck.count)
    return True


def fill_hand(
    deck: Pile,
    hand: Pile,
    limbo: Pile,
    rng: random.Random,
    hand_size: int = HAND_SIZE,
    on_move: MoveCallback | None = None,
) -> None:
    """
    Draw until the hand holds hand_size Labyrinth cards.

    Door and Dream cards drawn along the way go to Limbo, which is
    shuffled back into the deck once the hand is full. Running out of
    cards raises DeckExhaustedError; cards already moved stay where
    they are.
    """
    report = on_move or (lambda message: None)

    while hand.count < hand_size:
        try:
            card = deck.draw()
        except EmptyPileError as e:
            raise DeckExhaustedError(deck.name) from e

        if not card.is_labyrinth:
            limbo.append(card)
            report(f"{card} moved to Limbo")
            continue

        hand.append(card)
        report(f"{card} added to Hand")

    if shuffle_limbo_into_deck(deck, limbo, rng):
        report("Shuffling Limbo into Deck")


def sort_draws(
    deck: Pile,
    count: int,
    labyrinth_to: Pile,
    other_to: Pile,
    on_move: MoveCallback | None = None,
) -> list[Card]:
    """
    Draw count cards, sending Labyrinth cards to one pile and the rest
    to another. Raises EmptyPileError if the deck runs out; there is
    no rollback of cards already sorted.
    """
    report = on_move or (lambda message: None)
    drawn: list[Card] = []

    for _ in range(count):
        card = deck.draw()
        drawn.append(card)
        target = labyrinth_to if card.is_labyrinth else other_to
        target.append(card)
        report(f"{card} moved to {target.name.capitalize()}")

    return drawn


def draw_hand(deck: Pile, rng: random.Random, hand_size: int = HAND_SIZE) -> tuple[Pile, Pile]:
    """
    Draw a fresh hand from the deck.

    Returns (hand, limbo); limbo is empty after a completed fill.
    """
    hand = Pile(name="hand")
    limbo = Pile(name="limbo")
    fill_hand(deck, hand, limbo, rng, hand_size=hand_size)
    return hand, limbo
