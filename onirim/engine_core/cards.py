"""
Cards - The Onirim card taxonomy.

Every card has a class, a color and a symbol:
- Labyrinth cards carry a color and a symbol (Key, Sun, Moon)
- Door cards carry a color only
- Dream cards (Nightmares) carry neither

Cards are immutable. Identity is the instance_id handle, not the
attributes: the deck holds many cards with identical attributes and the
door-discovery marker has to tell them apart.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import itertools


class CardClass(Enum):
    """Card classes."""
    DREAM = "Dream"
    DOOR = "Door"
    LABYRINTH = "Labyrinth"


class Color(Enum):
    """Card colors. NONE is used by Dream cards."""
    NONE = "None"
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    BROWN = "Brown"


class Symbol(Enum):
    """Labyrinth symbols. NONE is used by Door and Dream cards."""
    NONE = "None"
    KEY = "Key"
    SUN = "Sun"
    MOON = "Moon"


# Board token letters
CLASS_KEYS = {
    CardClass.DREAM: "D",
    CardClass.DOOR: "R",
    CardClass.LABYRINTH: "L",
}

COLOR_KEYS = {
    Color.NONE: "",
    Color.RED: "R",
    Color.BLUE: "B",
    Color.GREEN: "G",
    Color.BROWN: "Y",
}

SYMBOL_KEYS = {
    Symbol.NONE: "",
    Symbol.KEY: "K",
    Symbol.SUN: "S",
    Symbol.MOON: "M",
}

DREAM_KEY = "DN"

# Handles for cards created outside a deck (tests, tools)
_loose_ids = itertools.count(1000)


@dataclass(frozen=True)
class Card:
    """
    A card instance.

    instance_id is unique within one deck (0..75 for a standard deck).
    """
    card_class: CardClass
    color: Color = Color.NONE
    symbol: Symbol = Symbol.NONE
    instance_id: int = field(default_factory=lambda: next(_loose_ids))

    def __hash__(self):
        return hash(self.instance_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.instance_id == other.instance_id

    @property
    def is_labyrinth(self) -> bool:
        return self.card_class == CardClass.LABYRINTH

    @property
    def is_door(self) -> bool:
        return self.card_class == CardClass.DOOR

    @property
    def is_dream(self) -> bool:
        return self.card_class == CardClass.DREAM

    @property
    def is_key(self) -> bool:
        """Key-symbol Labyrinth card."""
        return self.is_labyrinth and self.symbol == Symbol.KEY

    @property
    def key(self) -> str:
        """Compact board token, e.g. LRK, RB, DN."""
        if self.is_dream:
            return DREAM_KEY
        return (
            CLASS_KEYS[self.card_class]
            + COLOR_KEYS[self.color]
            + SYMBOL_KEYS[self.symbol]
        )

    def __str__(self) -> str:
        if self.is_labyrinth:
            return f"L:{self.color.value[0]}{self.symbol.value[0]}"
        if self.is_door:
            return f"R:{self.color.value[0]}"
        return "D:NM"


def labyrinth(color: Color, symbol: Symbol, instance_id: int | None = None) -> Card:
    """Factory for a Labyrinth card."""
    if instance_id is None:
        return Card(CardClass.LABYRINTH, color, symbol)
    return Card(CardClass.LABYRINTH, color, symbol, instance_id)


def door(color: Color, instance_id: int | None = None) -> Card:
    """Factory for a Door card."""
    if instance_id is None:
        return Card(CardClass.DOOR, color)
    return Card(CardClass.DOOR, color, Symbol.NONE, instance_id)


def dream(instance_id: int | None = None) -> Card:
    """Factory for a Dream (Nightmare) card."""
    if instance_id is None:
        return Card(CardClass.DREAM)
    return Card(CardClass.DREAM, Color.NONE, Symbol.NONE, instance_id)
