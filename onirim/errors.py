"""
Engine errors.

Only EmptyPileError (and its DeckExhaustedError subclass) is allowed to
reach the turn machine; it always ends the game as a loss. Invalid choices
are handled by the interaction adapters, and malformed labels are
programming errors.
"""


class OnirimError(Exception):
    """Base class for engine errors."""


class EmptyPileError(OnirimError):
    """A card was drawn from an empty pile."""

    def __init__(self, pile_name: str = "deck"):
        self.pile_name = pile_name
        super().__init__(f"No cards left in {pile_name}, you lose.")


class DeckExhaustedError(EmptyPileError):
    """The deck ran out while filling the hand."""


class InvalidChoiceError(OnirimError, ValueError):
    """A received choice does not match any offered label."""

    def __init__(self, key: str, offered: list[str] | None = None):
        self.key = key
        self.offered = offered or []
        msg = f"Invalid choice: {key!r}"
        if self.offered:
            msg += f" (expected one of {', '.join(self.offered)})"
        super().__init__(msg)


class MalformedLabelError(OnirimError, ValueError):
    """A choice label cannot be parsed into action + index."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Malformed choice label: {key!r}")


class SessionAbandonedError(OnirimError):
    """The player walked away while the game was waiting for a choice."""
