"""
Prompt Schemas - The contract between the turn machine and its players.

A prompt is a message plus an ordered list of labeled choices. Labels
are an action letter followed by an optional 1-based index:

    P2  play hand card 2           D4  discard card 4
    K1  discard Key card 1         R3  move door 3 to Limbo
    H0  discard the hand           T0  discard the top of the deck
    Y / N  yes / no

Labels are unique within one prompt.
"""

from __future__ import annotations
import re
from typing import Optional

from pydantic import BaseModel, Field

from ..errors import InvalidChoiceError, MalformedLabelError

LABEL_PATTERN = re.compile(r"^([A-Z])([0-9]+)?$")


class Choice(BaseModel):
    """A single labeled option."""
    key: str = Field(description="Label such as P2, D4, H0, Y")
    name: str = Field(description="Human-readable description")


class Prompt(BaseModel):
    """A question for the player with its ordered choices."""
    message: str
    choices: list[Choice] = Field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return [choice.key for choice in self.choices]

    def add_choice(self, key: str, name: str) -> Choice:
        """Append a choice; labels must be well-formed and unique."""
        parse_label(key)
        if key in self.keys:
            raise ValueError(f"Duplicate choice label: {key}")
        choice = Choice(key=key, name=name)
        self.choices.append(choice)
        return choice

    def get(self, key: str) -> Choice:
        """Return the offered choice with this exact label."""
        for choice in self.choices:
            if choice.key == key:
                return choice
        raise InvalidChoiceError(key, self.keys)

    def render(self) -> str:
        """Plain text: the message, then one line per choice."""
        lines = [self.message]
        lines.extend(f"  {choice.key}: {choice.name}" for choice in self.choices)
        return "\n".join(lines)


def parse_label(key: str) -> tuple[str, Optional[int]]:
    """
    Split a label into (action, 0-based index).

    "P2" -> ("P", 1), "H0" -> ("H", -1), "Y" -> ("Y", None).
    """
    match = LABEL_PATTERN.match(key or "")
    if not match:
        raise MalformedLabelError(key)
    action, digits = match.groups()
    if digits is None:
        return action, None
    return action, int(digits) - 1
