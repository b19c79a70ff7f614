"""
Choice Policy - Interface for automated players.

A ChoicePolicy looks at a prompt (and the visible board) and returns
one of the prompt's labels. Policies never touch game state; they see
exactly what a human player would see.
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config import HAND_SIZE
from ..interact.prompt import parse_label

if TYPE_CHECKING:
    from ..engine_core.board import BoardSnapshot
    from ..interact.prompt import Choice, Prompt


@dataclass
class ChoiceDecision:
    """
    A decision for one prompt.

    Contains:
    - The chosen label
    - Explanation (for logs/debugging)
    """
    key: str
    explanation: str = ""


class ChoicePolicy(ABC):
    """
    Abstract base class for choice policies.

    Implementations range from random play to simple heuristics.
    """

    @abstractmethod
    def select_choice(
        self,
        prompt: Prompt,
        board: BoardSnapshot | None = None,
    ) -> ChoiceDecision:
        """
        Pick one of the prompt's choices.

        Args:
            prompt: The prompt to answer
            board: Visible board at the time of the prompt

        Returns:
            ChoiceDecision with an offered label
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(ChoicePolicy):
    """
    Random policy - picks uniformly among the offered choices.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_choice(self, prompt, board=None) -> ChoiceDecision:
        if not prompt.choices:
            raise ValueError("No options available")

        choice = self.rng.choice(prompt.choices)
        return ChoiceDecision(key=choice.key, explanation="Selected randomly")


class FirstChoicePolicy(ChoicePolicy):
    """
    First-choice policy - always picks the first offered choice.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_choice(self, prompt, board=None) -> ChoiceDecision:
        if not prompt.choices:
            raise ValueError("No options available")

        return ChoiceDecision(
            key=prompt.choices[0].key,
            explanation="Selected first option",
        )


class GreedyPolicy(ChoicePolicy):
    """
    Greedy policy - simple rules of thumb, no lookahead.

    - Plays a card that extends the row's current color; otherwise any
      non-Key play; otherwise discards a non-Key card
    - Always trades a Key for a drawn Door
    - Answers Nightmares with a Key, then the deck, then the hand;
      gives up a Door only when the deck could not refill a hand
    - During a prophecy discards a Nightmare if one is revealed and
      buries Nightmares and Doors deepest
    """

    NIGHTMARE_TOKEN = "D:NM"
    DECK_DISCARD_RESERVE = 10

    def select_choice(self, prompt, board=None) -> ChoiceDecision:
        if not prompt.choices:
            raise ValueError("No options available")

        by_action: dict[str, list[Choice]] = {}
        for choice in prompt.choices:
            action, _ = parse_label(choice.key)
            by_action.setdefault(action, []).append(choice)

        if "Y" in by_action:
            return ChoiceDecision(key="Y", explanation="Trade Key for Door")

        if "H" in by_action or "T" in by_action:
            return self._answer_nightmare(by_action, board)

        if prompt.message.startswith("Select card to play"):
            return self._play_or_discard(by_action, board)

        return self._prophecy(prompt, discarding="D" in by_action)

    def _answer_nightmare(self, by_action, board) -> ChoiceDecision:
        if "K" in by_action:
            return ChoiceDecision(key=by_action["K"][0].key, explanation="Sacrifice a Key")
        if board is None or board.cards_remaining > self.DECK_DISCARD_RESERVE:
            return ChoiceDecision(key="T0", explanation="Discard from the deck")
        if "R" in by_action and board.cards_remaining < HAND_SIZE:
            return ChoiceDecision(key=by_action["R"][0].key, explanation="Give up a Door")
        return ChoiceDecision(key="H0", explanation="Discard the hand")

    def _play_or_discard(self, by_action, board) -> ChoiceDecision:
        plays = by_action.get("P", [])
        discards = by_action.get("D", [])

        if board is not None and board.hand:
            last_color = board.row[-1][1] if board.row else None
            for choice in plays:
                _, index = parse_label(choice.key)
                token = board.hand[index]
                if last_color and token[1] == last_color:
                    return ChoiceDecision(key=choice.key, explanation="Extend the color run")
            for choice in plays:
                _, index = parse_label(choice.key)
                if not board.hand[index].endswith("K"):
                    return ChoiceDecision(key=choice.key, explanation="Play a non-Key card")
            for choice in discards:
                _, index = parse_label(choice.key)
                if not board.hand[index].endswith("K"):
                    return ChoiceDecision(key=choice.key, explanation="Discard a non-Key card")

        if plays:
            return ChoiceDecision(key=plays[0].key, explanation="Play first legal card")
        return ChoiceDecision(key=discards[0].key, explanation="Discard first card")

    def _prophecy(self, prompt, discarding: bool) -> ChoiceDecision:
        # Placed cards stack up, so the first card placed ends up deepest.
        for choice in prompt.choices:
            if self.NIGHTMARE_TOKEN in choice.name:
                return ChoiceDecision(key=choice.key, explanation="Get rid of a Nightmare")

        if discarding:
            for choice in prompt.choices:
                if "R:" not in choice.name:
                    return ChoiceDecision(key=choice.key, explanation="Discard a Labyrinth card")
        else:
            for choice in prompt.choices:
                if "R:" in choice.name:
                    return ChoiceDecision(key=choice.key, explanation="Bury a Door")

        return ChoiceDecision(key=prompt.choices[0].key, explanation="First option")
