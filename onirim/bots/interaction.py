"""Bot-driven InteractionPort: a ChoicePolicy answers every prompt."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .policy import ChoicePolicy, ChoiceDecision
from ..engine_core.board import get_board
from ..interact.port import InteractionPort
from ..interact.prompt import Choice, Prompt

if TYPE_CHECKING:
    from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


class PolicyInteraction(InteractionPort):
    """
    Answers prompts with a policy.

    The policy sees the visible board (if a state is attached) and
    the prompt; the decision is validated against the prompt, so an
    off-menu label from a policy raises InvalidChoiceError.
    """

    def __init__(self, policy: ChoicePolicy, state: GameState | None = None):
        self.policy = policy
        self.state = state
        self.decisions: list[ChoiceDecision] = []
        self.statuses: list[str] = []
        self._prompt: Prompt | None = None

    def send_prompt(self, prompt: Prompt) -> None:
        self._prompt = prompt

    def receive_choice(self) -> Choice:
        if self._prompt is None:
            raise RuntimeError("receive_choice() called before send_prompt()")

        board = get_board(self.state) if self.state is not None else None
        decision = self.policy.select_choice(self._prompt, board)
        choice = self._prompt.get(decision.key)
        self.decisions.append(decision)
        logger.debug("%s chose %s: %s", self.policy.get_name(), choice.key, decision.explanation)
        self._prompt = None
        return choice

    def post_status(self, message: str) -> None:
        self.statuses.append(message)
