"""Line-based terminal port: prints prompts, reads one key per line."""

from __future__ import annotations
from typing import Callable

from .port import InteractionPort
from .prompt import Choice, Prompt
from ..errors import InvalidChoiceError


class TerminalInteraction(InteractionPort):
    """Reads choices from input_fn and writes prompts/status to output_fn."""

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
    ):
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self._prompt: Prompt | None = None

    def send_prompt(self, prompt: Prompt) -> None:
        self._prompt = prompt
        self.output_fn(prompt.render())

    def receive_choice(self) -> Choice:
        if self._prompt is None:
            raise RuntimeError("receive_choice() called before send_prompt()")

        while True:
            key = self.input_fn("> ").strip().upper()
            if not key:
                continue
            try:
                choice = self._prompt.get(key)
            except InvalidChoiceError as e:
                self.output_fn(str(e))
                continue
            self._prompt = None
            return choice

    def post_status(self, message: str) -> None:
        self.output_fn(message)
