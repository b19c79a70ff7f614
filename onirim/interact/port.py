"""
Interaction Ports - How the turn machine reaches its player.

The machine publishes one prompt at a time and blocks until a choice
for it arrives. Status messages flow the other way and never block.

Ports:
- InteractionPort: interface consumed by the turn machine
- ChannelInteraction: queue-backed port for a player on another thread
- ScriptedInteraction: replays a fixed list of labels (tests, replays)
"""

from __future__ import annotations
import logging
import queue
import threading
from abc import ABC, abstractmethod

from .prompt import Choice, Prompt
from ..errors import InvalidChoiceError, SessionAbandonedError

logger = logging.getLogger(__name__)


class InteractionPort(ABC):
    """
    Interface between the turn machine and whoever answers its prompts.

    send_prompt() and receive_choice() strictly alternate. The choice
    returned by receive_choice() is always one the prompt offered.
    """

    @abstractmethod
    def send_prompt(self, prompt: Prompt) -> None:
        """Publish a prompt."""
        pass

    @abstractmethod
    def receive_choice(self) -> Choice:
        """Block until the player picks one of the offered choices."""
        pass

    def ask(self, prompt: Prompt) -> Choice:
        """Send a prompt and wait for its choice."""
        self.send_prompt(prompt)
        return self.receive_choice()

    def post_status(self, message: str) -> None:
        """Best-effort progress message. Ignored by default."""
        pass

    def close(self) -> None:
        """Signal that no more prompts will be sent."""
        pass


class ChannelInteraction(InteractionPort):
    """
    Queue-backed port.

    The turn machine runs on one thread; an input layer on another
    thread reads prompts with next_prompt() and answers with
    make_choice(). Invalid keys are rejected back to the input layer,
    which re-prompts; the machine only ever sees valid choices.

    Usage:
        port = ChannelInteraction()
        # machine thread: TurnMachine(state, port).run()

        prompt = port.next_prompt()
        while True:
            try:
                port.make_choice(read_key())
                break
            except InvalidChoiceError:
                continue
    """

    def __init__(self):
        self._prompts: queue.Queue[Prompt | None] = queue.Queue()
        self._choices: queue.Queue[Choice | None] = queue.Queue()
        self._statuses: queue.Queue[str | None] = queue.Queue()
        self._lock = threading.Lock()
        self._outstanding: Prompt | None = None
        self._answered = True
        self.closed = False

    # Machine side

    def send_prompt(self, prompt: Prompt) -> None:
        with self._lock:
            if not self._answered:
                raise RuntimeError("A prompt is already waiting for its choice")
            self._outstanding = prompt
            self._answered = False
        self._prompts.put(prompt)

    def receive_choice(self) -> Choice:
        choice = self._choices.get()
        if choice is None:
            raise SessionAbandonedError("Game abandoned while waiting for a choice")
        return choice

    def post_status(self, message: str) -> None:
        self._statuses.put(message)

    def close(self) -> None:
        self.closed = True
        self._prompts.put(None)
        self._statuses.put(None)

    def abandon(self) -> None:
        """Unblock a machine waiting in receive_choice() and end its game."""
        self._choices.put(None)

    # Input side

    @property
    def outstanding(self) -> Prompt | None:
        """The prompt waiting for a choice, if any."""
        with self._lock:
            return None if self._answered else self._outstanding

    def next_prompt(self, timeout: float | None = None) -> Prompt | None:
        """
        Wait for the next prompt. Returns None once the game is over.

        Raises queue.Empty if timeout expires.
        """
        return self._prompts.get(timeout=timeout)

    def next_status(self, timeout: float | None = None) -> str | None:
        """Wait for the next status message. Returns None once closed."""
        return self._statuses.get(timeout=timeout)

    def drain_statuses(self) -> list[str]:
        """All status messages currently queued, without blocking."""
        messages = []
        while True:
            try:
                message = self._statuses.get_nowait()
            except queue.Empty:
                return messages
            if message is not None:
                messages.append(message)

    def make_choice(self, key: str) -> Choice:
        """Answer the outstanding prompt. Raises InvalidChoiceError."""
        with self._lock:
            if self._answered or self._outstanding is None:
                raise InvalidChoiceError(key)
            choice = self._outstanding.get(key)
            self._answered = True
        self._choices.put(choice)
        return choice


class ScriptedInteraction(InteractionPort):
    """
    Replays a fixed sequence of choice labels.

    Every prompt and status is recorded for inspection.
    """

    def __init__(self, keys: list[str] | None = None):
        self.keys = list(keys or [])
        self.prompts: list[Prompt] = []
        self.statuses: list[str] = []
        self.closed = False
        self._position = 0

    def push(self, *keys: str) -> None:
        self.keys.extend(keys)

    @property
    def remaining(self) -> list[str]:
        return self.keys[self._position:]

    def send_prompt(self, prompt: Prompt) -> None:
        self.prompts.append(prompt)

    def receive_choice(self) -> Choice:
        if self._position >= len(self.keys):
            raise RuntimeError(
                f"Script exhausted at prompt: {self.prompts[-1].message if self.prompts else None}"
            )
        key = self.keys[self._position]
        self._position += 1
        return self.prompts[-1].get(key)

    def post_status(self, message: str) -> None:
        self.statuses.append(message)

    def close(self) -> None:
        self.closed = True
