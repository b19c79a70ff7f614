"""
Session Manager - Hosts independent games side by side.

A session is one play-through:
- Created when a player starts a game
- Owns its own GameState, ChannelInteraction and worker thread
- Shares nothing with other sessions
- Destroyed when the game ends or is abandoned

Sessions are EPHEMERAL: no persistence.

The worker thread runs the turn machine and blocks on the session's
prompt channel; the player answers from any other thread through
Session.next_prompt() / Session.make_choice().
"""

from __future__ import annotations
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum

from ..config import GameConfig
from ..engine_core.board import BoardSnapshot, get_board
from ..engine_core.machine import TurnMachine
from ..engine_core.state import GameState
from ..errors import SessionAbandonedError
from ..interact.port import ChannelInteraction
from ..interact.prompt import Choice, Prompt

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Game built, worker not started
    ACTIVE = "active"  # Worker running
    GAME_OVER = "game_over"  # Game finished (won or lost)
    ABANDONED = "abandoned"  # Player quit
    FAILED = "failed"  # Worker crashed


TERMINAL_STATES = {SessionState.GAME_OVER, SessionState.ABANDONED, SessionState.FAILED}


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The game state and its turn machine
    - The prompt/choice channels
    - The worker thread
    """
    session_id: str
    game_state: GameState
    port: ChannelInteraction
    created_at: float

    state: SessionState = SessionState.CREATED
    error: str | None = None
    _thread: threading.Thread | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def start(self) -> None:
        """Start the worker thread."""
        with self._lock:
            if self._thread is not None or self.state != SessionState.CREATED:
                return
            self.state = SessionState.ACTIVE
            self._thread = threading.Thread(
                target=self._run,
                name=f"onirim-{self.session_id[:8]}",
                daemon=True,
            )
        self._thread.start()

    def _run(self) -> None:
        machine = TurnMachine(self.game_state, self.port)
        try:
            machine.run()
            self._finish(SessionState.GAME_OVER)
        except SessionAbandonedError:
            self._finish(SessionState.ABANDONED)
            self.port.close()
        except Exception as e:
            logger.exception("Session %s crashed", self.session_id)
            self.error = str(e)
            self._finish(SessionState.FAILED)
            self.port.close()

    def _finish(self, state: SessionState) -> bool:
        """Record a final state. The first one recorded wins."""
        with self._lock:
            if self.state in TERMINAL_STATES:
                return False
            self.state = state
            return True

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def next_prompt(self, timeout: float | None = None) -> Prompt | None:
        """Next prompt, or None once the game is over."""
        return self.port.next_prompt(timeout=timeout)

    def make_choice(self, key: str) -> Choice:
        """Answer the outstanding prompt. Raises InvalidChoiceError."""
        return self.port.make_choice(key)

    def statuses(self) -> list[str]:
        """Status messages posted since the last call."""
        return self.port.drain_statuses()

    def board(self) -> BoardSnapshot:
        return get_board(self.game_state)

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the worker to finish. Returns True if it did."""
        if self._thread is None:
            return False
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def abandon(self) -> None:
        """
        Stop the game. An unstarted session is marked abandoned at once;
        a running worker records ABANDONED itself when it wakes, unless
        its game has already ended.
        """
        with self._lock:
            started = self._thread is not None
        if not started:
            self._finish(SessionState.ABANDONED)
            return
        self.port.abandon()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions, each with its own state and channels
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, config: GameConfig | None = None, start: bool = True) -> Session:
        """
        Create a new game session.

        Args:
            config: Game configuration (fresh seed if not provided)
            start: Start the worker thread immediately

        Returns:
            New Session
        """
        session_id = str(uuid.uuid4())
        session = Session(
            session_id=session_id,
            game_state=GameState.new(config or GameConfig()),
            port=ChannelInteraction(),
            created_at=time.time(),
        )

        with self._lock:
            self._sessions[session_id] = session

        logger.info("Created session %s (seed %s)", session_id, session.game_state.config.seed)
        if start:
            session.start()
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> None:
        """
        End a session and remove it.

        Called when the game is completed or abandoned.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return

        if session.is_active():
            session.abandon()
        logger.info("Ended session %s (%s)", session_id, reason)

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        with self._lock:
            return [
                sid for sid, session in self._sessions.items()
                if session.is_active()
            ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove finished sessions older than max_age.

        Returns the removed session IDs.
        """
        current_time = time.time()
        with self._lock:
            to_remove = [
                sid for sid, session in self._sessions.items()
                if current_time - session.created_at > max_age_seconds
                and not session.is_active()
            ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove
