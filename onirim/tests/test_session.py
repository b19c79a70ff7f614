"""
Tests for session management.

Each session runs its game on a worker thread; tests drive it through
the session's prompt/choice channels.
"""

import pytest

from ..bots import GreedyPolicy
from ..config import GameConfig
from ..errors import InvalidChoiceError
from ..session import SessionManager, SessionState


TIMEOUT = 5


def drive(session, policy, max_prompts=2000):
    """Answer prompts with policy until the game ends."""
    for _ in range(max_prompts):
        prompt = session.next_prompt(timeout=TIMEOUT)
        if prompt is None:
            return
        decision = policy.select_choice(prompt, session.board())
        session.make_choice(decision.key)
    raise AssertionError("Game did not finish")


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionManager:
    """Tests for creating and tracking sessions."""

    def test_create_and_get(self, manager):
        """A created session is registered with a dealt game."""
        session = manager.create_session(GameConfig(seed=1), start=False)

        assert manager.get_session(session.session_id) is session
        assert session.state == SessionState.CREATED
        assert session.game_state.hand.count == 5
        assert manager.list_active_sessions() == [session.session_id]

    def test_get_unknown(self, manager):
        """Unknown session ids return None."""
        assert manager.get_session("nope") is None

    def test_sessions_are_independent(self, manager):
        """Sessions with the same seed share no state or channels."""
        a = manager.create_session(GameConfig(seed=1), start=False)
        b = manager.create_session(GameConfig(seed=1), start=False)

        assert a.session_id != b.session_id
        assert a.game_state is not b.game_state
        assert a.port is not b.port
        assert [c.key for c in a.game_state.hand] == [c.key for c in b.game_state.hand]

    def test_end_unknown_is_noop(self, manager):
        """Ending an unknown session does nothing."""
        manager.end_session("nope")

    def test_end_unstarted_session(self, manager):
        """Ending an unstarted session abandons and removes it."""
        session = manager.create_session(GameConfig(seed=1), start=False)
        manager.end_session(session.session_id, reason="quit")

        assert session.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None

    def test_first_final_state_wins(self, manager):
        """Once a session has a final state, later transitions are ignored."""
        session = manager.create_session(GameConfig(seed=1), start=False)

        assert session._finish(SessionState.GAME_OVER)
        session.abandon()
        assert not session._finish(SessionState.FAILED)

        assert session.state == SessionState.GAME_OVER

    def test_abandoned_session_does_not_start(self, manager):
        """An abandoned session never launches its worker."""
        session = manager.create_session(GameConfig(seed=1), start=False)
        session.abandon()
        session.start()

        assert session.state == SessionState.ABANDONED
        assert not session.wait(timeout=0)

    def test_cleanup_keeps_active(self, manager):
        """Cleanup never removes an active session."""
        session = manager.create_session(GameConfig(seed=1), start=False)
        assert manager.cleanup_stale_sessions(max_age_seconds=-1) == []
        assert manager.get_session(session.session_id) is session

    def test_cleanup_removes_finished(self, manager):
        """Cleanup removes old finished sessions."""
        session = manager.create_session(GameConfig(seed=1), start=False)
        session.state = SessionState.GAME_OVER
        assert manager.cleanup_stale_sessions(max_age_seconds=-1) == [session.session_id]
        assert manager.get_session(session.session_id) is None


class TestRunningSession:
    """Tests for games driven through the channels."""

    def test_first_prompt(self, manager):
        """A started session asks for the first play."""
        session = manager.create_session(GameConfig(seed=3))
        try:
            prompt = session.next_prompt(timeout=TIMEOUT)
            assert prompt.message == "Select card to play or discard"
            assert session.state == SessionState.ACTIVE
        finally:
            manager.end_session(session.session_id, reason="quit")

    def test_invalid_choice_rejected_then_accepted(self, manager):
        """An invalid key is rejected and the same prompt can still be answered."""
        session = manager.create_session(GameConfig(seed=3))
        try:
            prompt = session.next_prompt(timeout=TIMEOUT)
            with pytest.raises(InvalidChoiceError):
                session.make_choice("Z9")
            session.make_choice(prompt.keys[-1])
            assert session.next_prompt(timeout=TIMEOUT) is not None
        finally:
            manager.end_session(session.session_id, reason="quit")

    def test_play_to_the_end(self, manager):
        """A session driven through its channels finishes the game."""
        session = manager.create_session(GameConfig(seed=8))

        drive(session, GreedyPolicy())

        assert session.wait(timeout=TIMEOUT)
        assert session.state == SessionState.GAME_OVER
        assert session.game_state.done
        assert session.board().done
        assert session.statuses()[-1] in ("You won!", "You lost.")
        assert manager.list_active_sessions() == []

    def test_two_games_side_by_side(self, manager):
        """Two sessions run to completion independently."""
        a = manager.create_session(GameConfig(seed=8))
        b = manager.create_session(GameConfig(seed=9))

        drive(a, GreedyPolicy())
        drive(b, GreedyPolicy())

        assert a.wait(timeout=TIMEOUT)
        assert b.wait(timeout=TIMEOUT)
        assert a.game_state is not b.game_state
        assert a.state == b.state == SessionState.GAME_OVER

    def test_ending_finished_game_keeps_result(self, manager):
        """Ending a session after its game is over does not mark it abandoned."""
        session = manager.create_session(GameConfig(seed=8))
        drive(session, GreedyPolicy())
        assert session.wait(timeout=TIMEOUT)

        session.abandon()
        manager.end_session(session.session_id, reason="quit")

        assert session.state == SessionState.GAME_OVER

    def test_abandon(self, manager):
        """Ending a running session stops its worker."""
        session = manager.create_session(GameConfig(seed=3))
        session.next_prompt(timeout=TIMEOUT)

        manager.end_session(session.session_id, reason="quit")

        assert session.wait(timeout=TIMEOUT)
        assert session.state == SessionState.ABANDONED
        assert session.port.closed
