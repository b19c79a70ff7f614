"""
Pytest fixtures for Onirim tests.
"""

import random
from collections import Counter

import pytest

from ..config import GameConfig
from ..engine_core.cards import Color, Symbol, labyrinth
from ..engine_core.machine import TurnMachine
from ..engine_core.state import GameState, GamePhase
from ..interact.port import ScriptedInteraction


@pytest.fixture
def config() -> GameConfig:
    """Fixed-seed configuration."""
    return GameConfig(seed=1234)


@pytest.fixture
def new_game(config: GameConfig) -> GameState:
    """A freshly dealt game."""
    return GameState.new(config)


@pytest.fixture
def make_state():
    """
    Factory for hand-built states.

    Piles are given as lists of cards, top of deck first.
    """
    def _make(
        deck=(),
        hand=(),
        row=(),
        discard=(),
        limbo=(),
        doors=(),
        found_door=(),
        phase=GamePhase.START_OF_TURN,
        seed=7,
        **config_overrides,
    ) -> GameState:
        state = GameState(
            config=GameConfig(seed=seed, **config_overrides),
            rng=random.Random(seed),
            phase=phase,
        )
        state.deck.extend(deck)
        state.hand.extend(hand)
        state.row.extend(row)
        state.discard.extend(discard)
        state.limbo.extend(limbo)
        state.doors.extend(doors)
        state.found_door.update(card.instance_id for card in found_door)
        return state

    return _make


@pytest.fixture
def make_machine():
    """Factory: machine over a state, answered by a scripted port."""
    def _make(state: GameState, keys=()):
        port = ScriptedInteraction(list(keys))
        return TurnMachine(state, port), port

    return _make


@pytest.fixture
def full_hand():
    """Five Labyrinth cards, no Keys, alternating symbols."""
    return [
        labyrinth(Color.RED, Symbol.SUN),
        labyrinth(Color.BLUE, Symbol.MOON),
        labyrinth(Color.GREEN, Symbol.SUN),
        labyrinth(Color.BROWN, Symbol.MOON),
        labyrinth(Color.RED, Symbol.MOON),
    ]


@pytest.fixture
def filler_deck():
    """Twenty Labyrinth Suns to keep draws going."""
    return [labyrinth(Color.BLUE, Symbol.SUN) for _ in range(20)]


def card_census(state: GameState) -> Counter:
    """How many times each instance appears across all piles."""
    return Counter(card.instance_id for card in state.all_cards())


def assert_conserved(state: GameState, expected_ids: set[int]) -> None:
    """Every card appears exactly once, and no card was added or lost."""
    census = card_census(state)
    duplicates = [cid for cid, n in census.items() if n > 1]
    assert not duplicates, f"Cards in more than one pile: {duplicates}"
    assert set(census) == expected_ids
