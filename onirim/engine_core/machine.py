"""
Turn Machine - Drives a game of Onirim through its phases.

The machine is the single point of state mutation. Each phase has a
handler that mutates the GameState and returns the next phase:

    START_OF_TURN -> PLAY_OR_DISCARD -> END_OF_TURN -> START_OF_TURN
                                  \\-> PROPHECY -> END_OF_TURN
    END_OF_TURN -> END_OF_TURN          (Labyrinth drawn, hand not full)
                -> DOOR_DRAWN -> END_OF_TURN
                -> DREAM_DRAWN -> END_OF_TURN
    any phase   -> END_OF_GAME          (8 doors, or the deck ran out)

Handlers that need a decision build a Prompt and block on the
InteractionPort until a Choice comes back. Running out of cards on any
draw raises EmptyPileError, which run()/step() turn into a loss.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from .board import get_board
from .cards import Card, Color
from .deck import fill_hand, shuffle_limbo_into_deck, sort_draws
from .pile import Pile
from .state import GamePhase, GameState
from ..errors import EmptyPileError, MalformedLabelError
from ..interact.port import InteractionPort
from ..interact.prompt import Prompt, parse_label

logger = logging.getLogger(__name__)

PROPHECY_SIZE = 5
NIGHTMARE_DECK_DISCARD = 5
DOOR_RUN_LENGTH = 3


@dataclass
class TurnMachine:
    """
    Runs phase handlers against one GameState.

    Usage:
        state = GameState.new(GameConfig(seed=42))
        machine = TurnMachine(state, TerminalInteraction())
        machine.run()
        print(state.won)
    """
    state: GameState
    port: InteractionPort
    transitions: list[tuple[GamePhase, GamePhase]] = field(default_factory=list)

    # =========================================================================
    # Driver
    # =========================================================================

    def run(self) -> GameState:
        """Run handlers until the game is over."""
        while not self.state.done:
            self.step()
        return self.state

    def step(self) -> GamePhase:
        """Run the handler for the current phase and advance."""
        previous = self.state.phase
        handler = self._get_handler(previous)

        try:
            next_phase = handler()
        except EmptyPileError as e:
            self._report(str(e))
            self.state.won = False
            next_phase = GamePhase.END_OF_GAME

        self.state.phase = next_phase
        self.transitions.append((previous, next_phase))
        logger.debug("Phase %s -> %s", previous.value, next_phase.value)
        return next_phase

    def _get_handler(self, phase: GamePhase) -> Callable[[], GamePhase]:
        """Get the handler function for a phase."""
        handlers = {
            GamePhase.START_OF_TURN: self._handle_start_of_turn,
            GamePhase.PLAY_OR_DISCARD: self._handle_play_or_discard,
            GamePhase.PROPHECY: self._handle_prophecy,
            GamePhase.END_OF_TURN: self._handle_end_of_turn,
            GamePhase.DOOR_DRAWN: self._handle_door_drawn,
            GamePhase.DREAM_DRAWN: self._handle_dream_drawn,
            GamePhase.END_OF_GAME: self._handle_end_of_game,
        }
        return handlers[phase]

    # =========================================================================
    # Rules
    # =========================================================================

    def is_playable(self, card: Card) -> bool:
        """
        A card can be played onto an empty row; otherwise only a
        Labyrinth card whose symbol differs from the last row card.
        """
        last = self.state.row.peek_last()
        if last is None:
            return True
        if not card.is_labyrinth:
            return False
        return card.symbol != last.symbol

    def playable_cards(self) -> list[Card]:
        return [card for card in self.state.hand if self.is_playable(card)]

    def is_door_discovered(self) -> bool:
        """
        True when the last three row cards share a color and none of
        them has already been used for a discovery.

        Scans backward from the end of the row and stops at the first
        card of another color or the first consumed card.
        """
        row = self.state.row
        last = row.peek_last()
        if last is None:
            return False

        run: list[Card] = []
        for card in reversed(row.cards):
            if len(run) == DOOR_RUN_LENGTH:
                break
            if card.instance_id in self.state.found_door or card.color != last.color:
                return False
            run.append(card)

        return len(run) == DOOR_RUN_LENGTH

    def matching_key_in_hand(self, color: Color) -> int | None:
        """Index of the first Key of this color in hand, or None."""
        for index, card in enumerate(self.state.hand):
            if card.is_key and card.color == color:
                return index
        return None

    # =========================================================================
    # Phase handlers
    # =========================================================================

    def _handle_start_of_turn(self) -> GamePhase:
        """Offer every legal play and every discard."""
        state = self.state
        self._report(get_board(state).render())

        prompt = Prompt(message="Select card to play or discard")
        for i, card in enumerate(state.hand):
            if self.is_playable(card):
                prompt.add_choice(f"P{i + 1}", f"Play {card}")
        for i, card in enumerate(state.hand):
            if card.is_key:
                prompt.add_choice(f"D{i + 1}", f"Discard {card} and trigger prophecy")
            else:
                prompt.add_choice(f"D{i + 1}", f"Discard {card}")

        self.port.send_prompt(prompt)
        return GamePhase.PLAY_OR_DISCARD

    def _handle_play_or_discard(self) -> GamePhase:
        """Resolve the play/discard choice sent by START_OF_TURN."""
        state = self.state
        choice = self.port.receive_choice()
        action, index = parse_label(choice.key)
        if action not in ("P", "D") or index is None:
            raise MalformedLabelError(choice.key)

        card = state.hand.remove_at(index)

        if action == "D":
            self._discard(card)
            if card.is_key:
                return GamePhase.PROPHECY
            return GamePhase.END_OF_TURN

        self._play_card(card)
        if self.is_door_discovered() and self._play_door(card.color):
            for row_card in state.row.cards[-DOOR_RUN_LENGTH:]:
                state.found_door.add(row_card.instance_id)
            if self._check_win():
                return GamePhase.END_OF_GAME
        return GamePhase.END_OF_TURN

    def _handle_prophecy(self) -> GamePhase:
        """
        Draw exactly five cards, discard one, then put the rest back on
        top of the deck one at a time. Each placed card goes on top of
        the previous one, so the last card placed ends up on top.
        """
        state = self.state
        self._report("Prophecy triggered")

        # Unlike the hand fill, this draws five cards whatever their class.
        revealed = Pile(name="prophecy")
        try:
            for _ in range(PROPHECY_SIZE):
                revealed.append(self._draw_card())
        except EmptyPileError:
            for card in reversed(revealed.cards):
                state.deck.prepend(card)
            raise

        prompt = Prompt(message="Select one card to discard:")
        for i, card in enumerate(revealed):
            prompt.add_choice(f"D{i + 1}", f"Discard {card}")
        choice = self.port.ask(prompt)
        _, index = parse_label(choice.key)
        self._discard(revealed.remove_at(index))

        while revealed.count > 1:
            prompt = Prompt(message="Select card to place on top of deck:")
            for i, card in enumerate(revealed):
                prompt.add_choice(f"P{i + 1}", f"Place {card} on deck")
            choice = self.port.ask(prompt)
            _, index = parse_label(choice.key)
            self._place_on_deck(revealed.remove_at(index))
        self._place_on_deck(revealed.remove_at(0))

        return GamePhase.END_OF_TURN

    def _handle_end_of_turn(self) -> GamePhase:
        """Refill the hand one draw at a time; dispatch Doors and Dreams."""
        state = self.state

        if state.hand_is_full:
            if shuffle_limbo_into_deck(state.deck, state.limbo, state.rng):
                self._report("Shuffled Limbo into Deck")
            state.turn_number += 1
            return GamePhase.START_OF_TURN

        card = self._draw_card()
        state.drawn = card

        if card.is_labyrinth:
            state.hand.append(card)
            state.drawn = None
            self._report(f"{card} added to Hand")
            return GamePhase.END_OF_TURN
        if card.is_door:
            return GamePhase.DOOR_DRAWN
        return GamePhase.DREAM_DRAWN

    def _handle_door_drawn(self) -> GamePhase:
        """Offer to trade a matching Key for the drawn Door."""
        state = self.state
        door = state.drawn
        color = door.color.value

        index = self.matching_key_in_hand(door.color)
        if index is None:
            self._move_to_limbo(door)
            state.drawn = None
            return GamePhase.END_OF_TURN

        prompt = Prompt(message="You've drawn a door:")
        prompt.add_choice("Y", f"Discard {color} Key to play {color} Door")
        prompt.add_choice("N", f"Keep {color} Key and move {color} Door to Limbo")
        choice = self.port.ask(prompt)

        state.drawn = None
        if choice.key == "Y":
            key_card = state.hand.remove_at(index)
            state.doors.append(door)
            self._report(f"Played {color} door")
            self._discard(key_card)
            if self._check_win():
                return GamePhase.END_OF_GAME
        else:
            self._move_to_limbo(door)
        return GamePhase.END_OF_TURN

    def _handle_dream_drawn(self) -> GamePhase:
        """
        Resolve a Nightmare. Exactly one of:
        - K<i>: discard a Key from hand
        - R<i>: move a discovered Door to Limbo
        - H0: discard the hand and draw a new one
        - T0: discard the top five cards of the deck
        The Nightmare itself is then discarded.
        """
        state = self.state

        prompt = Prompt(message="You've drawn a Nightmare:")
        for i, card in enumerate(state.hand):
            if card.is_key:
                prompt.add_choice(f"K{i + 1}", f"Discard {card} from hand")
        for i, card in enumerate(state.doors):
            prompt.add_choice(f"R{i + 1}", f"Move {card} from Doors to Limbo")
        prompt.add_choice("H0", "Discard your hand")
        prompt.add_choice("T0", "Discard cards from the deck")
        choice = self.port.ask(prompt)
        action, index = parse_label(choice.key)

        if action == "K":
            self._discard(state.hand.remove_at(index))
        elif action == "R":
            self._move_to_limbo(state.doors.remove_at(index))
        elif action == "H":
            for card in state.hand.take_all():
                self._discard(card)
            fill_hand(
                state.deck, state.hand, state.limbo, state.rng,
                hand_size=state.config.hand_size,
                on_move=self._report,
            )
        elif action == "T":
            sort_draws(
                state.deck, NIGHTMARE_DECK_DISCARD,
                labyrinth_to=state.discard,
                other_to=state.limbo,
                on_move=self._report,
            )
            if shuffle_limbo_into_deck(state.deck, state.limbo, state.rng):
                self._report("Shuffled Limbo into Deck")
        else:
            raise MalformedLabelError(choice.key)

        nightmare = state.drawn
        state.drawn = None
        self._discard(nightmare)
        return GamePhase.END_OF_TURN

    def _handle_end_of_game(self) -> GamePhase:
        state = self.state
        state.done = True
        self._report("You won!" if state.won else "You lost.")
        self.port.close()
        return GamePhase.END_OF_GAME

    # =========================================================================
    # Card movement
    # =========================================================================

    def _check_win(self) -> bool:
        if self.state.door_count >= self.state.config.doors_to_win:
            self.state.won = True
            return True
        return False

    def _play_door(self, color: Color) -> bool:
        """Move a Door of this color from the deck to Doors, if one is left."""
        state = self.state
        for index, card in enumerate(state.deck):
            if card.is_door and card.color == color:
                state.doors.append(state.deck.remove_at(index))
                self._report(f"Played {color.value} door")
                return True
        return False

    def _draw_card(self) -> Card:
        card = self.state.deck.draw()
        self._report(f"Drew {card}")
        return card

    def _discard(self, card: Card) -> None:
        self.state.discard.append(card)
        self._report(f"Discarded {card}")

    def _place_on_deck(self, card: Card) -> None:
        self.state.deck.prepend(card)
        self._report(f"Placed {card} on deck")

    def _play_card(self, card: Card) -> None:
        self.state.row.append(card)
        self._report(f"Played {card} to row")

    def _move_to_limbo(self, card: Card) -> None:
        self.state.limbo.append(card)
        self._report(f"Moved {card} to Limbo")

    def _report(self, message: str) -> None:
        """Send a progress message to the log and the player."""
        logger.info(message)
        self.port.post_status(message)
