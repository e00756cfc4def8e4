"""The game's state machine: states, events and the transitions between them."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class EventType(IntEnum):
    """Events that drive the game from one state to the next."""

    INITIAL_STATE = 0
    GAME_START = 1
    PLAYING_SEQUENCE = 2
    PLAYING_USER = 3
    PLAYING_WIN = 4
    PLAYING_LOSE = 5


class StateType(IntEnum):
    """States the game can be in."""

    INITIAL = 0
    GAME_START = 1
    PLAYING_SEQUENCE = 2
    PLAYING_USER = 3
    PLAYING_WIN = 4
    PLAYING_LOSE = 5


_STATE_NAMES = {
    StateType.INITIAL: "InitialState",
    StateType.GAME_START: "GameStartState",
    StateType.PLAYING_SEQUENCE: "PlayingSequenceState",
    StateType.PLAYING_USER: "PlayingUserState",
    StateType.PLAYING_WIN: "PlayingWinState",
    StateType.PLAYING_LOSE: "PlayingLoseState",
}

# The initial-state event has no printable name of its own.
_EVENT_NAMES = {
    EventType.GAME_START: "GameStart",
    EventType.PLAYING_SEQUENCE: "PlayingSequence",
    EventType.PLAYING_USER: "PlayingUser",
    EventType.PLAYING_WIN: "PlayingWin",
    EventType.PLAYING_LOSE: "PlayingLose",
}

_STATE_LABELS = {
    StateType.INITIAL: "Initial State",
    StateType.GAME_START: "Game Start State",
    StateType.PLAYING_SEQUENCE: "Playing Sequence State",
    StateType.PLAYING_USER: "Playing User State",
    StateType.PLAYING_WIN: "Playing Win State",
    StateType.PLAYING_LOSE: "Playing Lose State",
}

TRANSITIONS: dict[StateType, dict[EventType, StateType]] = {
    StateType.INITIAL: {EventType.GAME_START: StateType.GAME_START},
    StateType.GAME_START: {EventType.PLAYING_SEQUENCE: StateType.PLAYING_SEQUENCE},
    StateType.PLAYING_SEQUENCE: {EventType.PLAYING_USER: StateType.PLAYING_USER},
    StateType.PLAYING_USER: {
        EventType.PLAYING_WIN: StateType.PLAYING_WIN,
        EventType.PLAYING_LOSE: StateType.PLAYING_LOSE,
    },
    StateType.PLAYING_WIN: {EventType.PLAYING_SEQUENCE: StateType.PLAYING_SEQUENCE},
    StateType.PLAYING_LOSE: {EventType.INITIAL_STATE: StateType.INITIAL},
}

StateCallback = Callable[[StateType], None]


def state_type_to_string(state: StateType) -> str:
    """Name of a state; 'UnknownState' for anything else."""
    return _STATE_NAMES.get(state, "UnknownState")


def event_type_to_string(event: EventType) -> str:
    """Name of an event; 'UnknownEvent' for anything without one."""
    return _EVENT_NAMES.get(event, "UnknownEvent")


class StateMachine:
    """Tracks the current state and notifies callbacks on entry and exit.

    Callbacks may dispatch further events; the new state is current before
    its entry callback runs.
    """

    def __init__(
        self,
        on_enter: Optional[StateCallback] = None,
        on_exit: Optional[StateCallback] = None,
    ) -> None:
        self._state = StateType.INITIAL
        self._on_enter = on_enter
        self._on_exit = on_exit

    @property
    def state(self) -> StateType:
        return self._state

    def set_enter_callback(self, callback: Optional[StateCallback]) -> None:
        self._on_enter = callback

    def set_exit_callback(self, callback: Optional[StateCallback]) -> None:
        self._on_exit = callback

    def reset(self) -> None:
        """Return to the initial state without running any callback."""
        logger.info("Resetting Game State Machine")
        self._state = StateType.INITIAL

    def start(self) -> None:
        """Enter the current state."""
        self._enter(self._state)

    def dispatch(self, event: EventType) -> None:
        """Let the current state react to an event; unhandled events are ignored."""
        current = self._state
        logger.debug(
            "%s: Reacting to event: %s",
            state_type_to_string(current),
            event_type_to_string(event),
        )
        target = TRANSITIONS.get(current, {}).get(event)
        if target is None:
            logger.info("Unhandled event in %s", _STATE_LABELS.get(current, "Unknown State"))
            return
        if self._on_exit is not None:
            self._on_exit(current)
        self._state = target
        self._enter(target)

    def _enter(self, state: StateType) -> None:
        if self._on_enter is not None:
            self._on_enter(state)