"""Turn and grading state machine.

The functions here operate on an explicitly passed ``GameSession``. They
return ``True`` when the action was accepted and ``False`` when it was out of
phase; a rejected action leaves the session untouched.

    SETUP --start_session(mode)--> TASK_REVEAL --request_task--> ANSWER_CHECK
    ANSWER_CHECK --reveal--> MOVEMENT --grade--> WIN | (delay) TASK_REVEAL
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from .game_core import (
    WINNING_STEPS,
    GameMode,
    Phase,
    PlayerState,
    Task,
    clamp_int,
    initial_players,
)

logger = logging.getLogger(__name__)


class Grade(IntEnum):
    """Self-graded error bucket; the value is the error count it stands for."""

    CORRECT = 0
    ONE_ERROR = 1
    TWO_ERRORS = 2
    THREE_OR_MORE = 3

    @property
    def delta(self) -> int:
        return _GRADE_DELTAS[self]

    @classmethod
    def from_errors(cls, errors: int) -> "Grade":
        errors = int(errors)
        if errors < 0:
            raise ValueError("errors must be >= 0")
        return cls(min(errors, int(cls.THREE_OR_MORE)))


_GRADE_DELTAS: dict[Grade, int] = {
    Grade.CORRECT: 2,
    Grade.ONE_ERROR: 1,
    Grade.TWO_ERRORS: 0,
    Grade.THREE_OR_MORE: -1,
}


@dataclass(frozen=True, slots=True)
class PendingTurnSwitch:
    """Scheduled hand-over to the other player.

    ``generation`` identifies the game it was scheduled in; it is dropped
    once a new game has started.
    """

    due_at_s: float
    generation: int


@dataclass(slots=True)
class GameSession:
    phase: Phase = Phase.SETUP
    mode: GameMode | None = None
    players: tuple[PlayerState, PlayerState] = field(default_factory=initial_players)
    current_player_index: int = 0
    deck: list[Task] = field(default_factory=list)
    current_task: Task | None = None
    winner: PlayerState | None = None
    layout_seed: int = 0
    generation: int = 0
    turn: int = 0
    pending_switch: PendingTurnSwitch | None = None

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def opponent(self) -> PlayerState:
        return self.players[1 - self.current_player_index]


def movement_delta(errors: int) -> int:
    return Grade.from_errors(errors).delta


def apply_delta(position: int, delta: int) -> int:
    return clamp_int(position + delta, 0, WINNING_STEPS)


def start_session(session: GameSession, *, mode: GameMode | None, deck: list[Task], layout_seed: int) -> None:
    """Re-initialise ``session`` in place for a new game."""

    session.players = initial_players()
    session.current_player_index = 0
    session.mode = mode
    session.deck = list(deck) if mode is not None else []
    session.current_task = None
    session.winner = None
    session.layout_seed = int(layout_seed)
    session.generation += 1
    session.turn = 0
    session.pending_switch = None
    session.phase = Phase.SETUP if mode is None else Phase.TASK_REVEAL


def request_task(session: GameSession, *, refill: Callable[[], list[Task]]) -> bool:
    if session.phase is not Phase.TASK_REVEAL or session.mode is None:
        return _reject("request_task", session)
    if session.pending_switch is not None:
        return _reject("request_task", session)

    if not session.deck:
        session.deck = list(refill())
        logger.debug("deck exhausted; regenerated %d tasks", len(session.deck))
    if not session.deck:
        return _reject("request_task", session)

    session.current_task = session.deck.pop()
    session.phase = Phase.ANSWER_CHECK
    return True


def reveal(session: GameSession) -> bool:
    if session.phase is not Phase.ANSWER_CHECK or session.current_task is None:
        return _reject("reveal", session)
    session.phase = Phase.MOVEMENT
    return True


def grade(session: GameSession, errors: int, *, now_s: float, delay_s: float) -> bool:
    if session.phase is not Phase.MOVEMENT or session.current_task is None:
        return _reject("grade", session)
    if session.pending_switch is not None:
        return _reject("grade", session)
    delta = movement_delta(errors)

    idx = session.current_player_index
    player = session.players[idx]
    moved = player.moved_to(apply_delta(player.position, delta))
    players = list(session.players)
    players[idx] = moved
    session.players = (players[0], players[1])

    if moved.position == WINNING_STEPS:
        session.winner = moved
        session.phase = Phase.WIN
        logger.info("%s reached step %d and wins", moved.name, WINNING_STEPS)
        return True

    session.pending_switch = PendingTurnSwitch(
        due_at_s=float(now_s) + max(0.0, float(delay_s)),
        generation=session.generation,
    )
    return True


def fire_pending_switch(session: GameSession, *, now_s: float) -> bool:
    """Apply the scheduled turn switch if it is due and still current."""

    pending = session.pending_switch
    if pending is None:
        return False
    if pending.generation != session.generation or session.phase is not Phase.MOVEMENT:
        logger.debug("dropping stale turn switch %r", pending)
        session.pending_switch = None
        return False
    if now_s < pending.due_at_s:
        return False

    session.pending_switch = None
    session.current_player_index = 1 - session.current_player_index
    session.current_task = None
    session.turn += 1
    session.phase = Phase.TASK_REVEAL
    return True


def _reject(action: str, session: GameSession) -> bool:
    logger.debug("ignored %s in phase %s", action, session.phase.value)
    return False
