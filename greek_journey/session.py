from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .board_layout import BoardLayout, generate_layout
from .clock import Clock
from .game_core import GameMode, Phase, PlayerState, SeededRng, Task
from .task_deck import DEFAULT_CODE_TASK_COUNT, build_deck
from . import turn_engine
from .turn_engine import GameSession

logger = logging.getLogger(__name__)

TURN_DELAY_ENV = "GREEK_JOURNEY_TURN_DELAY_S"
CODE_TASKS_ENV = "GREEK_JOURNEY_CODE_TASKS"


@dataclass(frozen=True, slots=True)
class GameConfig:
    # Time the moved pawn stays on screen before the turn passes.
    turn_switch_delay_s: float = 0.8
    code_task_count: int = DEFAULT_CODE_TASK_COUNT

    def __post_init__(self) -> None:
        if self.turn_switch_delay_s < 0.0:
            raise ValueError("turn_switch_delay_s must be >= 0")
        if self.code_task_count <= 0:
            raise ValueError("code_task_count must be > 0")


def config_from_env(environ: Mapping[str, str] | None = None) -> GameConfig:
    env = os.environ if environ is None else environ
    defaults = GameConfig()

    raw_delay = env.get(TURN_DELAY_ENV, "").strip()
    raw_count = env.get(CODE_TASKS_ENV, "").strip()
    try:
        delay = defaults.turn_switch_delay_s if raw_delay == "" else float(raw_delay)
    except ValueError as exc:
        raise ValueError(f"{TURN_DELAY_ENV} must be a number, got {raw_delay!r}") from exc
    try:
        count = defaults.code_task_count if raw_count == "" else int(raw_count)
    except ValueError as exc:
        raise ValueError(f"{CODE_TASKS_ENV} must be an integer, got {raw_count!r}") from exc

    return GameConfig(turn_switch_delay_s=delay, code_task_count=count)


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    mode: GameMode | None
    players: tuple[PlayerState, PlayerState]
    current_player_index: int
    current_player: PlayerState
    checker: PlayerState
    prompt_label: str | None
    prompt: str | None
    answer: str | None  # withheld until the answer is revealed
    task_payload: object | None
    winner: PlayerState | None
    layout_seed: int
    deck_remaining: int
    turn_switch_pending: bool


class GameController:
    """Owns the single ``GameSession`` and funnels every mutation through it.

    - Deterministic: decks and layout seeds come from an RNG seeded at construction.
    - Time is entirely via injected Clock.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        seed: int,
        config: GameConfig | None = None,
        mode: GameMode | None = None,
    ) -> None:
        self._clock = clock
        self._seed = int(seed)
        self._config = GameConfig() if config is None else config
        self._rng = SeededRng(self._seed)

        self._session = GameSession()
        self._layout_seed = self._rng.randint(1, 2**31 - 1)
        self._layout: BoardLayout | None = None

        self.new_game(mode)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def mode(self) -> GameMode | None:
        return self._session.mode

    @property
    def players(self) -> tuple[PlayerState, PlayerState]:
        return self._session.players

    @property
    def current_player(self) -> PlayerState:
        return self._session.current_player

    @property
    def current_task(self) -> Task | None:
        return self._session.current_task

    @property
    def winner(self) -> PlayerState | None:
        return self._session.winner

    @property
    def layout_seed(self) -> int:
        return self._session.layout_seed

    @property
    def deck_size(self) -> int:
        return len(self._session.deck)

    @property
    def turn_switch_pending(self) -> bool:
        return self._session.pending_switch is not None

    def new_game(self, mode: GameMode | None = None) -> None:
        self._layout_seed += 1
        deck = [] if mode is None else self._build_deck(mode)
        turn_engine.start_session(self._session, mode=mode, deck=deck, layout_seed=self._layout_seed)
        self._layout = None
        logger.info(
            "new game: mode=%s layout_seed=%d deck=%d",
            "none" if mode is None else mode.value,
            self._layout_seed,
            len(deck),
        )

    def select_mode(self, mode: GameMode) -> bool:
        if self._session.phase is not Phase.SETUP:
            return False
        self.new_game(mode)
        return True

    def reset(self) -> None:
        """Back to mode selection with fresh players and a new board."""
        self.new_game(None)

    def restart(self) -> None:
        self.new_game(self._session.mode)

    def request_task(self) -> bool:
        mode = self._session.mode
        return turn_engine.request_task(
            self._session,
            refill=lambda: [] if mode is None else self._build_deck(mode),
        )

    def reveal(self) -> bool:
        return turn_engine.reveal(self._session)

    def grade(self, errors: int) -> bool:
        return turn_engine.grade(
            self._session,
            errors,
            now_s=self._clock.now(),
            delay_s=self._config.turn_switch_delay_s,
        )

    def update(self) -> None:
        if self._session.pending_switch is None:
            return
        turn_engine.fire_pending_switch(self._session, now_s=self._clock.now())

    def layout(self) -> BoardLayout:
        if self._layout is None or self._layout.seed != self._session.layout_seed:
            self._layout = generate_layout(self._session.layout_seed)
        return self._layout

    def snapshot(self) -> BoardSnapshot:
        s = self._session
        task = s.current_task
        answer_visible = task is not None and s.phase in (Phase.MOVEMENT, Phase.WIN)
        return BoardSnapshot(
            phase=s.phase,
            mode=s.mode,
            players=s.players,
            current_player_index=s.current_player_index,
            current_player=s.current_player,
            checker=s.opponent,
            prompt_label=None if task is None else task.prompt_label,
            prompt=None if task is None else task.prompt,
            answer=task.answer if (task is not None and answer_visible) else None,
            task_payload=None if task is None else task.payload,
            winner=s.winner,
            layout_seed=s.layout_seed,
            deck_remaining=len(s.deck),
            turn_switch_pending=s.pending_switch is not None,
        )

    def _build_deck(self, mode: GameMode) -> list[Task]:
        return build_deck(mode, self._rng, code_task_count=self._config.code_task_count)


def build_game_controller(
    *,
    clock: Clock,
    seed: int,
    mode: GameMode | None = None,
    config: GameConfig | None = None,
) -> GameController:
    return GameController(clock=clock, seed=seed, config=config, mode=mode)
