from __future__ import annotations

import math
import random
from collections.abc import MutableSequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

T = TypeVar("T")

TOTAL_STEPS = 25  # nodes on the track
WINNING_STEPS = TOTAL_STEPS - 1


class Phase(StrEnum):
    SETUP = "setup"
    TASK_REVEAL = "task_reveal"
    ANSWER_CHECK = "answer_check"
    MOVEMENT = "movement"
    WIN = "win"


class GameMode(StrEnum):
    TRANSLATION = "translation"
    CODE_ASSEMBLY = "code_assembly"

    @property
    def title(self) -> str:
        return _MODE_TITLES[self][0]

    @property
    def description(self) -> str:
        return _MODE_TITLES[self][1]


_MODE_TITLES: dict[GameMode, tuple[str, str]] = {
    GameMode.TRANSLATION: ("Фразы с книгой", "Переведи русскую фразу на греческий."),
    GameMode.CODE_ASSEMBLY: ("Цифры и буквы", "Собери код по греческой подсказке."),
}


@dataclass(frozen=True, slots=True)
class Task:
    mode: GameMode
    prompt: str
    answer: str
    prompt_label: str
    category: str | None = None
    payload: object | None = None  # optional structured data for UI


@dataclass(frozen=True, slots=True)
class PlayerState:
    id: int
    name: str
    color: str
    position: int = 0

    def moved_to(self, position: int) -> "PlayerState":
        return PlayerState(id=self.id, name=self.name, color=self.color, position=position)


PLAYER_IDENTITIES: tuple[tuple[str, str], tuple[str, str]] = (
    ("Игрок 1", "indigo"),
    ("Игрок 2", "rose"),
)


def initial_players() -> tuple[PlayerState, PlayerState]:
    (name0, color0), (name1, color1) = PLAYER_IDENTITIES
    return (
        PlayerState(id=0, name=name0, color=color0),
        PlayerState(id=1, name=name1, color=color1),
    )


class SeededRng:
    """Simple seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: list[T] | tuple[T, ...]) -> T:
        return self._rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def shuffle(self, items: MutableSequence[T]) -> None:
        fisher_yates(items, self)


def fisher_yates(items: MutableSequence[T], rng: SeededRng) -> None:
    """Shuffle in place; every element is visited exactly once."""

    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def clamp_int(value: int, lo: int, hi: int) -> int:
    return lo if value < lo else hi if value > hi else int(value)


def sine_hash(n: float) -> float:
    """Stable pseudo-random value in [0, 1) derived from ``n``."""

    x = math.sin(n) * 10000.0
    return x - math.floor(x)
