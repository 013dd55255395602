from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .game_core import GameMode, SeededRng, Task
from .greek_numerals import MAX_NUMERAL, MIN_NUMERAL, number_to_greek

logger = logging.getLogger(__name__)

TRANSLATION_PROMPT_LABEL = "Переведи на греческий"
CODE_PROMPT_LABEL = "Собери код из 6 элементов"

CODE_ELEMENT_COUNT = 6
DEFAULT_CODE_TASK_COUNT = 30

DIRECT_OBJECT_RU = "книгу"
FALLBACK_VERB_RU = "даю"


class Subject(StrEnum):
    """Greek subject pronouns used by the translation drill."""

    EGO = "Εγώ"
    ESY = "Εσύ"
    AFTOS = "Αυτός"
    AFTI = "Αυτή"
    EMEIS = "Εμείς"
    ESEIS = "Εσείς"
    AFTOI = "Αυτοί"

    @property
    def russian(self) -> str:
        return _SUBJECT_FORMS[self][0]

    @property
    def russian_verb(self) -> str:
        return _SUBJECT_FORMS[self][1]

    @classmethod
    def from_greek(cls, word: str) -> "Subject | None":
        try:
            return cls(word)
        except ValueError:
            return None


# subject -> (pronoun, "to give" in matching person)
_SUBJECT_FORMS: dict[Subject, tuple[str, str]] = {
    Subject.EGO: ("Я", "даю"),
    Subject.ESY: ("Ты", "даешь"),
    Subject.AFTOS: ("Он", "дает"),
    Subject.AFTI: ("Она", "дает"),
    Subject.EMEIS: ("Мы", "даем"),
    Subject.ESEIS: ("Вы", "даете"),
    Subject.AFTOI: ("Они", "дают"),
}


class IndirectObject(StrEnum):
    """Weak-form genitive clitics ("to me", "to you", ...)."""

    MOU = "μου"
    SOU = "σου"
    TOU = "του"
    TIS = "της"
    MAS = "μας"
    SAS = "σας"
    TOUS = "τους"

    @property
    def russian(self) -> str:
        return _OBJECT_FORMS[self]

    @classmethod
    def from_greek(cls, word: str) -> "IndirectObject | None":
        try:
            return cls(word)
        except ValueError:
            return None


_OBJECT_FORMS: dict[IndirectObject, str] = {
    IndirectObject.MOU: "мне",
    IndirectObject.SOU: "тебе",
    IndirectObject.TOU: "ему",
    IndirectObject.TIS: "ей",
    IndirectObject.MAS: "нам",
    IndirectObject.SAS: "вам",
    IndirectObject.TOUS: "им",
}


SENTENCES: tuple[tuple[Subject, tuple[str, ...]], ...] = (
    (
        Subject.EGO,
        (
            "Εγώ σου δίνω το βιβλίο",
            "Εγώ του δίνω το βιβλίο",
            "Εγώ της δίνω το βιβλίο",
            "Εγώ σας δίνω το βιβλίο",
            "Εγώ τους δίνω το βιβλίο",
        ),
    ),
    (
        Subject.ESY,
        (
            "Εσύ μου δίνεις το βιβλίο",
            "Εσύ του δίνεις το βιβλίο",
            "Εσύ της δίνεις το βιβλίο",
            "Εσύ μας δίνεις το βιβλίο",
            "Εσύ σας δίνεις το βιβλίο",
            "Εσύ τους δίνεις το βιβλίο",
        ),
    ),
    (
        Subject.AFTOS,
        (
            "Αυτός μου δίνει το βιβλίο",
            "Αυτός σου δίνει το βιβλίο",
            "Αυτός της δίνει το βιβλίο",
            "Αυτός μας δίνει το βιβλίο",
            "Αυτός σας δίνει το βιβλίο",
            "Αυτός τους δίνει το βιβλίο",
        ),
    ),
    (
        Subject.AFTI,
        (
            "Αυτή μου δίνει το βιβλίο",
            "Αυτή σου δίνει το βιβλίο",
            "Αυτή του δίνει το βιβλίο",
            "Αυτή μας δίνει το βιβλίο",
            "Αυτή σας δίνει το βιβλίο",
            "Αυτή τους δίνει το βιβλίο",
        ),
    ),
    (
        Subject.EMEIS,
        (
            "Εμείς σου δίνουμε το βιβλίο",
            "Εμείς του δίνουμε το βιβλίο",
            "Εμείς της δίνουμε το βιβλίο",
            "Εμείς σας δίνουμε το βιβλίο",
            "Εμείς τους δίνουμε το βιβλίο",
        ),
    ),
    (
        Subject.ESEIS,
        (
            "Εσείς μου δίνετε το βιβλίο",
            "Εσείς του δίνετε το βιβλίο",
            "Εσείς της δίνετε το βιβλίο",
            "Εσείς μας δίνετε το βιβλίο",
            "Εσείς τους δίνετε το βιβλίο",
        ),
    ),
    (
        Subject.AFTOI,
        (
            "Αυτοί μου δίνουν το βιβλίο",
            "Αυτοί σου δίνουν το βιβλίο",
            "Αυτοί του δίνουν το βιβλίο",
            "Αυτοί της δίνουν το βιβλίο",
            "Αυτοί μας δίνουν το βιβλίο",
            "Αυτοί σας δίνουν το βιβλίο",
        ),
    ),
)

TRANSLATION_TASK_COUNT = sum(len(sentences) for _, sentences in SENTENCES)


@dataclass(frozen=True, slots=True)
class GreekLetter:
    symbol: str
    name: str


_LETTER_NAMES = (
    "άλφα",
    "βήτα",
    "γάμμα",
    "δέλτα",
    "έψιλον",
    "ζήτα",
    "ήτα",
    "θήτα",
    "ιώτα",
    "κάππα",
    "λάμδα",
    "μυ",
    "νυ",
    "ξι",
    "όμικρον",
    "πι",
    "ρο",
    "σίγμα",
    "ταυ",
    "ύψιλον",
    "φι",
    "χι",
    "ψι",
    "ωμέγα",
)
_UPPER = "ΑΒΓΔΕΖΗΘΙΚΛΜΝΞΟΠΡΣΤΥΦΧΨΩ"
_LOWER = "αβγδεζηθικλμνξοπρστυφχψω"

# Upper-case block first, then lower-case; 48 entries.
GREEK_LETTERS: tuple[GreekLetter, ...] = tuple(
    GreekLetter(symbol=sym, name=name) for sym, name in zip(_UPPER, _LETTER_NAMES)
) + tuple(GreekLetter(symbol=sym, name=name) for sym, name in zip(_LOWER, _LETTER_NAMES))


class CodeElementKind(StrEnum):
    LETTER = "letter"
    NUMBER = "number"


@dataclass(frozen=True, slots=True)
class CodeElement:
    kind: CodeElementKind
    symbol: str
    label: str


def russian_gloss(sentence: str) -> str:
    """Russian prompt for a Greek "subject clitic verb το βιβλίο" sentence."""

    words = sentence.split(" ")
    subject_word = words[0]
    object_word = words[1] if len(words) > 1 else ""

    subject = Subject.from_greek(subject_word)
    clitic = IndirectObject.from_greek(object_word)

    subject_ru = subject.russian if subject is not None else subject_word
    object_ru = clitic.russian if clitic is not None else object_word
    verb_ru = subject.russian_verb if subject is not None else FALLBACK_VERB_RU

    return f"{subject_ru} {verb_ru} {object_ru} {DIRECT_OBJECT_RU}"


def generate_translation_tasks(rng: SeededRng) -> list[Task]:
    tasks = [
        Task(
            mode=GameMode.TRANSLATION,
            prompt=russian_gloss(sentence),
            answer=sentence,
            prompt_label=TRANSLATION_PROMPT_LABEL,
            category=subject.value,
        )
        for subject, sentences in SENTENCES
        for sentence in sentences
    ]
    rng.shuffle(tasks)
    return tasks


def generate_code_task(rng: SeededRng) -> Task:
    planned = [CodeElementKind.LETTER, CodeElementKind.NUMBER]
    kinds = (CodeElementKind.LETTER, CodeElementKind.NUMBER)
    while len(planned) < CODE_ELEMENT_COUNT:
        planned.append(rng.choice(kinds))
    rng.shuffle(planned)

    elements: list[CodeElement] = []
    for kind in planned:
        if kind is CodeElementKind.LETTER:
            letter = rng.choice(GREEK_LETTERS)
            elements.append(CodeElement(kind=kind, symbol=letter.symbol, label=letter.name))
        else:
            number = rng.randint(MIN_NUMERAL, MAX_NUMERAL)
            elements.append(CodeElement(kind=kind, symbol=str(number), label=number_to_greek(number)))

    return Task(
        mode=GameMode.CODE_ASSEMBLY,
        prompt=" - ".join(e.label for e in elements),
        answer="".join(e.symbol for e in elements),
        prompt_label=CODE_PROMPT_LABEL,
        payload=tuple(elements),
    )


def generate_code_tasks(rng: SeededRng, count: int = DEFAULT_CODE_TASK_COUNT) -> list[Task]:
    if count < 0:
        raise ValueError("count must be >= 0")
    return [generate_code_task(rng) for _ in range(int(count))]


def build_deck(mode: GameMode, rng: SeededRng, *, code_task_count: int = DEFAULT_CODE_TASK_COUNT) -> list[Task]:
    if mode is GameMode.TRANSLATION:
        deck = generate_translation_tasks(rng)
    else:
        deck = generate_code_tasks(rng, code_task_count)
    logger.debug("built %s deck with %d tasks", mode.value, len(deck))
    return deck
