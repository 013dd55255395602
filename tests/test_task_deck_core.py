from __future__ import annotations

import pytest

from greek_journey.game_core import GameMode, SeededRng
from greek_journey.task_deck import (
    CODE_ELEMENT_COUNT,
    CODE_PROMPT_LABEL,
    GREEK_LETTERS,
    SENTENCES,
    TRANSLATION_PROMPT_LABEL,
    TRANSLATION_TASK_COUNT,
    CodeElementKind,
    build_deck,
    generate_code_task,
    generate_code_tasks,
    generate_translation_tasks,
    russian_gloss,
)


def test_russian_gloss_examples() -> None:
    assert russian_gloss("Εγώ σου δίνω το βιβλίο") == "Я даю тебе книгу"
    assert russian_gloss("Εσύ μου δίνεις το βιβλίο") == "Ты даешь мне книгу"
    assert russian_gloss("Αυτή του δίνει το βιβλίο") == "Она дает ему книгу"
    assert russian_gloss("Αυτοί σας δίνουν το βιβλίο") == "Они дают вам книгу"


def test_russian_gloss_passes_unknown_words_through() -> None:
    assert russian_gloss("Κάποιος μου δίνει το βιβλίο") == "Κάποιος даю мне книгу"
    assert russian_gloss("Εμείς xyz δίνουμε το βιβλίο") == "Мы даем xyz книгу"


def test_translation_deck_has_one_task_per_sentence() -> None:
    tasks = generate_translation_tasks(SeededRng(1))
    sentences = [s for _, group in SENTENCES for s in group]

    assert len(tasks) == TRANSLATION_TASK_COUNT == len(sentences) == 39
    assert sorted(t.answer for t in tasks) == sorted(sentences)
    for t in tasks:
        assert t.mode is GameMode.TRANSLATION
        assert t.prompt == russian_gloss(t.answer)
        assert t.prompt_label == TRANSLATION_PROMPT_LABEL
        assert t.answer.startswith(str(t.category))


def test_translation_shuffle_is_deterministic_per_seed() -> None:
    a = generate_translation_tasks(SeededRng(7))
    b = generate_translation_tasks(SeededRng(7))
    assert a == b


def test_letter_table_has_upper_and_lower_case_entries() -> None:
    assert len(GREEK_LETTERS) == 48
    assert GREEK_LETTERS[0].symbol == "Α" and GREEK_LETTERS[0].name == "άλφα"
    assert GREEK_LETTERS[24].symbol == "α" and GREEK_LETTERS[24].name == "άλφα"
    assert GREEK_LETTERS[-1].symbol == "ω" and GREEK_LETTERS[-1].name == "ωμέγα"


def test_code_task_has_six_elements_with_letter_and_number() -> None:
    rng = SeededRng(2024)
    for _ in range(200):
        task = generate_code_task(rng)
        elements = task.payload
        assert isinstance(elements, tuple)
        assert len(elements) == CODE_ELEMENT_COUNT
        kinds = {e.kind for e in elements}
        assert kinds == {CodeElementKind.LETTER, CodeElementKind.NUMBER}

        assert task.mode is GameMode.CODE_ASSEMBLY
        assert task.prompt_label == CODE_PROMPT_LABEL
        assert task.answer == "".join(e.symbol for e in elements)
        assert task.prompt.split(" - ") == [e.label for e in elements]
        for e in elements:
            if e.kind is CodeElementKind.NUMBER:
                assert 1 <= int(e.symbol) <= 101


def test_generate_code_tasks_count_and_validation() -> None:
    assert len(generate_code_tasks(SeededRng(3))) == 30
    assert len(generate_code_tasks(SeededRng(3), 5)) == 5
    assert generate_code_tasks(SeededRng(3), 0) == []
    with pytest.raises(ValueError):
        generate_code_tasks(SeededRng(3), -1)


def test_build_deck_dispatches_on_mode() -> None:
    assert len(build_deck(GameMode.TRANSLATION, SeededRng(5))) == TRANSLATION_TASK_COUNT
    deck = build_deck(GameMode.CODE_ASSEMBLY, SeededRng(5), code_task_count=12)
    assert len(deck) == 12
    assert all(t.mode is GameMode.CODE_ASSEMBLY for t in deck)
