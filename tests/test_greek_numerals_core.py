from __future__ import annotations

import pytest

from greek_journey.greek_numerals import number_to_greek


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1, "ένα"),
        (7, "εφτά"),
        (10, "δέκα"),
        (13, "δεκατρία"),
        (19, "δεκαεννέα"),
        (20, "είκοσι"),
        (21, "είκοσι ένα"),
        (42, "σαράντα δύο"),
        (99, "ενενήντα εννέα"),
        (100, "εκατό"),
        (101, "εκατόν ένα"),
    ],
)
def test_number_to_greek_known_values(value: int, expected: str) -> None:
    assert number_to_greek(value) == expected


@pytest.mark.parametrize("value", [0, -5, 102, 1000])
def test_number_to_greek_out_of_domain_falls_back_to_digits(value: int) -> None:
    assert number_to_greek(value) == str(value)


def test_every_value_in_sampling_range_has_a_word_form() -> None:
    for value in range(1, 102):
        word = number_to_greek(value)
        assert word != str(value)
        assert not any(ch.isdigit() for ch in word)
