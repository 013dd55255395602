from __future__ import annotations

NUMBER_UNITS: dict[int, str] = {
    1: "ένα",
    2: "δύο",
    3: "τρία",
    4: "τέσσερα",
    5: "πέντε",
    6: "έξι",
    7: "εφτά",
    8: "οκτώ",
    9: "εννέα",
}

NUMBER_TEENS: dict[int, str] = {
    10: "δέκα",
    11: "έντεκα",
    12: "δώδεκα",
    13: "δεκατρία",
    14: "δεκατέσσερα",
    15: "δεκαπέντε",
    16: "δεκαέξι",
    17: "δεκαεπτά",
    18: "δεκαοκτώ",
    19: "δεκαεννέα",
}

NUMBER_TENS: dict[int, str] = {
    20: "είκοσι",
    30: "τριάντα",
    40: "σαράντα",
    50: "πενήντα",
    60: "εξήντα",
    70: "εβδομήντα",
    80: "ογδόντα",
    90: "ενενήντα",
}

MIN_NUMERAL = 1
MAX_NUMERAL = 101


def number_to_greek(value: int) -> str:
    """Spoken Greek form of ``value`` for 1..101; other values stay as digits."""

    value = int(value)
    if value < MIN_NUMERAL or value > MAX_NUMERAL:
        return str(value)
    if value < 10:
        return NUMBER_UNITS[value]
    if value < 20:
        return NUMBER_TEENS[value]
    if value < 100:
        tens = (value // 10) * 10
        unit = value % 10
        return NUMBER_TENS[tens] if unit == 0 else f"{NUMBER_TENS[tens]} {NUMBER_UNITS[unit]}"
    if value == 100:
        return "εκατό"
    # 101 is the only value above 100 in range.
    return "εκατόν ένα"
