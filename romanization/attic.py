"""
Attic numerals for romanization.

Attic (acrophonic) numerals were used in Ancient Greece from roughly the 7th
century BCE until the 3rd century BCE, when alphabetic Greek numerals
replaced them. The notation is additive: ΧΗΗΔΠΙΙ is 1000+100+100+10+5+1+1.
Many symbols also denote a unit (drachmas, talents, staters, ...).

See https://en.wikipedia.org/wiki/Attic_numerals and
https://www.unicode.org/charts/PDF/U10140.pdf for the Unicode block.

In running text there is no reliable way to tell Attic numerals from other
Greek, so detection relies on every symbol of a numeral carrying a combining
overline (U+0305). Text without overlines is never treated as a numeral.
"""

import enum
import re
from fractions import Fraction
from typing import Callable, Tuple

from romanization.characters import prepare_text, split_atomic_units
from romanization.numerals import (
    NumeralSymbolTable, NumeralValue, aggregate, classify_unit, scan_and_replace,
)
from romanization.systems import NumeralParsingSystem

COMBINING_OVERLINE = '\u0305'


class AtticUnit(enum.Enum):
    """Units an Attic numeral can be written in."""
    DRACHMA = 'drachma'
    PLETHRA = 'plethra'
    TALENTS = 'talents'
    STATERS = 'staters'
    MNAS = 'mnas'
    YEARS = 'years'
    WEIGHT = 'weight'
    TIME = 'time'


# ============================================================================
# Value Table
# ============================================================================

# Names in parentheses are the region the symbol variant comes from.
ATTIC_VALUES: Tuple[Tuple[str, object], ...] = (
    ('𐆊', 0),                # U+1018A zero sign
    ('𐅼', Fraction(1, 6)),   # U+1017C drachma/obol
    ('𐅀', Fraction(1, 4)),   # U+10140
    ('𐆋', Fraction(1, 4)),   # U+1018B
    ('𐅽', Fraction(2, 6)),   # U+1017D drachma/obol
    ('𐅁', Fraction(1, 2)),   # U+10141
    ('𐅵', Fraction(1, 2)),   # U+10175
    ('𐅶', Fraction(1, 2)),   # U+10176
    ('𐅾', Fraction(3, 6)),   # U+1017E drachma/obol
    ('𐅷', Fraction(2, 3)),   # U+10177
    ('𐅿', Fraction(4, 6)),   # U+1017F drachma/obol
    ('𐅸', Fraction(3, 4)),   # U+10178
    ('𐆀', Fraction(5, 6)),   # U+10180 drachma/obol
    ('Ι', 1),                # U+0399
    ('𐅂', 1),                # U+10142 drachma
    ('𐅘', 1),                # U+10158 plethron
    ('𐅙', 1),                # U+10159 (Thespian)
    ('𐅚', 1),                # U+1015A (Hermionian)
    ('𐅛', 2),                # U+1015B (Epidaurean)
    ('𐅜', 2),                # U+1015C (Thespian)
    ('𐅝', 2),                # U+1015D drachma (Cyrenaic)
    ('𐅞', 2),                # U+1015E drachma (Epidaurean)
    ('Π', 5),                # U+03A0
    ('𐅈', 5),                # U+10148 talents
    ('𐅏', 5),                # U+1014F staters
    ('𐅟', 5),                # U+1015F (Troezenian)
    ('𐅳', 5),                # U+10173 mnas (Delphic)
    ('Δ', 10),               # U+0394
    ('𐅉', 10),               # U+10149 talents
    ('𐅐', 10),               # U+10150 staters
    ('𐅗', 10),               # U+10157 mnas
    ('𐅠', 10),               # U+10160 (Troezenian)
    ('𐅡', 10),               # U+10161 (Troezenian)
    ('𐅢', 10),               # U+10162 (Hermionian)
    ('𐅣', 10),               # U+10163 (Messenian)
    ('𐅤', 10),               # U+10164 (Thespian)
    ('𐅥', 30),               # U+10165 (Thespian)
    ('𐅄', 50),               # U+10144
    ('𐅊', 50),               # U+1014A talents
    ('𐅑', 50),               # U+10151 staters
    ('𐅦', 50),               # U+10166 (Troezenian)
    ('𐅧', 50),               # U+10167 (Troezenian)
    ('𐅨', 50),               # U+10168 (Hermionian)
    ('𐅩', 50),               # U+10169 (Thespian)
    ('𐅴', 50),               # U+10174 mnas (Stratian)
    ('Η', 100),              # U+0397
    ('𐅋', 100),              # U+1014B talents
    ('𐅒', 100),              # U+10152 staters
    ('𐅪', 100),              # U+1016A (Thespian)
    ('𐅫', 300),              # U+1016B (Thespian)
    ('𐅅', 500),              # U+10145
    ('𐅌', 500),              # U+1014C talents
    ('𐅓', 500),              # U+10153 staters
    ('𐅬', 500),              # U+1016C (Epidaurean)
    ('𐅭', 500),              # U+1016D (Troezenian)
    ('𐅮', 500),              # U+1016E (Thespian)
    ('𐅯', 500),              # U+1016F (Carystian)
    ('𐅰', 500),              # U+10170 (Naxian)
    ('Χ', 1000),             # U+03A7
    ('𐅍', 1000),             # U+1014D talents
    ('𐅔', 1000),             # U+10154 staters
    ('𐅱', 1000),             # U+10171 (Thespian)
    ('𐅆', 5000),             # U+10146
    ('𐅎', 5000),             # U+1014E talents
    ('𐅲', 5000),             # U+10172 (Thespian)
    ('Μ', 10000),            # U+039C
    ('𐅕', 10000),            # U+10155 staters
    ('𐅇', 50000),            # U+10147
    ('𐅖', 50000),            # U+10156 staters
)


# ============================================================================
# Unit Symbols
# ============================================================================

# Tried in this order; the first set containing any symbol of the numeral wins.
ATTIC_UNIT_SYMBOLS: Tuple[Tuple[AtticUnit, frozenset], ...] = (
    (AtticUnit.DRACHMA, frozenset('𐅻𐅼𐅂𐅝𐅞𐅽𐅾𐅿𐆀')),
    (AtticUnit.PLETHRA, frozenset('𐅘')),
    (AtticUnit.TALENTS, frozenset('𐅺𐅈𐅉𐅊𐅋𐅌𐅍𐅎')),
    (AtticUnit.STATERS, frozenset('𐅏𐅐𐅑𐅒𐅓𐅔𐅕𐅖')),
    (AtticUnit.MNAS, frozenset('𐅳𐅗𐅴')),
    (AtticUnit.YEARS, frozenset('𐅹𐆌')),
    (AtticUnit.WEIGHT, frozenset('𐆎')),
    (AtticUnit.TIME, frozenset('𐆍')),
)


def build_detection_pattern(symbols) -> 're.Pattern[str]':
    """
    Compile a pattern matching a run of overlined numeral symbols.

    Matching ignores case, so lowercase Greek letters with an overline are
    picked up too; they have no value and add nothing to the sum.
    """
    symbol_class = ''.join(re.escape(s) for s in symbols)
    return re.compile(f"(?:[{symbol_class}]{COMBINING_OVERLINE})+", re.IGNORECASE)


class AtticNumerals(NumeralParsingSystem[AtticUnit]):
    """
    Parses Attic numerals.

    Example:
        >>> attic = AtticNumerals()
        >>> attic.process("ΔΠΙΙΙ")
        NumeralValue(value=Fraction(18, 1), unit=None)
        >>> attic.process("𐅉𐅈")
        NumeralValue(value=Fraction(15, 1), unit=<AtticUnit.TALENTS: 'talents'>)
    """

    def __init__(self):
        self.value_table = NumeralSymbolTable(ATTIC_VALUES)
        self.unit_symbols = ATTIC_UNIT_SYMBOLS
        self.detection_pattern = build_detection_pattern(self.value_table)

    def process(self, text: str) -> NumeralValue[AtticUnit]:
        """
        Parse an Attic numeral.

        Overlines are ignored and unknown characters add nothing.

        Args:
            text: The numeral.

        Returns:
            Its value, with a unit if one of its symbols indicates one.
        """
        text = prepare_text(text).replace(COMBINING_OVERLINE, '')
        symbols = split_atomic_units(text)

        unit = classify_unit(symbols, self.unit_symbols)
        return NumeralValue(aggregate(symbols, self.value_table), unit)

    def process_numerals_in_text(
        self, text: str,
        numeral_processor: Callable[[NumeralValue[AtticUnit]], str],
    ) -> str:
        """
        Replace every overlined Attic numeral in text.

        Args:
            text: Text to search.
            numeral_processor: Turns each parsed numeral into the string that
                replaces it, e.g. ``format_numeral``.

        Returns:
            The prepared text with each numeral run replaced. When no numeral
            is found the prepared text is returned as is.
        """
        text = prepare_text(text)
        return scan_and_replace(
            text, self.detection_pattern,
            lambda run: numeral_processor(self.process(run)),
        )
