"""
Native numeral handling for romanization.

Provides additive numeral aggregation with exact fractional weights, unit
classification, in-text numeral detection and replacement, and output
formatting of numeral values as Arabic or Roman numerals.
"""

import enum
import re
from dataclasses import dataclass
from decimal import Decimal, localcontext
from fractions import Fraction
from numbers import Rational
from types import MappingProxyType
from typing import (
    Callable, Dict, Generic, Iterable, Iterator, Mapping, Optional,
    Sequence, Tuple, TypeVar, Union,
)

from romanization.characters import determine_result_from_symbols

U = TypeVar('U')

Weight = Union[int, str, Decimal, Fraction]


# ============================================================================
# Exceptions
# ============================================================================

class InexactWeightError(TypeError):
    """Raised when a numeral table is given a weight that is not exact."""

    def __init__(self, symbol: str, weight):
        self.symbol = symbol
        self.weight = weight
        super().__init__(
            f"Weight for {symbol!r} must be an exact finite rational, got {weight!r} "
            f"({type(weight).__name__})"
        )


# ============================================================================
# Value Types
# ============================================================================

@dataclass(frozen=True)
class NumeralValue(Generic[U]):
    """
    A parsed numeral: its exact value and, if one could be found, its unit.
    """
    value: Fraction
    unit: Optional[U] = None

    def without_unit(self) -> 'NumeralValue':
        """The same value with no unit attached."""
        return NumeralValue(self.value)

    def __float__(self) -> float:
        return float(self.value)


class NumeralSymbolTable(Mapping[str, Fraction]):
    """
    Read-only mapping from numeral symbol to its weight.

    Weights are stored as Fractions. Integers, Decimals, Fractions and strings such
    as ``"1/6"`` are accepted. Floats are rejected because they cannot hold
    values like 1/6 exactly; so are NaN, infinities and strings that are not
    fractions. Every rejection raises InexactWeightError.
    """

    def __init__(self, weights: Union[Mapping[str, Weight], Iterable[Tuple[str, Weight]]]):
        items = weights.items() if isinstance(weights, Mapping) else weights
        table: Dict[str, Fraction] = {}
        for symbol, weight in items:
            table[symbol] = self._to_fraction(symbol, weight)
        self._table = MappingProxyType(table)

    @staticmethod
    def _to_fraction(symbol: str, weight) -> Fraction:
        if isinstance(weight, bool) or isinstance(weight, float):
            raise InexactWeightError(symbol, weight)
        if not isinstance(weight, (Rational, Decimal, str)):
            raise InexactWeightError(symbol, weight)
        try:
            return Fraction(weight)
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise InexactWeightError(symbol, weight) from e

    def __getitem__(self, symbol: str) -> Fraction:
        return self._table[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"NumeralSymbolTable({len(self._table)} symbols)"


# ============================================================================
# Aggregation and Classification
# ============================================================================

def aggregate(symbols: Iterable[str], table: Mapping[str, Fraction]) -> Fraction:
    """
    Sum the weights of a sequence of numeral symbols.

    The notation is additive: there is no place value and no subtractive
    pairing. Symbols missing from the table weigh nothing.

    Args:
        symbols: Atomic units of a numeral.
        table: Symbol weights.

    Returns:
        Exact total.

    Example:
        >>> aggregate(['Π', 'Ι', 'Ι', 'Ι'], {'Π': Fraction(5), 'Ι': Fraction(1)})
        Fraction(8, 1)
    """
    total = Fraction(0)
    for symbol in symbols:
        weight = table.get(symbol)
        if weight is not None:
            total += weight
    return total


def classify_unit(symbols: Iterable[str],
                  candidate_sets: Sequence[Tuple[U, Iterable[str]]]) -> Optional[U]:
    """
    Determine the unit a numeral denotes.

    Each candidate set is tried in the declared order; the first one that
    contains any of the symbols gives the unit. Declared order is final, a
    symbol shared by two sets always resolves to the earlier set.

    Args:
        symbols: Atomic units of a numeral.
        candidate_sets: Ordered (unit, unit-indicating symbols) pairs.

    Returns:
        The unit, or None when no set matches.
    """
    return determine_result_from_symbols(symbols, candidate_sets)


# ============================================================================
# In-text Detection
# ============================================================================

def scan_and_replace(text: str, detector: 're.Pattern[str]',
                     processor: Callable[[str], str]) -> str:
    """
    Replace every numeral run found in text.

    The detector is applied left to right; each non-overlapping match is
    handed to ``processor`` and its return value substituted for the match.
    Everything between matches is copied through untouched.

    Args:
        text: Prepared text to scan.
        detector: Compiled pattern matching one maximal numeral run.
        processor: Maps the raw matched run to its replacement.

    Returns:
        The rewritten text, or ``text`` itself when nothing matched.
    """
    parts = []
    start = 0
    found = False

    for match in detector.finditer(text):
        found = True
        parts.append(text[start:match.start()])
        parts.append(processor(match.group()))
        start = match.end()

    if not found:
        return text

    parts.append(text[start:])
    return ''.join(parts)


# ============================================================================
# Output Formatting
# ============================================================================

class OutputNumeralType(enum.Enum):
    """How parsed numeral values are written back into romanized text."""
    ARABIC = 'arabic'
    ROMAN = 'roman'


ROMAN_NUMERALS = (
    (1000, 'M'), (900, 'CM'), (500, 'D'), (400, 'CD'),
    (100, 'C'), (90, 'XC'), (50, 'L'), (40, 'XL'),
    (10, 'X'), (9, 'IX'), (5, 'V'), (4, 'IV'),
    (1, 'I'),
)

# Twelfths below one half: none, ·, :, ∴, ∷, ⁙
ROMAN_TWELFTHS = ('', '·', ':', '∴', '∷', '⁙')
ROMAN_HALF = 'S'
ROMAN_ZERO = 'N'

ARABIC_DECIMAL_PLACES = 2


def to_roman(value: Union[int, Fraction]) -> str:
    """
    Write a non-negative value as Roman numerals.

    Fractional parts are rounded to the nearest twelfth and written with
    ``S`` for a half and dots for the remaining twelfths.

    Example:
        >>> to_roman(Fraction(29, 2))
        'XIVS'
        >>> to_roman(Fraction(155, 12))
        'XIIS⁙'
    """
    value = Fraction(value)
    if value < 0:
        raise ValueError(f"Cannot write negative value {value} as Roman numerals")

    twelfths = round_half_up(value * 12)
    whole, twelfths = divmod(twelfths, 12)

    if whole == 0 and twelfths == 0:
        return ROMAN_ZERO

    result = []
    for amount, numeral in ROMAN_NUMERALS:
        count, whole = divmod(whole, amount)
        result.append(numeral * count)

    if twelfths >= 6:
        result.append(ROMAN_HALF)
        twelfths -= 6
    result.append(ROMAN_TWELFTHS[twelfths])

    return ''.join(result)


def round_half_up(value: Fraction) -> int:
    """Round to the nearest integer, halves away from zero."""
    rounded = int(abs(value) + Fraction(1, 2))
    return -rounded if value < 0 else rounded


def to_arabic(value: Union[int, Fraction], places: int = ARABIC_DECIMAL_PLACES) -> str:
    """
    Write a value as a decimal number with at most ``places`` decimals.

    Rounding is exact and sends halves away from zero; the integer part is
    never approximated, however large.

    Example:
        >>> to_arabic(Fraction(155, 12))
        '12.92'
        >>> to_arabic(Fraction(1, 8))
        '0.13'
        >>> to_arabic(Fraction(8))
        '8'
    """
    units = round_half_up(Fraction(value) * 10 ** places)
    with localcontext() as ctx:
        ctx.prec = len(str(abs(units))) + 1
        text = format(Decimal(units).scaleb(-places), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_numeral(value: Union[NumeralValue, Fraction, int],
                   output_type: OutputNumeralType = OutputNumeralType.ARABIC) -> str:
    """
    Format a numeral value for insertion into romanized text.

    Args:
        value: A NumeralValue or a bare number.
        output_type: Arabic or Roman output.

    Returns:
        The formatted number.
    """
    if isinstance(value, NumeralValue):
        value = value.value
    if output_type is OutputNumeralType.ROMAN:
        return to_roman(value)
    return to_arabic(value)
