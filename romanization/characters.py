"""
Character handling for romanization.

Provides the atomic-unit tokenizer shared by every system, language-wide
text preparation, and symbol-set classification.
"""

import unicodedata
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')

# ============================================================================
# Surrogate Ranges
# ============================================================================

HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF


def is_high_surrogate(char: str) -> bool:
    """Check if a single code point is the first half of a UTF-16 pair."""
    return HIGH_SURROGATE_START <= ord(char) <= HIGH_SURROGATE_END


def is_low_surrogate(char: str) -> bool:
    """Check if a single code point is the second half of a UTF-16 pair."""
    return LOW_SURROGATE_START <= ord(char) <= LOW_SURROGATE_END


def has_surrogates(text: str) -> bool:
    """Check if text carries any raw surrogate code points."""
    return any(HIGH_SURROGATE_START <= ord(c) <= LOW_SURROGATE_END for c in text)


# ============================================================================
# Tokenizer
# ============================================================================

def split_atomic_units(text: str) -> List[str]:
    """
    Split text into atomic character units.

    Every code point is its own unit, except a high surrogate immediately
    followed by a low surrogate, which stays together as one two-code-point
    unit. Characters outside the BMP in an ordinary Python string are already
    a single code point and need no special handling. A high surrogate with
    nothing after it is kept as a lone unit.

    Args:
        text: Any string, including the empty string.

    Returns:
        List of units whose concatenation is exactly ``text``.

    Example:
        >>> split_atomic_units("a\\ud800\\udd7cb")
        ['a', '\\ud800\\udd7c', 'b']
    """
    units = []
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if (is_high_surrogate(char) and i + 1 < length
                and is_low_surrogate(text[i + 1])):
            units.append(text[i:i + 2])
            i += 2
        else:
            units.append(char)
            i += 1

    return units


tokenize = split_atomic_units


# ============================================================================
# Language-wide Preparation
# ============================================================================

def join_surrogate_pairs(text: str) -> str:
    """
    Recombine explicit UTF-16 surrogate pairs into real code points.

    Unpaired surrogates are left in place.
    """
    if not has_surrogates(text):
        return text
    return text.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'surrogatepass')


def prepare_text(text: str) -> str:
    """
    Prepare raw input before tokenization.

    Joins surrogate pairs and applies NFC normalization. Numeral systems treat the
    result as their actual input.

    Args:
        text: Raw input text.

    Returns:
        Prepared text.
    """
    return unicodedata.normalize('NFC', join_surrogate_pairs(text))


# ============================================================================
# Symbol Set Classification
# ============================================================================

def determine_result_from_symbols(
    symbols: Iterable[str],
    candidates: Sequence[Tuple[T, Iterable[str]]],
) -> Optional[T]:
    """
    Pick the first candidate whose symbol collection shares a symbol with
    ``symbols``.

    Candidates are tried strictly in the given order, so a symbol listed under
    two candidates resolves to the earlier one.

    Args:
        symbols: Symbols to test (a string iterates as its code points).
        candidates: Ordered (result, symbol collection) pairs.

    Returns:
        The matching result, or None.
    """
    present = set(symbols)
    if not present:
        return None

    for result, candidate_symbols in candidates:
        if not present.isdisjoint(candidate_symbols):
            return result

    return None
