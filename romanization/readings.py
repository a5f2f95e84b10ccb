"""
Reading resolution for romanization.

Maps each character of a string to every known reading (pronunciation),
drawing from several prioritized lookup tables, and collapses the result
into display strings.

A system declares its sources as an ``enum.Flag`` with one member per table.
Callers request any union of those members; only requested sources
contribute, always in the order the system declares them.

Example:
    >>> class Types(enum.Flag):
    ...     MAIN = 1
    ...     EXTRA = 2
    >>> sources = [
    ...     ReadingSource(Types.MAIN, {'率': ['shuài', 'lǜ']}),
    ...     ReadingSource(Types.EXTRA, {'率': ['lǜ']}),
    ... ]
    >>> str(resolve('率?', Types.MAIN | Types.EXTRA, sources))
    '[shuài lǜ]?'
"""

import enum
from dataclasses import dataclass
from typing import Iterator, List, Mapping, NamedTuple, Sequence, Tuple, Union

from romanization.characters import split_atomic_units


# ============================================================================
# Value Types
# ============================================================================

@dataclass(frozen=True)
class Reading:
    """One pronunciation of a character, tagged with the table it came from."""
    type: enum.Flag
    value: str


@dataclass(frozen=True)
class ReadingCharacter:
    """
    A character with all of its known readings.

    ``character`` is one atomic unit, which may be two code points long when
    the input held an explicit surrogate pair. ``readings`` are ordered by
    source priority, then by each source's own list order. An empty tuple
    means no requested source knows the character.
    """
    character: str
    readings: Tuple[Reading, ...] = ()

    def distinct_values(self) -> List[str]:
        """Reading values with duplicates removed, in first-seen order."""
        return list(dict.fromkeys(r.value for r in self.readings))

    def flatten(self) -> str:
        """
        Collapse the readings into one display string.

        No readings gives the character itself, a single distinct value is
        returned bare, and several distinct values are space-joined inside
        square brackets, e.g. ``[shuài lǜ]``.
        """
        values = self.distinct_values()
        if len(values) > 1:
            return f"[{' '.join(values)}]"
        return values[0] if values else self.character

    def first_reading(self) -> str:
        """The first reading's value, or the character if there is none."""
        return self.readings[0].value if self.readings else self.character

    def __str__(self) -> str:
        return f"'{self.character}' {self.flatten()}"


@dataclass(frozen=True)
class ReadingsString:
    """A string of characters, each with all of its known readings."""
    characters: Tuple[ReadingCharacter, ...] = ()

    def __iter__(self) -> Iterator[ReadingCharacter]:
        return iter(self.characters)

    def __len__(self) -> int:
        return len(self.characters)

    def __getitem__(self, index: int) -> ReadingCharacter:
        return self.characters[index]

    @property
    def text(self) -> str:
        """The original text the readings were resolved from."""
        return ''.join(c.character for c in self.characters)

    def flatten(self) -> str:
        """
        Concatenate the flattened form of every character.

        Example: ``xiàndài [hàn tān][yǔ yù] cí[diǎn tiǎn]``
        """
        return ''.join(c.flatten() for c in self.characters)

    def first_readings(self) -> str:
        """Concatenate each character's first reading (best-guess output)."""
        return ''.join(c.first_reading() for c in self.characters)

    def __str__(self) -> str:
        return self.flatten()


class ReadingSource(NamedTuple):
    """A lookup table and the reading type its entries are tagged with."""
    type: enum.Flag
    mapping: Mapping[str, Sequence[str]]


# ============================================================================
# Resolution
# ============================================================================

def resolve_character(character: str, requested: enum.Flag,
                      sources: Sequence[ReadingSource]) -> ReadingCharacter:
    """
    Collect the readings of one atomic unit from every requested source.

    Args:
        character: A single atomic unit.
        requested: Union of reading types to include.
        sources: Tables in priority order.

    Returns:
        ReadingCharacter for the unit.
    """
    readings = []
    for source in sources:
        if source.type not in requested:
            continue
        values = source.mapping.get(character)
        if values:
            readings.extend(Reading(source.type, value) for value in values)
    return ReadingCharacter(character, tuple(readings))


def resolve(text: str, requested: enum.Flag,
            sources: Sequence[ReadingSource]) -> ReadingsString:
    """
    Resolve every character of text against the requested sources.

    Args:
        text: Text to resolve. Not normalized here.
        requested: Union of reading types to include.
        sources: Tables in priority order.

    Returns:
        ReadingsString with one ReadingCharacter per atomic unit of ``text``.
    """
    return ReadingsString(tuple(
        resolve_character(unit, requested, sources)
        for unit in split_atomic_units(text)
    ))


def flatten(readings: Union[ReadingsString, ReadingCharacter]) -> str:
    """Flatten a ReadingsString or a single ReadingCharacter for display."""
    return readings.flatten()


def first_readings(readings: ReadingsString) -> str:
    """Best-guess conversion: first reading of each character, or the character."""
    return readings.first_readings()
