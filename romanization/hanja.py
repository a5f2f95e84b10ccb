"""
Hanja (Chinese characters used in Korean) to Hangeul readings.
"""

import enum
from types import MappingProxyType
from typing import Callable, List, Optional, Tuple

from romanization.loading.tables import CsvTableProvider, TableProvider
from romanization.readings import ReadingSource
from romanization.settings import HANJA_HANGEUL_FILE, READING_SEPARATOR
from romanization.systems import ReadingsSystem


class HanjaReadingType(enum.Flag):
    """Tables supported for Hanja. Hangeul is the only one."""
    HANGEUL = 1


def hangeul_syllables(value: str) -> Tuple[str, ...]:
    """Keep the first character of each space-separated reading."""
    return tuple(reading[0] for reading in value.split(READING_SEPARATOR) if reading)


class HanjaReadings(ReadingsSystem):
    """
    Converts Hanja to Hangeul, optionally romanizing the result.

    Hangeul romanization itself is left to a caller-supplied function.
    """

    reading_types = HanjaReadingType

    def __init__(self, readings_to_use: HanjaReadingType = HanjaReadingType.HANGEUL,
                 provider: Optional[TableProvider] = None):
        super().__init__(readings_to_use)
        provider = provider or CsvTableProvider()

        self.hangeul_readings = MappingProxyType(provider.load_character_map(
            HANJA_HANGEUL_FILE, value_transform=hangeul_syllables))
        self._sources = [ReadingSource(HanjaReadingType.HANGEUL, self.hangeul_readings)]

    @property
    def sources(self) -> List[ReadingSource]:
        return self._sources

    def process(self, text: str,
                romanizer: Optional[Callable[[str], str]] = None) -> str:
        """
        Replace every Hanja with its first Hangeul reading.

        Args:
            text: Text to convert.
            romanizer: Applied to the converted text, e.g. a Hangeul
                romanization function. None returns the Hangeul text.

        Returns:
            Converted text. Unrecognized characters are left untouched.
        """
        hangeul = self.process_with_readings(text).first_readings()
        return romanizer(hangeul) if romanizer is not None else hangeul

    def process_to_hangeul(self, text: str) -> str:
        """Replace every Hanja with its first Hangeul reading."""
        return self.process(text)
