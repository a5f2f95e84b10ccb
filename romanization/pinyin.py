"""
Hanyu Pinyin romanization of Chinese characters.

Readings come from three tables, used in this priority order:

- standard Hanyu Pinyin
- Hanyu Pinyin as given in Xiandai Hanyu Pinlu Cidian
- Hanyu Pinyin as given in Xiandai Hanyu Cidian (XHC)

See https://en.wikipedia.org/wiki/Hanyu_Pinyin
"""

import enum
from types import MappingProxyType
from typing import List, Optional, Tuple

from romanization.loading.tables import CsvTableProvider, TableProvider
from romanization.readings import ReadingSource
from romanization.settings import (
    HANYU_PINLU_FILE, HANYU_PINYIN_FILE, READING_SEPARATOR, XHC_FILE,
)
from romanization.systems import ReadingsSystem


class PinyinReadingType(enum.Flag):
    """Tables supported by Hanyu Pinyin."""
    HANYU_PINYIN = 1
    HANYU_PINLU = 1 << 1
    XHC = 1 << 2


ALL_PINYIN_READINGS = (
    PinyinReadingType.HANYU_PINYIN
    | PinyinReadingType.HANYU_PINLU
    | PinyinReadingType.XHC
)


def split_readings(value: str) -> Tuple[str, ...]:
    """Split a table cell into its readings, skipping empty ones."""
    return tuple(reading for reading in value.split(READING_SEPARATOR) if reading)


class HanyuPinyin(ReadingsSystem):
    """
    The Hanyu Pinyin romanization system.

    Example:
        >>> pinyin = HanyuPinyin()
        >>> pinyin.process("汉语")
        'hànyǔ'
        >>> str(pinyin.process_with_readings("汉语"))
        '[hàn tān][yǔ yù]'
    """

    reading_types = PinyinReadingType

    def __init__(self, readings_to_use: PinyinReadingType = ALL_PINYIN_READINGS,
                 provider: Optional[TableProvider] = None):
        super().__init__(readings_to_use)
        provider = provider or CsvTableProvider()

        self.hanyu_pinyin_readings = MappingProxyType(provider.load_character_map(
            HANYU_PINYIN_FILE, value_transform=split_readings))
        self.hanyu_pinlu_readings = MappingProxyType(provider.load_character_map(
            HANYU_PINLU_FILE, value_transform=split_readings))
        self.xhc_readings = MappingProxyType(provider.load_character_map(
            XHC_FILE, value_transform=split_readings))

        self._sources = [
            ReadingSource(PinyinReadingType.HANYU_PINYIN, self.hanyu_pinyin_readings),
            ReadingSource(PinyinReadingType.HANYU_PINLU, self.hanyu_pinlu_readings),
            ReadingSource(PinyinReadingType.XHC, self.xhc_readings),
        ]

    @property
    def sources(self) -> List[ReadingSource]:
        return self._sources
