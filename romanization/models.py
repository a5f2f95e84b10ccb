"""
Pydantic models for romanization results.

These models give the in-memory value types a stable JSON form:

    from romanization.models import ReadingsStringResult, NumeralValueResult

    result = ReadingsStringResult.from_readings_string(
        pinyin.process_with_readings("汉语"))
    print(result.model_dump_json())
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from romanization.numerals import NumeralValue
from romanization.readings import Reading, ReadingCharacter, ReadingsString


def _flag_name(flag: Any) -> str:
    name = getattr(flag, 'name', None)
    return name.lower() if name else str(flag)


class ReadingResult(BaseModel):
    """One reading and the table it came from."""
    type: str = Field(..., description="Reading type name (e.g. 'hanyu_pinyin')")
    value: str = Field(..., description="The reading itself")

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingResult":
        return cls(type=_flag_name(reading.type), value=reading.value)


class ReadingCharacterResult(BaseModel):
    """A character with all of its readings."""
    character: str = Field(..., description="The character as it appears in the input")
    readings: List[ReadingResult] = Field(default_factory=list, description="Readings in priority order")
    flattened: str = Field(..., description="Display form, e.g. '[hàn tān]'")

    @classmethod
    def from_reading_character(cls, rc: ReadingCharacter) -> "ReadingCharacterResult":
        return cls(
            character=rc.character,
            readings=[ReadingResult.from_reading(r) for r in rc.readings],
            flattened=rc.flatten(),
        )


class ReadingsStringResult(BaseModel):
    """Readings for every character of a text."""
    text: str = Field(..., description="The input text")
    characters: List[ReadingCharacterResult] = Field(default_factory=list)
    flattened: str = Field(..., description="All readings, e.g. 'xiàndài [hàn tān]'")
    first_readings: str = Field(..., description="Best-guess romanization")

    @classmethod
    def from_readings_string(cls, rs: ReadingsString) -> "ReadingsStringResult":
        return cls(
            text=rs.text,
            characters=[ReadingCharacterResult.from_reading_character(c) for c in rs],
            flattened=rs.flatten(),
            first_readings=rs.first_readings(),
        )


class NumeralValueResult(BaseModel):
    """A parsed numeral."""
    source: Optional[str] = Field(None, description="The numeral text that was parsed")
    value: str = Field(..., description="Exact value, e.g. '29/2' or '8'")
    decimal: float = Field(..., description="Value as a float")
    unit: Optional[str] = Field(None, description="Unit name, if one was found")

    @classmethod
    def from_numeral_value(cls, nv: NumeralValue,
                           source: Optional[str] = None) -> "NumeralValueResult":
        unit = nv.unit
        if unit is not None:
            unit = getattr(unit, 'value', str(unit))
        return cls(
            source=source,
            value=str(nv.value),
            decimal=float(nv.value),
            unit=unit,
        )
