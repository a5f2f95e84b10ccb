"""
Romanization: readings and native numerals for non-Latin scripts.
"""

from typing import Optional, Union

from romanization.numerals import NumeralValue, OutputNumeralType, format_numeral
from romanization.readings import ReadingsString
from romanization.systems import (
    NumeralParsingSystem, ReadingsSystem, SystemName, SystemRegistry, create_system,
)

__version__ = "0.1.0"

__all__ = [
    'NumeralValue', 'OutputNumeralType', 'ReadingsString', 'SystemName',
    'SystemRegistry', 'create_system', 'process', 'process_with_readings',
    'romanize', '__version__',
]


def process(
    text: str,
    system: Union[ReadingsSystem, NumeralParsingSystem],
    numeral_type: OutputNumeralType = OutputNumeralType.ARABIC,
) -> str:
    """
    Run text through a system.

    Readings systems return the first reading of each character. Numeral
    systems replace every numeral found in the text, formatted as
    ``numeral_type``.

    Args:
        text: Text to process.
        system: A system instance.
        numeral_type: Output format for numeral systems.

    Returns:
        The processed text.

    Example:
        >>> registry = SystemRegistry()
        >>> process("Δ̅Ι̅Ι̅Ι̅Ι̅", registry.get("attic"), OutputNumeralType.ROMAN)
        'XIV'
    """
    if isinstance(system, NumeralParsingSystem):
        return system.process_numerals_in_text(
            text, lambda value: format_numeral(value, numeral_type))
    return system.process(text)


def process_with_readings(text: str, system: ReadingsSystem) -> ReadingsString:
    """Get every known reading of each character of text."""
    return system.process_with_readings(text)


def romanize(text: str, system: Union[str, SystemName],
             registry: Optional[SystemRegistry] = None) -> str:
    """
    Romanize text with a system looked up by name.

    Convenience wrapper around ``process`` using default options.

    Args:
        text: Text to romanize.
        system: System name or alias (e.g. 'pinyin', 'attic').
        registry: Registry to take the system from. A new one is created
            when omitted, which reloads the system's tables.
    """
    registry = registry if registry is not None else SystemRegistry()
    return process(text, registry.get(system))
