"""
Romanization systems for romanization.

Every supported system is one member of the closed ``SystemName`` set and
implements one of two capability interfaces:

- ``ReadingsSystem``: per-character readings from prioritized tables.
- ``NumeralParsingSystem``: native numerals to values, in isolation or
  embedded in text.

Instances are always built by the caller, either directly, through
``create_system``, or through a ``SystemRegistry`` the caller owns.
"""

import enum
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from romanization.loading.tables import TableProvider
from romanization.numerals import NumeralValue
from romanization.readings import ReadingSource, ReadingsString, resolve

logger = logging.getLogger(__name__)

U = TypeVar('U')


# ============================================================================
# Capability Interfaces
# ============================================================================

class ReadingsSystem(ABC):
    """A system that romanizes by looking up readings of each character."""

    #: The enum.Flag listing every table the system supports.
    reading_types: Type[enum.Flag]

    def __init__(self, readings_to_use: enum.Flag):
        if not isinstance(readings_to_use, self.reading_types):
            raise TypeError(
                f"{type(self).__name__} reads {self.reading_types.__name__} tables, "
                f"got {readings_to_use!r}"
            )
        self.readings_to_use = readings_to_use

    @property
    @abstractmethod
    def sources(self) -> List[ReadingSource]:
        """Loaded tables in priority order."""
        pass

    def process_with_readings(self, text: str) -> ReadingsString:
        """
        Get every known reading of each character of text.

        Only the tables in ``readings_to_use`` contribute.
        """
        return resolve(text, self.readings_to_use, self.sources)

    def process(self, text: str) -> str:
        """
        Romanize text using the first known reading of each character.

        Unrecognized characters are left untouched.
        """
        return self.process_with_readings(text).first_readings()


class NumeralParsingSystem(ABC, Generic[U]):
    """A system that parses a native numeral notation."""

    @abstractmethod
    def process(self, text: str) -> NumeralValue[U]:
        """Parse one numeral into its value and unit."""
        pass

    @abstractmethod
    def process_numerals_in_text(
        self, text: str, numeral_processor: Callable[[NumeralValue[U]], str]
    ) -> str:
        """Replace every numeral found in text with ``numeral_processor``'s output."""
        pass


# ============================================================================
# Closed System Set
# ============================================================================

class UnknownSystemError(KeyError):
    """Raised when a system name is not recognized."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        choices = ', '.join(n.value for n in SystemName)
        return f"Unknown romanization system '{self.name}' (choose from: {choices})"


class SystemName(enum.Enum):
    """All supported systems."""
    HANYU_PINYIN = 'hanyu-pinyin'
    HANJA_READINGS = 'hanja-readings'
    ATTIC_NUMERALS = 'attic-numerals'

    @classmethod
    def parse(cls, name: Union[str, 'SystemName']) -> 'SystemName':
        """
        Look up a system by name or alias.

        Raises:
            UnknownSystemError: If the name is not recognized.
        """
        if isinstance(name, SystemName):
            return name
        key = name.strip().lower().replace('_', '-')
        system = SYSTEM_ALIASES.get(key)
        if system is None:
            raise UnknownSystemError(name)
        return system


SYSTEM_ALIASES: Dict[str, SystemName] = {
    'hanyu-pinyin': SystemName.HANYU_PINYIN,
    'pinyin': SystemName.HANYU_PINYIN,
    'hanja-readings': SystemName.HANJA_READINGS,
    'hanja': SystemName.HANJA_READINGS,
    'attic-numerals': SystemName.ATTIC_NUMERALS,
    'attic': SystemName.ATTIC_NUMERALS,
}

System = Union[ReadingsSystem, NumeralParsingSystem]


def create_system(name: Union[str, SystemName], **options: Any) -> System:
    """
    Build a new system instance.

    Tables are loaded here; a TableLoadError from this call means no
    instance was created.

    Args:
        name: System name or alias.
        **options: Passed to the system's constructor (e.g. ``provider``,
            ``readings_to_use``).

    Returns:
        A freshly constructed system.

    Raises:
        UnknownSystemError: If the name is not recognized.
        TableLoadError: If the system's tables cannot be loaded.
    """
    system_name = SystemName.parse(name)

    if system_name is SystemName.HANYU_PINYIN:
        from romanization.pinyin import HanyuPinyin
        system = HanyuPinyin(**options)
    elif system_name is SystemName.HANJA_READINGS:
        from romanization.hanja import HanjaReadings
        system = HanjaReadings(**options)
    else:
        from romanization.attic import AtticNumerals
        system = AtticNumerals(**options)

    logger.debug(f"Created system {system_name.value}")
    return system


class SystemRegistry:
    """
    Caller-owned cache of system instances.

    Each system is built on first request and reused afterwards.
    Construction is guarded so concurrent first requests build only one
    instance.

    Args:
        provider: Table provider handed to every readings system. Numeral
            systems need no tables and never receive it.
        options: Extra constructor keywords per system, keyed by system
            name or alias, e.g.
            ``{'pinyin': {'readings_to_use': PinyinReadingType.XHC}}``.

    Raises:
        UnknownSystemError: If ``options`` names an unknown system.
    """

    def __init__(self, provider: Optional[TableProvider] = None,
                 options: Optional[Mapping[Union[str, SystemName], Mapping[str, Any]]] = None):
        self.provider = provider
        self.options: Dict[SystemName, Dict[str, Any]] = {
            SystemName.parse(name): dict(system_options)
            for name, system_options in (options or {}).items()
        }
        self._systems: Dict[SystemName, System] = {}
        self._lock = threading.Lock()

    def options_for(self, name: SystemName) -> Dict[str, Any]:
        """Constructor keywords used to build the named system."""
        options = dict(self.options.get(name, {}))
        if self.provider is not None and name is not SystemName.ATTIC_NUMERALS:
            options.setdefault('provider', self.provider)
        return options

    def get(self, name: Union[str, SystemName]) -> System:
        """Get the system, building it if necessary."""
        system_name = SystemName.parse(name)

        system = self._systems.get(system_name)
        if system is not None:
            return system

        with self._lock:
            if system_name not in self._systems:
                self._systems[system_name] = create_system(
                    system_name, **self.options_for(system_name))
            return self._systems[system_name]

    def __contains__(self, name: Union[str, SystemName]) -> bool:
        return SystemName.parse(name) in self._systems

    def clear(self) -> None:
        """Drop every cached instance."""
        with self._lock:
            self._systems.clear()
