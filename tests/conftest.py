"""
Shared fixtures for the romanization tests.
"""

import pytest

from romanization.attic import AtticNumerals
from romanization.hanja import HanjaReadings
from romanization.loading.database import get_session
from romanization.loading.tables import CsvTableProvider
from romanization.pinyin import HanyuPinyin
from romanization.settings import DEFAULT_DATA_DIR


@pytest.fixture(scope="session")
def bundled_provider():
    """Provider reading the CSV tables shipped with the package."""
    return CsvTableProvider(DEFAULT_DATA_DIR)


@pytest.fixture(scope="session")
def pinyin(bundled_provider):
    return HanyuPinyin(provider=bundled_provider)


@pytest.fixture(scope="session")
def hanja(bundled_provider):
    return HanjaReadings(provider=bundled_provider)


@pytest.fixture(scope="session")
def attic():
    return AtticNumerals()


@pytest.fixture
def db_session():
    """In-memory database session."""
    session = get_session(':memory:')
    yield session
    session.close()


@pytest.fixture
def write_table(tmp_path):
    """Write a CSV table into a temporary data directory."""
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return path
    return _write
