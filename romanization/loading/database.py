"""
Database-backed character tables for romanization.

Stores character maps in a SQLite database through SQLAlchemy so tables can
be shipped as one file instead of many CSVs.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy import Integer, String, UniqueConstraint, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from romanization.loading.tables import TableLoadError, TableProvider
from romanization.settings import DB_PATH

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class CharacterEntry(Base):
    """One row of a character table."""
    __tablename__ = 'character_entry'
    __table_args__ = (
        UniqueConstraint('table_name', 'ord', name='uq_character_entry_ord'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_name: Mapped[str] = mapped_column(String(128), index=True)
    ord: Mapped[int] = mapped_column(Integer)
    character: Mapped[str] = mapped_column(String(8))
    value: Mapped[str] = mapped_column(String)

    def __repr__(self) -> str:
        return f"CharacterEntry({self.table_name!r}, {self.character!r}, {self.value!r})"


# ============================================================================
# Engine / Session
# ============================================================================

def get_engine(db_path: Optional[Union[str, Path]] = None) -> Engine:
    """
    Create an engine for a SQLite database file.

    Args:
        db_path: Database path, ``":memory:"`` for an in-memory database.
            Defaults to settings.DB_PATH.
    """
    if db_path is None:
        db_path = DB_PATH
    if str(db_path) == ':memory:':
        return create_engine('sqlite://')
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f'sqlite:///{db_path}')


def init_db(engine: Engine) -> None:
    """Create all tables that don't exist yet."""
    Base.metadata.create_all(engine)


def get_session(db_path: Optional[Union[str, Path]] = None) -> Session:
    """Open a session on the database, creating its schema if needed."""
    engine = get_engine(db_path)
    init_db(engine)
    return sessionmaker(bind=engine)()


# ============================================================================
# Provider
# ============================================================================

class DatabaseTableProvider(TableProvider):
    """Reads character tables from the ``character_entry`` table."""

    def __init__(self, session: Session):
        self.session = session

    def read_rows(self, name: str) -> List[Tuple[str, str]]:
        rows = self.session.execute(
            select(CharacterEntry.character, CharacterEntry.value)
            .where(CharacterEntry.table_name == name)
            .order_by(CharacterEntry.ord)
        ).all()

        if not rows:
            raise TableLoadError(name, "no rows in database")
        return [(row.character, row.value) for row in rows]


def import_tables(session: Session, source: TableProvider,
                  names: Iterable[str]) -> Dict[str, int]:
    """
    Copy tables from another provider into the database in one transaction.

    Every table is read before the database is touched, so a missing or
    malformed table leaves the stored rows unchanged. Rows already stored
    under any of the names are replaced.

    Args:
        session: Database session. Committed once on success, rolled back on
            a database error.
        source: Provider to read from, usually a CsvTableProvider.
        names: Table names.

    Returns:
        Number of rows imported per table.

    Raises:
        TableLoadError: If any table cannot be read from ``source``.
    """
    tables = {name: source.read_rows(name) for name in names}

    try:
        for name, rows in tables.items():
            session.execute(delete(CharacterEntry).where(CharacterEntry.table_name == name))
            session.add_all(
                CharacterEntry(table_name=name, ord=i, character=key, value=value)
                for i, (key, value) in enumerate(rows)
            )
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    for name, rows in tables.items():
        logger.info(f"Imported {len(rows)} rows into table {name}")
    return {name: len(rows) for name, rows in tables.items()}


def import_table(session: Session, source: TableProvider, name: str) -> int:
    """
    Copy one table from another provider into the database.

    Any rows already stored under ``name`` are replaced.

    Returns:
        Number of rows imported.
    """
    return import_tables(session, source, [name])[name]
