"""
Command line interface for romanization.

Usage:
    python -m romanization.cli -s pinyin "汉语"           # first readings
    python -m romanization.cli -s pinyin -r "汉语"        # all readings
    python -m romanization.cli -s pinyin -j "汉语"        # full JSON
    python -m romanization.cli -s attic -n roman "Δ̅Ι̅Ι̅Ι̅Ι̅"  # numerals in text
    python -m romanization.cli import-db                 # CSV tables -> SQLite
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from romanization import __version__, process
from romanization.loading.database import DatabaseTableProvider, get_session, import_tables
from romanization.loading.tables import CsvTableProvider, TableLoadError
from romanization.models import NumeralValueResult, ReadingsStringResult
from romanization.numerals import OutputNumeralType
from romanization.settings import (
    DATA_DIR, DB_PATH, DEBUG, HANJA_HANGEUL_FILE, HANYU_PINLU_FILE,
    HANYU_PINYIN_FILE, XHC_FILE,
)
from romanization.systems import (
    NumeralParsingSystem, SystemName, SystemRegistry, UnknownSystemError,
)

logger = logging.getLogger(__name__)

# Tables copied by import-db
BUNDLED_TABLES = (HANYU_PINYIN_FILE, HANYU_PINLU_FILE, XHC_FILE, HANJA_HANGEUL_FILE)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose or DEBUG else logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def import_db_command(args) -> int:
    """Copy the CSV tables into the SQLite database."""
    source = CsvTableProvider(args.data_dir)
    db_path = Path(args.output) if args.output else DB_PATH

    session = get_session(db_path)
    try:
        counts = import_tables(session, source, BUNDLED_TABLES)
    except TableLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        session.close()

    print(f"Imported {sum(counts.values()):,} rows from {len(counts)} tables into {db_path}")
    return 0


def main_import_db(args: list) -> int:
    """CLI entry point for import-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Copy the character tables into a SQLite database',
        prog='romanization import-db',
    )

    parser.add_argument(
        '--data-dir',
        type=str,
        default=str(DATA_DIR),
        metavar='PATH',
        help='Directory holding the CSV tables',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help=f'Output database path (default: {DB_PATH})',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    return import_db_command(parsed)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Romanize text written in non-Latin scripts',
        prog='romanization',
        epilog='Subcommands:\n  romanization import-db    Copy CSV tables into a SQLite database',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Text to romanize',
    )

    parser.add_argument(
        '-s', '--system',
        type=str,
        default=SystemName.HANYU_PINYIN.value,
        metavar='NAME',
        help='System to use: ' + ', '.join(n.value for n in SystemName)
             + f' (default: {SystemName.HANYU_PINYIN.value})',
    )

    parser.add_argument(
        '-r', '--readings',
        action='store_true',
        help='Show all readings of each character',
    )

    parser.add_argument(
        '-j', '--json',
        action='store_true',
        help='Full result as JSON',
    )

    parser.add_argument(
        '-n', '--numerals',
        choices=[t.value for t in OutputNumeralType],
        default=OutputNumeralType.ARABIC.value,
        help='How numerals are written (default: arabic)',
    )

    parser.add_argument(
        '--data-dir',
        type=str,
        default=None,
        metavar='PATH',
        help='Directory holding the CSV tables',
    )

    parser.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Read tables from a SQLite database instead of CSV files',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'import-db':
        return main_import_db(args_list[1:])

    parser = build_parser()
    parsed = parser.parse_args(args_list)

    if parsed.version:
        print(f'romanization {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''
    if not text:
        parser.print_help()
        return 1

    setup_logging(parsed.verbose)

    session = None
    try:
        if parsed.database:
            session = get_session(parsed.database)
            provider = DatabaseTableProvider(session)
        else:
            provider = CsvTableProvider(parsed.data_dir)

        system = SystemRegistry(provider=provider).get(parsed.system)
    except (UnknownSystemError, TableLoadError) as e:
        print(f'Error: {e}', file=sys.stderr)
        if session is not None:
            session.close()
        return 1

    try:
        if isinstance(system, NumeralParsingSystem):
            if parsed.readings:
                print(f"Error: {parsed.system} has no readings", file=sys.stderr)
                return 1
            if parsed.json:
                result = NumeralValueResult.from_numeral_value(system.process(text), source=text)
                print(json.dumps(result.model_dump(), ensure_ascii=False))
            else:
                print(process(text, system, OutputNumeralType(parsed.numerals)))
        elif parsed.json:
            result = ReadingsStringResult.from_readings_string(system.process_with_readings(text))
            print(json.dumps(result.model_dump(), ensure_ascii=False))
        elif parsed.readings:
            print(system.process_with_readings(text).flatten())
        else:
            print(system.process(text))
        return 0
    finally:
        if session is not None:
            session.close()


if __name__ == '__main__':
    sys.exit(main())
