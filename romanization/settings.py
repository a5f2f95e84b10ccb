"""
Settings and configuration for romanization.

Values are read from the environment once, at import time.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DEFAULT_DATA_DIR = PACKAGE_DIR / "data"

# Environment variable for a custom table directory
DATA_DIR = Path(os.environ.get("ROMANIZATION_DATA_DIR", DEFAULT_DATA_DIR))

# Database path - defaults to <data dir>/romanization.db
DB_PATH = Path(os.environ.get("ROMANIZATION_DB_PATH", DATA_DIR / "romanization.db"))

# Character map files (bundled with package)
HANYU_PINYIN_FILE = "HanziHanyuPinyin.csv"
HANYU_PINLU_FILE = "HanziHanyuPinlu.csv"
XHC_FILE = "HanziXHC.csv"
HANJA_HANGEUL_FILE = "HanjaHangeul.csv"

# CSV reading options
CSV_ENCODING = "utf-8"
CSV_COMMENT_PREFIX = "#"

# Multiple readings in one table cell are separated by this
READING_SEPARATOR = " "

# Debug mode
DEBUG = os.environ.get("ROMANIZATION_DEBUG", "").lower() in ("1", "true", "yes")
