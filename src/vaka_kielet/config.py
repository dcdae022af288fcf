from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

# Root of the project (repo root)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Data directory (the CSV is expected here unless a URL is configured)
DATA_DIR = PROJECT_ROOT / "data"

# ---------------------------------------------------------------------------
# App identity
# ---------------------------------------------------------------------------

APP_NAME = "Vieraskieliset varhaiskasvatuksessa"
APP_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Dataset source
#
# The dataset is a semicolon-delimited CSV published by Tilastokeskus
# (Statistics Finland), one row per municipality plus a "KOKO MAA" row.
#
# Either serve it over HTTP(S) and point VAKA_DATASET_URL at it, or drop the
# file at data/paivakoti_kielet.csv (override with VAKA_DATASET_PATH).
# A configured URL always wins over the local path.
# ---------------------------------------------------------------------------

DATASET_FILENAME = "paivakoti_kielet.csv"

DATASET_URL = os.getenv("VAKA_DATASET_URL", "").strip()
DATASET_PATH = Path(
    os.getenv("VAKA_DATASET_PATH", "").strip() or (DATA_DIR / DATASET_FILENAME)
)
DATASET_SOURCE = DATASET_URL or str(DATASET_PATH)

HTTP_TIMEOUT_SECONDS = int(os.getenv("VAKA_HTTP_TIMEOUT", "30").strip() or 30)

LOG_LEVEL = os.getenv("VAKA_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# ---------------------------------------------------------------------------
# Dataset layout
# ---------------------------------------------------------------------------

CSV_DELIMITER = ";"

# Accepted spellings of the area column, tried in this order
AREA_COLUMNS = ("alue", "Alue", "ALUE")
TOTAL_COLUMN = "kaikki"
FOREIGN_COLUMN = "vieraskieliset"

# Area name of the national aggregate row
BASELINE_AREA_NAME = "KOKO MAA"

# Maximum number of suggestions shown under the search box
SUGGESTION_LIMIT = 8
