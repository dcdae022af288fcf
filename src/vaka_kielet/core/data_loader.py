from __future__ import annotations

import io
import logging
import math
import re
import time
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import pandas as pd
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from vaka_kielet.config import (
    AREA_COLUMNS,
    BASELINE_AREA_NAME,
    CSV_DELIMITER,
    FOREIGN_COLUMN,
    HTTP_TIMEOUT_SECONDS,
    TOTAL_COLUMN,
)
from vaka_kielet.core.normalize import normalize

logger = logging.getLogger(__name__)

Source = Union[str, Path]

# Shown to the user whenever a load fails, whatever the cause
LOAD_FAILED_MESSAGE = (
    "Datan lataus epäonnistui. Tarkista että paivakoti_kielet.csv on saatavilla "
    "ja että tiedoston nimi on oikein."
)

BASELINE_KEY = normalize(BASELINE_AREA_NAME)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class LoadError(Exception):
    """Raised when the dataset cannot be fetched or parsed as a whole."""

    def __init__(self, message: str, *, user_message: str = LOAD_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.user_message = user_message


class FetchError(LoadError):
    """Source unreachable, unreadable or answered with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(LoadError):
    """Raw text could not be tokenized into a header + rows table."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AreaRecord:
    """
    One area (municipality, or the KOKO MAA aggregate) from the dataset.

    foreign_language_share is derived once from the two counts and is a
    percentage (0..100, or above 100 if the source says so).
    """
    area_name: str
    total_children: float
    foreign_language_children: float
    foreign_language_share: float = field(init=False)

    def __post_init__(self) -> None:
        share = self.foreign_language_children / self.total_children * 100
        object.__setattr__(self, "foreign_language_share", share)

    @property
    def key(self) -> str:
        return normalize(self.area_name)

    @property
    def is_baseline(self) -> bool:
        return self.key == BASELINE_KEY


@dataclass(frozen=True)
class Dataset:
    records: Tuple[AreaRecord, ...] = ()
    source: str = ""

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[AreaRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def baseline(self) -> Optional[AreaRecord]:
        for rec in self.records:
            if rec.is_baseline:
                return rec
        return None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "alue": r.area_name,
                    "kaikki": r.total_children,
                    "vieraskieliset": r.foreign_language_children,
                    "osuus": r.foreign_language_share,
                }
                for r in self.records
            ],
            columns=["alue", "kaikki", "vieraskieliset", "osuus"],
        )


EMPTY_DATASET = Dataset()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def _build_retry_session() -> requests.Session:
    """
    Build a requests Session with conservative retries for transient errors.
    Status errors are not raised by urllib3; they are reported by the caller.
    """
    session = requests.Session()

    retry = Retry(
        total=3,
        connect=3,
        read=3,
        status=3,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session


_SESSION: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is None:
        _SESSION = _build_retry_session()
    return _SESSION


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _decode(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    return text[1:] if text.startswith("\ufeff") else text


def fetch_dataset_text(source: Source, timeout_seconds: int = HTTP_TIMEOUT_SECONDS) -> str:
    """
    Return the raw CSV text behind `source` (an http(s) URL or a local path).
    """
    if _is_url(source):
        try:
            resp = _get_session().get(str(source), timeout=timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"CSV lataus epäonnistui ({exc})") from exc

        if not resp.ok:
            raise FetchError(
                f"CSV lataus epäonnistui ({resp.status_code})",
                status_code=resp.status_code,
            )
        return _decode(resp.content)

    path = Path(source)
    try:
        return _decode(path.read_bytes())
    except OSError as exc:
        raise FetchError(f"CSV lataus epäonnistui ({path}: {exc.strerror or exc})") from exc


# ---------------------------------------------------------------------------
# Parsing & validation
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def coerce_number(value: Any) -> float:
    """
    Numeric value of a count cell: a blank cell counts as 0, a missing cell
    or anything that is not a plain decimal number is NaN.
    """
    if value is None:
        return math.nan
    try:
        if pd.isna(value):
            return math.nan
    except (TypeError, ValueError):
        pass

    text = str(value).strip()
    if text == "":
        return 0.0

    if _DECIMAL_RE.match(text):
        return float(text)
    return math.nan


def _as_count(x: float) -> float:
    return int(x) if float(x).is_integer() else x


def _cell(row: Dict[str, Any], col: str) -> Optional[Any]:
    val = row.get(col)
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    return val


def _area_value(row: Dict[str, Any]) -> Optional[str]:
    # First *present* spelling wins, even when its value is blank
    for col in AREA_COLUMNS:
        val = _cell(row, col)
        if val is not None:
            return str(val)
    return None


def build_record(row: Dict[str, Any]) -> Optional[AreaRecord]:
    """
    Validate one parsed CSV row. Returns None when the row must be dropped.
    """
    area = _area_value(row)
    if area is None or not area.strip():
        return None

    total = coerce_number(_cell(row, TOTAL_COLUMN))
    if not math.isfinite(total) or total <= 0:
        return None

    foreign = coerce_number(_cell(row, FOREIGN_COLUMN))
    if not math.isfinite(foreign) or foreign < 0:
        return None

    return AreaRecord(
        area_name=area.strip(),
        total_children=_as_count(total),
        foreign_language_children=_as_count(foreign),
    )


def _read_table(text: str) -> pd.DataFrame:
    # Only the header line decides the table width; a broken header is fatal,
    # a broken data row is not
    header_line = next(line for line in text.splitlines() if line.strip())
    header = pd.read_csv(io.StringIO(header_line), sep=CSV_DELIMITER, nrows=0, dtype=str)
    width = len(header.columns)

    # Over-long rows keep their leading fields instead of failing the load
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        return pd.read_csv(
            io.StringIO(text),
            sep=CSV_DELIMITER,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )


def parse_dataset(text: str, source: str = "") -> Dataset:
    """
    Turn raw semicolon-delimited text into a Dataset.

    Rows are validated one by one; invalid rows are dropped and counted,
    never reported individually. Text with no header at all gives an
    empty Dataset.
    """
    if not text.strip():
        return Dataset(records=(), source=source)

    try:
        df = _read_table(text)
    except pd.errors.EmptyDataError:
        return Dataset(records=(), source=source)
    except (pd.errors.ParserError, ValueError) as exc:
        raise ParseError(f"CSV-tiedoston jäsennys epäonnistui: {exc}") from exc

    records: List[AreaRecord] = []
    dropped = 0
    for row in df.to_dict(orient="records"):
        rec = build_record(row)
        if rec is None:
            dropped += 1
            continue
        records.append(rec)

    logger.info(
        "Parsed dataset from %s: %d rows accepted, %d rows dropped.",
        source or "<text>", len(records), dropped,
    )
    return Dataset(records=tuple(records), source=source)


def load_dataset(source: Source, timeout_seconds: int = HTTP_TIMEOUT_SECONDS) -> Dataset:
    """
    Fetch, parse and validate the dataset behind `source`.

    Raises:
      - FetchError: source unreachable / non-success HTTP status
      - ParseError: text is not a readable delimited table
    An empty Dataset is a successful outcome, not an error.
    """
    logger.info("Loading dataset from %s", source)
    text = fetch_dataset_text(source, timeout_seconds=timeout_seconds)
    dataset = parse_dataset(text, source=str(source))

    if not dataset.is_empty and dataset.baseline is None:
        logger.warning(
            "Dataset from %s has no %r row; national comparison disabled.",
            source, BASELINE_AREA_NAME,
        )
    return dataset


def timed_load_dataset(
    source: Source,
    timeout_seconds: int = HTTP_TIMEOUT_SECONDS,
) -> Tuple[Dataset, float]:
    """
    Convenience helper for UI timing logs.
    """
    t0 = time.perf_counter()
    dataset = load_dataset(source, timeout_seconds=timeout_seconds)
    return dataset, (time.perf_counter() - t0)
