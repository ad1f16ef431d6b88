"""
Delimited-text ingestion.

Reads CSV files into immutable RawRow tuples. The first non-empty row is
the header and is skipped. Columns are mapped by position, so files
whose columns are ordered differently can be remapped onto index, d1, d2.
"""

import csv
import io
from pathlib import Path
from typing import Sequence, Tuple, Union

from .types import RawRow, Ok, Err, IngestError


FIELDS = ("index", "d1", "d2")

# Column layouts of the bundled datasets, in file order.
DATA_COLUMNS: Tuple[str, ...] = ("index", "d1", "d2")
DATA_1_COLUMNS: Tuple[str, ...] = ("d1", "d2", "index")

DATA_DIR = Path(__file__).parent / "data"

DATASETS: dict[str, Tuple[Path, Tuple[str, ...]]] = {
    "data": (DATA_DIR / "data.csv", DATA_COLUMNS),
    "data_1": (DATA_DIR / "data_1.csv", DATA_1_COLUMNS),
}


class MalformedRowError(ValueError):
    """A data row does not have one value per column."""


def validate_columns(columns: Sequence[str]) -> None:
    """
    Check that a column layout names index, d1 and d2 exactly once.

    Raises:
        ValueError: If the layout is not a permutation of the fields
    """
    if sorted(columns) != sorted(FIELDS):
        raise ValueError(f"Columns must be a permutation of {FIELDS}, got {tuple(columns)}")


def parse_rows(text: str, columns: Sequence[str] = DATA_COLUMNS) -> Tuple[RawRow, ...]:
    """
    Parse CSV text into raw rows.

    Args:
        text: Full CSV document including a header row
        columns: Field name for each column, in file order

    Returns:
        Tuple of RawRow with string fields, in file order

    Raises:
        ValueError: If columns is not a permutation of index, d1, d2
        MalformedRowError: If a row has the wrong number of values
    """
    validate_columns(columns)

    reader = csv.reader(io.StringIO(text))
    rows = []
    header_skipped = False
    for record in reader:
        if not record:
            continue
        if not header_skipped:
            header_skipped = True
            continue
        if len(record) != len(columns):
            raise MalformedRowError(
                f"Line {reader.line_num}: expected {len(columns)} values, got {len(record)}"
            )
        values = dict(zip(columns, record))
        rows.append(RawRow(index=values["index"], d1=values["d1"], d2=values["d2"]))

    return tuple(rows)


def load_rows(path: Path, columns: Sequence[str] = DATA_COLUMNS) -> Union[Ok, Err]:
    """
    Read a CSV file into raw rows.

    Args:
        path: CSV file to read
        columns: Field name for each column, in file order

    Returns:
        Ok(tuple of RawRow) on success, Err on failure
    """
    path = Path(path)

    if not path.exists():
        return Err(IngestError.FILE_NOT_FOUND, f"File not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(IngestError.READ_FAILED, f"Read failed: {e}")

    try:
        return Ok(parse_rows(text, columns))
    except MalformedRowError as e:
        return Err(IngestError.MALFORMED_ROW, f"{path}: {e}")
    except ValueError as e:
        return Err(IngestError.UNKNOWN_COLUMN, str(e))


def load_dataset(name: str) -> Union[Ok, Err]:
    """Load one of the bundled datasets by name."""
    if name not in DATASETS:
        return Err(IngestError.FILE_NOT_FOUND, f"Unknown dataset: {name}")
    path, columns = DATASETS[name]
    return load_rows(path, columns)
