import io
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

import pandas as pd

from strady.domain.errors import RateFileError

RateRow = dict[str, str]

RATE_FILE_MODE = 0o644


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_rate_rows(path: Path) -> tuple[list[RateRow], int]:
    """
    Parse a delimited rate file into one dict per data row.

    The header row names the fields. Every value stays a string (no numeric
    coercion, empty cells are ""). Rows with a wrong field count are dropped;
    the second element of the result is how many were dropped.

    Raises RateFileError when the file is not UTF-8 or cannot be tokenized.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise RateFileError(f"rate file is not valid UTF-8: {e}") from e

    skipped = 0

    def _skip_bad_line(fields: list[str]) -> None:
        nonlocal skipped
        skipped += 1
        return None

    # header=None: the first line fixes the row width, so longer rows go to
    # _skip_bad_line instead of being read as an implicit index
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.EmptyDataError:
        return [], 0
    except pd.errors.ParserError as e:
        raise RateFileError(f"rate file could not be parsed: {e}") from e

    header = [str(name) for name in df.iloc[0]]

    rows: list[RateRow] = []
    for values in df.iloc[1:].itertuples(index=False, name=None):
        # short rows come back padded with missing values
        if not all(isinstance(v, str) for v in values):
            skipped += 1
            continue
        rows.append(dict(zip(header, values)))

    # an unclosed quote swallows every line after it into one field
    if text.count('"') % 2:
        data_lines = sum(1 for line in text.splitlines() if line.strip()) - 1
        skipped += max(data_lines - len(rows) - skipped, 0)

    return rows, skipped


def stage_stream(stream: BinaryIO, dest: Path, *, chunk_size: int = 1024 * 1024) -> Path:
    """
    Copy `stream` into a temp file next to `dest` and return its path.

    Nothing at `dest` changes until commit_staged() is called.
    """
    fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=f".{dest.name}.", suffix=".part")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(stream, out, chunk_size)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return tmp


def commit_staged(tmp: Path, dest: Path) -> int:
    """Move a staged file over `dest`. Returns the size of the new file."""
    try:
        os.replace(tmp, dest)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    # mkstemp files are 0600
    os.chmod(dest, RATE_FILE_MODE)
    return dest.stat().st_size
