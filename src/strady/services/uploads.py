from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from strady.adapters.logging_utils import get_logger
from strady.adapters.storage import commit_staged, read_rate_rows, stage_stream
from strady.domain.errors import RateFileError, UploadFailedError
from strady.domain.rates import RateTable, RateTableStore

logger = get_logger(__name__)


def receive_rates_upload(stream: BinaryIO, store: RateTableStore, *, filename: str | None = None) -> RateTable:
    """
    Persist an uploaded rate file to the store's fixed path, then reload.

    Steps, in order:
      1) stage: copy the upload to a temp file beside `store.path`
      2) check: the staged file must parse as a rate table
      3) commit: move it over the single slot at `store.path`
      4) reload: synchronously, only after the commit

    A write failure raises UploadFailedError, an unreadable file raises
    RateFileError. Either way the slot and the current table are untouched.
    """
    dest: Path = store.path
    logger.info(
        "New rate file uploaded",
        extra={"context": {"upload_name": filename, "dest": str(dest)}},
    )

    try:
        staged = stage_stream(stream, dest)
    except OSError as e:
        logger.error(
            "Rate file write failed",
            extra={"context": {"dest": str(dest), "error": str(e)}},
        )
        raise UploadFailedError(f"could not store rate file: {e}") from e

    try:
        read_rate_rows(staged)
    except RateFileError as e:
        staged.unlink(missing_ok=True)
        logger.warning(
            "Rejected unreadable rate file",
            extra={"context": {"upload_name": filename, "error": str(e)}},
        )
        raise

    try:
        size = commit_staged(staged, dest)
    except OSError as e:
        logger.error(
            "Rate file write failed",
            extra={"context": {"dest": str(dest), "error": str(e)}},
        )
        raise UploadFailedError(f"could not store rate file: {e}") from e

    logger.info("Rate file stored", extra={"context": {"dest": str(dest), "bytes": size}})
    return store.reload()
