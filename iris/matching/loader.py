"""Appetite data loaders — read client profiles and appetite records from
JSON exports of the broker database.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from iris.matching.profiles import AppetiteRecord, ClientProfile

logger = logging.getLogger("iris.matching.loader")


class AppetiteDataError(ValueError):
    """Raised when an input file cannot be read or has the wrong shape."""


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise AppetiteDataError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise AppetiteDataError(f"Invalid JSON in {path}: {exc}") from exc


def load_client_profile(path: str | Path) -> ClientProfile:
    """Load a client profile from *path*.

    The file holds either a bare profile object or a stored client record
    with the profile under ``report_data`` (and the name under
    ``client_name``).
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict):
        raise AppetiteDataError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    if isinstance(data.get("report_data"), dict):
        profile = ClientProfile.from_report_data(data["report_data"], client_name=data.get("client_name"))
    else:
        profile = ClientProfile.from_report_data(data)
    logger.info("Loaded client profile from %s (industry=%r)", path, profile.industry)
    return profile


def load_appetite_records(path: str | Path) -> list[AppetiteRecord]:
    """Load appetite records from *path*.

    Accepts a JSON list of rows, or an object carrying the list under
    ``records`` or ``underwriter_appetites``.  Each row may be flat or a
    guide with nested ``appetite_data`` (see :meth:`AppetiteRecord.from_row`).
    Rows that are not objects are skipped with a warning.
    """
    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict):
        rows = data.get("records", data.get("underwriter_appetites"))
    else:
        rows = data
    if not isinstance(rows, list):
        raise AppetiteDataError(
            f"Expected a list of appetite records in {path} "
            "(top-level list, 'records' or 'underwriter_appetites')"
        )

    records: list[AppetiteRecord] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("Skipping appetite row %d in %s: not an object", index, path)
            continue
        records.append(AppetiteRecord.from_row(row))

    logger.info("Loaded %d appetite records from %s", len(records), path)
    return records
