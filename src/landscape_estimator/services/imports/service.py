"""Bulk import of active properties from CSV or Excel uploads."""

from __future__ import annotations

import csv
import io
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence

from openpyxl import load_workbook

from ...config import settings
from ...data.branches import EXPECTED_BRANCH_NAMES, normalize_branch
from ...data.properties_repository import replace_active_properties
from ...errors import InvalidArgumentError
from ...models.domain import ImportSummary
from ..maps import GeocodeResult

logger = logging.getLogger(__name__)

NAME_COLUMNS = ("name", "job_name", "property_name")
ADDRESS_COLUMNS = ("address", "property_address")
BRANCH_COLUMNS = ("branch", "service_branch")
SUPPORTED_SUFFIXES = {".csv", ".xlsx"}


class Geocoder(Protocol):
    def geocode(self, address: str) -> Optional[GeocodeResult]: ...


def normalize_header(header: Any) -> str:
    return re.sub(r"\s+", "_", str(header or "").strip().lower())


def _first_value(row: dict[str, str], columns: Sequence[str]) -> str:
    for column in columns:
        value = row.get(column)
        if value:
            return str(value).strip()
    return ""


def _read_csv(content: bytes) -> list[dict[str, str]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidArgumentError("Failed to parse CSV: file is not UTF-8 encoded.") from exc
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if not header:
        raise InvalidArgumentError("Failed to parse CSV: missing header row.")
    headers = [normalize_header(name) for name in header]
    rows: list[dict[str, str]] = []
    for values in reader:
        if not any(value.strip() for value in values):
            continue
        rows.append({name: value for name, value in zip(headers, values)})
    return rows


def _read_xlsx(content: bytes) -> list[dict[str, str]]:
    workbook = load_workbook(filename=io.BytesIO(content), read_only=True, data_only=True)
    worksheet = workbook.active
    values = worksheet.iter_rows(values_only=True)
    header = next(values, None)
    if header is None:
        raise InvalidArgumentError("Uploaded workbook is empty.")
    headers = [normalize_header(cell) for cell in header]
    rows: list[dict[str, str]] = []
    for row in values:
        cells = ["" if cell is None else str(cell) for cell in row]
        if not any(cell.strip() for cell in cells):
            continue
        rows.append({name: cell for name, cell in zip(headers, cells)})
    return rows


def read_rows(content: bytes, filename: str) -> list[dict[str, str]]:
    """Parse an upload into rows keyed by normalised header."""

    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise InvalidArgumentError("Only .csv and .xlsx files are supported.")
    if suffix == ".csv":
        return _read_csv(content)
    return _read_xlsx(content)


def _check_columns(rows: Sequence[dict[str, str]]) -> None:
    headers = set(rows[0]) if rows else set()
    missing = []
    if not headers.intersection(NAME_COLUMNS):
        missing.append("name (or job_name)")
    if not headers.intersection(ADDRESS_COLUMNS):
        missing.append("address")
    if not headers.intersection(BRANCH_COLUMNS):
        missing.append("branch")
    if missing:
        raise InvalidArgumentError(f"Missing required columns: {', '.join(missing)}")


def _skip_reason(address: str, raw_branch: str) -> str:
    if not address:
        return "Missing address"
    return f'Invalid branch: "{raw_branch or "MISSING"}"'


def geocode_addresses(
    addresses: Sequence[str],
    geocoder: Geocoder,
    *,
    delay_seconds: float | None = None,
    pause_every: int | None = None,
    pause_seconds: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> list[Optional[GeocodeResult]]:
    """Geocode sequentially, pacing requests to stay under provider rate limits."""

    delay = settings.geocode_delay_seconds if delay_seconds is None else delay_seconds
    every = pause_every or settings.geocode_pause_every
    pause = settings.geocode_pause_seconds if pause_seconds is None else pause_seconds

    logger.info("Starting geocoding for %d addresses...", len(addresses))
    results: list[Optional[GeocodeResult]] = []
    for index, address in enumerate(addresses):
        if index and index % every == 0:
            logger.info("Geocoded %d/%d addresses...", index, len(addresses))
            if pause:
                sleep(pause)
        try:
            results.append(geocoder.geocode(address))
        except (ConnectionError, KeyError, ValueError) as exc:
            logger.error("Failed to geocode address %d: %s (%s)", index, address, exc)
            results.append(None)
        if delay:
            sleep(delay)
    found = sum(1 for result in results if result is not None)
    logger.info("Geocoding complete. Successfully geocoded %d/%d addresses.", found, len(addresses))
    return results


def import_active_properties(
    content: bytes,
    filename: str,
    *,
    geocoder: Geocoder,
    store: Callable[[Sequence[dict[str, Any]]], int] = replace_active_properties,
    sleep: Callable[[float], None] = time.sleep,
) -> ImportSummary:
    """Parse, validate, geocode and store an active-property upload.

    The store always receives the complete new set; previous rows are replaced,
    never merged.
    """

    rows = read_rows(content, filename)
    if not rows:
        raise InvalidArgumentError("Uploaded file contains no rows.")
    _check_columns(rows)

    valid: list[tuple[dict[str, str], str]] = []
    skipped: list[dict[str, str]] = []
    unknown_branches: set[str] = set()
    for row in rows:
        address = _first_value(row, ADDRESS_COLUMNS)
        raw_branch = _first_value(row, BRANCH_COLUMNS)
        branch = normalize_branch(raw_branch)
        if address and branch:
            valid.append((row, branch))
            continue
        if raw_branch and not branch:
            unknown_branches.add(raw_branch)
        skipped.append(
            {
                "name": _first_value(row, NAME_COLUMNS) or "UNNAMED",
                "address": address or "MISSING",
                "branch": raw_branch or "MISSING",
                "issue": _skip_reason(address, raw_branch),
            }
        )

    if skipped:
        logger.info("Found %d invalid rows. Examples: %s", len(skipped), skipped[:5])
    if not valid:
        raise InvalidArgumentError(
            f"No valid properties found. All {len(rows)} rows have issues. "
            f"Expected branch names: {', '.join(EXPECTED_BRANCH_NAMES)}"
        )

    logger.info("Processing %d valid properties for geocoding...", len(valid))
    addresses = [_first_value(row, ADDRESS_COLUMNS) for row, _ in valid]
    geocoded = geocode_addresses(addresses, geocoder, sleep=sleep)

    uploaded_at = datetime.now(timezone.utc).isoformat()
    records: list[dict[str, Any]] = []
    failed: list[dict[str, str]] = []
    for (row, branch), address, result in zip(valid, addresses, geocoded):
        name = _first_value(row, NAME_COLUMNS) or "Unnamed Property"
        if result is None:
            failed.append({"name": name, "address": address, "reason": "Failed to geocode address"})
            continue
        records.append(
            {
                "name": name,
                "address": address,
                "lat": result.location.latitude,
                "lng": result.location.longitude,
                "branch": branch,
                "is_active": True,
                "uploaded_at": uploaded_at,
            }
        )

    imported = store(records)
    logger.info(
        "Import complete: %d successful, %d failed geocoding, %d invalid rows",
        imported,
        len(failed),
        len(skipped),
    )
    return ImportSummary(
        imported=imported,
        failed=len(failed),
        skipped=len(skipped),
        total=len(rows),
        failed_rows=failed,
        message=_summary_message(imported, skipped, unknown_branches),
    )


def _summary_message(imported: int, skipped: Iterable[dict[str, str]], unknown_branches: set[str]) -> str:
    skipped = list(skipped)
    if not skipped:
        return f"Successfully imported {imported} properties"
    reasons = []
    missing_addresses = sum(1 for row in skipped if row["address"] == "MISSING")
    if missing_addresses:
        reasons.append(f"{missing_addresses} missing addresses")
    if unknown_branches:
        reasons.append(f"unrecognized branches: {', '.join(sorted(unknown_branches)[:5])}")
    detail = f" ({', '.join(reasons)})" if reasons else ""
    return f"Imported {imported} properties. Skipped {len(skipped)} rows{detail}."
