"""Active-property store backed by the Supabase ``active_properties`` table."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ..config import settings
from ..db.supabase import ACTIVE_PROPERTIES_TABLE, get_supabase_client
from ..errors import UpstreamUnavailableError
from ..models.domain import CandidateProperty, Coordinate

logger = logging.getLogger(__name__)

# Matches every row; the table has no natural "delete all" filter.
_NIL_UUID = "00000000-0000-0000-0000-000000000000"


def _require_client():
    supabase = get_supabase_client()
    if not supabase:
        raise UpstreamUnavailableError(
            "Supabase not configured. Set LSE_SUPABASE_URL and LSE_SUPABASE_KEY environment variables."
        )
    return supabase


def _row_to_property(row: dict[str, Any]) -> CandidateProperty:
    return CandidateProperty(
        property_id=str(row["id"]),
        name=str(row.get("name") or "Unnamed Property"),
        location=Coordinate(float(row["lat"]), float(row["lng"])),
        branch=str(row["branch"]).strip().lower(),
        active=bool(row.get("is_active", True)),
        address=row.get("address"),
        uploaded_at=row.get("uploaded_at"),
    )


def list_active_properties(branch: str | None = None) -> tuple[CandidateProperty, ...]:
    """Load active properties, optionally restricted to a single branch."""

    supabase = _require_client()
    try:
        query = supabase.table(ACTIVE_PROPERTIES_TABLE).select("*").eq("is_active", True)
        if branch:
            query = query.eq("branch", branch.strip().lower())
        response = query.order("name").execute()
    except Exception as exc:
        logger.error("Failed to fetch active properties: %s", exc)
        raise UpstreamUnavailableError(f"Failed to fetch active properties: {exc}") from exc

    properties: list[CandidateProperty] = []
    for row in response.data or []:
        try:
            properties.append(_row_to_property(row))
        except (KeyError, ValueError, TypeError) as exc:
            logger.warning("Skipping invalid active property row %s: %s", row.get("id"), exc)
    logger.debug("Loaded %d active properties (branch=%s)", len(properties), branch)
    return tuple(properties)


def count_active_properties() -> int:
    supabase = _require_client()
    try:
        response = supabase.table(ACTIVE_PROPERTIES_TABLE).select("id", count="exact").limit(1).execute()
    except Exception as exc:
        raise UpstreamUnavailableError(f"Failed to count active properties: {exc}") from exc
    return int(response.count or 0)


def _batched(records: Sequence[dict], size: int) -> Iterable[Sequence[dict]]:
    for start in range(0, len(records), size):
        yield records[start : start + size]


def replace_active_properties(records: Sequence[dict[str, Any]], batch_size: int | None = None) -> int:
    """Replace the whole active-property set with ``records``.

    Each record carries ``name, address, lat, lng, branch, is_active, uploaded_at``.
    Returns the number of inserted rows.
    """

    supabase = _require_client()
    size = batch_size or settings.import_batch_size

    logger.info("Clearing existing active properties...")
    try:
        supabase.table(ACTIVE_PROPERTIES_TABLE).delete().neq("id", _NIL_UUID).execute()
    except Exception as exc:
        logger.error("Error clearing existing properties: %s", exc)
        raise UpstreamUnavailableError(f"Failed to clear existing properties: {exc}") from exc

    inserted = 0
    total_batches = (len(records) + size - 1) // size
    for batch_number, batch in enumerate(_batched(records, size), start=1):
        try:
            supabase.table(ACTIVE_PROPERTIES_TABLE).insert(list(batch)).execute()
        except Exception as exc:
            logger.error("Error inserting batch %d of %d: %s", batch_number, total_batches, exc)
            raise UpstreamUnavailableError(
                f"Failed to save properties at batch {batch_number} of {total_batches}: {exc}"
            ) from exc
        inserted += len(batch)
        logger.info("Inserted batch %d: %d/%d properties", batch_number, inserted, len(records))
    return inserted
