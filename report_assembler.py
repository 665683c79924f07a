"""
Report Assembler for the App Usage Report.
Normalizes every raw row in input order and computes the summary block.
"""

import logging
from typing import Any, Callable, List, Mapping, Sequence

from error_handling import handle_pipeline_phase, DataTransformationError
from models import Report, ReportRecord, ReportSummary
from name_cache import NameCache
from record_normalizer import normalize
from validators import validate_raw_rows

logger = logging.getLogger(__name__)


def summarize(records: List[ReportRecord]) -> ReportSummary:
    """
    Compute record count, distinct applications and the date range.

    Dates are opaque feed strings, so min/max use plain string ordering.
    """
    dates = [record.date for record in records if record.date is not None]

    return ReportSummary(
        total_records=len(records),
        distinct_apps=len({record.app_id for record in records}),
        date_min=min(dates) if dates else None,
        date_max=max(dates) if dates else None
    )


@handle_pipeline_phase(phase_name="ASSEMBLE", error_cls=DataTransformationError)
def assemble(rows: Sequence[Mapping[str, Any]], lookup: Callable[[str], str]) -> Report:
    """
    Build a Report from raw usage rows.

    Args:
        rows: Raw rows in feed order
        lookup: Directory lookup resolving AppId to a display name

    Returns:
        Report with records in input order and its summary
    """
    logger.info(f"[ASSEMBLE] Normalizing {len(rows)} raw rows...")

    valid_rows, invalid_rows = validate_raw_rows(list(rows))
    cache = NameCache()
    records: List[ReportRecord] = []
    skipped = len(invalid_rows)

    for idx, row in enumerate(valid_rows):
        try:
            record = normalize(row, cache, lookup)
        except Exception as exc:
            skipped += 1
            logger.warning(
                "[ASSEMBLE] Failed to normalize row %d: %s",
                idx,
                exc,
            )
            continue

        if record is None:
            skipped += 1
            logger.warning("[ASSEMBLE] Row %d has no AppId, skipping", idx)
            continue

        records.append(record)

    if skipped:
        logger.warning("[ASSEMBLE] Skipped %d rows during assembly", skipped)

    summary = summarize(records)
    logger.info(
        f"[ASSEMBLE] Assembly complete: {summary.total_records} records, "
        f"{summary.distinct_apps} distinct apps, {cache.fetch_count} directory lookups"
    )
    return Report(records=records, summary=summary, skipped_rows=skipped)
