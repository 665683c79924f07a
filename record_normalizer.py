"""
Record Normalizer: turns one raw usage row into a typed ReportRecord.
"""

import logging
import re
from typing import Any, Callable, Mapping, Optional

from column_resolver import FIELD_SYNONYMS, LogicalField, resolve_field, resolve_raw
from models import ReportRecord
from name_cache import NameCache

logger = logging.getLogger(__name__)


USAGE_PATTERN = re.compile(r'^\s*-?[0-9]+\s*$')


def parse_usage(raw_value: Any) -> int:
    """
    Parse a request count, falling back to 0 when it is not an integer.

    Text must be decimal digits with an optional minus sign ("+5" and "1_000" are
    rejected). Native JSON numbers count when integral (50.0 -> 50).
    """
    if raw_value is None or isinstance(raw_value, bool):
        return 0
    if isinstance(raw_value, int):
        return max(raw_value, 0)
    if isinstance(raw_value, float):
        return max(int(raw_value), 0) if raw_value.is_integer() else 0

    text = str(raw_value)
    if not USAGE_PATTERN.match(text):
        logger.debug(f"Unparsable usage value {raw_value!r}, defaulting to 0")
        return 0
    return max(int(text), 0)


def normalize(
    row: Mapping[str, Any],
    cache: NameCache,
    lookup: Callable[[str], str]
) -> Optional[ReportRecord]:
    """
    Normalize a raw row into a ReportRecord.

    Args:
        row: Raw row with feed-dependent column names
        cache: Name cache owned by the current run
        lookup: Directory lookup used on cache misses

    Returns:
        ReportRecord, or None when the row has no usable AppId
    """
    app_id = resolve_field(row, LogicalField.APP_ID)
    if app_id is None:
        return None

    date = resolve_field(row, LogicalField.DATE)
    service_area = resolve_field(row, LogicalField.SERVICE_AREA)
    tenant_id = resolve_field(row, LogicalField.TENANT_ID)

    # Whitespace counts as a value here; " " then fails to parse and becomes 0.
    usage = parse_usage(resolve_raw(row, FIELD_SYNONYMS[LogicalField.REQUEST_COUNT]))

    app_name = cache.get_or_fetch(app_id, lookup) or app_id

    return ReportRecord(
        date=date,
        service_area=service_area,
        tenant_id=tenant_id,
        app_id=app_id,
        app_name=app_name,
        usage=usage
    )
