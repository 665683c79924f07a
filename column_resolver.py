"""
Column Resolver for loosely-named report rows.

Usage report rows arrive with feed-dependent column headers ("appId",
"AppId", "App ID"). Each logical field has an ordered synonym list; the
first synonym carrying a usable value wins.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class LogicalField(str, Enum):
    DATE = "Date"
    SERVICE_AREA = "ServiceArea"
    TENANT_ID = "TenantId"
    APP_ID = "AppId"
    REQUEST_COUNT = "RequestCount"


FIELD_SYNONYMS: Dict[LogicalField, List[str]] = {
    LogicalField.APP_ID: ["appId", "AppId", "App ID", "ApplicationId"],
    LogicalField.DATE: ["reportDate", "ReportDate", "Report Date", "Date"],
    LogicalField.SERVICE_AREA: ["serviceArea", "ServiceArea", "Service Area"],
    LogicalField.TENANT_ID: ["tenantId", "TenantId", "Tenant ID"],
    LogicalField.REQUEST_COUNT: ["requestCount", "RequestCount", "Request Count", "Usage", "Count"],
}


def resolve(row: Mapping[str, Any], synonyms: List[str]) -> Optional[str]:
    """
    Return the first synonym value whose trimmed text is non-empty.

    Args:
        row: Raw row mapping field name to value
        synonyms: Field names in priority order

    Returns:
        The trimmed value, or None when every synonym is missing or blank
    """
    for name in synonyms:
        value = row.get(name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def resolve_raw(row: Mapping[str, Any], synonyms: List[str]) -> Optional[Any]:
    """
    Return the first synonym value that is non-null and non-empty.

    Unlike resolve(), whitespace-only values are accepted and returned as is.
    """
    for name in synonyms:
        value = row.get(name)
        if value is None:
            continue
        if str(value) != "":
            return value
    return None


def resolve_field(row: Mapping[str, Any], field: LogicalField) -> Optional[str]:
    return resolve(row, FIELD_SYNONYMS[field])
