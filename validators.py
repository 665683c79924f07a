"""
Pydantic Validation Models for the App Usage Report.
Provides input validation for CLI parameters and raw report rows.
"""

import logging
from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ReportRequestParams(BaseModel):
    """Validation model for report request parameters."""

    lookback_days: int = Field(
        default=30,
        ge=1,
        description="Reporting window in days",
    )
    output_path: Optional[str] = Field(
        default=None,
        description="CSV output path; console mode when omitted",
    )

    @field_validator("output_path")
    @classmethod
    def validate_output_path_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("output_path must not be blank")
        return v


def validate_raw_rows(raw_rows: List[Any]) -> tuple[List[Mapping[str, Any]], List[dict]]:
    """
    Split raw rows into mappings and entries that cannot be rows at all.

    Args:
        raw_rows: Rows as returned by the usage endpoint.

    Returns:
        Tuple of (valid_rows, invalid_rows). Invalid entries keep their index.
    """
    valid = []
    invalid = []

    for idx, row in enumerate(raw_rows):
        if isinstance(row, Mapping):
            valid.append(row)
            continue
        logger.warning(
            "[VALIDATION] Skipping non-mapping row at index %d: %s",
            idx,
            type(row).__name__,
        )
        invalid.append({"index": idx, "data": row, "error": f"expected mapping, got {type(row).__name__}"})

    if invalid:
        logger.warning(
            "[VALIDATION] %d of %d raw rows failed validation",
            len(invalid),
            len(raw_rows),
        )

    return valid, invalid
