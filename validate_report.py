"""
Report Validation Script
Re-reads a written app usage CSV and checks its structure and values.
"""

import sys
import logging
import pandas as pd

from error_handling import DataValidationError
from models import REPORT_COLUMNS

logger = logging.getLogger(__name__)


def load_report_csv(report_file: str) -> pd.DataFrame:
    """Load a report CSV keeping every cell as text; empty cells become ''."""
    return pd.read_csv(report_file, dtype=str, keep_default_na=False, encoding='utf-8')


def validate_csv_structure(df: pd.DataFrame) -> bool:
    """
    Validate that the CSV has the six report columns in order.

    Raises:
        DataValidationError: If structure validation fails
    """
    if list(df.columns) != REPORT_COLUMNS:
        raise DataValidationError(
            f"CSV columns mismatch. Expected {REPORT_COLUMNS}, got {list(df.columns)}",
            details={"columns": list(df.columns)},
        )

    logger.info("[VALIDATION] CSV structure validation passed: %d columns", len(REPORT_COLUMNS))
    return True


def validate_record_values(df: pd.DataFrame) -> bool:
    """
    Validate that every row has an AppId and a non-negative integer Usage.

    Raises:
        DataValidationError: If any row fails
    """
    missing_app_ids = df[df['AppId'].str.strip() == '']
    if not missing_app_ids.empty:
        raise DataValidationError(
            f"Found {len(missing_app_ids)} rows without AppId",
            details={"rows": missing_app_ids.index.tolist()},
        )

    bad_usage = df[~df['Usage'].str.fullmatch(r'\d+')]
    if not bad_usage.empty:
        raise DataValidationError(
            f"Found {len(bad_usage)} rows with invalid Usage values",
            details={"rows": bad_usage.index.tolist()},
        )

    logger.info("[VALIDATION] Record value validation passed: %d rows", len(df))
    return True


def validate_report_csv(report_file: str) -> pd.DataFrame:
    """Load and validate a report CSV, returning the loaded frame."""
    logger.info(f"[VALIDATION] Loading report from {report_file}...")
    df = load_report_csv(report_file)
    validate_csv_structure(df)
    validate_record_values(df)
    return df


def main(argv=None):
    """Validate the report CSV named on the command line."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    args = sys.argv[1:] if argv is None else argv
    report_file = args[0] if args else 'app_usage_report.csv'

    try:
        df = validate_report_csv(report_file)
        print(f"Report validation SUCCESSFUL: {len(df)} records in {report_file}")
        return 0
    except Exception as e:
        logger.error(f"Validation FAILED: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
