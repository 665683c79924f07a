"""
Export module for the App Usage Report.
Writes the normalized report to a six-column UTF-8 CSV file.
"""

import csv
import logging
import pandas as pd
from error_handling import handle_pipeline_phase, ExportError
from models import Report, REPORT_COLUMNS

logger = logging.getLogger(__name__)


def report_to_dataframe(report: Report) -> pd.DataFrame:
    """Return the report records as a DataFrame with the report columns."""
    rows = [record.to_row() for record in report.records]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


@handle_pipeline_phase(phase_name="EXPORT_CSV", error_cls=ExportError)
def write_report_csv(report: Report, output_filename: str) -> None:
    """
    Export the report to CSV format.

    Args:
        report: Assembled report
        output_filename: Output CSV filename

    Raises:
        ExportError: If the file cannot be written.
    """
    logger.info(
        "[EXPORT_CSV] Exporting %d records to %s",
        len(report.records),
        output_filename,
    )

    with open(output_filename, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=REPORT_COLUMNS)

        writer.writeheader()
        writer.writerows(record.to_row() for record in report.records)

    logger.info(
        "[EXPORT_CSV] Successfully exported %d records to %s",
        len(report.records),
        output_filename,
    )
    print(f"\n+ App usage report exported to {output_filename} ({len(report.records)} records)")
