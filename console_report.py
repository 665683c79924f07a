"""
Console rendering of the App Usage Report.
"""

import logging
from export_report import report_to_dataframe
from models import Report

logger = logging.getLogger(__name__)


def render_report_table(report: Report) -> str:
    """Render the six report columns as a plain-text table."""
    if not report.records:
        return "No usage records found."

    df = report_to_dataframe(report).fillna("")
    return df.to_string(index=False)


def render_summary(report: Report) -> str:
    summary = report.summary
    lines = [
        "=" * 70,
        "SUMMARY",
        "-" * 70,
        f"  Total Records:                     {summary.total_records}",
        f"  Distinct Applications:             {summary.distinct_apps}",
        f"  Date Range:                        {summary.date_range}",
    ]
    if report.skipped_rows:
        lines.append(f"  Skipped Rows:                      {report.skipped_rows}")
    lines.append("=" * 70)
    return "\n".join(lines)


def print_report(report: Report) -> None:
    """Print the report table followed by the summary block."""
    logger.info(f"Rendering {len(report.records)} records to console")
    print("\n")
    print(render_report_table(report))
    print("\n")
    print(render_summary(report))
