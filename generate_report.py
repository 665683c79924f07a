"""
App Usage Report Generator

Fetches per-application usage from the Graph reports endpoint, resolves
application display names from the directory and writes the normalized
report to CSV, or prints it when no output path is given.

Usage:
    python generate_report.py [--output report.csv] [--days 30]
"""

import sys
import logging
import argparse
from typing import Optional

import data_adapter
from config import ReportConfig
from console_report import print_report
from directory_lookup import GraphDirectoryLookup
from error_handling import APIError, PipelinePhaseError
from export_report import write_report_csv
from report_assembler import assemble
from validators import ReportRequestParams

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Generate the per-application usage report')
    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='CSV output path (prints to the console when omitted)'
    )
    parser.add_argument(
        '--days', '-d',
        type=int,
        default=30,
        help='Lookback window in days (default: 30)'
    )
    return parser.parse_args(argv)


def run_report(params: ReportRequestParams, config: Optional[ReportConfig] = None):
    """
    Run one fetch -> assemble -> output pass.

    Returns:
        The assembled Report
    """
    config = config or ReportConfig.from_env(lookback_days=params.lookback_days)
    logger.info(f"Configuration: {config.to_dict()}")

    token = data_adapter.acquire_access_token(timeout=config.request_timeout)
    rows = data_adapter.fetch_usage_rows(config, token)

    if not rows:
        logger.info("No usage data returned for the requested period")

    directory = GraphDirectoryLookup(config, token)
    report = assemble(rows, directory.lookup)

    if params.output_path:
        write_report_csv(report, params.output_path)
    else:
        print_report(report)

    return report


def main(argv=None) -> int:
    """Main execution function for the report generator."""
    args = parse_args(argv)

    data_adapter.setup_logging()

    logger.info("=" * 60)
    logger.info("App Usage Report Generator")
    logger.info("=" * 60)

    try:
        params = ReportRequestParams(lookback_days=args.days, output_path=args.output)
    except ValueError as e:
        logger.error(f"Invalid arguments: {e}")
        return 2

    try:
        report = run_report(params)
    except (APIError, PipelinePhaseError, ValueError) as e:
        logger.error(f"Report generation failed: {e}", exc_info=True)
        return 1

    logger.info("=" * 60)
    logger.info(
        f"Report completed: {report.summary.total_records} records, "
        f"{report.summary.distinct_apps} distinct apps"
    )
    logger.info("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
