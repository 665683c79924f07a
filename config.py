"""
Configuration module for the app usage report.
Holds the Graph endpoint layout and the reporting window.
"""

import os

DEFAULT_USAGE_REPORT_PATH = "/reports/getApiUsageReport(period='{period}')"


class ReportConfig:
    """Configuration class for report retrieval parameters."""

    def __init__(
        self,
        lookback_days: int = 30,
        graph_base_url: str = "https://graph.microsoft.com",
        api_version: str = "beta",
        usage_report_path: str = DEFAULT_USAGE_REPORT_PATH,
        request_timeout: int = 30
    ):
        """
        Initialize report configuration.

        Args:
            lookback_days: Size of the reporting window in days
            graph_base_url: Base URL of the Graph API
            api_version: Graph API version segment (e.g., 'beta', 'v1.0')
            usage_report_path: Report path, formatted with the period token
            request_timeout: Timeout in seconds for every HTTP call
        """
        self.lookback_days = lookback_days
        self.graph_base_url = graph_base_url
        self.api_version = api_version
        self.usage_report_path = usage_report_path
        self.request_timeout = request_timeout

    @classmethod
    def from_env(cls, **overrides):
        """Build a configuration from GRAPH_* environment variables."""
        values = {
            'graph_base_url': os.getenv('GRAPH_BASE_URL', "https://graph.microsoft.com"),
            'api_version': os.getenv('GRAPH_API_VERSION', "beta"),
            'usage_report_path': os.getenv('GRAPH_USAGE_REPORT_PATH', DEFAULT_USAGE_REPORT_PATH),
            'request_timeout': int(os.getenv('GRAPH_REQUEST_TIMEOUT', "30")),
        }
        values.update(overrides)
        return cls(**values)

    @property
    def period_token(self) -> str:
        """Lookback window as the endpoint's period token, e.g. 30 -> 'D30'."""
        return f"D{self.lookback_days}"

    def graph_url(self, path: str) -> str:
        return f"{self.graph_base_url.rstrip('/')}/{self.api_version.strip('/')}/{path.lstrip('/')}"

    @property
    def usage_report_url(self) -> str:
        return self.graph_url(self.usage_report_path.format(period=self.period_token))

    def to_dict(self):
        """Convert configuration to dictionary."""
        return {
            'lookback_days': self.lookback_days,
            'period_token': self.period_token,
            'graph_base_url': self.graph_base_url,
            'api_version': self.api_version,
            'usage_report_path': self.usage_report_path,
            'request_timeout': self.request_timeout
        }
