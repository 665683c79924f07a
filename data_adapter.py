"""
Data Adapter Module for Graph Usage Report Integration
Acquires a Graph token and fetches the raw per-application usage rows.
"""

import io
import os
import logging
import requests
import pandas as pd
from typing import List, Dict, Any, Optional

from config import ReportConfig
from error_handling import handle_api_errors, handle_pipeline_phase, DataRetrievalError


logger = logging.getLogger(__name__)

TOKEN_URL_TEMPLATE = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"


def setup_logging(log_file: str = 'app_usage_report.log'):
    """Configure centralized logging for the report pipeline."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR)
    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(console_formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


@handle_api_errors(endpoint="TOKEN")
def _request_token(token_url: str, form: Dict[str, str], timeout: int) -> Dict[str, Any]:
    response = requests.post(token_url, data=form, timeout=timeout)
    response.raise_for_status()
    return response.json()


def acquire_access_token(
    tenant_id: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    timeout: int = 30
) -> str:
    """
    Obtain a Graph bearer token.

    GRAPH_ACCESS_TOKEN is used as is when set. Otherwise the client
    credentials grant runs with AZURE_TENANT_ID, AZURE_CLIENT_ID and
    AZURE_CLIENT_SECRET (explicit arguments take precedence).

    Raises:
        ValueError: If no token and no complete credential set is available
        AuthenticationError: If the token endpoint rejects the credentials
    """
    if not (tenant_id or client_id or client_secret):
        token = os.getenv('GRAPH_ACCESS_TOKEN')
        if token:
            logger.info("Using access token from GRAPH_ACCESS_TOKEN")
            return token

    credentials = {
        'AZURE_TENANT_ID': tenant_id or os.getenv('AZURE_TENANT_ID'),
        'AZURE_CLIENT_ID': client_id or os.getenv('AZURE_CLIENT_ID'),
        'AZURE_CLIENT_SECRET': client_secret or os.getenv('AZURE_CLIENT_SECRET'),
    }
    missing = [name for name, value in credentials.items() if not value]
    if missing:
        error_msg = f"Missing credentials: set GRAPH_ACCESS_TOKEN or {', '.join(missing)}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    token_url = TOKEN_URL_TEMPLATE.format(tenant_id=credentials['AZURE_TENANT_ID'])
    logger.info(f"Requesting client credentials token from {token_url}")

    payload = _request_token(
        token_url,
        {
            'grant_type': 'client_credentials',
            'client_id': credentials['AZURE_CLIENT_ID'],
            'client_secret': credentials['AZURE_CLIENT_SECRET'],
            'scope': GRAPH_SCOPE,
        },
        timeout,
    )

    token = payload.get('access_token') if isinstance(payload, dict) else None
    if not token:
        error_msg = "Token response did not contain an access_token"
        logger.error(error_msg)
        raise ValueError(error_msg)

    return token


def graph_headers(token: str) -> Dict[str, str]:
    return {
        'Authorization': f'Bearer {token}',
        'Accept': 'application/json, text/csv'
    }


def parse_usage_payload(response: requests.Response) -> List[Dict[str, Any]]:
    """
    Parse a usage report response into raw rows.

    JSON bodies may be {"value": [...]} or a bare list. Anything else is
    read as CSV text, every cell kept as a string.

    Args:
        response: HTTP response from the usage report endpoint

    Returns:
        List of raw row dictionaries (empty for an empty body)
    """
    content_type = response.headers.get('Content-Type', '').lower()

    if 'json' in content_type:
        payload = response.json()
        if isinstance(payload, dict):
            rows = payload.get('value') or []
        elif isinstance(payload, list):
            rows = payload
        else:
            rows = []
        logger.info(f"Parsed {len(rows)} rows from JSON response")
        return list(rows)

    text = response.content.decode('utf-8-sig')
    if not text.strip():
        logger.info("Usage report body is empty")
        return []

    df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    rows = df.to_dict(orient='records')
    logger.info(f"Parsed {len(rows)} rows from CSV response ({len(df.columns)} columns)")
    return rows


@handle_api_errors(endpoint="USAGE_REPORT")
def _usage_report_get(url: str, headers: Dict[str, str], timeout: int) -> List[Dict[str, Any]]:
    response = requests.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return parse_usage_payload(response)


@handle_pipeline_phase(phase_name="FETCH", error_cls=DataRetrievalError)
def fetch_usage_rows(config: ReportConfig, token: str) -> List[Dict[str, Any]]:
    """
    Fetch raw usage rows for the configured lookback window.

    Args:
        config: Report configuration (period token, URLs, timeout)
        token: Graph bearer token

    Returns:
        List of raw rows, possibly empty

    Raises:
        AuthenticationError: For 401/403 responses
        APIError: For any other transport failure
    """
    url = config.usage_report_url
    logger.info(f"[FETCH] Requesting usage report for period {config.period_token}")
    logger.info(f"[FETCH] Full API URL: {url}")

    rows = _usage_report_get(url, graph_headers(token), config.request_timeout)

    logger.info(f"[FETCH] Data fetch complete: {len(rows)} rows")
    return rows
