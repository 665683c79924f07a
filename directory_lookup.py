"""
Directory Lookup adapter for application display names.

Resolves an application identifier against the Graph directory, first as a
registered application and then as a service principal. Any failure is a
miss: the identifier itself is returned so one bad lookup never aborts the
report.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from config import ReportConfig
from error_handling import handle_api_errors, APIError

logger = logging.getLogger(__name__)

DIRECTORY_SOURCES = [
    ('applications', '/applications'),
    ('servicePrincipals', '/servicePrincipals'),
]


def _odata_quote(value: str) -> str:
    return value.replace("'", "''")


@handle_api_errors(endpoint="DIRECTORY")
def _directory_get(url: str, headers: Dict[str, str], params: Dict[str, str], timeout: int) -> Dict[str, Any]:
    response = requests.get(url, headers=headers, params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()


def _first_display_name(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        entries = payload.get('value', [])
    elif isinstance(payload, list):
        entries = payload
    else:
        return None

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = entry.get('displayName')
        if name is not None and str(name).strip():
            return str(name).strip()
    return None


class GraphDirectoryLookup:
    """Looks up display names in the Graph directory with a bearer token."""

    def __init__(self, config: ReportConfig, token: str):
        self.config = config
        self.headers = {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json'
        }

    def _lookup_source(self, source: str, path: str, app_id: str) -> Optional[str]:
        url = self.config.graph_url(path)
        params = {
            '$filter': f"appId eq '{_odata_quote(app_id)}'",
            '$select': 'appId,displayName'
        }
        try:
            payload = _directory_get(url, self.headers, params, self.config.request_timeout)
        except APIError as e:
            logger.warning(f"  - {source} lookup failed for {app_id}: {e}")
            return None
        return _first_display_name(payload)

    def lookup(self, app_id: str) -> str:
        """
        Resolve app_id to a display name.

        Args:
            app_id: Application identifier

        Returns:
            The directory display name, or app_id when no source matches
        """
        for source, path in DIRECTORY_SOURCES:
            name = self._lookup_source(source, path, app_id)
            if name:
                logger.info(f"  + {app_id}: {name} ({source})")
                return name

        logger.info(f"  - {app_id}: no directory match, using identifier")
        return app_id

    __call__ = lookup


class StaticDirectoryLookup:
    """Directory lookup backed by an in-memory mapping, for offline runs."""

    def __init__(self, names: Mapping[str, str]):
        self.names = dict(names)

    def lookup(self, app_id: str) -> str:
        return self.names.get(app_id) or app_id

    __call__ = lookup
