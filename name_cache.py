"""
Per-run memo of application identifier -> display name.
"""

import logging
from typing import Callable, Dict

logger = logging.getLogger(__name__)


class NameCache:
    """Caches directory lookups so each identifier is fetched at most once."""

    def __init__(self):
        self._names: Dict[str, str] = {}
        self.fetch_count = 0

    def get_or_fetch(self, app_id: str, fetch: Callable[[str], str]) -> str:
        """
        Return the cached display name for app_id, fetching it on first use.

        Args:
            app_id: Application identifier
            fetch: Lookup called with app_id on a cache miss

        Returns:
            Display name stored for app_id; app_id itself when fetch fails
        """
        if app_id in self._names:
            return self._names[app_id]

        self.fetch_count += 1
        try:
            name = fetch(app_id)
        except Exception as e:
            logger.warning(f"Directory lookup failed for {app_id}, using identifier: {e}")
            name = app_id
        self._names[app_id] = name
        logger.debug(f"Cached display name for {app_id}: {name}")
        return name

    def __contains__(self, app_id: str) -> bool:
        return app_id in self._names

    def __len__(self) -> int:
        return len(self._names)
