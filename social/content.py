"""Content store collaborators used to resolve notification targets.

Logs, forum threads and forum replies are owned by the content service. The
notification feed only needs a renderable snapshot of them, looked up by
``(target_type, target_id)``.
"""

import logging

import requests
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class NullContentStore:
    """Content store that knows nothing; every lookup misses."""

    def fetch(self, target_type, target_id):
        return None


class HttpContentStore:
    """Fetch targets from the content service's JSON API."""

    PATHS = {
        "log": "logs",
        "thread": "forum/threads",
        "reply": "forum/replies",
    }

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url if base_url is not None else settings.SOCIAL_CONTENT_STORE_URL).rstrip("/")
        self.timeout = timeout or settings.SOCIAL_CONTENT_STORE_TIMEOUT
        self.session = session or requests.Session()

    def fetch(self, target_type, target_id):
        """Return the target as a dict, or None when missing or unreachable."""
        path = self.PATHS.get(target_type)
        if not self.base_url or not path or not target_id:
            return None
        url = f"{self.base_url}/{path}/{target_id}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Content store request to %s failed: %s", url, exc)
            return None
        if response.status_code == 404:
            return None
        if not response.ok:
            logger.warning("Content store returned %s for %s", response.status_code, url)
            return None
        return response.json()


def get_content_store():
    """Instantiate the content store configured in SOCIAL_CONTENT_STORE."""
    return import_string(settings.SOCIAL_CONTENT_STORE)()
