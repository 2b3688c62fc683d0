"""Firebase Admin access for verifying identity tokens.

The app is created lazily on first use from the service-account file named by
``FIREBASE_SERVICE_ACCOUNT_FILE``. Test runs never reach Google unless the
suite mocks ``firebase_admin.initialize_app`` or sets ``FIREBASE_ALLOW_TEST_APP``.
"""

import logging
import os
import sys
import firebase_admin
from firebase_admin import credentials, auth

logger = logging.getLogger(__name__)

_app = None


def _flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("1", "true", "yes")


def _is_mock(obj) -> bool:
    """True for unittest.mock objects patched in by the test suite."""
    return "unittest.mock" in type(obj).__module__


def _is_running_tests():
    return "pytest" in sys.modules or any(arg in sys.argv for arg in ("test", "pytest"))


def _diagnostics_enabled() -> bool:
    return not _is_running_tests() or _flag("FIREBASE_VERBOSE_TEST_LOGS")


def _init_blocked() -> bool:
    if not _is_running_tests() or _flag("FIREBASE_ALLOW_TEST_APP"):
        return False
    return not _is_mock(firebase_admin.initialize_app)


def _service_account():
    """Certificate for the configured service account, or None."""
    path = os.getenv("FIREBASE_SERVICE_ACCOUNT_FILE")
    if path and os.path.exists(path):
        return credentials.Certificate(path)
    if _diagnostics_enabled():
        logger.warning("FIREBASE_SERVICE_ACCOUNT_FILE not found; identity tokens cannot be verified.")
    return None


def get_app():
    """Return the Firebase app, creating it on first call; None when unavailable."""
    global _app
    if _app:
        return _app
    if firebase_admin._apps:
        _app = firebase_admin.get_app()
        return _app
    if _init_blocked():
        return None

    certificate = _service_account()
    if certificate is None:
        return None
    try:
        _app = firebase_admin.initialize_app(certificate)
    except (ValueError, OSError) as exc:
        if _diagnostics_enabled():
            logger.error("Failed to initialize Firebase: %s", exc)
        return None
    return _app


def verify_identity_token(id_token: str) -> str | None:
    """Return the Firebase uid for a valid ID token; firebase_admin errors propagate."""
    decoded = auth.verify_id_token(id_token, app=get_app())
    return decoded.get("uid")
