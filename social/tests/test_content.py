from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase, override_settings

from social import content
from social.content import HttpContentStore, NullContentStore, get_content_store


class HttpContentStoreTestCase(SimpleTestCase):
    def setUp(self):
        self.session = MagicMock()
        self.store = HttpContentStore(base_url="https://content.example.org/api/", timeout=2, session=self.session)

    def test_fetches_target_by_type(self):
        self.session.get.return_value = MagicMock(status_code=200, ok=True)
        self.session.get.return_value.json.return_value = {"id": "t1", "title": "Hello"}

        result = self.store.fetch("thread", "t1")

        self.assertEqual(result, {"id": "t1", "title": "Hello"})
        self.session.get.assert_called_once_with("https://content.example.org/api/forum/threads/t1", timeout=2)

    def test_missing_target_returns_none(self):
        self.session.get.return_value = MagicMock(status_code=404, ok=False)
        self.assertIsNone(self.store.fetch("log", "gone"))

    def test_server_error_is_logged(self):
        self.session.get.return_value = MagicMock(status_code=503, ok=False)
        with patch.object(content.logger, "warning") as mock_warning:
            self.assertIsNone(self.store.fetch("reply", "r1"))
        mock_warning.assert_called_once()

    def test_network_error_is_logged(self):
        self.session.get.side_effect = requests.ConnectionError("refused")
        with patch.object(content.logger, "warning") as mock_warning:
            self.assertIsNone(self.store.fetch("log", "l1"))
        mock_warning.assert_called_once()

    def test_unknown_type_or_missing_url_skips_request(self):
        self.assertIsNone(self.store.fetch("video", "v1"))
        self.assertIsNone(HttpContentStore(base_url="", session=self.session).fetch("log", "l1"))
        self.session.get.assert_not_called()


class ContentStoreFactoryTestCase(SimpleTestCase):
    @override_settings(SOCIAL_CONTENT_STORE="social.content.NullContentStore")
    def test_builds_configured_store(self):
        store = get_content_store()
        self.assertIsInstance(store, NullContentStore)
        self.assertIsNone(store.fetch("log", "l1"))
