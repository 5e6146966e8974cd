"""Component tests for the syncnotifications management command."""

import tempfile
from io import StringIO
from unittest.mock import patch

from django.core.cache import cache
from django.core.cache.backends.filebased import FileBasedCache
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

import responses

from core.services.credentials import CachedSessionCredentialProvider

BASE_URL = "http://notifications.test/api/notifications"


@patch("core.management.commands.syncnotifications.setup_logging")
class TestSyncNotificationsCommand(SimpleTestCase):
    """Tests for running a headless sync session."""

    def setUp(self):
        """Set up test fixtures."""
        cache.clear()
        self.payload = [
            {"id": 2, "type": "NEW_RESPONSE", "title": "Reply", "read": False},
            {"id": 1, "type": "NEW_REPORT", "title": "Filed", "read": True},
        ]

    def _mock_api(self, rsps):
        rsps.add(responses.GET, BASE_URL, json=self.payload, status=200)
        rsps.add(
            responses.GET, f"{BASE_URL}/count", json={"unreadCount": 1}, status=200
        )

    def test_runs_session_and_reports_counts(self, mock_setup_logging):
        """Test a short session fetches the list and prints the summary."""
        out = StringIO()

        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            self._mock_api(rsps)
            call_command(
                "syncnotifications", "--token", "abc", "--duration", "0.01", stdout=out
            )

            list_calls = [c for c in rsps.calls if c.request.url == BASE_URL]
            self.assertGreaterEqual(len(list_calls), 1)
            self.assertEqual(
                list_calls[0].request.headers["Authorization"], "Bearer abc"
            )

        mock_setup_logging.assert_called_once()
        self.assertIn("1 unread of 2", out.getvalue())

    def test_reads_token_from_session_cache(self, mock_setup_logging):
        """Test --session-key uses the token stored for that session."""
        CachedSessionCredentialProvider("session-9").store_token("cached-token")
        out = StringIO()

        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            self._mock_api(rsps)
            call_command(
                "syncnotifications",
                "--session-key",
                "session-9",
                "--duration",
                "0.01",
                "--no-alerts",
                stdout=out,
            )

            self.assertEqual(
                rsps.calls[0].request.headers["Authorization"], "Bearer cached-token"
            )

    def test_reads_token_stored_by_another_process(self, mock_setup_logging):
        """Test --session-key sees a token written through a separate cache."""
        with tempfile.TemporaryDirectory() as cache_dir:
            # The login process holds its own cache connection
            login_cache = FileBasedCache(cache_dir, {})
            login_cache.set(
                CachedSessionCredentialProvider("session-7").cache_key, "shared-token"
            )
            file_cache = {
                "default": {
                    "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
                    "LOCATION": cache_dir,
                }
            }

            with (
                self.settings(CACHES=file_cache),
                responses.RequestsMock(assert_all_requests_are_fired=False) as rsps,
            ):
                self._mock_api(rsps)
                call_command(
                    "syncnotifications",
                    "--session-key",
                    "session-7",
                    "--duration",
                    "0.01",
                    stdout=StringIO(),
                )

                self.assertEqual(
                    rsps.calls[0].request.headers["Authorization"],
                    "Bearer shared-token",
                )

    def test_reports_last_error(self, mock_setup_logging):
        """Test a session against a failing API ends with a warning."""
        out = StringIO()

        with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            rsps.add(responses.GET, BASE_URL, status=503)
            rsps.add(responses.GET, f"{BASE_URL}/count", status=503)
            call_command(
                "syncnotifications", "--token", "abc", "--duration", "0.01", stdout=out
            )

        self.assertIn("last error", out.getvalue())
        self.assertIn("0 unread of 0", out.getvalue())

    @patch.dict("os.environ", {"EVENTSPHERE_TOKEN": ""})
    def test_missing_token_raises(self, mock_setup_logging):
        """Test the command refuses to run without a session token."""
        with self.assertRaises(CommandError):
            call_command("syncnotifications")

    def test_unknown_session_key_raises(self, mock_setup_logging):
        """Test a session without a stored token is rejected."""
        with self.assertRaises(CommandError):
            call_command("syncnotifications", "--session-key", "nobody")
