"""Unit tests for Django app configuration.

This module tests the Django app configuration for the core application
and verifies it's properly integrated into the project.
"""

import unittest

from django.apps import AppConfig, apps
from django.conf import settings
from django.test import SimpleTestCase

from core.apps import CoreConfig
from core.signals import notification_received


class TestCoreAppConfig(unittest.TestCase):
    """Tests for CoreConfig class."""

    def test_core_config_inherits_from_appconfig(self):
        """Test that CoreConfig inherits from AppConfig."""
        self.assertTrue(issubclass(CoreConfig, AppConfig))

    def test_core_config_name_is_correct(self):
        """Test that CoreConfig has correct app name."""
        self.assertEqual(CoreConfig.name, "core")

    def test_core_config_has_docstring(self):
        """Test that CoreConfig has a docstring."""
        self.assertIsNotNone(CoreConfig.__doc__)
        self.assertGreater(len(CoreConfig.__doc__), 0)


class TestCoreAppIntegration(SimpleTestCase):
    """Tests for core app integration with Django."""

    def test_core_app_is_installed(self):
        """Test that core app is in INSTALLED_APPS."""
        self.assertIn("core", settings.INSTALLED_APPS)

    def test_core_app_config_is_correct_class(self):
        """Test that registered app config is CoreConfig."""
        app_config = apps.get_app_config("core")
        self.assertIsInstance(app_config, CoreConfig)
        self.assertEqual(app_config.label, "core")

    def test_ready_registers_signal_receivers(self):
        """Test the log receiver is connected once the app is ready."""
        lookup_keys = [key for key, *_ in notification_received.receivers]
        self.assertIn(("core.log_notification_received", id(None)), lookup_keys)


if __name__ == "__main__":
    unittest.main()
