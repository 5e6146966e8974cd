"""Unit tests for run_local module."""

import unittest
from unittest.mock import patch

import run_local


class TestRunLocal(unittest.TestCase):
    """Tests for run_local script."""

    @patch("run_local.execute_from_command_line")
    def test_main_calls_syncnotifications(self, mock_execute):
        """Test that main() calls the syncnotifications command."""
        with patch("sys.argv", ["run_local.py"]):
            run_local.main()

        mock_execute.assert_called_once()
        args = mock_execute.call_args[0][0]
        self.assertIn("syncnotifications", args)

    @patch("run_local.execute_from_command_line")
    def test_main_passes_arguments_through(self, mock_execute):
        """Test that extra arguments reach the command."""
        with patch("sys.argv", ["run_local.py", "--duration", "5"]):
            run_local.main()

        args = mock_execute.call_args[0][0]
        self.assertEqual(args[1:], ["syncnotifications", "--duration", "5"])

    def test_module_has_correct_docstring(self):
        """Test that module has expected docstring."""
        self.assertIsNotNone(run_local.__doc__)
        self.assertIn("notification sync session", run_local.__doc__)


if __name__ == "__main__":
    unittest.main()
