#!/usr/bin/env python
"""Script to run a headless notification sync session locally."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Run the notification sync engine until interrupted.

    Extra command line arguments are passed through to the
    'syncnotifications' command (for example --token or --duration).
    """
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventsphere.settings")
    execute_from_command_line([sys.argv[0], "syncnotifications", *sys.argv[1:]])


if __name__ == "__main__":
    main()
