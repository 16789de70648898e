#!/usr/bin/env python3
"""
Management script: `python manage.py <command> [args...]`
"""

import sys

from iar_uploader.interfaces.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
