#!/usr/bin/env python3
"""
Application startup script with environment configuration support.

    python run.py --env staging --port 9000
"""

import sys

from tourhub.cli import main


if __name__ == "__main__":
    sys.exit(main())
