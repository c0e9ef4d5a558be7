#!/usr/bin/env python3
"""
Main entry point for Bookmark Triage.
"""

import sys

from bookmark_triage.cli import main

if __name__ == "__main__":
    sys.exit(main())
