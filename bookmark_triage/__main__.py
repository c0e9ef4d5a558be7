#!/usr/bin/env python3
"""
Package entry point for Bookmark Triage.

This allows the package to be executed with: python -m bookmark_triage
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
