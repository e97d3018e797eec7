#!/usr/bin/env python3
"""Launcher for running LangChat from a source checkout."""

import sys

from langchat.main import main

if __name__ == "__main__":
    sys.exit(main())
