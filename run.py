#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four command-line interface
"""

import sys

from connect_four.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
