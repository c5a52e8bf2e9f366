#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play --ai hard
    python run.py analyze --position <42 comma-separated values>
    python run.py benchmark --iterations 500
"""

import sys

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
