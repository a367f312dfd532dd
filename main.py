#!/usr/bin/env python3
"""
intcalc - Main entry point for the integer calculator.

Commands:
    add A B | subtract A B | multiply A B | divide A B
    eval "A OP B"            - One operation, e.g. "7 / 3"
    demo                     - Run the reference calculations
    repl                     - Interactive session (default)
"""
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from calc_core.cli import main


if __name__ == "__main__":
    sys.exit(main())
