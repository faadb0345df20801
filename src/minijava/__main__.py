"""
Entry point for running the MiniJava CLI as a module.

Usage:
    python -m minijava run nested-loops
"""

import sys

from minijava.cli import main

if __name__ == "__main__":
    sys.exit(main())
