"""
Main entry point for running exposewm as a module.

Usage:
    python -m exposewm [options]
"""

from .engine import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
