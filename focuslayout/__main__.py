"""
Main entry point for running focuslayout as a module.

Usage:
    python -m focuslayout CONTEXT APP [APP ...] [options]
"""

from .engine import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
