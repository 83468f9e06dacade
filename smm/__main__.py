"""
Main entry point for running smm as a module.

Usage:
    python -m smm
"""

from .monitor_setup import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
