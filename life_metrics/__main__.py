"""
life_metrics - command line entry point.
"""

from life_metrics.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
