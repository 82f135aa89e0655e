"""
main.py — Entry point.

Run with:
    python main.py [-c CONFIG]

Requires:
    pip install pygame
"""

import sys

from gridsnake.cli import main


if __name__ == "__main__":
    sys.exit(main())
