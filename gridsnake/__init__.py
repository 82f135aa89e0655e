"""Snake on a fixed grid: menu, options, obstacles, wraparound, high scores."""

import os

__version__ = "0.1.0"

# keep pygame's import banner out of the CLI output
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
