"""Multi-line status bar for the Claude Code CLI."""

from .__version__ import __version__

__all__ = ["__version__"]
