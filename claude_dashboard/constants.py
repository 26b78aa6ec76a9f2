"""
Centralised constants for the Claude dashboard status line.

All magic numbers, timeouts, file-system paths, and hardcoded names live
here so they are easy to find, tune, and test.
"""

from __future__ import annotations

import os
import tempfile

from .__version__ import __version__

# ── File-system paths ─────────────────────────────────────────────────────────

HOME_DIR = os.path.expanduser("~")
CLAUDE_DIR = os.path.join(HOME_DIR, ".claude")
DASHBOARD_CONFIG_PATH = os.path.join(CLAUDE_DIR, "claude-dashboard.local.json")
CREDENTIALS_PATH = os.path.join(CLAUDE_DIR, ".credentials.json")

USAGE_CACHE_FILE = os.path.join(tempfile.gettempdir(), "claude-dashboard-cache.json")
"""Usage-limit cache shared by every status line process on this machine."""

# ── Usage API ─────────────────────────────────────────────────────────────────

USAGE_API_URL = "https://api.anthropic.com/api/oauth/usage"
USAGE_API_BETA = "oauth-2025-04-20"
USER_AGENT = f"claude-dashboard/{__version__}"

USAGE_FETCH_TIMEOUT = 5
"""Timeout (seconds) for the usage-limits HTTP request."""

DEFAULT_CACHE_TTL = 60
"""Default lifetime (seconds) of a cached usage-limits response."""

KEYCHAIN_SERVICE = "Claude Code-credentials"
"""Service name the CLI stores its OAuth credentials under."""

# ── Subprocess timeouts (seconds) ────────────────────────────────────────────

KEYCHAIN_TIMEOUT = 5
GIT_TIMEOUT = 5

# ── Transcript ────────────────────────────────────────────────────────────────

AGENT_TOOL_NAME = "Task"
TODO_TOOL_NAME = "TodoWrite"

FILE_PATH_TOOLS: frozenset[str] = frozenset({"Read", "Write", "Edit"})
PATTERN_TOOLS: frozenset[str] = frozenset({"Glob", "Grep"})
SHELL_TOOL_NAME = "Bash"

COMMAND_TARGET_MAX_LEN = 30
"""Characters of a shell command kept as the tool target."""

MAX_TRACKED_TOOLS = 20
MAX_TRACKED_AGENTS = 10

# ── Status line layout ────────────────────────────────────────────────────────

PROGRESS_BAR_WIDTH = 10
PROGRESS_FILLED_CHAR = "\u2588"  # full block
PROGRESS_EMPTY_CHAR = "\u2591"  # light shade

MAX_RUNNING_TOOLS_SHOWN = 2
MAX_COMPLETED_TOOLS_SHOWN = 4
MAX_COMPLETED_AGENTS_SHOWN = 2
MAX_AGENTS_SHOWN = 3

TOOL_TARGET_MAX_LEN = 20
AGENT_DESCRIPTION_MAX_LEN = 40
TODO_CONTENT_MAX_LEN = 50

WARNING_GLYPH = "\u26a0\ufe0f"

EMOJIS: tuple[str, ...] = (
    "\u26a1\ufe0f",
    "\U0001f525",
    "\U0001f451",
    "\U0001f60e",
    "\U0001f438",
    "\U0001f984",
    "\U0001f308",
    "\U0001f680",
    "\U0001f4a1",
    "\U0001f389",
    "\U0001f511",
    "\U0001f319",
)
"""Random decoration shown before the model name."""

# ── Time unit divisors ────────────────────────────────────────────────────────

SECONDS_PER_MINUTE = 60
