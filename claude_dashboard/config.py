"""User configuration for the status line.

Reads the optional ~/.claude/claude-dashboard.local.json file:

{
    "language": "auto",        # "en" | "ko" | "auto"
    "plan": "max",             # "pro" | "max"
    "cache": {"ttlSeconds": 60}
}
"""

from __future__ import annotations

import json
import logging
import os

from pydantic import ValidationError

from .constants import DASHBOARD_CONFIG_PATH
from .schemas import DashboardConfig

logger = logging.getLogger(__name__)


def load_config(path: str | None = None) -> DashboardConfig:
    """Load the user config, falling back to defaults on any problem."""
    path = path or DASHBOARD_CONFIG_PATH
    if not os.path.exists(path):
        return DashboardConfig()
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        return DashboardConfig.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.debug("Ignoring config %s: %s", path, e)
        return DashboardConfig()
