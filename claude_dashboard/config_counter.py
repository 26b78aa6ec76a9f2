"""
Counts of Claude configuration artifacts for the project line.

User-level files live under ~/.claude (plus ~/.claude.json); project-level
files are looked up relative to the working directory when one is known.
Anything missing or unparsable counts as zero.
"""

from __future__ import annotations

import json
import logging
import os

from .constants import CLAUDE_DIR, HOME_DIR
from .models import ConfigCounts

logger = logging.getLogger(__name__)

CLAUDE_MD_NAMES = ("CLAUDE.md", "CLAUDE.local.md")


def _read_json_object(file_path: str) -> dict:
    if not os.path.exists(file_path):
        return {}
    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Skipping unreadable config %s: %s", file_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _map_keys(file_path: str, key: str) -> set[str]:
    value = _read_json_object(file_path).get(key)
    return set(value) if isinstance(value, dict) else set()


def get_mcp_server_names(file_path: str) -> set[str]:
    return _map_keys(file_path, "mcpServers")


def count_mcp_servers_in_file(file_path: str, exclude_from: str | None = None) -> int:
    """Count MCP servers, ignoring names also declared in ``exclude_from``."""
    servers = get_mcp_server_names(file_path)
    if exclude_from:
        servers -= get_mcp_server_names(exclude_from)
    return len(servers)


def count_hooks_in_file(file_path: str) -> int:
    return len(_map_keys(file_path, "hooks"))


def count_rules_in_dir(rules_dir: str) -> int:
    """Recursively count markdown files under ``rules_dir``, ignoring symlinks."""
    if not os.path.isdir(rules_dir):
        return 0
    count = 0
    try:
        with os.scandir(rules_dir) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    count += count_rules_in_dir(entry.path)
                elif entry.is_file(follow_symlinks=False) and entry.name.endswith(".md"):
                    count += 1
    except OSError as e:
        logger.debug("Error scanning rules dir %s: %s", rules_dir, e)
    return count


def count_configs(cwd: str | None = None) -> ConfigCounts:
    counts = ConfigCounts()

    claude_dir = CLAUDE_DIR
    if os.path.exists(os.path.join(claude_dir, "CLAUDE.md")):
        counts.claude_md_count += 1
    counts.rules_count += count_rules_in_dir(os.path.join(claude_dir, "rules"))

    user_settings = os.path.join(claude_dir, "settings.json")
    counts.mcp_count += count_mcp_servers_in_file(user_settings)
    counts.hooks_count += count_hooks_in_file(user_settings)

    # ~/.claude.json servers already declared in settings.json are not double counted
    user_claude_json = os.path.join(HOME_DIR, ".claude.json")
    counts.mcp_count += count_mcp_servers_in_file(user_claude_json, exclude_from=user_settings)

    if cwd:
        for base in (cwd, os.path.join(cwd, ".claude")):
            for name in CLAUDE_MD_NAMES:
                if os.path.exists(os.path.join(base, name)):
                    counts.claude_md_count += 1
        counts.rules_count += count_rules_in_dir(os.path.join(cwd, ".claude", "rules"))

        counts.mcp_count += count_mcp_servers_in_file(os.path.join(cwd, ".mcp.json"))
        for settings_name in ("settings.json", "settings.local.json"):
            settings_path = os.path.join(cwd, ".claude", settings_name)
            counts.mcp_count += count_mcp_servers_in_file(settings_path)
            counts.hooks_count += count_hooks_in_file(settings_path)

    return counts
