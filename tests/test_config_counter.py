"""Tests for config_counter.py — CLAUDE.md, rules, MCP and hook counts."""

import json
import os
from unittest.mock import patch

import pytest

from claude_dashboard.config_counter import (
    count_configs,
    count_hooks_in_file,
    count_mcp_servers_in_file,
    count_rules_in_dir,
)


@pytest.fixture
def fake_home(tmp_path):
    """An empty home directory with ~/.claude patched in."""
    home = tmp_path / "home"
    claude_dir = home / ".claude"
    claude_dir.mkdir(parents=True)
    with (
        patch("claude_dashboard.config_counter.HOME_DIR", str(home)),
        patch("claude_dashboard.config_counter.CLAUDE_DIR", str(claude_dir)),
    ):
        yield home


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "project"
    (path / ".claude").mkdir(parents=True)
    return path


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    def test_count_mcp_servers(self, tmp_path):
        path = tmp_path / "settings.json"
        _write_json(path, {"mcpServers": {"github": {}, "slack": {}}})
        assert count_mcp_servers_in_file(str(path)) == 2

    def test_mcp_servers_excluded(self, tmp_path):
        main = tmp_path / ".claude.json"
        other = tmp_path / "settings.json"
        _write_json(main, {"mcpServers": {"github": {}, "slack": {}, "jira": {}}})
        _write_json(other, {"mcpServers": {"github": {}}})
        assert count_mcp_servers_in_file(str(main), exclude_from=str(other)) == 2

    def test_mcp_servers_not_an_object(self, tmp_path):
        path = tmp_path / "settings.json"
        _write_json(path, {"mcpServers": ["github"]})
        assert count_mcp_servers_in_file(str(path)) == 0

    def test_count_hooks(self, tmp_path):
        path = tmp_path / "settings.json"
        _write_json(path, {"hooks": {"PreToolUse": [], "Stop": []}})
        assert count_hooks_in_file(str(path)) == 2

    def test_missing_and_corrupt_files(self, tmp_path):
        assert count_hooks_in_file(str(tmp_path / "missing.json")) == 0
        corrupt = tmp_path / "corrupt.json"
        corrupt.write_text("{oops", encoding="utf-8")
        assert count_mcp_servers_in_file(str(corrupt)) == 0

    def test_json_array_counts_zero(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert count_hooks_in_file(str(path)) == 0

    def test_count_rules_recursive(self, tmp_path):
        rules = tmp_path / "rules"
        (rules / "nested" / "deeper").mkdir(parents=True)
        (rules / "style.md").write_text("x")
        (rules / "notes.txt").write_text("x")
        (rules / "nested" / "testing.md").write_text("x")
        (rules / "nested" / "deeper" / "security.md").write_text("x")
        assert count_rules_in_dir(str(rules)) == 3

    def test_count_rules_missing_dir(self, tmp_path):
        assert count_rules_in_dir(str(tmp_path / "rules")) == 0

    def test_count_rules_skips_symlinks(self, tmp_path):
        rules = tmp_path / "rules"
        rules.mkdir()
        (rules / "a.md").write_text("x")
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "b.md").write_text("x")
        os.symlink(rules, rules / "loop", target_is_directory=True)
        os.symlink(shared, rules / "shared", target_is_directory=True)
        os.symlink(shared / "b.md", rules / "linked.md")
        assert count_rules_in_dir(str(rules)) == 1


# ---------------------------------------------------------------------------
# count_configs
# ---------------------------------------------------------------------------


class TestCountConfigs:
    def test_nothing_configured(self, fake_home):
        counts = count_configs(None)
        assert (counts.claude_md_count, counts.rules_count, counts.mcp_count, counts.hooks_count) == (0, 0, 0, 0)

    def test_user_level(self, fake_home):
        claude_dir = fake_home / ".claude"
        (claude_dir / "CLAUDE.md").write_text("# me")
        (claude_dir / "rules").mkdir()
        (claude_dir / "rules" / "a.md").write_text("x")
        _write_json(
            claude_dir / "settings.json",
            {"mcpServers": {"github": {}}, "hooks": {"Stop": [], "PreToolUse": []}},
        )
        _write_json(fake_home / ".claude.json", {"mcpServers": {"github": {}, "linear": {}}})

        counts = count_configs(None)
        assert counts.claude_md_count == 1
        assert counts.rules_count == 1
        assert counts.mcp_count == 2
        assert counts.hooks_count == 2

    def test_project_level(self, fake_home, project):
        (project / "CLAUDE.md").write_text("x")
        (project / "CLAUDE.local.md").write_text("x")
        (project / ".claude" / "CLAUDE.md").write_text("x")
        (project / ".claude" / "rules").mkdir()
        (project / ".claude" / "rules" / "r1.md").write_text("x")
        (project / ".claude" / "rules" / "r2.md").write_text("x")
        _write_json(project / ".mcp.json", {"mcpServers": {"db": {}}})
        _write_json(project / ".claude" / "settings.json", {"mcpServers": {"a": {}}, "hooks": {"Stop": []}})
        _write_json(
            project / ".claude" / "settings.local.json",
            {"mcpServers": {"b": {}}, "hooks": {"PostToolUse": []}},
        )

        counts = count_configs(str(project))
        assert counts.claude_md_count == 3
        assert counts.rules_count == 2
        assert counts.mcp_count == 3
        assert counts.hooks_count == 2

    def test_user_and_project_are_summed(self, fake_home, project):
        (fake_home / ".claude" / "CLAUDE.md").write_text("x")
        (project / "CLAUDE.md").write_text("x")
        counts = count_configs(str(project))
        assert counts.claude_md_count == 2

    def test_missing_project_dir(self, fake_home, tmp_path):
        counts = count_configs(str(tmp_path / "does-not-exist"))
        assert counts.claude_md_count == 0
        assert counts.mcp_count == 0
