"""
Claude dashboard status line.

Builds up to five lines from the stdin snapshot plus four lookups that run
concurrently:
  1. model, context usage, cost and rate limits
  2. project name, git branch, config counts, session duration
  3. running and recently completed tools
  4. running and recently completed sub-agents
  5. todo progress
"""

from __future__ import annotations

import json
import logging
import os
import random
import sys
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import TextIO

from pydantic import ValidationError

from .colors import (
    BG_WHITE,
    BLACK,
    CYAN,
    DIM,
    GREEN,
    MAGENTA,
    RESET,
    YELLOW,
    color_for_percent,
    colorize,
)
from .config import load_config
from .config_counter import count_configs
from .constants import (
    AGENT_DESCRIPTION_MAX_LEN,
    EMOJIS,
    MAX_AGENTS_SHOWN,
    MAX_COMPLETED_AGENTS_SHOWN,
    MAX_COMPLETED_TOOLS_SHOWN,
    MAX_RUNNING_TOOLS_SHOWN,
    TODO_CONTENT_MAX_LEN,
    TOOL_TARGET_MAX_LEN,
    WARNING_GLYPH,
)
from .formatters import (
    calculate_percent,
    format_cost,
    format_elapsed,
    format_session_duration,
    format_time_remaining,
    format_tokens,
    render_progress_bar,
    round_half_up,
    shorten_model_name,
    truncate,
    truncate_path,
)
from .git import get_git_branch
from .i18n import Translations, get_translations
from .models import AgentEntry, ConfigCounts, TodoEntry, ToolEntry, TranscriptData
from .schemas import DashboardConfig, StdinInput, UsageLimits
from .transcript import parse_transcript
from .usage_client import fetch_usage_limits

logger = logging.getLogger(__name__)

SEPARATOR = f" {DIM}│{RESET} "

ICON_RUNNING = colorize("◐", YELLOW)
ICON_DONE = colorize("✓", GREEN)


def warning_line() -> str:
    return colorize(WARNING_GLYPH, YELLOW)


def read_stdin(stream: TextIO | None = None) -> StdinInput | None:
    """Parse the CLI's JSON snapshot; None when missing or malformed."""
    stream = stream or sys.stdin
    try:
        content = stream.read()
        return StdinInput.model_validate(json.loads(content))
    except (OSError, ValueError, ValidationError) as e:
        logger.debug("Unusable stdin input: %s", e)
        return None


# ── Line 1: context + rate limits ────────────────────────────────────────────


def build_context_section(data: StdinInput, t: Translations) -> str:
    """{god} tag, emoji, model, then context bar, percent, tokens and cost."""
    god_tag = colorize("{god}", f"{BLACK}{BG_WHITE}")
    emoji = random.choice(EMOJIS)
    model_name = shorten_model_name(data.model.display_name)
    parts = [f"{god_tag} {emoji} {colorize(model_name, CYAN)}"]

    usage = data.context_window.current_usage
    if usage is None:
        parts.append(colorize(t.no_context, DIM))
        return SEPARATOR.join(parts)

    current = usage.context_tokens
    total = data.context_window.context_window_size
    percent = calculate_percent(current, total)

    parts.append(render_progress_bar(percent))
    parts.append(colorize(f"{percent}%", color_for_percent(percent)))
    parts.append(f"{format_tokens(current)}/{format_tokens(total)}")
    parts.append(colorize(format_cost(data.cost.total_cost_usd), YELLOW))
    return SEPARATOR.join(parts)


def _limit_percent(label: str, utilization: float) -> str:
    pct = round_half_up(utilization)
    return f"{label}:{colorize(f'{pct}%', color_for_percent(pct))}"


def build_rate_limits_section(limits: UsageLimits | None, config: DashboardConfig) -> str:
    """Compact rate limits, e.g. '5h:7%(4h40m) 7d:49% 7d-S:1%'."""
    if limits is None:
        return warning_line()

    parts = []
    if limits.five_hour:
        text = _limit_percent("5h", limits.five_hour.utilization)
        if limits.five_hour.resets_at:
            remaining = format_time_remaining(limits.five_hour.resets_at)
            if remaining:
                text += f"({remaining})"
        parts.append(text)

    # Only Max plans have the 7-day windows
    if config.plan == "max":
        if limits.seven_day:
            parts.append(_limit_percent("7d", limits.seven_day.utilization))
        if limits.seven_day_sonnet:
            parts.append(_limit_percent("7d-S", limits.seven_day_sonnet.utilization))

    return " ".join(parts)


# ── Line 2: project ──────────────────────────────────────────────────────────


def build_project_line(
    cwd: str | None,
    git_branch: str | None,
    counts: ConfigCounts,
    session_duration: str | None,
) -> str | None:
    if not cwd:
        return None

    project_name = os.path.basename(cwd.rstrip("/\\")) or cwd
    project = f"\U0001f4c1 {colorize(project_name, YELLOW)}"
    if git_branch:
        project += (
            f" {colorize('git:(', MAGENTA)}{colorize(git_branch, CYAN)}{colorize(')', MAGENTA)}"
        )
    parts = [project]

    for count, label in (
        (counts.claude_md_count, "CLAUDE.md"),
        (counts.rules_count, "rules"),
        (counts.mcp_count, "MCPs"),
        (counts.hooks_count, "hooks"),
    ):
        if count > 0:
            parts.append(colorize(f"{count} {label}", DIM))

    if session_duration:
        parts.append(colorize(f"⏱️ {session_duration}", DIM))

    return SEPARATOR.join(parts)


# ── Line 3: tools ────────────────────────────────────────────────────────────


def build_tools_line(tools: list[ToolEntry]) -> str | None:
    parts = []

    running = [tool for tool in tools if tool.status == "running"]
    for tool in running[-MAX_RUNNING_TOOLS_SHOWN:]:
        target = truncate_path(tool.target, TOOL_TARGET_MAX_LEN) if tool.target else ""
        text = f"{ICON_RUNNING} {colorize(tool.name, CYAN)}"
        if target:
            text += colorize(f": {target}", DIM)
        parts.append(text)

    finished = Counter(tool.name for tool in tools if tool.status in ("completed", "error"))
    for name, count in finished.most_common(MAX_COMPLETED_TOOLS_SHOWN):
        parts.append(f"{ICON_DONE} {name} {colorize(f'×{count}', DIM)}")

    return " | ".join(parts) if parts else None


# ── Line 4: agents ───────────────────────────────────────────────────────────


def build_agents_line(agents: list[AgentEntry], now: datetime | None = None) -> str | None:
    running = [a for a in agents if a.status == "running"]
    completed = [a for a in agents if a.status == "completed"][-MAX_COMPLETED_AGENTS_SHOWN:]
    to_show = (running + completed)[-MAX_AGENTS_SHOWN:]
    if not to_show:
        return None

    now = now or datetime.now(UTC)
    lines = []
    for agent in to_show:
        icon = ICON_RUNNING if agent.status == "running" else ICON_DONE
        text = f"{icon} {colorize(agent.type, MAGENTA)}"
        if agent.model:
            text += f" {colorize(f'[{agent.model}]', DIM)}"
        if agent.description:
            text += colorize(f": {truncate(agent.description, AGENT_DESCRIPTION_MAX_LEN)}", DIM)
        elapsed = format_elapsed(agent.start_time, agent.end_time, now=now)
        text += f" {colorize(f'({elapsed})', DIM)}"
        lines.append(text)
    return "\n".join(lines)


# ── Line 5: todos ────────────────────────────────────────────────────────────


def build_todos_line(todos: list[TodoEntry]) -> str | None:
    if not todos:
        return None

    in_progress = next((todo for todo in todos if todo.status == "in_progress"), None)
    completed = sum(1 for todo in todos if todo.status == "completed")
    total = len(todos)
    progress = colorize(f"({completed}/{total})", DIM)

    if in_progress is None:
        if completed == total:
            return f"{ICON_DONE} All todos complete {progress}"
        return None

    content = truncate(in_progress.content, TODO_CONTENT_MAX_LEN)
    return f"{colorize('▸', YELLOW)} {content} {progress}"


# ── Assembly ─────────────────────────────────────────────────────────────────


def gather(
    data: StdinInput, config: DashboardConfig
) -> tuple[UsageLimits | None, str | None, ConfigCounts, TranscriptData]:
    """Run the four independent lookups concurrently and join them."""
    cwd = data.working_dir
    with ThreadPoolExecutor(max_workers=4) as pool:
        limits_f = pool.submit(fetch_usage_limits, config.cache.ttl_seconds)
        branch_f = pool.submit(get_git_branch, cwd)
        counts_f = pool.submit(count_configs, cwd)
        transcript_f = pool.submit(parse_transcript, data.transcript_path)

        def _result(future, default):
            try:
                return future.result()
            except Exception as e:
                logger.debug("Lookup failed: %s", e)
                return default

        return (
            _result(limits_f, None),
            _result(branch_f, None),
            _result(counts_f, ConfigCounts()),
            _result(transcript_f, TranscriptData()),
        )


def build_lines(
    data: StdinInput,
    config: DashboardConfig,
    limits: UsageLimits | None,
    git_branch: str | None,
    counts: ConfigCounts,
    transcript: TranscriptData,
) -> list[str]:
    """Compose the non-empty status lines in display order."""
    t = get_translations(config.language)
    session_duration = (
        format_session_duration(transcript.session_start) if transcript.session_start else None
    )

    main_line = SEPARATOR.join(
        section
        for section in (
            build_context_section(data, t),
            build_rate_limits_section(limits, config),
        )
        if section
    )
    lines = [
        main_line,
        build_project_line(data.working_dir, git_branch, counts, session_duration),
        build_tools_line(transcript.tools),
        build_agents_line(transcript.agents),
        build_todos_line(transcript.todos),
    ]
    return [line for line in lines if line]


def render(stdin: TextIO | None = None, config_path: str | None = None) -> list[str]:
    """Read stdin and return the status lines, or the single warning line."""
    try:
        config = load_config(config_path)
        data = read_stdin(stdin)
        if data is None:
            return [warning_line()]
        return build_lines(data, config, *gather(data, config))
    except Exception as e:
        logger.debug("Status line render failed: %s", e, exc_info=True)
        return [warning_line()]


def main(stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    out = stdout or sys.stdout
    for line in render(stdin):
        print(line, file=out)
