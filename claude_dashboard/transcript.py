"""
Session transcript aggregation.

Streams a Claude Code transcript (one JSON record per line) and rebuilds
the recent tool calls, sub-agent runs and the latest todo list. Tool and
agent entries are tracked by tool_use id and resolved by the matching
tool_result block.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

from .constants import (
    AGENT_TOOL_NAME,
    COMMAND_TARGET_MAX_LEN,
    FILE_PATH_TOOLS,
    MAX_TRACKED_AGENTS,
    MAX_TRACKED_TOOLS,
    PATTERN_TOOLS,
    SHELL_TOOL_NAME,
    TODO_TOOL_NAME,
)
from .formatters import parse_timestamp
from .models import AgentEntry, TodoEntry, ToolEntry, TranscriptData

logger = logging.getLogger(__name__)


def _opt_str(value) -> str | None:
    return str(value) if value else None


def extract_target(tool_name: str, tool_input) -> str | None:
    """Short description of what a tool call operates on."""
    if not isinstance(tool_input, dict):
        return None
    if tool_name in FILE_PATH_TOOLS:
        return _opt_str(tool_input.get("file_path") or tool_input.get("path"))
    if tool_name in PATTERN_TOOLS:
        return _opt_str(tool_input.get("pattern"))
    if tool_name == SHELL_TOOL_NAME:
        cmd = tool_input.get("command")
        if not isinstance(cmd, str):
            return None
        if len(cmd) > COMMAND_TARGET_MAX_LEN:
            return cmd[:COMMAND_TARGET_MAX_LEN] + "..."
        return cmd
    return None


def _parse_todos(items: list) -> list[TodoEntry]:
    todos = []
    for item in items:
        if not isinstance(item, dict):
            continue
        todos.append(
            TodoEntry(
                id=str(item.get("id", "")),
                content=str(item.get("content", "")),
                status=str(item.get("status", "pending")),
            )
        )
    return todos


class TranscriptAggregator:
    """Accumulates transcript records in file order."""

    def __init__(self):
        self.session_start: datetime | None = None
        self.tools: dict[str, ToolEntry] = {}
        self.agents: dict[str, AgentEntry] = {}
        self.todos: list[TodoEntry] = []

    def process_record(self, record: dict) -> None:
        ts = parse_timestamp(record.get("timestamp"))
        if ts is not None and self.session_start is None:
            self.session_start = ts
        timestamp = ts or datetime.now(UTC)

        message = record.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, list):
            return

        for block in content:
            if not isinstance(block, dict):
                continue
            if block.get("type") == "tool_use" and block.get("id") and block.get("name"):
                self._on_tool_use(block, timestamp)
            elif block.get("type") == "tool_result" and block.get("tool_use_id"):
                self._on_tool_result(block, timestamp)

    def _on_tool_use(self, block: dict, timestamp: datetime) -> None:
        tool_id = block["id"]
        name = block["name"]
        tool_input = block.get("input")
        if not isinstance(tool_input, dict):
            tool_input = {}

        if name == AGENT_TOOL_NAME:
            agent_type = tool_input.get("subagent_type")
            self.agents[tool_id] = AgentEntry(
                type="unknown" if agent_type is None else str(agent_type),
                model=_opt_str(tool_input.get("model")),
                description=_opt_str(tool_input.get("description")),
                start_time=timestamp,
            )
        elif name == TODO_TOOL_NAME:
            items = tool_input.get("todos")
            if isinstance(items, list):
                # Each write is a full snapshot of the list
                self.todos = _parse_todos(items)
        else:
            self.tools[tool_id] = ToolEntry(
                name=str(name),
                target=extract_target(name, tool_input),
                start_time=timestamp,
            )

    def _on_tool_result(self, block: dict, timestamp: datetime) -> None:
        tool_use_id = block["tool_use_id"]
        tool = self.tools.get(tool_use_id)
        if tool:
            tool.status = "error" if block.get("is_error") else "completed"
            tool.end_time = timestamp
        agent = self.agents.get(tool_use_id)
        if agent:
            agent.status = "completed"
            agent.end_time = timestamp

    def result(self) -> TranscriptData:
        return TranscriptData(
            session_start=self.session_start,
            tools=list(self.tools.values())[-MAX_TRACKED_TOOLS:],
            agents=list(self.agents.values())[-MAX_TRACKED_AGENTS:],
            todos=list(self.todos),
        )


def parse_transcript(transcript_path: str | None) -> TranscriptData:
    """
    Parse a transcript file into recent tools, agents and todos.
    Missing or unreadable files yield an empty result; bad lines are skipped.
    """
    aggregator = TranscriptAggregator()
    if not transcript_path:
        return aggregator.result()

    try:
        with open(transcript_path, encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                    if isinstance(record, dict):
                        aggregator.process_record(record)
                except (json.JSONDecodeError, TypeError, ValueError) as e:
                    logger.debug("Skipping malformed transcript line in %s: %s", transcript_path, e)
    except OSError as e:
        logger.debug("Error reading transcript %s: %s", transcript_path, e)

    return aggregator.result()
