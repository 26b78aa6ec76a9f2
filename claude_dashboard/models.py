"""Typed data models for the Claude dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

ToolStatus = Literal["running", "completed", "error"]
AgentStatus = Literal["running", "completed"]


@dataclass
class ToolEntry:
    """A tool call reconstructed from the transcript."""

    name: str
    start_time: datetime
    target: str | None = None
    status: ToolStatus = "running"
    end_time: datetime | None = None


@dataclass
class AgentEntry:
    """A sub-agent launched through the agent tool."""

    type: str
    start_time: datetime
    model: str | None = None
    description: str | None = None
    status: AgentStatus = "running"
    end_time: datetime | None = None


@dataclass
class TodoEntry:
    id: str
    content: str
    status: str = "pending"  # 'pending' | 'in_progress' | 'completed'


@dataclass
class TranscriptData:
    """Aggregated activity parsed from a session transcript."""

    session_start: datetime | None = None
    tools: list[ToolEntry] = field(default_factory=list)
    agents: list[AgentEntry] = field(default_factory=list)
    todos: list[TodoEntry] = field(default_factory=list)


@dataclass
class ConfigCounts:
    """Configuration artifacts found for the project line."""

    claude_md_count: int = 0
    rules_count: int = 0
    mcp_count: int = 0
    hooks_count: int = 0


@dataclass
class CacheEntry:
    """A cached value and the epoch time (seconds) it was stored."""

    data: Any
    timestamp: float = 0.0

    def is_valid(self, ttl_seconds: float, now: float) -> bool:
        return now - self.timestamp < ttl_seconds
