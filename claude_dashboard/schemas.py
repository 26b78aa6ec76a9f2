"""
Pydantic models for the JSON the status line reads and writes.

These define the shapes of the stdin snapshot sent by the CLI, the user
config file, the usage-limits API response and the on-disk usage cache.
"""

from __future__ import annotations

import logging

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from .constants import DEFAULT_CACHE_TTL

logger = logging.getLogger(__name__)

# ── Stdin snapshot ───────────────────────────────────────────────────────────


class ModelInfo(BaseModel):
    id: str = ""
    display_name: str


class WorkspaceInfo(BaseModel):
    current_dir: str = ""


class CurrentUsage(BaseModel):
    """Token usage of the most recent API call."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @property
    def context_tokens(self) -> int:
        """Tokens currently occupying the context window."""
        return self.input_tokens + self.cache_creation_input_tokens + self.cache_read_input_tokens


class ContextWindow(BaseModel):
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    context_window_size: int
    current_usage: CurrentUsage | None = None


class CostInfo(BaseModel):
    total_cost_usd: float = 0.0


class StdinInput(BaseModel):
    """The snapshot the CLI pipes to the status line command."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: ModelInfo
    workspace: WorkspaceInfo = Field(default_factory=WorkspaceInfo)
    context_window: ContextWindow
    cost: CostInfo
    cwd: str | None = None
    transcript_path: str | None = None

    @property
    def working_dir(self) -> str | None:
        """Explicit cwd first, then the workspace directory."""
        return self.cwd or self.workspace.current_dir or None


# ── User config (~/.claude/claude-dashboard.local.json) ─────────────────────


class LenientModel(BaseModel):
    """A model whose invalid fields fall back to their defaults individually."""

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(cls, value, handler, info: ValidationInfo):
        try:
            return handler(value)
        except ValidationError as e:
            logger.debug("Ignoring invalid config value for %s: %s", info.field_name, e)
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)


class CacheSettings(LenientModel):
    model_config = ConfigDict(populate_by_name=True)

    ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL, alias="ttlSeconds")


class DashboardConfig(LenientModel):
    """
    User preferences. Unknown keys are ignored and each malformed value
    falls back to its own default.

    ``language`` is "en", "ko" or "auto"; any other language gets English.
    ``plan`` is "max" or "pro"; anything but "max" shows only the 5h window.
    """

    language: str = "auto"
    plan: str = "max"
    cache: CacheSettings = Field(default_factory=CacheSettings)


# ── Usage limits (GET /api/oauth/usage) ──────────────────────────────────────


class UsageWindow(BaseModel):
    utilization: float = 0.0
    resets_at: str | None = None

    @field_validator("utilization", mode="before")
    @classmethod
    def _null_utilization(cls, v):
        return 0.0 if v is None else v


class UsageLimits(BaseModel):
    """Rate-limit utilization per window. Absent windows are None."""

    five_hour: UsageWindow | None = None
    seven_day: UsageWindow | None = None
    seven_day_sonnet: UsageWindow | None = None


class UsageCacheFile(BaseModel):
    """On-disk usage cache. ``timestamp`` is epoch milliseconds."""

    data: UsageLimits
    timestamp: float
