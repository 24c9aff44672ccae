"""Defaults for the gitmessage remote agent and pipeline.

User overrides are loaded from ~/.gitmessage/config.yaml.
Use 'gitmessage config' commands to modify settings.
"""

from pydantic import BaseModel, Field, field_validator


# ============================================================
# REMOTE AGENT
# ============================================================

API_URL = "https://api.mistral.ai/v1/agents/completions"
DEFAULT_AGENT_ID = "ag:952a4ff1:20250309:git-commit:d9a7e0dc"
API_KEY_ENV_VAR = "MISTRAL_API_KEY"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.gitmessage/config.yaml doesn't set them

DEFAULT_MAX_DIFF_CHARS = 32000
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "console"

TRUNCATION_MARKER = "...(truncated)"

VALID_LOG_FORMATS = {"console", "json"}


class Settings(BaseModel):
    """Validated runtime settings.

    Attributes:
        api_url: Completion endpoint receiving the prompt.
        agent_id: Identifier of the agent that writes the commit message.
        max_diff_chars: Diff characters kept in the prompt before truncation.
        timeout: Seconds to wait for the remote agent.
        log_level: Minimum level for structured log lines.
        log_format: "console" or "json".
    """

    api_url: str = API_URL
    agent_id: str = DEFAULT_AGENT_ID
    max_diff_chars: int = Field(default=DEFAULT_MAX_DIFF_CHARS, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    @field_validator("agent_id")
    @classmethod
    def agent_id_must_not_be_empty(cls, v: str) -> str:
        """Ensure the agent id is not blank."""
        if not v or not v.strip():
            raise ValueError("agent_id cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def log_format_must_be_known(cls, v: str) -> str:
        """Ensure the log format is supported."""
        if v not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of: {', '.join(sorted(VALID_LOG_FORMATS))}")
        return v
