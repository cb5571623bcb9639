"""
Runtime configuration for the usage status reporter.

Every value can be overridden from the environment with the CLAUDE_USAGE_
prefix, e.g. CLAUDE_USAGE_CACHE_TTL_MS=60000.
"""

import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Paths, endpoint and cache timing used by a single invocation"""

    model_config = SettingsConfigDict(env_prefix="CLAUDE_USAGE_")

    # Files
    credentials_file: Path = Path.home() / ".claude" / ".credentials.json"
    cache_file: Path = Path(tempfile.gettempdir()) / ".claude_usage_cache"

    # Cache timing
    cache_ttl_ms: int = 4 * 60 * 1000
    cache_jitter_ms: int = 60 * 1000  # +/- bound

    # Usage endpoint
    api_url: str = "https://api.anthropic.com/api/oauth/usage"
    anthropic_beta: str = "oauth-2025-04-20"
    user_agent: str = "claude-code-statusline/1.1.0"
    request_timeout: float | None = None  # seconds; None blocks

    log_level: str = "WARNING"
