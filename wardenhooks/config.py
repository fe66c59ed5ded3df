"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and WARDENHOOKS_* environment variables.  The
dispatcher takes its defaults from here.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class WardenHooksConfig(BaseSettings):
    """Hook dispatch configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export WARDENHOOKS_LOG_LEVEL=DEBUG
        export WARDENHOOKS_ISOLATE_HOOK_FAILURES=false
        export WARDENHOOKS_HOOK_TIMEOUT_SECONDS=5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WARDENHOOKS_",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"

    # Dispatch
    isolate_hook_failures: bool = True  # False: first failing hook aborts the cycle
    hook_timeout_seconds: float | None = None  # per async hook; None waits forever

    # History
    history_max_records: int = 100


# Module-level singleton: import as `from wardenhooks.config import config`
config = WardenHooksConfig()
