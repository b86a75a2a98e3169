"""Process settings for the ``wf`` command.

Settings are loaded from environment variables (prefix ``WF_``) and a local
`.env` file if present. They only tune the runtime; the user's tracker
credentials and base branch live in the stored configuration handled by
:mod:`dev_workflow.config`.
"""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "workflow"


class WorkflowSettings(BaseSettings):
    """Settings for the ``wf`` command.

    Environment variables:
    - WF_LOG_LEVEL                (optional)
    - WF_CONFIG_DIR               (optional)
    - WF_TRACKER_TIMEOUT_SECONDS  (optional)
    """

    log_level: str = Field(
        default="WARNING",
        description="Root logging level",
    )

    config_dir: Path | None = Field(
        default=None,
        description="Directory holding the global configuration (defaults to the user config dir)",
    )

    tracker_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout for issue tracker requests; unset means wait indefinitely",
    )

    model_config = SettingsConfigDict(
        env_prefix="WF_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def global_config_file(self) -> Path:
        """Path of the global configuration file."""

        base = self.config_dir or Path(platformdirs.user_config_dir(APP_NAME, appauthor=False))
        return base / "config.json"
