"""Configuration for the process core tooling.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProcessSettings(BaseSettings):
    """Settings for running process definitions locally.

    Environment variables:
    - LOG_LEVEL             (optional)
    - PROCESS_STATE_PATH    (optional)
    - PROCESS_OBJECTS_PATH  (optional)
    - PROCESS_MAX_STEPS     (optional)

    Notes:
        Tests can point at a different env file via
        `ProcessSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    state_path: Path = Field(
        default=Path("process_state"),
        validation_alias="PROCESS_STATE_PATH",
        description="Directory where process instances are persisted",
    )

    objects_path: Path | None = Field(
        default=None,
        validation_alias="PROCESS_OBJECTS_PATH",
        description="JSON file describing the data objects triggers may reference",
    )

    max_steps: int = Field(
        default=1000,
        gt=0,
        validation_alias="PROCESS_MAX_STEPS",
        description="Upper bound on task executions during a single run",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @property
    def instances_file(self) -> Path:
        """Path where process instances are persisted."""

        return self.state_path / "instances.json"
