"""
Application configuration using Pydantic Settings.

Every setting can be overridden through a ``PD_``-prefixed environment
variable; command line flags take precedence over both.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Settings for the package search tool.

    Defaults reproduce the stock behavior: a five second bound per source,
    paru preferred over yay, and ``less -R +Gg`` as the pager.
    """

    model_config = SettingsConfigDict(
        env_prefix="PD_",
        extra="ignore",
    )

    timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for each source before giving up on it",
    )
    aur_helpers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["paru", "yay"],
        description="AUR helpers to probe, in order of preference",
    )
    pager: str = Field(default="less", description="Pager program")
    pager_args: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["-R", "+Gg"],
        description="Arguments passed to the pager",
    )
    use_pager: bool = Field(default=True, description="Allow paging long reports")
    default_terminal_height: int = Field(
        default=24,
        ge=1,
        description="Terminal height assumed when it cannot be queried",
    )
    log_level: LogLevel = Field(default="WARNING", description="Minimum log level")
    json_logs: bool = Field(default=False, description="Emit logs as JSON lines")

    @field_validator("aur_helpers", mode="before")
    @classmethod
    def parse_aur_helpers(cls, v: str | list[str]) -> list[str]:
        """Parse helpers from a comma-separated string or list."""
        if isinstance(v, str):
            return [h.strip() for h in v.split(",") if h.strip()]
        return v

    @field_validator("pager_args", mode="before")
    @classmethod
    def parse_pager_args(cls, v: str | list[str]) -> list[str]:
        """Parse pager arguments from a whitespace-separated string or list."""
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Configured Settings instance.
    """
    return Settings()
