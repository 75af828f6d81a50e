"""
Logging Configuration.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Section logger configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MULOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    indent: str = Field(default="    ", description="Indentation unit per open section")
    timestamp_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="Record timestamp format")
    report_disk: bool = Field(default=False, description="Show disk usage of disk_path on every record")
    disk_path: Optional[str] = Field(
        default=None,
        description="Directory whose size is reported (default: system temporary directory)",
    )
    console_stream: Literal["stdout", "stderr"] = Field(default="stdout", description="Console sink stream")
