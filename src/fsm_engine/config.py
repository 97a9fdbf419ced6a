"""Environment based settings for the command line tools."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Settings read from ``FSM_ENGINE_*`` environment variables."""

    log_level: str = "WARNING"
    log_format: str = DEFAULT_LOG_FORMAT
    export_format: str = "yaml"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        return cls(
            log_level=os.getenv("FSM_ENGINE_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("FSM_ENGINE_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            export_format=os.getenv("FSM_ENGINE_EXPORT_FORMAT", "yaml").lower(),
        )


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=settings.log_format)
