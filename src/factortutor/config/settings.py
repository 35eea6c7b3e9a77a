"""Configuration model for FactorTutor."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class CatalogConfig(BaseModel):
    course_id: str = "trinomial_factoring"
    remote_url: Optional[str] = Field(default=None)
    timeout_seconds: float = 5.0

    def get_remote_url(self) -> Optional[str]:
        return os.environ.get("FACTORTUTOR_CATALOG_URL") or self.remote_url

class Settings(BaseModel):
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    log_level: str = "WARNING"

    @classmethod
    def load(cls) -> "Settings":
        config_path = Path.home() / ".factortutor" / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def get_log_level(self) -> str:
        return (os.environ.get("FACTORTUTOR_LOG_LEVEL") or self.log_level).upper()


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr so stdout stays free for protocol output."""
    logging.basicConfig(stream=sys.stderr, level=level.upper(), format=LOG_FORMAT, force=True)
