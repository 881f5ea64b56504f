"""Scan configuration threaded explicitly into every validator."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .models import MODULE_ORDER

logger = logging.getLogger(__name__)

REPORT_FILENAME = "ready-to-ship-report.json"


class ScanLimits(BaseModel):
    """Soft caps on how many matched files each module opens."""

    error_handler_files_per_glob: int = Field(default=10, ge=0)
    error_handler_main_files: int = Field(default=3, ge=0)
    security_feature_files: int = Field(default=20, ge=0)
    security_antipattern_files: int = Field(default=10, ge=0)
    database_connection_files: int = Field(default=10, ge=0)


class ScanConfig(BaseModel):
    """Where to scan and which modules to run."""

    project_path: Path = Field(default=Path("."), description="Root of the project to inspect")
    skip: list[str] = Field(default_factory=list, description="Module names to leave out of a report")
    limits: ScanLimits = Field(default_factory=ScanLimits)

    @field_validator("skip", mode="before")
    @classmethod
    def _split_skip(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        return [name.strip().lower() for name in value if name and name.strip()]

    @property
    def root(self) -> Path:
        return self.project_path.expanduser().resolve()

    @property
    def modules(self) -> list[str]:
        """Modules to run, in report order."""
        unknown = [name for name in self.skip if name not in MODULE_ORDER]
        if unknown:
            logger.warning(f"Ignoring unknown modules in skip list: {', '.join(unknown)}")
        return [name for name in MODULE_ORDER if name not in self.skip]
