# scenarios/config/run_config.py
from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_DELIMITER = ", "


class RunConfig(BaseModel):
    """
    Defaults of a run; every field can be overridden by a CLI flag.

    jobs == 0 means "one job per CPU".
    """

    jobs: int = Field(default=1, ge=0)
    keep_going: bool = False
    strict: bool = True
    delimiter: str = DEFAULT_DELIMITER
    ignore_env: bool = False
    insert_name: bool = True
    export_name: bool = True

    @field_validator("delimiter")
    @classmethod
    def _no_nul_in_delimiter(cls, value: str) -> str:
        # 合并后的名字不能带 NUL
        if "\0" in value:
            raise ValueError("delimiter must not contain a NUL byte")
        return value

    def resolved_jobs(self) -> int:
        if self.jobs == 0:
            return os.cpu_count() or 1
        return self.jobs
