import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    debug: bool = False
    sample_every: int = Field(default=1000, ge=1)


class RunModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    input_osm: Path
    output_nodes: Path
    start_node: int = Field(gt=0, lt=2**63)
    generator: str = "osmpp"
    run_id: str = "local"
    log: LogModel = LogModel()

    @field_validator("input_osm", "output_nodes", mode="before")
    @classmethod
    def _expand(cls, v):
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("path must not be empty")
            return os.path.expandvars(os.path.expanduser(v))
        return v
