"""Generator configuration.

Module-level constants hold the defaults; ``GeneratorConfig`` bundles them
so tests can run plans against smaller datasets.
"""

from pydantic import BaseModel, ConfigDict, Field

GENERATOR_NAME = "testgen"
BASIC_RECORD_COUNT = 10001
DEFAULT_PLAN = "basic"
DEFAULT_BLOCK_SIZE = 512
DEFAULT_FILE_MODE = 0o666
DEFAULT_BACKEND = "gdbm"


class GeneratorConfig(BaseModel):
    """Knobs shared by every run."""
    generator_name: str = GENERATOR_NAME
    record_count: int = Field(default=BASIC_RECORD_COUNT, ge=0)
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, gt=0)
    file_mode: int = Field(default=DEFAULT_FILE_MODE, ge=0, le=0o7777)

    model_config = ConfigDict(extra="forbid", frozen=True)
