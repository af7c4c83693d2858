"""The JSON oracle: run metadata plus the exact records written.

A verifier opens the produced store and checks it against this document,
so ``data`` lists the pairs in write order and ``data_records`` always
equals ``len(data)``.
"""

from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from kvtestgen._internal.oracle_json import oracle_dumps
from kvtestgen.kernel.records import Record


class RunMetadata(BaseModel):
    """Who generated the fixture, when, and how many records it holds."""
    generated_by: str
    generated_time: int = Field(ge=0)  # seconds since the epoch
    data_records: int = Field(ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class OracleDocument(BaseModel):
    """On-disk oracle layout. Field order here is the order in the file."""
    generated_by: str
    generated_time: str  # decimal epoch seconds
    data_records: int
    data: List[Tuple[str, str]]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_record_count(self) -> "OracleDocument":
        if self.data_records != len(self.data):
            raise ValueError(
                f"data_records is {self.data_records} but data holds {len(self.data)} pairs"
            )
        return self

    @classmethod
    def build(cls, metadata: RunMetadata, records: Sequence[Record]) -> "OracleDocument":
        return cls(
            generated_by=metadata.generated_by,
            generated_time=str(metadata.generated_time),
            data_records=metadata.data_records,
            data=[tuple(record.as_pair()) for record in records],
        )

    def to_json(self) -> str:
        """Serialize without the trailing newline."""
        return oracle_dumps(self.model_dump())
