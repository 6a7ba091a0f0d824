from pydantic import BaseModel, ConfigDict, Field, field_validator

from aptarchive.constants import DEFAULT_HASHES
from aptarchive.hashing import validate_algorithms


class SuiteFeatures(BaseModel):
    """Options that control how a suite's indices are published."""

    model_config = ConfigDict(frozen=True)

    # digest families computed for every written index, in output order
    hashes: list[str] = Field(default_factory=lambda: list(DEFAULT_HASHES))

    @field_validator("hashes")
    @classmethod
    def _check_hashes(cls, value: list[str]) -> list[str]:
        return validate_algorithms(value)
