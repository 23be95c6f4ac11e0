"""Data model for remote results."""
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mutalyzer_ld.errors import MalformedResultError

NORMALIZED_RESULT = Dict[str, Any]
"""Flat mapping from field name to a scalar or an array."""


@dataclass(frozen=True)
class SingletonWrapper:
    """
    A record known to hold exactly one entry.

    The remote service uses these to wrap each operation's result
    (``{"runMutalyzerResult": {...}}``) and each array-valued field
    (``{"string": ["a", "b"]}``).
    """

    key: str
    value: Any

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "SingletonWrapper":
        """
        Wrap a mapping, failing if it does not have exactly one entry.

        :param obj:
        :return:
        """
        if not isinstance(obj, Mapping):
            raise MalformedResultError(f"Expected a single-entry record, got {type(obj).__name__}")
        if len(obj) != 1:
            raise MalformedResultError(
                f"Expected a single-entry record, got {len(obj)} entries", keys=obj.keys()
            )
        [(key, value)] = obj.items()
        return cls(key=key, value=value)

    def unwrap(self) -> Any:
        return self.value


class ErrorMessage(BaseModel):
    """A message embedded in a remote result."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str = Field(default="", alias="errorcode")
    """Message code; codes starting with ``E`` are fatal."""

    text: str = Field(default="", alias="message")
    """Human readable message."""

    @property
    def is_fatal(self) -> bool:
        return self.code.startswith("E")

    @field_validator("code", "text", mode="before")
    @classmethod
    def nil_as_empty(cls, v: Any) -> Any:
        """Nil or empty elements arrive as None."""
        if v is None:
            return ""
        return v
