"""Uniform execution outcomes shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, model_validator


@dataclass
class RawResult:
    """What the low-level execution primitive returns before shaping."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1
    last_row_id: int | None = None

    @property
    def changes(self) -> int:
        """Affected row count, clamped to zero when the driver reports none."""
        return self.rowcount if self.rowcount > 0 else 0


class ExecutionResult(BaseModel):
    """Backend-independent outcome of running a statement.

    A failed result always carries an error message and never carries rows.
    A successful result never carries an error.
    """

    success: bool
    rows: list[dict[str, Any]] = Field(default_factory=list)
    changes: int | None = None
    last_row_id: int | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_outcome(self) -> ExecutionResult:
        if self.success:
            if self.error is not None:
                raise ValueError("a successful result cannot carry an error")
        else:
            if not self.error:
                raise ValueError("a failed result requires an error message")
            if self.rows:
                raise ValueError("a failed result cannot carry rows")
        return self

    @classmethod
    def failure(cls, exc: BaseException) -> ExecutionResult:
        """Build the failure shape for an execution error."""
        return cls(success=False, error=str(exc) or type(exc).__name__)
