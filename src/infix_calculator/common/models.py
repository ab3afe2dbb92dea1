"""Pydantic models for evaluation requests, results and diagnostics."""
import math
from typing import List, Optional

from pydantic import BaseModel, Field

from infix_calculator.common.errors import CalculatorError, ErrorKind


class OperationRequest(BaseModel):
    """Represents a single expression to evaluate."""

    expression: str = Field(..., description="Mathematical expression as a string")
    line: Optional[int] = Field(default=None, ge=1, description="Line number in the input file")


class Diagnostic(BaseModel):
    """Non-fatal note emitted while tokenizing, e.g. a dropped duplicate operator."""

    kind: ErrorKind
    message: str
    token: Optional[str] = None
    position: Optional[int] = None


class ErrorInfo(BaseModel):
    """Description of the error that stopped an evaluation."""

    kind: ErrorKind
    message: str
    token: Optional[str] = Field(default=None, description="Offending character or token")
    position: Optional[int] = Field(default=None, description="Index in the normalized expression")

    @classmethod
    def from_exception(cls, exc: CalculatorError) -> "ErrorInfo":
        return cls(kind=exc.kind, message=exc.message, token=exc.token, position=exc.position)

    def describe(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class OperationResult(BaseModel):
    """Represents the outcome of one evaluated expression."""

    expression: str = Field(..., description="Original expression")
    result: Optional[float] = Field(
        default=None, description="Evaluated value; NaN payload for NotANumber errors"
    )
    error: Optional[ErrorInfo] = Field(default=None, description="Set when the evaluation failed")
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    line: Optional[int] = Field(default=None, ge=1, description="Line number in the input file")

    @property
    def ok(self) -> bool:
        return self.error is None

    def format_line(self) -> str:
        """
        Render the result the way it is written to result files.

        :return: ``expression = value`` or ``expression -> ERROR: message``
        :rtype: str
        """
        if self.error is None:
            return f"{self.expression} = {self.result}"
        message = self.error.describe()
        if self.result is not None and math.isnan(self.result):
            message = f"{message} [result: {self.result}]"
        return f"{self.expression} -> ERROR: {message}"
