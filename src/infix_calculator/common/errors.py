"""Errors raised by the calculator pipeline."""
from enum import Enum
import math
from typing import Optional


class ErrorKind(str, Enum):
    """Every error or diagnostic the pipeline can report."""

    UNRECOGNIZED_CHARACTER = "UnrecognizedCharacter"
    UNBALANCED_GROUPING = "UnbalancedGrouping"
    MALFORMED_EXPRESSION = "MalformedExpression"
    DIVISION_BY_ZERO = "DivisionByZero"
    NOT_A_NUMBER = "NotANumber"
    EXPRESSION_TOO_LONG = "ExpressionTooLong"
    # Unexpected failure inside a batch worker
    INTERNAL_ERROR = "InternalError"
    # Non-fatal, only ever reported as a diagnostic
    REDUNDANT_OPERATOR_DROPPED = "RedundantOperatorDropped"


class CalculatorError(ValueError):
    """
    Base class of the fatal pipeline errors.

    :param str message: Human readable description
    :param str token: Offending character or token text, if any
    :param int position: Index of the offending character in the normalized expression, if any
    """

    kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message: str, token: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.token = token
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class UnrecognizedCharacterError(CalculatorError):
    kind = ErrorKind.UNRECOGNIZED_CHARACTER


class UnbalancedGroupingError(CalculatorError):
    kind = ErrorKind.UNBALANCED_GROUPING


class MalformedExpressionError(CalculatorError):
    kind = ErrorKind.MALFORMED_EXPRESSION


class DivisionByZeroError(CalculatorError):
    kind = ErrorKind.DIVISION_BY_ZERO


class ExpressionTooLongError(CalculatorError):
    kind = ErrorKind.EXPRESSION_TOO_LONG


class NotANumberError(CalculatorError):
    """Raised when a computation produces NaN; ``value`` keeps the NaN for display."""

    kind = ErrorKind.NOT_A_NUMBER

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        position: Optional[int] = None,
        value: float = math.nan,
    ):
        super().__init__(message, token=token, position=position)
        self.value = value
