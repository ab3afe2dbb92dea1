"""Test classes OperationRequest, OperationResult and ErrorInfo."""
import math

from pydantic import ValidationError
import pytest

from infix_calculator.common.errors import DivisionByZeroError, ErrorKind, UnbalancedGroupingError
from infix_calculator.common.models import Diagnostic, ErrorInfo, OperationRequest, OperationResult


def test_operation_request_valid() -> None:
    """Test that a valid OperationRequest can be created."""
    req = OperationRequest(expression="2 + 2 * 3")
    assert req.expression == "2 + 2 * 3"
    assert req.line is None


def test_operation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        # int instead of str
        OperationRequest(expression=123)


def test_operation_result_valid() -> None:
    """Test that a valid OperationResult can be created."""
    res = OperationResult(expression="2 + 2 * 3", result=8.0)
    assert res.ok
    assert res.result == 8.0
    assert res.diagnostics == []
    assert res.format_line() == "2 + 2 * 3 = 8.0"


def test_operation_result_invalid_result_type() -> None:
    """Test that invalid result type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(expression="2 + 2", result="not a float")


def test_operation_result_invalid_line() -> None:
    with pytest.raises(ValidationError):
        OperationResult(expression="2 + 2", result=4.0, line=0)


def test_error_info_from_exception() -> None:
    info = ErrorInfo.from_exception(DivisionByZeroError("Cannot divide by zero", token="/", position=1))
    assert info.kind is ErrorKind.DIVISION_BY_ZERO
    assert info.token == "/"
    assert info.describe() == "Cannot divide by zero (at position 1)"


def test_format_line_error() -> None:
    exc = UnbalancedGroupingError("'(' is never closed", token="(", position=0)
    res = OperationResult(expression="(3+4", error=ErrorInfo.from_exception(exc))
    assert not res.ok
    assert res.format_line() == "(3+4 -> ERROR: '(' is never closed (at position 0)"


def test_format_line_nan_payload() -> None:
    res = OperationResult(
        expression="arcsin(2)",
        result=math.nan,
        error=ErrorInfo(kind=ErrorKind.NOT_A_NUMBER, message="not a number"),
    )
    assert res.format_line() == "arcsin(2) -> ERROR: not a number [result: nan]"


def test_round_trip_through_dict() -> None:
    """Results survive model_dump/model_validate, as done between processes."""
    res = OperationResult(
        expression="3++2",
        result=5.0,
        diagnostics=[Diagnostic(kind=ErrorKind.REDUNDANT_OPERATOR_DROPPED, message="dropped", token="+", position=2)],
        line=3,
    )
    assert OperationResult.model_validate(res.model_dump()) == res
