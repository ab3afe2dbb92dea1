"""Single entry point chaining tokenizer, converter and evaluator."""
from typing import List, Optional

from infix_calculator.common.config import CalculatorSettings
from infix_calculator.common.errors import CalculatorError, NotANumberError
from infix_calculator.common.logger import logger
from infix_calculator.common.models import Diagnostic, ErrorInfo, OperationResult
from infix_calculator.core.converter import to_postfix
from infix_calculator.core.evaluator import evaluate
from infix_calculator.core.tokenizer import tokenize

DEFAULT_SETTINGS = CalculatorSettings()


def normalize(raw_input: str) -> str:
    """Lowercase the input and remove every whitespace character."""
    return "".join(raw_input.lower().split())


def calculate(
    raw_input: str,
    settings: Optional[CalculatorSettings] = None,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> float:
    """
    Evaluate a raw expression, raising the first error met.

    :param str raw_input: Expression as typed by the user
    :param CalculatorSettings settings: Limits to apply, defaults used if None
    :param list diagnostics: Optional list receiving non-fatal diagnostics

    :return: Computed result
    :rtype: float
    :raises CalculatorError: If any stage fails
    """
    settings = settings or DEFAULT_SETTINGS
    expression = normalize(raw_input)
    tokens = tokenize(expression, diagnostics, max_length=settings.max_expression_length)
    return evaluate(to_postfix(tokens))


def evaluate_expression(raw_input: str, settings: Optional[CalculatorSettings] = None) -> OperationResult:
    """
    Evaluate a raw expression and report the outcome as a result model.

    Pipeline errors never propagate: they are returned in ``error``. A
    NotANumber error keeps its NaN in ``result``.

    :param str raw_input: Expression as typed by the user
    :param CalculatorSettings settings: Limits to apply, defaults used if None

    :return: Result holding either the value or the error, plus diagnostics
    :rtype: OperationResult
    """
    diagnostics: List[Diagnostic] = []
    try:
        value = calculate(raw_input, settings, diagnostics)
    except CalculatorError as exc:
        logger.info(f"❌ {raw_input!r}: {exc.kind.value}: {exc}")
        return OperationResult(
            expression=raw_input,
            result=exc.value if isinstance(exc, NotANumberError) else None,
            error=ErrorInfo.from_exception(exc),
            diagnostics=diagnostics,
        )
    return OperationResult(expression=raw_input, result=value, diagnostics=diagnostics)
