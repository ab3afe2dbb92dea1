"""Evaluate a postfix token sequence with a value stack."""
import math
from typing import List, Sequence

from infix_calculator.common.errors import (
    DivisionByZeroError,
    MalformedExpressionError,
    NotANumberError,
    UnbalancedGroupingError,
)
from infix_calculator.common.logger import logger
from infix_calculator.common.tokens import (
    FunctionToken,
    LeftGroupToken,
    NumberToken,
    RightGroupToken,
    Token,
)


def evaluate(postfix: Sequence[Token]) -> float:
    """
    Reduce a postfix sequence to a single value.

    Binary operators pop ``b`` then ``a`` and push ``a OP b``; functions pop
    one value. Exactly one value must remain at the end.

    :param Sequence[Token] postfix: Tokens in postfix order

    :return: Computed result
    :rtype: float
    :raises MalformedExpressionError: If an operator lacks operands or values are left over
    :raises DivisionByZeroError: On a division by zero (``5/0``, ``cot(0)``)
    :raises NotANumberError: If any computation yields NaN
    """
    stack: List[float] = []

    for token in postfix:
        if isinstance(token, NumberToken):
            stack.append(token.value)
            continue

        if isinstance(token, (LeftGroupToken, RightGroupToken)):
            raise UnbalancedGroupingError(
                f"Grouping symbol {str(token)!r} in postfix expression",
                token=str(token),
                position=token.position,
            )

        op = token.operator
        if len(stack) < op.arity:
            kind = "function" if isinstance(token, FunctionToken) else "operator"
            raise MalformedExpressionError(
                f"Not enough operands for {kind} {op.symbol!r}",
                token=op.symbol,
                position=token.position,
            )

        # Operands come off the stack in reverse order: b first, then a
        operands = stack[-op.arity:]
        del stack[-op.arity:]

        try:
            value = op.compute(*operands)
        except ZeroDivisionError:
            raise DivisionByZeroError(
                f"Cannot divide by zero in {op.symbol!r}", token=op.symbol, position=token.position
            ) from None

        if math.isnan(value):
            raise NotANumberError(
                f"{op.symbol!r} of {', '.join(f'{x:g}' for x in operands)} is not a number",
                token=op.symbol,
                position=token.position,
                value=value,
            )
        stack.append(value)

    if len(stack) != 1:
        raise MalformedExpressionError(
            "Empty expression" if not stack else f"Invalid expression ({len(stack)} operands left)"
        )

    logger.debug(f"Evaluated to {stack[0]}")
    return stack[0]
