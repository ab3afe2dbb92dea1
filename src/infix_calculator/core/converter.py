"""Infix to postfix conversion (shunting-yard)."""
from typing import List, Sequence, Union

from infix_calculator.common.errors import UnbalancedGroupingError
from infix_calculator.common.logger import logger
from infix_calculator.common.tokens import (
    FunctionToken,
    LeftGroupToken,
    NumberToken,
    OperatorToken,
    RightGroupToken,
    Token,
)

StackEntry = Union[OperatorToken, FunctionToken, LeftGroupToken]


def to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """
    Convert tokens from infix order to Reverse Polish Notation using the Shunting-yard algorithm.

    Operators are temporarily stored on a stack and output according to
    their precedence and associativity; grouping symbols never reach the
    output.

    Examples:
        - Infix: 3 + 4 * 2
        - Postfix: 3 4 2 * +

    :param Sequence[Token] tokens: Tokens in infix order

    :return: Tokens in postfix order
    :rtype: List[Token]
    :raises UnbalancedGroupingError: On a mismatched, unopened or unclosed grouping symbol
    """
    output: List[Token] = []
    stack: List[StackEntry] = []

    for token in tokens:
        if isinstance(token, NumberToken):
            output.append(token)

        elif isinstance(token, (OperatorToken, FunctionToken)):
            # Pop operators binding at least as tightly as the incoming one
            while stack and isinstance(stack[-1], (OperatorToken, FunctionToken)):
                if not token.operator.yields_to(stack[-1].operator):
                    break
                output.append(stack.pop())
            stack.append(token)

        elif isinstance(token, LeftGroupToken):
            stack.append(token)

        elif isinstance(token, RightGroupToken):
            while stack and not isinstance(stack[-1], LeftGroupToken):
                output.append(stack.pop())
            if not stack:
                raise UnbalancedGroupingError(
                    f"{token.group.closer!r} has no matching {token.group.opener!r}",
                    token=token.group.closer,
                    position=token.position,
                )
            opener = stack.pop()
            if opener.group is not token.group:
                raise UnbalancedGroupingError(
                    f"{token.group.closer!r} closes {opener.group.opener!r} opened at position {opener.position}",
                    token=token.group.closer,
                    position=token.position,
                )

    while stack:
        entry = stack.pop()
        if isinstance(entry, LeftGroupToken):
            raise UnbalancedGroupingError(
                f"{entry.group.opener!r} is never closed",
                token=entry.group.opener,
                position=entry.position,
            )
        output.append(entry)

    # Post-condition: grouping symbols never survive the conversion
    for token in output:
        if isinstance(token, (LeftGroupToken, RightGroupToken)):
            raise UnbalancedGroupingError(
                f"Leftover {str(token)!r} in postfix expression", token=str(token), position=token.position
            )

    logger.debug(f"Postfix: {' '.join(str(t) for t in output)}")
    return output
