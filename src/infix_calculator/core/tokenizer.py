"""
Turn a normalized expression string into a sequence of tokens.

The scan is a single left-to-right pass. Decisions that depend on context
(unary minus, duplicate operators) look at the previously emitted token,
never at raw character offsets.
"""
from typing import List, Optional

from infix_calculator.common.errors import (
    ErrorKind,
    ExpressionTooLongError,
    UnrecognizedCharacterError,
)
from infix_calculator.common.logger import logger
from infix_calculator.common.models import Diagnostic
from infix_calculator.common.operators import (
    BINARY_OPERATORS,
    CLOSERS,
    FUNCTION_PATTERNS,
    OPENERS,
    Operator,
)
from infix_calculator.common.tokens import (
    FunctionToken,
    LeftGroupToken,
    NumberToken,
    OperatorToken,
    RightGroupToken,
    Token,
)

DEFAULT_MAX_LENGTH = 1000

NUMBER_CHARS = frozenset("0123456789.")


def _is_digit(expression: str, index: int) -> bool:
    return index < len(expression) and expression[index].isdigit()


def _expects_operand(tokens: List[Token]) -> bool:
    """True when the next token must start an operand: at the start, or after an operator or opener."""
    if not tokens:
        return True
    return isinstance(tokens[-1], (OperatorToken, FunctionToken, LeftGroupToken))


def _number_token(literal: str, position: int) -> NumberToken:
    """
    Convert a buffered numeric literal into a token.

    :param str literal: Digits and dots, optionally prefixed with ``-``
    :param int position: Index of the literal's first character

    :return: The number token
    :rtype: NumberToken
    :raises UnrecognizedCharacterError: If the literal is not a valid number (``1.2.3``, ``.``)
    """
    if literal.count(".") > 1 or not any(ch.isdigit() for ch in literal):
        raise UnrecognizedCharacterError(
            f"Malformed number literal {literal!r}", token=literal, position=position
        )
    return NumberToken(value=float(literal), position=position)


def _drop_redundant(
    symbol: str, position: int, expression: str, diagnostics: Optional[List[Diagnostic]]
) -> None:
    """Log a dropped duplicate operator and record it as a diagnostic."""
    message = f"Redundant operator {symbol!r} dropped"
    logger.warning(f"⚠️ {message} at position {position} in {expression!r}")
    if diagnostics is not None:
        diagnostics.append(
            Diagnostic(
                kind=ErrorKind.REDUNDANT_OPERATOR_DROPPED,
                message=message,
                token=symbol,
                position=position,
            )
        )


def _match_function(expression: str, index: int) -> Optional[Operator]:
    for name, op in FUNCTION_PATTERNS:
        if expression.startswith(name, index):
            return op
    return None


def tokenize(
    expression: str,
    diagnostics: Optional[List[Diagnostic]] = None,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> List[Token]:
    """
    Split a lowercased, whitespace-free expression into tokens.

    Rules:
        - Digits and dots accumulate into a number literal.
        - A ``-`` directly followed by a digit, where an operand is expected,
          becomes the sign of that literal (``-5+3``, ``3*-2``, ``sin-1``).
        - ``--`` collapses into ``+``; any other doubled binary operator is
          dropped and reported as a diagnostic.
        - Function names are matched by literal lookahead, longest name first.

    Grouping symbols are not checked for balance here, the converter does it.

    :param str expression: Normalized expression
    :param list diagnostics: Optional list receiving non-fatal diagnostics
    :param int max_length: Longest accepted expression

    :return: Tokens in infix order
    :rtype: List[Token]
    :raises ExpressionTooLongError: If the expression exceeds ``max_length``
    :raises UnrecognizedCharacterError: On any character matching no rule
    """
    if len(expression) > max_length:
        raise ExpressionTooLongError(
            f"Expression is {len(expression)} characters long, the limit is {max_length}"
        )

    tokens: List[Token] = []
    number = ""
    number_start = 0
    index = 0

    while index < len(expression):
        char = expression[index]

        if char in NUMBER_CHARS:
            if not number:
                number_start = index
            number += char
            index += 1
            continue

        if number:
            tokens.append(_number_token(number, number_start))
            number = ""

        if char in BINARY_OPERATORS:
            op = BINARY_OPERATORS[char]
            previous = tokens[-1] if tokens else None

            if isinstance(previous, OperatorToken) and previous.operator is op:
                if op is not Operator.SUBTRACTION:
                    _drop_redundant(char, index, expression, diagnostics)
                elif len(tokens) > 1 and isinstance(tokens[-2], OperatorToken) \
                        and tokens[-2].operator is Operator.ADDITION:
                    # Double negation right after a plus: the plus it yields is redundant
                    tokens.pop()
                    _drop_redundant(Operator.ADDITION.symbol, index, expression, diagnostics)
                else:
                    # Double negation
                    tokens[-1] = OperatorToken(operator=Operator.ADDITION, position=previous.position)
            elif op is Operator.SUBTRACTION and _expects_operand(tokens) and _is_digit(expression, index + 1):
                number = "-"
                number_start = index
            else:
                tokens.append(OperatorToken(operator=op, position=index))
            index += 1

        elif char in OPENERS:
            tokens.append(LeftGroupToken(group=OPENERS[char], position=index))
            index += 1

        elif char in CLOSERS:
            tokens.append(RightGroupToken(group=CLOSERS[char], position=index))
            index += 1

        else:
            function = _match_function(expression, index)
            if function is None:
                raise UnrecognizedCharacterError(
                    f"{char!r} is not a valid expression character", token=char, position=index
                )
            tokens.append(FunctionToken(operator=function, position=index))
            index += len(function.symbol)

    # Flush the literal still pending at the end of input
    if number:
        tokens.append(_number_token(number, number_start))

    logger.debug(f"Tokenized {expression!r} into {' '.join(str(t) for t in tokens)}")
    return tokens
