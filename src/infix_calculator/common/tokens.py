"""Token types produced by the tokenizer and reordered by the converter."""
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from infix_calculator.common.operators import GroupKind, Operator


class BaseToken(BaseModel):
    """Fields shared by every token."""

    # Tokens are values: immutable and hashable
    model_config = ConfigDict(frozen=True)

    position: int = Field(default=0, ge=0, description="Index of the token's first character")


class NumberToken(BaseToken):
    type: Literal["number"] = "number"
    value: float = Field(..., description="Numeric literal, sign included")

    def __str__(self) -> str:
        return f"{self.value:g}"


class OperatorToken(BaseToken):
    """Binary operator such as ``+`` or ``^``."""

    type: Literal["operator"] = "operator"
    operator: Operator

    def __str__(self) -> str:
        return self.operator.symbol


class FunctionToken(BaseToken):
    """Unary function such as ``sqrt`` or ``ln``."""

    type: Literal["function"] = "function"
    operator: Operator

    def __str__(self) -> str:
        return self.operator.symbol


class LeftGroupToken(BaseToken):
    type: Literal["left_group"] = "left_group"
    group: GroupKind

    def __str__(self) -> str:
        return self.group.opener


class RightGroupToken(BaseToken):
    type: Literal["right_group"] = "right_group"
    group: GroupKind

    def __str__(self) -> str:
        return self.group.closer


Token = Union[NumberToken, OperatorToken, FunctionToken, LeftGroupToken, RightGroupToken]
GroupToken = Union[LeftGroupToken, RightGroupToken]
OperatorLikeToken = Union[OperatorToken, FunctionToken]
