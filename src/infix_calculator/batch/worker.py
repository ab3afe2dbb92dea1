"""Worker process for evaluating mathematical expressions."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infix_calculator.common.config import CalculatorSettings
from infix_calculator.common.errors import ErrorKind
from infix_calculator.common.logger import logger
from infix_calculator.common.models import ErrorInfo, OperationResult
from infix_calculator.core.calculator import evaluate_expression


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single expression.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one expression only
        - Sends the OperationResult (as a dict) through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only) for safety
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    settings: Optional[CalculatorSettings] = Field(default=None, description="Limits applied to the expression")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def run(self) -> None:
        """
        Evaluate the expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        try:
            outcome = evaluate_expression(self.expression, self.settings)
            outcome = outcome.model_copy(update={"line": self.line_number})

            if outcome.ok:
                logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
            else:
                logger.error(
                    f"👷❌ Worker failed on line {self.line_number}: {outcome.error.kind.value}\n"
                    f"Could not evaluate: {self.expression!r}"
                )

            self.conn.send(outcome.model_dump())

        except Exception as exc:
            logger.error(
                f"👷❌ Worker crashed on line {self.line_number}: {exc}\n"
                f"Could not evaluate: {self.expression!r}"
            )

            # Send error through the connection
            failure = OperationResult(
                expression=self.expression,
                error=ErrorInfo(kind=ErrorKind.INTERNAL_ERROR, message=str(exc) or type(exc).__name__),
                line=self.line_number,
            )
            self.conn.send(failure.model_dump())

        finally:
            # Always close the connection
            self.conn.close()
