"""
Command-line shell around the calculator core.

Modes:
- ``-e EXPR...``: evaluate expressions given on the command line
- ``-f FILE``: evaluate a file of expressions in parallel worker processes
- no argument: interactive menu (compute, help, exit)
"""
import argparse
from importlib import resources
from pathlib import Path
import sys
from typing import Callable, List, Optional

from pydantic import BaseModel, FilePath, ValidationError

from infix_calculator.batch.runner import BatchEvaluator
from infix_calculator.common.config import CalculatorSettings, load_settings
from infix_calculator.common.logger import configure_logging
from infix_calculator.common.models import OperationResult
from infix_calculator.core.calculator import evaluate_expression, normalize


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : list of str
        Expressions to evaluate directly.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    verbose : bool
        Enable debug logging.
    """

    expressions: List[str] = []
    file_path: Optional[FilePath] = None
    verbose: bool = False


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="infix-calculator",
        description="Infix calculator with trigonometric and logarithmic functions",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-e", "--expression",
        nargs="+",
        dest="expressions",
        default=[],
        help="Expression(s) to evaluate",
    )
    group.add_argument(
        "-f", "--file",
        dest="file_path",
        help="Path to a file containing one expression per line",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    try:
        return CliArgs(expressions=args.expressions, file_path=args.file_path, verbose=args.verbose)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the output file path based on the input file.

    Examples
    --------
    input: resources/operations.txt
    output: resources/operations_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    return input_path.with_name(f"{input_path.stem}_results.txt")


def load_help_text() -> str:
    """Read the help text shipped with the package."""
    return resources.files("infix_calculator").joinpath("help.txt").read_text(encoding="utf-8")


def format_result(outcome: OperationResult) -> str:
    """Render a result for the console, diagnostics first."""
    lines = [f"Note: {d.message} (at position {d.position})" for d in outcome.diagnostics]
    if outcome.ok:
        lines.append(f"Result: {outcome.result}")
    else:
        lines.append(f"Error [{outcome.error.kind.value}]: {outcome.error.describe()}")
        if outcome.result is not None:
            lines.append(f"Result: {outcome.result}")
    return "\n".join(lines)


def run_interactive(
    settings: CalculatorSettings,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Run the interactive menu until the user exits or input ends.

    :param settings: Calculator settings
    :param read: Prompting input function
    :param write: Output function
    """
    try:
        while True:
            write("----------INFIX CALCULATOR----------")
            write("--SELECT AN OPTION FROM THE MENU--")
            write("1. Compute")
            write("2. Help")
            write("3. Exit")
            selection = normalize(read("Selection: "))

            if selection in ("1", "compute"):
                while True:
                    write("\nCOMPUTATION")
                    expression = read("Please enter your expression here: ")
                    write(format_result(evaluate_expression(expression, settings)))
                    choice = normalize(read("Would you like to do another expression? (yes to repeat) "))
                    if choice != "yes":
                        break

            elif selection in ("2", "help"):
                write(load_help_text())

            elif selection in ("3", "exit"):
                write("Closing calculator. Thank you!")
                return

            else:
                write("Sorry, but we didn't understand your request.")
    except EOFError:
        return


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the ``infix-calculator`` command.

    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)
    settings = load_settings()
    configure_logging("DEBUG" if cli_args.verbose else settings.log_level)

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        output_path = build_output_path(input_path)
        evaluator = BatchEvaluator(
            output_file=output_path, max_workers=settings.max_workers, settings=settings
        )
        results = evaluator.evaluate_file(input_path)
        for outcome in results:
            print(outcome.format_line())
        print(f"Results written to {output_path}")
        return 0 if all(r.ok for r in results) else 1

    if cli_args.expressions:
        status = 0
        for expression in cli_args.expressions:
            outcome = evaluate_expression(expression, settings)
            print(outcome.format_line())
            if not outcome.ok:
                status = 1
        return status

    run_interactive(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
