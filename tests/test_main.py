"""Test the command-line shell."""
from pathlib import Path

import pytest

from infix_calculator import main as cli
from infix_calculator.common.config import CalculatorSettings


def test_build_output_path() -> None:
    assert cli.build_output_path(Path("resources/operations.txt")) == Path("resources/operations_results.txt")


def test_parse_args_expressions() -> None:
    args = cli.parse_args(["-e", "1+1", "2*3"])
    assert args.expressions == ["1+1", "2*3"]
    assert args.file_path is None
    assert not args.verbose


def test_parse_args_missing_file(tmp_path: Path) -> None:
    """A file that does not exist is rejected by validation."""
    with pytest.raises(SystemExit):
        cli.parse_args(["-f", str(tmp_path / "missing.txt")])


def test_parse_args_exclusive_modes(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["-e", "1", "-f", "ops.txt"])


def test_main_expressions(capsys) -> None:
    status = cli.main(["-e", "3+4*2", "2^3^2"])
    out = capsys.readouterr().out.splitlines()
    assert status == 0
    assert out == ["3+4*2 = 11.0", "2^3^2 = 512.0"]


def test_main_expression_error(capsys) -> None:
    status = cli.main(["-e", "5/0"])
    out = capsys.readouterr().out
    assert status == 1
    assert out.startswith("5/0 -> ERROR:")


def test_main_file(tmp_path: Path, capsys) -> None:
    input_file = tmp_path / "ops.txt"
    input_file.write_text("1+2\n\nsqrt(81)\n")

    status = cli.main(["-f", str(input_file)])

    assert status == 0
    results = (tmp_path / "ops_results.txt").read_text().splitlines()
    assert sorted(results) == ["1+2 = 3.0", "sqrt(81) = 9.0"]
    assert "Results written to" in capsys.readouterr().out


def test_format_result_with_diagnostic() -> None:
    text = cli.format_result(cli.evaluate_expression("3**2"))
    assert text.splitlines() == ["Note: Redundant operator '*' dropped (at position 2)", "Result: 6.0"]


def test_format_result_error() -> None:
    text = cli.format_result(cli.evaluate_expression("(1"))
    assert text.startswith("Error [UnbalancedGrouping]:")


def run_menu(answers):
    """Drive the interactive menu with canned answers and collect its output."""
    replies = iter(answers)
    output = []

    def read(prompt):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError

    cli.run_interactive(CalculatorSettings(), read=read, write=output.append)
    return output


def test_interactive_compute_then_exit() -> None:
    output = run_menu(["1", "3 + 4", "yes", "sin(0)", "no", "exit"])
    assert "Result: 7.0" in output
    assert "Result: 0.0" in output
    assert output[-1] == "Closing calculator. Thank you!"


def test_interactive_help() -> None:
    output = run_menu(["Help", "3"])
    assert any("INFIX CALCULATOR HELP" in text for text in output)


def test_interactive_unknown_selection_and_eof() -> None:
    output = run_menu(["9"])
    assert "Sorry, but we didn't understand your request." in output
