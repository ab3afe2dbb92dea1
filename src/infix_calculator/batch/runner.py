"""Evaluate many expressions in parallel, one worker process per expression."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field

from infix_calculator.batch.worker import WorkerProcess
from infix_calculator.common.config import CalculatorSettings
from infix_calculator.common.logger import logger
from infix_calculator.common.models import OperationResult

ActiveWorker = Tuple[Process, Connection]


class BatchEvaluator(BaseModel):
    """
    Evaluate a batch of expressions using worker processes.

    Features:
        - Spawns one worker process per expression.
        - Writes results immediately to disk as soon as a worker finishes.
        - Ensures each worker is destroyed immediately after finishing.
        - Keeps at most ``max_workers`` workers alive at once.
    """

    model_config = ConfigDict(frozen=True)

    output_file: Path = Field(..., description="Path to write evaluation results")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Defaults to the CPU count")
    settings: CalculatorSettings = Field(default_factory=CalculatorSettings)

    @staticmethod
    def _clean_lines(lines: Iterable[str]) -> List[Tuple[int, str]]:
        """
        Number the input lines and drop the empty ones.

        :param lines: Raw input lines

        :return: List of (line number, expression)
        :rtype: List[Tuple[int, str]]
        """
        return [
            (line_number, line.strip())
            for line_number, line in enumerate(lines, start=1)
            if line.strip()
        ]

    def _spawn_worker(self, expr: str, line_number: int) -> ActiveWorker:
        """
        Spawn a WorkerProcess for the given expression and return process and pipe.

        :param str expr: Expression to evaluate
        :param int line_number: Line number of the expression in the input

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe(duplex=False)
        worker = WorkerProcess(
            conn=child_conn, expression=expr, line_number=line_number, settings=self.settings
        )
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return process, parent_conn

    def _collect_finished_workers(
        self, active_workers: List[ActiveWorker], f_out: TextIO, results: List[OperationResult]
    ) -> None:
        """
        Block until at least one worker reported, then collect every finished worker.

        Finished workers are removed from the active_workers list and their
        result is written to the output file.

        :param list active_workers: List of tuples (Process, Pipe)
        :param file f_out: Open file handle for writing results
        :param list results: List receiving the collected results
        """
        ready = wait([pipe_conn for _, pipe_conn in active_workers])

        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            if pipe_conn not in ready:
                continue

            payload = pipe_conn.recv()
            pipe_conn.close()
            proc.join()
            active_workers.pop(i)

            result = OperationResult.model_validate(payload)
            results.append(result)

            # Write output immediately
            f_out.write(result.format_line() + "\n")
            f_out.flush()

    def evaluate_lines(self, lines: Iterable[str]) -> List[OperationResult]:
        """
        Evaluate every non-empty line and write one result line per expression.

        Steps:
            1. Drop empty lines, keeping the original line numbers.
            2. Spawn worker processes, respecting the worker limit.
            3. Write each result as soon as its worker finishes.

        :param lines: Expressions, one per line

        :return: Results ordered by line number
        :rtype: List[OperationResult]
        """
        data = self._clean_lines(lines)
        results: List[OperationResult] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            if not data:
                logger.warning("📄 No expression to evaluate")
                return results

            max_workers = min(self.max_workers or cpu_count(), len(data))
            active_workers: List[ActiveWorker] = []
            logger.info(f"🚀 Evaluating {len(data)} expressions with up to {max_workers} workers")

            for line_number, expr in data:
                # Wait until a worker slot is available
                while len(active_workers) >= max_workers:
                    self._collect_finished_workers(active_workers, f_out, results)

                active_workers.append(self._spawn_worker(expr, line_number))

            # Collect remaining active workers
            while active_workers:
                self._collect_finished_workers(active_workers, f_out, results)

        results.sort(key=lambda r: r.line)
        logger.info(f"✅ {sum(r.ok for r in results)}/{len(results)} expressions evaluated")
        return results

    def evaluate_file(self, input_file: Path) -> List[OperationResult]:
        """
        Evaluate the expressions of a plain text file, one per line.

        :param Path input_file: File to read

        :return: Results ordered by line number
        :rtype: List[OperationResult]
        """
        return self.evaluate_lines(input_file.read_text(encoding="utf-8").splitlines())
