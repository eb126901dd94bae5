# scenarios/consumers/driver.py
from __future__ import annotations

from typing import Optional, Union

from scenarios import logs
from scenarios.consumers.commandline import CommandLine
from scenarios.model.scenario import Scenario
from scenarios.pipeline.parallel.children import FinishedChild, PreparedChild, check_outcome
from scenarios.pipeline.parallel.executor import LoopDriver
from scenarios.utils.errors import MergeError, NotAllFinishedError, ScenariosError, WaitError

Item = Union[Scenario, MergeError]


class CommandLineDriver(LoopDriver[Item]):
    """
    Runs one ``CommandLine`` per merged scenario.

    失败策略：
      - fail-fast（默认）：第一个失败的子进程即为致命错误，停止调度
      - keep-going：失败只记录，继续调度，最后统一报告
    merge / prepare / spawn 错误无论哪种策略都是致命的。
    """

    def __init__(self, command: CommandLine, jobs: int = 1, keep_going: bool = False):
        if jobs < 1:
            raise ValueError(f"invalid number of jobs: {jobs}")
        self.command = command
        self.jobs = jobs
        self.keep_going = keep_going

        self.num_succeeded = 0
        self.num_failed = 0
        self.fatal: Optional[ScenariosError] = None

    @property
    def failed(self) -> bool:
        return self.fatal is not None or self.num_failed > 0

    def max_num_of_children(self) -> int:
        return self.jobs

    def prepare_child(self, item: Item) -> PreparedChild:
        if isinstance(item, MergeError):
            raise item
        child = self.command.with_scenario(item)
        logs.debug(f"[Driver] prepared scenario={child.name!r} argv={child.argv}")
        return child

    def on_reap(self, outcome: FinishedChild | WaitError) -> None:
        error = self._record(outcome)
        if error is None:
            return
        if not self.keep_going:
            raise error
        logs.warning_chain(error)

    def on_loop_failed(self, error: ScenariosError) -> None:
        self.fatal = error
        logs.error_chain(error)

    def on_cleanup_reap(self, outcome: FinishedChild | WaitError) -> None:
        error = self._record(outcome)
        if error is not None:
            logs.warning_chain(error)

    def on_finish(self) -> None:
        logs.debug(
            f"[Driver] finished ok={self.num_succeeded} failed={self.num_failed} "
            f"fatal={self.fatal is not None}"
        )
        if self.failed:
            raise NotAllFinishedError()

    # ---------------- internal ----------------

    def _record(self, outcome: FinishedChild | WaitError) -> Optional[Exception]:
        error = check_outcome(outcome)
        if error is None:
            self.num_succeeded += 1
        else:
            self.num_failed += 1
        return error
