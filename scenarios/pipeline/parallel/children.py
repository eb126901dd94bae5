# scenarios/pipeline/parallel/children.py
from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from scenarios.pipeline.parallel.tokens import PoolToken, TokenStock
from scenarios.utils.errors import ChildFailedError, SpawnError, WaitError


@dataclass
class PreparedChild:
    """
    A process that is ready to start.

    ``name`` (the scenario) and ``program`` only serve error messages;
    ``env`` is the COMPLETE environment of the child.
    """

    name: str
    argv: List[str]
    env: Dict[str, str] = field(default_factory=dict)

    @property
    def program(self) -> str:
        return self.argv[0]

    def spawn(self, token: PoolToken) -> "RunningChild":
        """
        Start the process. Raises ``SpawnError``; the token then still
        belongs to the caller.
        """
        try:
            process = subprocess.Popen(self.argv, env=self.env)
        except OSError as e:
            raise SpawnError(self.name, self.program, e) from e
        return RunningChild(self.name, process, token)

    def spawn_or_return_token(self, token: PoolToken, stock: TokenStock) -> "RunningChild":
        """Like ``spawn``, but hands the token back to ``stock`` on failure."""
        try:
            return self.spawn(token)
        except SpawnError:
            stock.release(token)
            raise


class RunningChild:
    """A started process together with the token it occupies."""

    def __init__(self, name: str, process: subprocess.Popen, token: PoolToken):
        self.name = name
        self.process = process
        self.token = token

    @property
    def pid(self) -> int:
        return self.process.pid

    def is_finished(self) -> bool:
        """Non-blocking status check; raises ``WaitError``."""
        try:
            return self.process.poll() is not None
        except OSError as e:
            raise WaitError(self.name, e) from e

    def finish(self) -> Tuple["FinishedChild | WaitError", PoolToken]:
        """
        Collect the exit status. Must only be called once, after the
        process has exited (or ``is_finished`` failed).
        """
        try:
            returncode = self.process.wait()
        except OSError as e:
            error = WaitError(self.name, e)
            error.__cause__ = e
            return error, self.token
        return FinishedChild(self.name, returncode), self.token

    def __repr__(self) -> str:
        return f"RunningChild(name={self.name!r}, pid={self.pid})"


@dataclass(frozen=True)
class FinishedChild:
    name: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def check(self) -> None:
        """Raise ``ChildFailedError`` unless the child exited with 0."""
        if not self.success:
            raise ChildFailedError(self.name, self.returncode)


def check_outcome(outcome: "FinishedChild | WaitError") -> Optional[Exception]:
    """
    把 reap 结果统一成 "错误或 None"：WaitError 与非零退出码同等对待。
    """
    if isinstance(outcome, WaitError):
        return outcome
    try:
        outcome.check()
    except ChildFailedError as e:
        return e
    return None
