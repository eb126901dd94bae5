# tests/pipeline/parallel/conftest.py
from __future__ import annotations

import sys
from typing import List, Optional

import pytest

from scenarios.pipeline.parallel.children import (
    FinishedChild,
    PreparedChild,
    RunningChild,
    check_outcome,
)
from scenarios.pipeline.parallel.executor import LoopDriver
from scenarios.pipeline.parallel.tokens import PoolToken
from scenarios.utils.errors import NotAllFinishedError, ScenariosError, WaitError

# 特殊 item
LOST = "lost"        # 子进程状态查询失败 -> WaitError
MISSING = "missing"  # 程序不存在 -> SpawnError


def exit_with(code: int, name: Optional[str] = None, delay: float = 0.0) -> PreparedChild:
    """子进程：（可选先 sleep）以 code 退出"""
    return PreparedChild(
        name=name or f"exit-{code}",
        argv=[sys.executable, "-c", f"import sys, time; time.sleep({delay}); sys.exit({code})"],
    )


class BrokenProcess:
    """poll() 总是失败的假进程"""

    pid = 99999

    def poll(self):
        raise OSError("status unavailable")

    def wait(self):
        raise OSError("status unavailable")


class LostChild(PreparedChild):
    def spawn(self, token: PoolToken) -> RunningChild:
        return RunningChild(self.name, BrokenProcess(), token)


class RecordingDriver(LoopDriver[object]):
    """
    items:
      - int          -> 以该退出码结束
      - (code, sec)  -> sleep sec 后以 code 结束
      - LOST/MISSING -> 见上
    记录每个回调，方便断言
    """

    def __init__(self, jobs: int = 1, keep_going: bool = False):
        self.jobs = jobs
        self.keep_going = keep_going
        self.prepared: List[object] = []
        self.reaped: List[FinishedChild | WaitError] = []
        self.cleanup_reaped: List[FinishedChild | WaitError] = []
        self.loop_error: Optional[ScenariosError] = None
        self.finished = False

    def max_num_of_children(self) -> int:
        return self.jobs

    def prepare_child(self, item) -> PreparedChild:
        self.prepared.append(item)
        name = f"item-{len(self.prepared)}"
        if item == LOST:
            return LostChild(name, [sys.executable])
        if item == MISSING:
            return PreparedChild(name, ["/nonexistent/scenarios-test-program"])
        if isinstance(item, tuple):
            code, delay = item
            return exit_with(code, name=name, delay=delay)
        return exit_with(item, name=name)

    def on_reap(self, outcome):
        self.reaped.append(outcome)
        error = check_outcome(outcome)
        if error is not None and not self.keep_going:
            raise error

    def on_loop_failed(self, error):
        self.loop_error = error

    def on_cleanup_reap(self, outcome):
        self.cleanup_reaped.append(outcome)

    def on_finish(self):
        self.finished = True
        failed = [o for o in self.reaped + self.cleanup_reaped if check_outcome(o)]
        if self.loop_error is not None or failed:
            raise NotAllFinishedError()

    # ---------- 断言辅助 ----------
    @property
    def all_reaped(self):
        return self.reaped + self.cleanup_reaped


@pytest.fixture
def make_driver():
    return RecordingDriver


@pytest.fixture(name="exit_with")
def exit_with_fixture():
    return exit_with


@pytest.fixture
def lost_child():
    return LostChild("lost", [sys.executable])
