# scenarios/pipeline/parallel/executor.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

from scenarios import logs
from scenarios.pipeline.parallel.children import FinishedChild, PreparedChild
from scenarios.pipeline.parallel.pool import ProcessPool
from scenarios.pipeline.parallel.tokens import TokenStock
from scenarios.pipeline.parallel.types import LoopState
from scenarios.utils.errors import ScenariosError, WaitError

Item = TypeVar("Item")


class LoopDriver(ABC, Generic[Item]):
    """
    Policy half of the execution loop.

    The executor owns tokens and processes; the driver decides what an
    item becomes and which outcomes are fatal.
    """

    @abstractmethod
    def max_num_of_children(self) -> int:
        """Capacity of the token stock (>= 1)."""

    @abstractmethod
    def prepare_child(self, item: Item) -> PreparedChild:
        """Turn one item into a ready-to-spawn child; raising is fatal."""

    @abstractmethod
    def on_reap(self, outcome: FinishedChild | WaitError) -> None:
        """A child finished while scheduling; raising starts draining."""

    @abstractmethod
    def on_loop_failed(self, error: ScenariosError) -> None:
        """Scheduling stopped because of ``error``."""

    @abstractmethod
    def on_cleanup_reap(self, outcome: FinishedChild | WaitError) -> None:
        """A child finished while draining. Must not raise."""

    @abstractmethod
    def on_finish(self) -> None:
        """Emit the aggregate result; raise if anything failed."""


class ParallelExecutor(Generic[Item]):
    """
    ParallelExecutor（有界并发 + 失败策略）

    状态机：
      SCHEDULING -> DRAINING -> FINISHED

    - SCHEDULING：逐个 item 申请 token / 准备 / 启动；没有 token 时先 reap 一个
    - DRAINING：出现致命错误后进入，等待所有子进程结束，永不提前退出
    - FINISHED：driver.on_finish() 汇总结果

    保证：
      - 每个 push 进 pool 的子进程恰好被 reap 一次
      - 进入 DRAINING 后不再启动新进程
      - 结束时 pool 为空
    """

    def __init__(self, driver: LoopDriver[Item]):
        self.driver = driver
        self.stock = TokenStock(driver.max_num_of_children())
        self.pool = ProcessPool()
        self.state = LoopState.SCHEDULING
        self.num_started = 0

    def run(self, items: Iterable[Item]) -> None:
        logs.debug(f"[ParallelExecutor] start jobs={self.stock.capacity}")

        with self.pool:
            try:
                self._schedule(items)
            except ScenariosError as e:
                self.state = LoopState.DRAINING
                if not self.pool.is_empty() and self.stock.capacity > 1:
                    logs.info("Waiting for unfinished child processes ...")
                self.driver.on_loop_failed(e)
            finally:
                self._drain()

        self.state = LoopState.FINISHED
        logs.debug(f"[ParallelExecutor] done started={self.num_started}")
        self.driver.on_finish()

    # ---------------- internal ----------------

    def _schedule(self, items: Iterable[Item]) -> None:
        for item in items:
            while not self.stock.num_remaining:
                self._reap_one()

            prepared = self.driver.prepare_child(item)
            token = self.stock.acquire()
            child = prepared.spawn_or_return_token(token, self.stock)
            self.pool.push(child)
            self.num_started += 1

        # 输入耗尽：剩余子进程仍按 SCHEDULING 语义处理（失败即转 DRAINING）
        while not self.pool.is_empty():
            self._reap_one()

    def _reap_one(self) -> None:
        reaped = self.pool.wait_reap()
        assert reaped is not None, "no token left but the pool is empty"
        outcome, token = reaped
        # token 先还，on_reap 抛异常也不会丢
        self.stock.release(token)
        self.driver.on_reap(outcome)

    def _drain(self) -> None:
        self.state = LoopState.DRAINING
        while True:
            reaped = self.pool.wait_reap()
            if reaped is None:
                break
            outcome, token = reaped
            self.stock.release(token)
            self.driver.on_cleanup_reap(outcome)


def loop_in_process_pool(items: Iterable[Item], driver: LoopDriver[Item]) -> None:
    ParallelExecutor(driver).run(items)
