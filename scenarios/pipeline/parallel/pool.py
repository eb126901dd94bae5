# scenarios/pipeline/parallel/pool.py
from __future__ import annotations

import time
from typing import List, Optional, Tuple

from scenarios import logs
from scenarios.pipeline.parallel.children import FinishedChild, RunningChild
from scenarios.pipeline.parallel.tokens import PoolToken
from scenarios.utils.errors import PoolNotEmptyError, WaitError

Reaped = Tuple["FinishedChild | WaitError", PoolToken]

POLL_INTERVAL_SEC = 0.010


class ProcessPool:
    """
    ProcessPool = 正在运行的子进程集合

    设计铁律：
    - push 之前调用方必须已经拿到 token
    - 每个子进程恰好被 reap 一次，token 随结果一起交还
    - 非空的 pool 不能被丢弃：close() 直接报错
    """

    def __init__(self, poll_interval: float = POLL_INTERVAL_SEC):
        self.poll_interval = poll_interval
        self._children: List[RunningChild] = []

    def __len__(self) -> int:
        return len(self._children)

    def is_empty(self) -> bool:
        return not self._children

    def push(self, child: RunningChild) -> None:
        self._children.append(child)
        logs.debug(f"[ProcessPool] started pid={child.pid} scenario={child.name!r}")

    def reap(self) -> List[Reaped]:
        """
        Scan every entry once; remove and return each exited child.

        The whole pass is collected before returning, so every removed
        entry has already been waited on and its token is in the result.
        A ``WaitError`` is terminal as well: the entry is dropped and the
        error is returned in place of a ``FinishedChild``.
        """
        still_running: List[RunningChild] = []
        reaped: List[Reaped] = []

        for child in self._children:
            try:
                done = child.is_finished()
            except WaitError as e:
                logs.debug(f"[ProcessPool] lost pid={child.pid}: {e}")
                reaped.append((e, child.token))
                continue
            if done:
                reaped.append(child.finish())
            else:
                still_running.append(child)

        self._children = still_running
        return reaped

    def wait_reap(self) -> Optional[Reaped]:
        """
        Block until one child can be reaped and return it.
        Returns ``None`` only if the pool is already empty.
        """
        while self._children:
            for i, child in enumerate(self._children):
                try:
                    done = child.is_finished()
                except WaitError as e:
                    del self._children[i]
                    return e, child.token
                if done:
                    del self._children[i]
                    return child.finish()
            time.sleep(self.poll_interval)
        return None

    def close(self) -> None:
        if self._children:
            names = ", ".join(repr(c.name) for c in self._children)
            raise PoolNotEmptyError(
                f"closing a process pool with {len(self._children)} running children: {names}"
            )

    def __enter__(self) -> "ProcessPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        # 最后一道防线：只能记录，析构里不能抛异常
        if getattr(self, "_children", None):
            logs.error(f"[ProcessPool] FATAL: dropped with {len(self._children)} running children")
