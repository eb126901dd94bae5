from .children import FinishedChild, PreparedChild, RunningChild
from .executor import LoopDriver, ParallelExecutor, loop_in_process_pool
from .pool import ProcessPool
from .tokens import PoolToken, TokenStock
from .types import LoopState

__all__ = [
    "PreparedChild", "RunningChild", "FinishedChild",
    "LoopDriver", "ParallelExecutor", "loop_in_process_pool",
    "ProcessPool",
    "PoolToken", "TokenStock",
    "LoopState",
]
