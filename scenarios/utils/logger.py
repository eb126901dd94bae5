#!filepath: scenarios/utils/logger.py
import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger

APP_NAME = "scenarios"


class Logging:
    """
    进程级日志模块
    ---------------------------------------
    - stderr 输出，格式 "scenarios: <message>"
    - quiet 模式只保留 ERROR
    - 可选文件日志（按日期切割 + 保留周期）
    - 错误链输出（__cause__ 逐级展开）
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        quiet: bool = False,
    ):
        self.configure(
            log_dir=log_dir,
            rotation=rotation,
            retention=retention,
            log_level=log_level,
            quiet=quiet,
        )

    def configure(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        quiet: bool = False,
    ) -> None:
        """
        配置全局 logger；可重复调用，每次都会替换已有 sink。
        """
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.quiet = quiet

        logger.remove()

        # 用户可见输出：不带时间戳，只带程序名
        logger.add(
            sink=sys.stderr,
            level="ERROR" if quiet else log_level,
            format=APP_NAME + ": {message}",
            colorize=False,
            backtrace=False,
            diagnose=False,
        )

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            logger.add(
                sink=f"{log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=rotation,
                retention=retention,
                level="DEBUG",
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,
                backtrace=True,
                diagnose=False,
            )

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.opt(depth=1).exception(msg, *args, **kwargs)

    def error_chain(self, error: BaseException) -> None:
        """
        First logs an error, then all its causes.

        Output::

            scenarios: error: <error>
            scenarios:   -> reason: <cause>
        """
        self._log_chain("ERROR", error)

    def warning_chain(self, error: BaseException) -> None:
        """
        Same output as ``error_chain`` at WARNING level (hidden by quiet mode).
        """
        self._log_chain("WARNING", error)

    def _log_chain(self, level: str, error: BaseException) -> None:
        # 错误信息里可能带 "{}"，只能作为参数传入
        logger.opt(depth=2).log(level, "error: {}", error)
        cause = error.__cause__
        while cause is not None:
            logger.opt(depth=2).log(level, "  -> reason: {}", cause)
            cause = cause.__cause__

    # ---------- 日志装饰器 ----------
    def timed(self, msg: str) -> Callable:
        """
        记录函数耗时（DEBUG 级别，只进文件日志）。
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()
                try:
                    return func(*args, **kwargs)
                finally:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {msg} took {cost:.4f}s")

            return wrapper

        return decorator


# 默认全局 logs（CLI 启动时通过 logs.configure 重新配置）
logs = Logging()
