# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield
    logger.remove()


@pytest.fixture
def log_messages() -> List[str]:
    """收集 loguru 输出（只保留 message 文本）"""
    messages: List[str] = []
    logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    return messages


@pytest.fixture
def write_scenarios(tmp_path: Path):
    """
    Usage:
        path = write_scenarios("a.ini", "[A]\\nx = 1\\n")
    """

    def _write(name: str, text: str) -> str:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return str(p)

    return _write


@pytest.fixture
def python_cmd():
    """argv prefix that runs a python snippet in a child process"""

    def _cmd(code: str) -> List[str]:
        return [sys.executable, "-c", code]

    return _cmd
