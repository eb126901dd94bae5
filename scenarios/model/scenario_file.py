#!filepath: scenarios/model/scenario_file.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from scenarios import logs
from scenarios.model.inputline import Comment, Definition, parse_line
from scenarios.model.scenario import Scenario, is_alnum_identifier
from scenarios.utils.errors import (
    DuplicateScenarioError,
    DuplicateVariableError,
    InvalidVariableError,
    ParseError,
    ScenarioError,
    ScenarioSyntaxError,
    UnexpectedDefinitionError,
)

STDIN_PATH = "-"
STDIN_NAME = "<stdin>"


def from_file_or_stdin(path: str, strict: bool = True) -> List[Scenario]:
    """``-`` means standard input."""
    if path == STDIN_PATH:
        try:
            return from_stream(sys.stdin, STDIN_NAME, strict=strict)
        except OSError as e:
            raise ParseError(STDIN_NAME, 0, "could not read scenario file") from e
        except UnicodeDecodeError as e:
            raise ParseError(STDIN_NAME, 0, "scenario file is not valid UTF-8") from e
    return from_file(path, strict=strict)


def from_file(path: str | Path, strict: bool = True) -> List[Scenario]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return from_stream(f, str(path), strict=strict)
    except OSError as e:
        raise ParseError(path, 0, "could not read scenario file") from e
    except UnicodeDecodeError as e:
        raise ParseError(path, 0, "scenario file is not valid UTF-8") from e


def from_stream(stream: TextIO | Iterable[str], name: str, strict: bool = True) -> List[Scenario]:
    scenarios = ScenarioFileReader(name, strict=strict).read(stream)
    logs.debug(f"[ScenarioFile] {name}: {len(scenarios)} scenarios")
    return scenarios


def from_text(text: str, name: str = "<string>", strict: bool = True) -> List[Scenario]:
    return from_stream(text.splitlines(), name, strict=strict)


class ScenarioFileReader:
    """
    逐行读取场景文件；任何错误都包成带 "文件:行号" 的 ParseError。

    文件格式::

        # comment
        [Scenario name]
        VARIABLE = value
    """

    def __init__(self, filename: str, strict: bool = True):
        self.filename = filename
        self.strict = strict

    def read(self, lines: Iterable[str]) -> List[Scenario]:
        result: List[Scenario] = []
        seen: set[str] = set()

        header: Optional[Tuple[str, int]] = None
        definitions: Dict[str, str] = {}

        for lineno, raw in enumerate(lines, start=1):
            try:
                line = parse_line(raw)
            except ScenarioSyntaxError as e:
                raise self._error(e, lineno) from None

            if isinstance(line, Comment):
                continue

            if isinstance(line, Definition):
                if header is None:
                    raise self._error(UnexpectedDefinitionError(line.name), lineno)
                if not is_alnum_identifier(line.name):
                    raise self._error(InvalidVariableError(line.name), lineno)
                if line.name in definitions:
                    raise self._error(DuplicateVariableError(line.name), lineno)
                definitions[line.name] = line.value
                continue

            if header is not None:
                result.append(self._build(header, definitions, seen))
            header = (line.name, lineno)
            definitions = {}

        if header is not None:
            result.append(self._build(header, definitions, seen))
        return result

    def _build(self, header: Tuple[str, int], definitions: Dict[str, str], seen: set[str]) -> Scenario:
        name, lineno = header
        try:
            scenario = Scenario(name, definitions)
        except ScenarioError as e:
            raise self._error(e, lineno) from None

        if self.strict:
            if name in seen:
                raise self._error(DuplicateScenarioError(name), lineno)
            seen.add(name)
        return scenario

    def _error(self, kind: Exception, lineno: int) -> ParseError:
        return ParseError(self.filename, lineno, kind)
