# scenarios/model/inputline.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from scenarios.utils.errors import (
    NoClosingBracketError,
    NotAVarDefError,
    TextAfterClosingBracketError,
)


@dataclass(frozen=True)
class Comment:
    pass


@dataclass(frozen=True)
class Header:
    name: str


@dataclass(frozen=True)
class Definition:
    name: str
    value: str


InputLine = Union[Comment, Header, Definition]


def parse_line(line: str) -> InputLine:
    """
    One line of a scenario file.

    - empty / ``#...``   -> Comment
    - ``[name]``         -> Header (name trimmed)
    - ``KEY = value``    -> Definition (split at the first ``=``)
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return Comment()
    if line.startswith("["):
        return _parse_header(line)
    if "=" in line:
        name, value = line.split("=", 1)
        return Definition(name.rstrip(), value.lstrip())
    raise NotAVarDefError(line)


def _parse_header(line: str) -> Header:
    if not line.endswith("]"):
        if "]" not in line:
            raise NoClosingBracketError(line)
        raise TextAfterClosingBracketError(line)
    return Header(line[1:-1].strip())
