# scenarios/model/scenario.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple

from scenarios.utils.errors import (
    DuplicateVariableError,
    InvalidNameError,
    InvalidVariableError,
)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_alnum_identifier(s: str) -> bool:
    return _IDENTIFIER.fullmatch(s) is not None


def is_valid_name(name: str) -> bool:
    return bool(name) and "\0" not in name


@dataclass(frozen=True)
class Scenario:
    """
    Scenario = 一个带名字的环境变量集合（不可变）

    - name 非空，不含 NUL
    - 变量名必须是 C 风格标识符
    - 合并后的名字可以包含分隔符
    """

    name: str
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not is_valid_name(self.name):
            raise InvalidNameError(self.name)
        for key in self.variables:
            if not is_alnum_identifier(key):
                raise InvalidVariableError(key)
        # 冻结：外部拿不到可写的 dict
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    @classmethod
    def from_pairs(cls, name: str, pairs: Iterable[Tuple[str, str]]) -> "Scenario":
        """
        Build a scenario from ``(key, value)`` pairs, rejecting duplicate keys.
        """
        variables: dict[str, str] = {}
        for key, value in pairs:
            if key in variables:
                raise DuplicateVariableError(key)
            variables[key] = value
        return cls(name, variables)

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def get_variable(self, name: str) -> str | None:
        return self.variables.get(name)

    def variable_names(self) -> Iterator[str]:
        return iter(self.variables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scenario):
            return NotImplemented
        return self.name == other.name and dict(self.variables) == dict(other.variables)

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.variables.items())))

    def __str__(self) -> str:
        return f'Scenario "{self.name}"'
