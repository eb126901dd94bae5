# scenarios/consumers/commandline.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Sequence

from scenarios.model.scenario import Scenario
from scenarios.pipeline.parallel.children import PreparedChild
from scenarios.utils.errors import VariableNameError

SCENARIOS_NAME_NAME = "SCENARIOS_NAME"
NAME_PLACEHOLDER = "{}"


@dataclass(frozen=True)
class CommandLineOptions:
    """
    - ignore_env: 子进程只看到 scenario 里的变量
    - insert_name_in_args: 参数里的 "{}" 替换为 scenario 名
    - add_scenarios_name: 导出 SCENARIOS_NAME
    - is_strict: scenario 自己定义 SCENARIOS_NAME 时报错而不是覆盖
    """

    ignore_env: bool = False
    insert_name_in_args: bool = True
    add_scenarios_name: bool = True
    is_strict: bool = True


class CommandLine:
    """A command template that is instantiated once per scenario."""

    def __init__(self, argv: Sequence[str], options: CommandLineOptions | None = None):
        if not argv:
            raise ValueError("command line must contain at least the program name")
        self.argv: List[str] = list(argv)
        self.options = options or CommandLineOptions()

    @property
    def program(self) -> str:
        return self.argv[0]

    def with_scenario(self, scenario: Scenario) -> PreparedChild:
        return PreparedChild(
            name=scenario.name,
            argv=self._build_argv(scenario.name),
            env=self._build_env(scenario),
        )

    # ---------------- internal ----------------

    def _build_argv(self, name: str) -> List[str]:
        if not self.options.insert_name_in_args:
            return list(self.argv)
        return [arg.replace(NAME_PLACEHOLDER, name) for arg in self.argv]

    def _build_env(self, scenario: Scenario) -> Dict[str, str]:
        opts = self.options
        if opts.add_scenarios_name and opts.is_strict and scenario.has_variable(SCENARIOS_NAME_NAME):
            raise VariableNameError(SCENARIOS_NAME_NAME)

        env: Dict[str, str] = {} if opts.ignore_env else dict(os.environ)
        env.update(scenario.variables)
        if opts.add_scenarios_name:
            env[SCENARIOS_NAME_NAME] = scenario.name
        return env

    def __repr__(self) -> str:
        return f"CommandLine({self.argv!r})"
