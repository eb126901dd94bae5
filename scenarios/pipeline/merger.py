# scenarios/pipeline/merger.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from scenarios.config.run_config import DEFAULT_DELIMITER
from scenarios.model.scenario import Scenario
from scenarios.utils.errors import MergeError


@dataclass(frozen=True)
class MergeOptions:
    """同一次运行里所有 merge 共用的配置。"""

    delimiter: str = DEFAULT_DELIMITER
    strict: bool = True


def merge(left: Scenario, right: Scenario, options: MergeOptions) -> Scenario:
    """
    Merge ``right`` into ``left`` and return the combined scenario.

    strict: a variable defined on both sides raises ``MergeError``
    lax:    ``right`` overwrites ``left``

    The name is only extended once the variables merged cleanly.
    """
    variables = dict(left.variables)
    for key, value in right.variables.items():
        if options.strict and key in variables:
            raise MergeError(key, left.name, right.name)
        variables[key] = value
    return Scenario(left.name + options.delimiter + right.name, variables)


def merge_all(scenarios: Sequence[Scenario], options: MergeOptions) -> Scenario:
    """
    Left fold of ``merge`` over one combination of scenarios.

    On conflict the left side of the ``MergeError`` is the ORIGINAL
    scenario that first defined the variable, never an intermediate
    merged name like ``"A, B"``.
    """
    if not scenarios:
        raise ValueError("merge_all() needs at least one scenario")

    result = scenarios[0]
    for right in scenarios[1:]:
        try:
            result = merge(result, right, options)
        except MergeError as e:
            first = _first_definer(scenarios, e.varname)
            raise MergeError(e.varname, first.name, right.name) from None
    return result


def merge_combinations(
    combinations: Iterable[Sequence[Scenario]],
    options: MergeOptions,
) -> Iterator[Scenario | MergeError]:
    """
    Lazily merge every combination; conflicts are yielded, not raised,
    so the consumer decides when a conflict stops the run.
    """
    for combination in combinations:
        try:
            yield merge_all(combination, options)
        except MergeError as e:
            yield e


def _first_definer(scenarios: Sequence[Scenario], varname: str) -> Scenario:
    for scenario in scenarios:
        if scenario.has_variable(varname):
            return scenario
    raise AssertionError(f"no scenario defines {varname!r}")
