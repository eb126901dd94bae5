#!filepath: scenarios/workflows/run_scenarios.py
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, TextIO, Union

from scenarios import logs
from scenarios.config.run_config import RunConfig
from scenarios.consumers.commandline import CommandLine, CommandLineOptions
from scenarios.consumers.driver import CommandLineDriver
from scenarios.consumers.printer import Printer
from scenarios.model.filter import NameFilter
from scenarios.model.scenario import Scenario
from scenarios.model.scenario_file import from_file_or_stdin
from scenarios.pipeline.cartesian import product, product_size
from scenarios.pipeline.merger import MergeOptions, merge_combinations
from scenarios.pipeline.parallel.executor import loop_in_process_pool
from scenarios.utils.errors import MergeError, NoScenariosError


def load_groups(
    files: Sequence[str],
    strict: bool = True,
    name_filter: Optional[NameFilter] = None,
) -> List[List[Scenario]]:
    """
    One group per input file (``-`` = stdin), already filtered by name.
    """
    if not files:
        raise NoScenariosError()
    name_filter = name_filter or NameFilter()

    groups = []
    for path in files:
        group = name_filter.apply(from_file_or_stdin(path, strict=strict))
        logs.debug(f"[Workflow] {path}: {len(group)} scenarios after filtering")
        groups.append(group)
    return groups


def combine(
    groups: Sequence[Sequence[Scenario]],
    options: MergeOptions,
) -> Iterator[Union[Scenario, MergeError]]:
    logs.debug(f"[Workflow] {product_size(groups)} combinations")
    return merge_combinations(product(groups), options)


def print_scenarios(
    items: Iterable[Union[Scenario, MergeError]],
    printer: Printer,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Print every merged name; the first conflict stops printing and is raised.
    Returns the number of printed names.
    """
    count = 0
    for item in items:
        if isinstance(item, MergeError):
            raise item
        printer.print_scenario(item, stream)
        count += 1
    return count


def execute_scenarios(
    items: Iterable[Union[Scenario, MergeError]],
    argv: Sequence[str],
    run: RunConfig,
) -> CommandLineDriver:
    """
    Run ``argv`` once per merged scenario. Raises ``NotAllFinishedError``
    unless every command succeeded.
    """
    command = CommandLine(
        argv,
        CommandLineOptions(
            ignore_env=run.ignore_env,
            insert_name_in_args=run.insert_name,
            add_scenarios_name=run.export_name,
            is_strict=run.strict,
        ),
    )
    driver = CommandLineDriver(command, jobs=run.resolved_jobs(), keep_going=run.keep_going)
    loop_in_process_pool(items, driver)
    return driver


@logs.timed("run_scenarios")
def run_scenarios(
    files: Sequence[str],
    argv: Optional[Sequence[str]] = None,
    run: Optional[RunConfig] = None,
    name_filter: Optional[NameFilter] = None,
    printer: Optional[Printer] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Entry point of one invocation.

    - load -> filter -> cartesian product -> merge
    - with ``argv``: execute the command for each combination
    - without: print the names (default printer if none given)
    """
    run = run or RunConfig()
    groups = load_groups(files, strict=run.strict, name_filter=name_filter)
    items = combine(groups, MergeOptions(delimiter=run.delimiter, strict=run.strict))

    if argv:
        execute_scenarios(items, argv, run)
    else:
        print_scenarios(items, printer or Printer(), stream)
