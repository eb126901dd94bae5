#!filepath: scenarios/cli.py
import sys
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError
from rich import print

from scenarios import __version__, logs
from scenarios.config.app_config import AppConfig
from scenarios.config.run_config import RunConfig
from scenarios.consumers.printer import PATTERN, Printer
from scenarios.model.filter import NameFilter
from scenarios.utils.errors import NotAllFinishedError, ScenariosError
from scenarios.workflows.run_scenarios import run_scenarios

COMMAND_SEPARATOR = "--"
PRINT_FLAGS = ("--print", "--print0")

app = typer.Typer(
    help="Run a command once for every combination of scenarios.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool):
    if value:
        print(f"scenarios {__version__}")
        raise typer.Exit()


@app.command(
    help=(
        "Read scenario FILES ('-' for stdin), combine one scenario of each file "
        "and either print the combined names or run the COMMAND given after "
        "'--' once per combination."
    )
)
def run(
    ctx: typer.Context,
    files: Optional[List[str]] = typer.Argument(None, metavar="FILES...", show_default=False),
    print_: bool = typer.Option(False, "--print", help="Print the name of each scenario (default without COMMAND); --print=FORMAT sets a template."),
    print0: bool = typer.Option(False, "--print0", help="Like --print, but terminate names with NUL."),
    template: Optional[str] = typer.Option(None, "--template", metavar="FORMAT", help="Print FORMAT with every '{}' replaced by the name."),
    choose: Optional[str] = typer.Option(None, "-c", "--choose", metavar="PATTERN", help="Only use scenarios whose name matches PATTERN."),
    exclude: Optional[str] = typer.Option(None, "-x", "--exclude", metavar="PATTERN", help="Ignore scenarios whose name matches PATTERN."),
    strict: bool = typer.Option(False, "-s", "--strict", help="Forbid variable name conflicts (default)."),
    lax: bool = typer.Option(False, "-l", "--lax", help="Let later scenarios override earlier definitions."),
    ignore_env: bool = typer.Option(False, "-I", "--ignore-env", help="Don't inherit the environment."),
    no_insert_name: bool = typer.Option(False, "--no-insert-name", help="Don't replace '{}' in COMMAND."),
    no_export_name: bool = typer.Option(False, "--no-export-name", help="Don't export SCENARIOS_NAME."),
    delimiter: Optional[str] = typer.Option(None, "-d", "--delimiter", help="String between merged scenario names."),
    keep_going: bool = typer.Option(False, "-k", "--keep-going", help="Don't abort if a COMMAND fails."),
    jobs: Optional[int] = typer.Option(None, "-j", "--jobs", min=0, metavar="N", help="Run N commands in parallel (0: one per CPU)."),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only print errors."),
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH", help="YAML configuration file."),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
):
    # ctx.obj: None = 没有 "--"；list = "--" 之后的命令
    command: Optional[List[str]] = ctx.obj

    _check_usage(
        command,
        printing=print_ or print0 or template is not None,
        exec_flags={
            "--ignore-env": ignore_env,
            "--no-insert-name": no_insert_name,
            "--no-export-name": no_export_name,
            "--keep-going": keep_going,
            "--jobs": jobs is not None,
        },
    )
    if choose is not None and exclude is not None:
        raise typer.BadParameter("cannot be used together with --exclude", param_hint="'--choose'")
    if strict and lax:
        raise typer.BadParameter("cannot be used together with --lax", param_hint="'--strict'")
    if print_ and print0:
        raise typer.BadParameter("cannot be used together with --print0", param_hint="'--print'")

    try:
        cfg = AppConfig.load(str(config) if config else None)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logs.configure(quiet=quiet)
        logs.error_chain(e)
        raise typer.Exit(code=1) from None

    logs.configure(
        log_dir=cfg.log.dir,
        rotation=cfg.log.rotation,
        retention=cfg.log.retention,
        log_level=cfg.log.level,
        quiet=quiet,
    )

    updates = {
        "strict": (not lax) if (strict or lax) else None,
        "delimiter": delimiter,
        "jobs": jobs,
        "keep_going": keep_going or None,
        "ignore_env": ignore_env or None,
        "insert_name": False if no_insert_name else None,
        "export_name": False if no_export_name else None,
    }
    try:
        run_cfg = RunConfig(**{
            **cfg.run.model_dump(),
            **{k: v for k, v in updates.items() if v is not None},
        })
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="'--delimiter'") from None

    if choose is not None:
        name_filter = NameFilter.choose(choose)
    elif exclude is not None:
        name_filter = NameFilter.exclude(exclude)
    else:
        name_filter = NameFilter()

    printer = Printer(
        template=template if template is not None else PATTERN,
        terminator="\0" if print0 else "\n",
    )

    try:
        run_scenarios(
            files or [],
            argv=command,
            run=run_cfg,
            name_filter=name_filter,
            printer=printer,
        )
    except NotAllFinishedError as e:
        logs.info(str(e))
        raise typer.Exit(code=1) from None
    except ScenariosError as e:
        logs.error_chain(e)
        raise typer.Exit(code=1) from None


def _check_usage(command: Optional[List[str]], printing: bool, exec_flags: dict) -> None:
    if command is None:
        for flag, given in exec_flags.items():
            if given:
                raise typer.BadParameter("requires a COMMAND after '--'", param_hint=f"'{flag}'")
        return
    if not command:
        raise typer.BadParameter("no COMMAND given after '--'", param_hint="'COMMAND'")
    if printing:
        raise typer.BadParameter("cannot be used together with a COMMAND", param_hint="'--print'")


def split_command(argv: List[str]):
    """
    ``FILES... -- COMMAND...`` → (options and files, command or None).
    Everything after the first ``--`` belongs to the command verbatim.
    """
    if COMMAND_SEPARATOR not in argv:
        return argv, None
    i = argv.index(COMMAND_SEPARATOR)
    return argv[:i], argv[i + 1:]


def expand_print_formats(args: List[str]) -> List[str]:
    """
    ``--print=FORMAT`` → ``--print --template FORMAT`` (same for ``--print0``).
    A bare ``--print`` stays a flag.
    """
    expanded: List[str] = []
    for arg in args:
        flag, sep, fmt = arg.partition("=")
        if sep and flag in PRINT_FLAGS:
            expanded += [flag, "--template", fmt]
        else:
            expanded.append(arg)
    return expanded


def main(argv: Optional[List[str]] = None):
    head, command = split_command(list(sys.argv[1:] if argv is None else argv))
    head = expand_print_formats(head)
    app(args=head, obj=command, prog_name="scenarios")


if __name__ == "__main__":
    main()

# python -m scenarios.cli scenarios.ini -- make test
