# tests/test_cli.py
import pytest
from typer.testing import CliRunner

from scenarios import __version__
from scenarios.cli import app, expand_print_formats, main, split_command

runner = CliRunner()

COMPILERS = "[gcc]\nCC = gcc\n[clang]\nCC = clang\n"
MODES = "[debug]\nMODE = debug\n[release]\nMODE = release\n"


@pytest.fixture
def files(write_scenarios):
    return [write_scenarios("cc.ini", COMPILERS), write_scenarios("mode.ini", MODES)]


def invoke(args, command=None):
    return runner.invoke(app, args, obj=command)


def test_split_command():
    assert split_command(["a.ini", "-k"]) == (["a.ini", "-k"], None)
    assert split_command(["a.ini", "--", "echo", "--", "x"]) == (["a.ini"], ["echo", "--", "x"])
    assert split_command(["a.ini", "--"]) == (["a.ini"], [])


def test_print_by_default(files):
    result = invoke(files)

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["gcc, debug", "gcc, release", "clang, debug", "clang, release"]


def test_print0_and_template(files):
    result = invoke(["--print0", "--template", "<{}>", "-x", "gcc", "-d", "/", *files])

    assert result.exit_code == 0
    assert result.stdout == "<clang/debug>\0<clang/release>\0"


def test_exclude(files):
    result = invoke(["-x", "*g*", *files])
    assert result.stdout.splitlines() == []
    assert result.exit_code == 0


@pytest.mark.parametrize(
    "args",
    [
        ["-c", "a", "-x", "b"],
        ["--strict", "--lax"],
        ["-k"],
        ["-j", "2"],
        ["--no-export-name"],
        ["-j", "-1"],
    ],
)
def test_usage_errors(files, args):
    assert invoke([*args, *files]).exit_code == 2


def test_print_with_command_is_usage_error(files, python_cmd):
    assert invoke(["--print", *files], command=python_cmd("pass")).exit_code == 2


def test_empty_command_is_usage_error(files):
    assert invoke(files, command=[]).exit_code == 2


def test_no_files():
    result = invoke([])

    assert result.exit_code == 1
    assert "no scenarios provided" in result.output


def test_parse_error_reports_location(write_scenarios):
    path = write_scenarios("bad.ini", "[A]\nnonsense\n")

    result = invoke([path])

    assert result.exit_code == 1
    assert f"error: {path}:2: syntax error" in result.output


def test_merge_conflict(write_scenarios):
    a = write_scenarios("a.ini", "[A]\nx = 1\n")
    b = write_scenarios("b.ini", "[B]\nx = 2\n")

    assert invoke([a, b]).exit_code == 1
    assert invoke(["--lax", a, b]).stdout == "A, B\n"


def test_execute(files, python_cmd):
    check = "import os, sys; sys.exit(0 if os.environ['SCENARIOS_NAME'] == sys.argv[1] else 5)"

    result = invoke(["-j", "2", *files], command=[*python_cmd(check), "{}"])

    assert result.exit_code == 0


def test_execute_failure(files, python_cmd):
    result = invoke(["--keep-going", *files], command=python_cmd("import sys; sys.exit(3)"))

    assert result.exit_code == 1
    assert "exit code: 3" in result.output
    assert "not all scenarios completed successfully" in result.output


def test_quiet_hides_child_failures(files, python_cmd):
    result = invoke(["-q", "-k", *files], command=python_cmd("import sys; sys.exit(3)"))

    assert result.exit_code == 1
    assert "exit code: 3" not in result.output


def test_version():
    result = invoke(["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_main_splits_command(files, python_cmd):
    with pytest.raises(SystemExit) as exc:
        main([*files, "--", *python_cmd("import sys; sys.exit(0)")])
    assert exc.value.code == 0


def test_stdin_invalid_utf8():
    result = runner.invoke(app, ["-"], input=b"[A\xff]\nx = 1\n")

    assert result.exit_code == 1
    assert "error: <stdin>: scenario file is not valid UTF-8" in result.output


def test_stdin_scenarios(files):
    result = runner.invoke(app, ["-", files[1]], input="[A]\nx = 1\n")

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["A, debug", "A, release"]


def test_expand_print_formats():
    assert expand_print_formats(["--print", "a.ini"]) == ["--print", "a.ini"]
    assert expand_print_formats(["--print=<{}>", "a.ini"]) == ["--print", "--template", "<{}>", "a.ini"]
    assert expand_print_formats(["--print0=x={}"]) == ["--print0", "--template", "x={}"]
    assert expand_print_formats(["--printer=x"]) == ["--printer=x"]


def test_print_and_print0_conflict(files):
    assert invoke(["--print", "--print0", *files]).exit_code == 2


def test_main_print0_with_format(files, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--print0=[{}]", "-x", "gcc", *files])

    assert exc.value.code == 0
    assert capsys.readouterr().out == "[clang, debug]\0[clang, release]\0"
