# scenarios/utils/errors.py
from __future__ import annotations

from pathlib import Path


class ScenariosError(RuntimeError):
    """
    Base class of every error this program reports to the user.
    The CLI prints these with their cause chain and exits with 1.
    """


class UserInputError(ScenariosError):
    """
    Raised for invalid user-provided input (options, paths, patterns).
    Should NOT print traceback.
    """


class NoScenariosError(UserInputError):
    def __init__(self) -> None:
        super().__init__("no scenarios provided")


# ============================================================
# Scenario construction / merge
# ============================================================
class ScenarioError(ScenariosError, ValueError):
    """Base class of scenario construction and merge errors."""


class InvalidScenarioError(ScenarioError):
    description = "invalid scenario"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{self.description}: {name!r}")


class InvalidNameError(InvalidScenarioError):
    description = "the scenario name is invalid"


class InvalidVariableError(InvalidScenarioError):
    description = "the variable name is invalid"


class DuplicateVariableError(InvalidScenarioError):
    description = "a variable of this name has been added before"


class MergeError(ScenarioError):
    """Two scenarios of one combination define the same variable."""

    def __init__(self, varname: str, left: str, right: str) -> None:
        self.varname = varname
        self.left = left
        self.right = right
        super().__init__(
            f'conflicting variable definitions: "{varname}" defined by '
            f'scenarios "{left}" and "{right}"'
        )


# ============================================================
# Scenario files
# ============================================================
class ScenarioSyntaxError(ScenariosError):
    description = "syntax error"

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f'{self.description}: "{line}"')


class NoClosingBracketError(ScenarioSyntaxError):
    description = 'syntax error: bracket "[" not closed in header line'


class TextAfterClosingBracketError(ScenarioSyntaxError):
    description = 'syntax error: text after closing bracket "]" of a header line'


class NotAVarDefError(ScenarioSyntaxError):
    description = 'syntax error: missing equals sign "=" in variable definition'


class UnexpectedDefinitionError(ScenariosError):
    def __init__(self, varname: str) -> None:
        self.varname = varname
        super().__init__(f"variable definition before the first header: {varname}")


class DuplicateScenarioError(ScenariosError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'scenario name defined twice: "{name}" (strict mode is enabled)')


class ParseError(ScenariosError):
    """
    Any error found while reading a scenario file, tagged with its location.
    ``kind`` is the underlying error; its own cause is chained as ``__cause__``.
    """

    def __init__(self, filename: str | Path, lineno: int, kind: Exception | str) -> None:
        self.filename = str(filename)
        self.lineno = lineno
        self.kind = kind
        super().__init__(f"{self.location}: {kind}")

    @property
    def location(self) -> str:
        if self.lineno:
            return f"{self.filename}:{self.lineno}"
        return self.filename


# ============================================================
# Child processes
# ============================================================
class VariableNameError(ScenariosError):
    description = "use of reserved variable name"

    def __init__(self, varname: str) -> None:
        self.varname = varname
        super().__init__(f'{self.description}: "{varname}" (strict mode is enabled)')


class ChildError(ScenariosError):
    """Something went wrong with the child process of scenario ``name``."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f'{message}\n\tin scenario "{name}"')


class SpawnError(ChildError):
    def __init__(self, name: str, program: str, error: OSError) -> None:
        self.program = program
        self.error = error
        super().__init__(name, f'could not execute command "{program}": {error}')


class WaitError(ChildError):
    def __init__(self, name: str, error: OSError) -> None:
        self.error = error
        super().__init__(name, f"could not check child process's status: {error}")


class ChildFailedError(ChildError):
    def __init__(self, name: str, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(name, f"command returned non-zero {describe_returncode(returncode)}")


class NotAllFinishedError(ScenariosError):
    """Aggregate failure: reported once, at the very end of a run."""

    def __init__(self) -> None:
        super().__init__("not all scenarios completed successfully")


class PoolNotEmptyError(AssertionError):
    """A process pool was torn down while still owning running children."""


def describe_returncode(returncode: int) -> str:
    # Popen 用负数表示被信号终止
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit code: {returncode}"
