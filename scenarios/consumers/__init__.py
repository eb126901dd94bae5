from .commandline import SCENARIOS_NAME_NAME, CommandLine, CommandLineOptions
from .driver import CommandLineDriver
from .printer import Printer

__all__ = [
    "CommandLine", "CommandLineOptions", "SCENARIOS_NAME_NAME",
    "CommandLineDriver",
    "Printer",
]
