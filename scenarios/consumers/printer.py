# scenarios/consumers/printer.py
import sys
from typing import TextIO

from scenarios.model.scenario import Scenario

PATTERN = "{}"


class Printer:
    """Writes one line per scenario; every "{}" in the template becomes the name."""

    def __init__(self, template: str = PATTERN, terminator: str = "\n"):
        self.template = template
        self.terminator = terminator

    def format(self, name: str) -> str:
        return self.template.replace(PATTERN, name)

    def print_scenario(self, scenario: Scenario, stream: TextIO | None = None) -> None:
        stream = stream if stream is not None else sys.stdout
        stream.write(self.format(scenario.name))
        stream.write(self.terminator)
