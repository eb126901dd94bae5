# scenarios/model/filter.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional

from scenarios.model.scenario import Scenario


class FilterMode(str, Enum):
    CHOOSE_MATCHING = "choose"
    IGNORE_MATCHING = "ignore"


@dataclass(frozen=True)
class NameFilter:
    """
    Shell-glob filter on scenario names (``*``, ``?``, ``[...]``, ``[!...]``).

    - CHOOSE_MATCHING: only matching scenarios pass; no pattern -> none pass
    - IGNORE_MATCHING: matching scenarios are dropped; no pattern -> all pass
    """

    mode: FilterMode = FilterMode.IGNORE_MATCHING
    pattern: Optional[str] = None

    def is_allowed(self, scenario: Scenario) -> bool:
        matches = self.pattern is not None and fnmatchcase(scenario.name, self.pattern)
        if self.mode is FilterMode.CHOOSE_MATCHING:
            return matches
        return not matches

    def apply(self, scenarios: Iterable[Scenario]) -> List[Scenario]:
        return [s for s in scenarios if self.is_allowed(s)]

    @classmethod
    def choose(cls, pattern: str) -> "NameFilter":
        return cls(FilterMode.CHOOSE_MATCHING, pattern)

    @classmethod
    def exclude(cls, pattern: str) -> "NameFilter":
        return cls(FilterMode.IGNORE_MATCHING, pattern)
