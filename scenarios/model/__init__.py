from .scenario import Scenario
from .filter import FilterMode, NameFilter

__all__ = ["Scenario", "NameFilter", "FilterMode"]
