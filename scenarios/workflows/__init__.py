from .run_scenarios import combine, execute_scenarios, load_groups, print_scenarios, run_scenarios

__all__ = ["load_groups", "combine", "print_scenarios", "execute_scenarios", "run_scenarios"]
