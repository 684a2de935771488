"""
Construction heuristics producing an initial solution for local search.
"""

from dockyard.construction.first_fit import first_fit_decreasing, add_truck_to_solution

__all__ = [
    'first_fit_decreasing',
    'add_truck_to_solution',
]
