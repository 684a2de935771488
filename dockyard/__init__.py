"""
Dock yard planning: assigns trucks to (timeslot, dock) pairs with a local search solver.
"""

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.truck import Truck
from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.base_model.capacity_grouping import CapacityGrouping
from dockyard.config import SolverConfig, AcceptanceType
from dockyard.solver import solve, SolveResult

__all__ = [
    'Timeslot',
    'Dock',
    'Truck',
    'Solution',
    'HardSoftScore',
    'CapacityGrouping',
    'SolverConfig',
    'AcceptanceType',
    'solve',
    'SolveResult',
]
