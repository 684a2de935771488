from collections import defaultdict
from typing import Callable, Hashable, Iterable, Optional

from dockyard.base_model.solution import Solution
from dockyard.base_model.truck import Truck
from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.capacity_grouping import CapacityGrouping

KeyFunction = Callable[[Truck, Optional[Timeslot], Optional[Dock]], Optional[Hashable]]


def count_pairs(n: int) -> int:
    """Number of unordered pairs among n trucks"""
    return n * (n - 1) // 2


def overload(load: int, capacity: int) -> int:
    return max(0, load - capacity)


def cell_key(truck: Truck, timeslot: Optional[Timeslot], dock: Optional[Dock]):
    if timeslot is None or dock is None:
        return None
    return (timeslot, dock)


def timeslot_name_key(truck: Truck, timeslot: Optional[Timeslot], dock: Optional[Dock]):
    if timeslot is None or dock is None:
        return None
    return (timeslot, truck.name)


def dock_key(truck: Truck, timeslot: Optional[Timeslot], dock: Optional[Dock]):
    if timeslot is None or dock is None:
        return None
    return dock


def capacity_key_function(grouping: CapacityGrouping) -> KeyFunction:
    if grouping == CapacityGrouping.TIMESLOT_DOCK:
        return cell_key
    return dock_key


def capacity_group_dock(key) -> Dock:
    """The dock whose capacity bounds a capacity group, for either kind of grouping key."""
    return key[1] if isinstance(key, tuple) else key


def capacity_load_index(solution: Solution):
    if solution.capacity_grouping == CapacityGrouping.TIMESLOT_DOCK:
        return solution.load_per_cell
    return solution.load_per_dock


def group_planned_trucks(trucks: Iterable[Truck], key_function: KeyFunction) -> dict:
    """Groups planned trucks by key, recomputed from the truck fields only."""
    groups = defaultdict(list)
    for truck in trucks:
        key = key_function(truck, truck.timeslot, truck.dock)
        if key is not None:
            groups[key].append(truck)
    return groups


def get_key_diffs(changes, key_function: KeyFunction,
                  weight: Callable[[Truck], int] = lambda truck: 1) -> dict:
    """
    How much each affected key would gain or lose if the changes were applied.
    Reads the current truck fields as the old state, so call it before applying.
    """
    diffs = defaultdict(int)
    for change in changes:
        truck = change.truck
        old_key = key_function(truck, truck.timeslot, truck.dock)
        new_key = key_function(truck, change.new_timeslot, change.new_dock)
        if old_key == new_key:
            continue
        if old_key is not None:
            diffs[old_key] -= weight(truck)
        if new_key is not None:
            diffs[new_key] += weight(truck)
    return diffs


def pair_penalty_delta(counts, diffs: dict) -> int:
    delta = 0
    for key, diff in diffs.items():
        if diff == 0:
            continue
        before = counts[key]
        delta += count_pairs(before + diff) - count_pairs(before)
    return delta


def overload_penalty_delta(loads, diffs: dict) -> int:
    delta = 0
    for key, diff in diffs.items():
        if diff == 0:
            continue
        capacity = capacity_group_dock(key).capacity
        before = loads[key]
        delta += overload(before + diff, capacity) - overload(before, capacity)
    return delta
