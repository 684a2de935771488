from dockyard.base_model.solution import Solution
from dockyard.base_model.truck import Truck
from dockyard.base_model.score import HardSoftScore
from dockyard.local_search.move import Move
from dockyard.local_search.rules_engine_helpers import (
    count_pairs, overload, cell_key, timeslot_name_key, capacity_key_function,
    capacity_group_dock, capacity_load_index, group_planned_trucks, get_key_diffs,
    pair_penalty_delta, overload_penalty_delta,
)

DOCK_CONFLICT = "Dock conflict"
TRUCK_CONFLICT = "Truck conflict"
REQUIRED_CAPACITY = "Required capacity"
UNPLANNED_TRUCK = "Unplanned truck"


def calculate_full_score(solution: Solution) -> HardSoftScore:
    hard_violations = 0
    hard_violations += dock_conflict_full(solution)
    hard_violations += truck_conflict_full(solution)
    hard_violations += required_capacity_full(solution)

    soft_violations = 0
    soft_violations += unplanned_truck_full(solution)

    return HardSoftScore(hard_violations, soft_violations)


def calculate_delta_score(solution: Solution, move: Move) -> HardSoftScore:
    """
    Score change caused by the move.
    Call this BEFORE doing the move, the current truck fields are read as the old state.
    """
    if move is None:
        raise ValueError("Move is None.")
    changes = move.changes()

    hard_violations = 0
    hard_violations += dock_conflict_delta(solution, changes)
    hard_violations += truck_conflict_delta(solution, changes)
    hard_violations += required_capacity_delta(solution, changes)

    soft_violations = 0
    soft_violations += unplanned_truck_delta(solution, changes)

    return HardSoftScore(hard_violations, soft_violations)


def calculate_constraint_totals(solution: Solution) -> dict[str, HardSoftScore]:
    """Score per rule, recomputed from scratch."""
    return {
        DOCK_CONFLICT: HardSoftScore(dock_conflict_full(solution), 0),
        TRUCK_CONFLICT: HardSoftScore(truck_conflict_full(solution), 0),
        REQUIRED_CAPACITY: HardSoftScore(required_capacity_full(solution), 0),
        UNPLANNED_TRUCK: HardSoftScore(0, unplanned_truck_full(solution)),
    }


def find_conflicting_trucks(solution: Solution) -> list[Truck]:
    """Trucks that take part in at least one hard violation, in solution order."""
    conflicting = set()
    for trucks in group_planned_trucks(solution.trucks, cell_key).values():
        if len(trucks) > 1:
            conflicting.update(trucks)
    for trucks in group_planned_trucks(solution.trucks, timeslot_name_key).values():
        if len(trucks) > 1:
            conflicting.update(trucks)
    key_function = capacity_key_function(solution.capacity_grouping)
    for key, trucks in group_planned_trucks(solution.trucks, key_function).items():
        if sum(truck.capacity for truck in trucks) > capacity_group_dock(key).capacity:
            conflicting.update(trucks)
    return [truck for truck in solution.trucks if truck in conflicting]


def dock_conflict_full(solution: Solution) -> int:
    """
    A dock can serve at most one truck in the same timeslot.
    One violation per pair of planned trucks sharing timeslot and dock.
    """
    violations = 0
    for trucks in group_planned_trucks(solution.trucks, cell_key).values():
        violations += count_pairs(len(trucks))
    return violations


def dock_conflict_delta(solution: Solution, changes) -> int:
    diffs = get_key_diffs(changes, cell_key)
    return pair_penalty_delta(solution.trucks_per_cell, diffs)


def truck_conflict_full(solution: Solution) -> int:
    """
    The same truck cannot be served twice in one timeslot.
    One violation per pair of planned trucks sharing timeslot and name.
    """
    violations = 0
    for trucks in group_planned_trucks(solution.trucks, timeslot_name_key).values():
        violations += count_pairs(len(trucks))
    return violations


def truck_conflict_delta(solution: Solution, changes) -> int:
    diffs = get_key_diffs(changes, timeslot_name_key)
    return pair_penalty_delta(solution.trucks_per_timeslot_name, diffs)


def required_capacity_full(solution: Solution) -> int:
    """
    The trucks on a dock cannot need more than the dock's capacity.
    Every unit above capacity is one violation.
    """
    violations = 0
    key_function = capacity_key_function(solution.capacity_grouping)
    for key, trucks in group_planned_trucks(solution.trucks, key_function).items():
        load = sum(truck.capacity for truck in trucks)
        violations += overload(load, capacity_group_dock(key).capacity)
    return violations


def required_capacity_delta(solution: Solution, changes) -> int:
    key_function = capacity_key_function(solution.capacity_grouping)
    diffs = get_key_diffs(changes, key_function, weight=lambda truck: truck.capacity)
    return overload_penalty_delta(capacity_load_index(solution), diffs)


def unplanned_truck_full(solution: Solution) -> int:
    unplanned = sum(1 for truck in solution.trucks if not truck.is_planned)
    return solution.unplanned_soft_weight * unplanned


def unplanned_truck_delta(solution: Solution, changes) -> int:
    violations = 0
    for change in changes:
        was_planned = change.truck.is_planned
        will_be_planned = change.new_timeslot is not None and change.new_dock is not None
        if was_planned and not will_be_planned:
            violations += 1
        elif not was_planned and will_be_planned:
            violations -= 1
    return solution.unplanned_soft_weight * violations
