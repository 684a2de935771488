from collections import Counter
from typing import Optional

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.truck import Truck
from dockyard.base_model.score import HardSoftScore
from dockyard.base_model.capacity_grouping import CapacityGrouping


class Solution:
    """Class that manages the dock yard planning: the problem facts, the trucks and the score."""

    def __init__(self, timeslots: list[Timeslot], docks: list[Dock], trucks: list[Truck],
                 capacity_grouping: CapacityGrouping = CapacityGrouping.DOCK,
                 unplanned_soft_weight: int = 1):
        self.timeslots: list[Timeslot] = list(timeslots)
        self.docks: list[Dock] = list(docks)
        self.trucks: list[Truck] = list(trucks)
        self.capacity_grouping: CapacityGrouping = capacity_grouping
        self.unplanned_soft_weight: int = unplanned_soft_weight # soft penalty per unplanned truck
        self.score: Optional[HardSoftScore] = None

        if len(set(self.timeslots)) != len(self.timeslots):
            raise ValueError("Duplicate timeslots in problem")
        dock_names = [dock.name for dock in self.docks]
        if len(set(dock_names)) != len(dock_names):
            raise ValueError(f"Duplicate dock names in problem: {dock_names}")
        truck_ids = [truck.truck_id for truck in self.trucks]
        if len(set(truck_ids)) != len(truck_ids):
            raise ValueError("Duplicate truck ids in problem")

        self._timeslot_set = set(self.timeslots)
        self._dock_set = set(self.docks)
        self.trucks_by_id: dict[int, Truck] = {truck.truck_id: truck for truck in self.trucks}

        # incremental indexes kept in sync by assign/unassign
        self.trucks_per_cell: Counter = Counter()         # (timeslot, dock) -> number of trucks
        self.trucks_per_timeslot_name: Counter = Counter()  # (timeslot, truck name) -> number of trucks
        self.load_per_dock: Counter = Counter()           # dock -> summed truck capacity
        self.load_per_cell: Counter = Counter()           # (timeslot, dock) -> summed truck capacity
        self.n_unplanned: int = 0
        self.rebuild_indexes()

    def rebuild_indexes(self) -> None:
        """Recompute every index from the truck fields. Needed after editing truck fields directly."""
        self.trucks_per_cell.clear()
        self.trucks_per_timeslot_name.clear()
        self.load_per_dock.clear()
        self.load_per_cell.clear()
        self.n_unplanned = 0
        for truck in self.trucks:
            if truck.timeslot is not None and truck.timeslot not in self._timeslot_set:
                raise ValueError(f"Truck {truck.truck_id} has a timeslot that is not part of the problem: {truck.timeslot}")
            if truck.dock is not None and truck.dock not in self._dock_set:
                raise ValueError(f"Truck {truck.truck_id} has a dock that is not part of the problem: {truck.dock}")
            if truck.is_planned:
                self._add_to_indexes(truck)
            else:
                self.n_unplanned += 1

    def _add_to_indexes(self, truck: Truck) -> None:
        cell = (truck.timeslot, truck.dock)
        self.trucks_per_cell[cell] += 1
        self.trucks_per_timeslot_name[(truck.timeslot, truck.name)] += 1
        self.load_per_dock[truck.dock] += truck.capacity
        self.load_per_cell[cell] += truck.capacity

    def _remove_from_indexes(self, truck: Truck) -> None:
        cell = (truck.timeslot, truck.dock)
        self.trucks_per_cell[cell] -= 1
        self.trucks_per_timeslot_name[(truck.timeslot, truck.name)] -= 1
        self.load_per_dock[truck.dock] -= truck.capacity
        self.load_per_cell[cell] -= truck.capacity

    def assign(self, truck: Truck, timeslot: Optional[Timeslot], dock: Optional[Dock]) -> None:
        """Set both planning variables of a truck and keep the indexes in sync."""
        if timeslot is not None and timeslot not in self._timeslot_set:
            raise ValueError(f"Timeslot {timeslot} is not part of the problem")
        if dock is not None and dock not in self._dock_set:
            raise ValueError(f"Dock {dock} is not part of the problem")

        if truck.is_planned:
            self._remove_from_indexes(truck)
        else:
            self.n_unplanned -= 1

        truck.timeslot = timeslot
        truck.dock = dock

        if truck.is_planned:
            self._add_to_indexes(truck)
        else:
            self.n_unplanned += 1

    def unassign(self, truck: Truck) -> None:
        self.assign(truck, None, None)

    def unassign_all(self) -> None:
        for truck in self.trucks:
            self.unassign(truck)

    def get_planned_trucks(self) -> list[Truck]:
        return [truck for truck in self.trucks if truck.is_planned]

    def get_unplanned_trucks(self) -> list[Truck]:
        return [truck for truck in self.trucks if not truck.is_planned]

    def get_trucks_in_cell(self, timeslot: Timeslot, dock: Dock) -> list[Truck]:
        return [truck for truck in self.trucks if truck.timeslot == timeslot and truck.dock == dock]

    def get_truck(self, truck_id: int) -> Truck:
        try:
            return self.trucks_by_id[truck_id]
        except KeyError:
            raise ValueError(f"Truck with id {truck_id} not found in solution.")

    def get_assignment_map(self) -> dict[int, tuple[Optional[Timeslot], Optional[Dock]]]:
        """Truck id -> (timeslot, dock). Used to compare solutions."""
        return {truck.truck_id: truck.assignment for truck in self.trucks}

    def is_empty_problem(self) -> bool:
        return not self.timeslots or not self.docks

    def __str__(self):
        return (f"Solution(timeslots={len(self.timeslots)}, docks={len(self.docks)}, "
                f"trucks={len(self.trucks)}, unplanned={self.n_unplanned}, score={self.score})")
