from typing import NamedTuple, Optional

from dockyard.base_model.solution import Solution
from dockyard.base_model.truck import Truck
from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.score import HardSoftScore


class Change(NamedTuple):
    """A single truck getting a new (timeslot, dock) pair. (None, None) means unassigned."""
    truck: Truck
    new_timeslot: Optional[Timeslot]
    new_dock: Optional[Dock]


class UndoToken(NamedTuple):
    previous_assignments: list[tuple[Truck, Optional[Timeslot], Optional[Dock]]]


class Move:
    """Base class for moves. A move is described entirely by the changes it makes."""

    def changes(self) -> list[Change]:
        raise NotImplementedError

    def is_doable(self) -> bool:
        """False if applying the move would leave every truck where it is."""
        return any(change.truck.assignment != (change.new_timeslot, change.new_dock)
                   for change in self.changes())

    def apply(self, solution: Solution) -> UndoToken:
        # read every old value before writing, swaps depend on it
        changes = self.changes()
        token = UndoToken([(c.truck, c.truck.timeslot, c.truck.dock) for c in changes])
        for change in changes:
            solution.assign(change.truck, change.new_timeslot, change.new_dock)
        return token

    def undo(self, solution: Solution, token: UndoToken) -> None:
        for truck, old_timeslot, old_dock in reversed(token.previous_assignments):
            solution.assign(truck, old_timeslot, old_dock)

    def delta(self, solution: Solution) -> HardSoftScore:
        """Score change the move would cause. Does not touch the solution."""
        from dockyard.local_search.rules_engine import calculate_delta_score
        return calculate_delta_score(solution, self)

    def tabu_keys(self) -> list[tuple]:
        """Keys of the assignments this move creates, matched against the tabu list."""
        return [(c.truck.truck_id, c.new_timeslot, c.new_dock) for c in self.changes()]

    def reverse_tabu_keys(self) -> list[tuple]:
        """Keys of the assignments this move destroys. Must be read before the move is applied."""
        return [(c.truck.truck_id, c.truck.timeslot, c.truck.dock) for c in self.changes()]


def _format_assignment(timeslot: Optional[Timeslot], dock: Optional[Dock]) -> str:
    if timeslot is None or dock is None:
        return "unassigned"
    return f"{timeslot}@{dock}"


class ReassignMove(Move):
    def __init__(self, truck: Truck, new_timeslot: Optional[Timeslot], new_dock: Optional[Dock]):
        self.truck = truck
        self.new_timeslot = new_timeslot
        self.new_dock = new_dock
        self.old_timeslot, self.old_dock = truck.assignment # as created, for printing

    def changes(self) -> list[Change]:
        return [Change(self.truck, self.new_timeslot, self.new_dock)]

    def __str__(self):
        return (f"ReassignMove(truck {self.truck.truck_id}: "
                f"{_format_assignment(self.old_timeslot, self.old_dock)} → "
                f"{_format_assignment(self.new_timeslot, self.new_dock)})")


class SwapMove(Move):
    def __init__(self, truck_a: Truck, truck_b: Truck):
        if truck_a is truck_b:
            raise ValueError(f"Cannot swap truck {truck_a.truck_id} with itself")
        self.truck_a = truck_a
        self.truck_b = truck_b
        self.old_assignment_a = truck_a.assignment # as created, for printing
        self.old_assignment_b = truck_b.assignment

    def changes(self) -> list[Change]:
        return [
            Change(self.truck_a, self.truck_b.timeslot, self.truck_b.dock),
            Change(self.truck_b, self.truck_a.timeslot, self.truck_a.dock),
        ]

    def __str__(self):
        return (f"SwapMove(truck {self.truck_a.truck_id} "
                f"[{_format_assignment(*self.old_assignment_a)}] ↔ "
                f"truck {self.truck_b.truck_id} "
                f"[{_format_assignment(*self.old_assignment_b)}])")
