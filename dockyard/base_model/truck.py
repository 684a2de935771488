from dataclasses import dataclass
from typing import Optional

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock


@dataclass(eq=False)
class Truck:
    """Class representing a truck waiting to be served. The planning entity of the model."""
    truck_id: int
    name: str
    capacity: int
    timeslot: Optional[Timeslot] = None
    dock: Optional[Dock] = None

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError(f"Truck {self.truck_id} must have a positive capacity, got {self.capacity}")

    @property
    def is_planned(self) -> bool:
        return self.timeslot is not None and self.dock is not None

    @property
    def assignment(self) -> tuple[Optional[Timeslot], Optional[Dock]]:
        return (self.timeslot, self.dock)

    def __str__(self):
        return f"{self.name}"
