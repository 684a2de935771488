from enum import Enum


class CapacityGrouping(Enum):
    """
    Key by which truck capacities are summed for the capacity rule.

    DOCK sums every planned truck on a dock regardless of timeslot.
    TIMESLOT_DOCK sums per (timeslot, dock) cell, so a dock's capacity is
    available again in every timeslot.
    """

    DOCK = "dock"
    TIMESLOT_DOCK = "timeslot_dock"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, grouping_string: str) -> 'CapacityGrouping':
        try:
            return cls(grouping_string.lower())
        except ValueError:
            raise ValueError(f"No capacity grouping found for: {grouping_string}")
