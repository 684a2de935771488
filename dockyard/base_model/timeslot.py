from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Timeslot:
    """Class representing a time window in which a dock can serve a truck"""
    start: Any  # datetime.time in practice, anything ordered works
    end: Any

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError(f"Timeslot start ({self.start}) must be before end ({self.end})")

    def __str__(self):
        return f"{self.start}"
