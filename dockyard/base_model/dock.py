from dataclasses import dataclass


@dataclass(frozen=True)
class Dock:
    """Class representing a dock in the yard"""
    name: str
    capacity: int

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError(f"Dock {self.name} has negative capacity: {self.capacity}")

    def __str__(self):
        return f"{self.name}"
