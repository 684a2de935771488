import random
from datetime import time

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.truck import Truck
from dockyard.base_model.solution import Solution

DEMO_TRUCK_CAPACITIES = [10, 15, 5, 30, 40, 20, 3, 19, 22, 11, 12]


def generate_demo_timeslots(n_timeslots: int = 3, first_hour: int = 8) -> list[Timeslot]:
    """One-hour timeslots starting at first_hour"""
    return [Timeslot(time(first_hour + i, 0), time(first_hour + i + 1, 0)) for i in range(n_timeslots)]


def generate_demo_docks() -> list[Dock]:
    return [
        Dock("DocYard-A-40", 40),
        Dock("DocYard-B-20", 20),
        Dock("DocYard-C-10", 10),
    ]


def generate_demo_trucks(capacities: list[int] = None) -> list[Truck]:
    """Trucks named after their capacity, e.g. T05 for a truck that needs 5"""
    if capacities is None:
        capacities = DEMO_TRUCK_CAPACITIES
    return [Truck(truck_id=i, name=f"T{capacity:02d}", capacity=capacity) for i, capacity in enumerate(capacities)]


def generate_demo_data() -> Solution:
    """The 3 timeslot, 3 dock, 11 truck yard"""
    return Solution(generate_demo_timeslots(), generate_demo_docks(), generate_demo_trucks())


def generate_test_data(n_trucks: int, n_timeslots: int, n_docks: int,
                       min_capacity: int = 1, max_capacity: int = 40,
                       seed: int = 13062025, duplicate_name_probability: float = 0.0) -> Solution:
    """
    Random problem instance. Dock capacities are drawn so most trucks fit somewhere.
    With duplicate_name_probability > 0 some trucks reuse the name of an earlier truck.
    """
    # Initialize random generator
    gen = random.Random(seed) # With a fix a seed for reproducibility

    if n_timeslots > 23:
        raise ValueError(f"At most 23 one-hour timeslots fit in a day, got {n_timeslots}")
    timeslots = generate_demo_timeslots(n_timeslots, first_hour=0) if n_timeslots else []

    docks = []
    for i in range(n_docks):
        capacity = gen.randint(min_capacity, max_capacity * 2)
        docks.append(Dock(f"Dock-{i + 1}", capacity))

    trucks = []
    for i in range(n_trucks):
        capacity = gen.randint(min_capacity, max_capacity)
        if trucks and gen.random() < duplicate_name_probability:
            name = gen.choice(trucks).name
        else:
            name = f"T{i}"
        trucks.append(Truck(truck_id=i, name=name, capacity=capacity))

    return Solution(timeslots, docks, trucks)


def scramble_assignments(solution: Solution, seed: int = 13062025, unassigned_probability: float = 0.2) -> None:
    """Put every truck on a random cell, or leave it unassigned, ignoring all constraints"""
    gen = random.Random(seed)
    for truck in solution.trucks:
        if not solution.timeslots or not solution.docks or gen.random() < unassigned_probability:
            solution.unassign(truck)
        else:
            solution.assign(truck, gen.choice(solution.timeslots), gen.choice(solution.docks))
