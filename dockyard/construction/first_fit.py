import logging

from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.local_search.move import ReassignMove
from dockyard.local_search.rules_engine import calculate_delta_score

logger = logging.getLogger(__name__)


def add_truck_to_solution(solution: Solution, truck, allow_unassigned: bool = True) -> bool:
    """
    Place one truck on the (timeslot, dock) cell with the lowest score delta.
    Cells are tried timeslot by timeslot in fact order, the first cell wins ties.
    When unassigned trucks are allowed, staying unassigned is tried first with a delta of zero.
    Returns True if the truck was placed.
    """
    best_move = None
    best_delta = HardSoftScore.ZERO if allow_unassigned else None

    for timeslot in solution.timeslots:
        for dock in solution.docks:
            move = ReassignMove(truck, timeslot, dock)
            delta = calculate_delta_score(solution, move)
            if best_delta is None or delta < best_delta:
                best_move = move
                best_delta = delta

    if best_move is None:
        return False
    best_move.apply(solution)
    return True


def first_fit_decreasing(solution: Solution, allow_unassigned: bool = True) -> int:
    """
    Greedy initial placement of every unplanned truck, biggest trucks first.
    Trucks that are already planned are left where they are.
    Returns the number of trucks placed.
    """
    trucks_to_place = solution.get_unplanned_trucks()
    trucks_to_place.sort(key=lambda truck: truck.capacity, reverse=True)

    n_placed = 0
    for truck in trucks_to_place:
        if add_truck_to_solution(solution, truck, allow_unassigned):
            n_placed += 1
        else:
            logger.debug(f"No feasible cell for truck {truck.truck_id} (capacity {truck.capacity}), leaving it unassigned")

    logger.info(f"Construction placed {n_placed} of {len(trucks_to_place)} unplanned trucks")
    return n_placed
