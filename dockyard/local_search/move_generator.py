import random
from collections import deque
from typing import Iterator, Optional

from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.local_search.move import Move, ReassignMove, SwapMove
from dockyard.local_search.rules_engine import calculate_delta_score


def reassign_neighborhood_size(solution: Solution, allow_unassigned: bool = True) -> int:
    n_values = len(solution.timeslots) * len(solution.docks) + (1 if allow_unassigned else 0)
    return len(solution.trucks) * n_values


def swap_neighborhood_size(solution: Solution) -> int:
    n = len(solution.trucks)
    return n * (n - 1) // 2


def iter_reassign_moves(solution: Solution, allow_unassigned: bool = True) -> Iterator[ReassignMove]:
    """Every (truck, value) pair, in truck order then timeslot-major value order. Includes no-op moves."""
    for truck in solution.trucks:
        for timeslot in solution.timeslots:
            for dock in solution.docks:
                yield ReassignMove(truck, timeslot, dock)
        if allow_unassigned:
            yield ReassignMove(truck, None, None)


def iter_swap_moves(solution: Solution) -> Iterator[SwapMove]:
    trucks = solution.trucks
    for i in range(len(trucks)):
        for j in range(i + 1, len(trucks)):
            yield SwapMove(trucks[i], trucks[j])


def iter_all_moves(solution: Solution, allow_unassigned: bool = True) -> Iterator[Move]:
    yield from iter_reassign_moves(solution, allow_unassigned)
    yield from iter_swap_moves(solution)


def _current_value_index(solution: Solution, truck, allow_unassigned: bool) -> Optional[int]:
    """Position of the truck's current value in the timeslot-major value range, None if it is not in it."""
    if truck.timeslot is None and truck.dock is None:
        return len(solution.timeslots) * len(solution.docks) if allow_unassigned else None
    if not truck.is_planned:
        return None # half assigned, clearing it is a real change
    timeslot_index = solution.timeslots.index(truck.timeslot)
    dock_index = solution.docks.index(truck.dock)
    return timeslot_index * len(solution.docks) + dock_index


def generate_random_reassign_move(solution: Solution, rng: random.Random,
                                  allow_unassigned: bool = True) -> Optional[ReassignMove]:
    """Random truck to a random value other than its current one. None if no such value exists."""
    if not solution.trucks:
        return None
    n_cells = len(solution.timeslots) * len(solution.docks)
    n_values = n_cells + (1 if allow_unassigned else 0)

    truck = rng.choice(solution.trucks)
    current_index = _current_value_index(solution, truck, allow_unassigned)
    if current_index is None:
        if n_values == 0:
            return None
        value_index = rng.randrange(n_values)
    else:
        if n_values <= 1:
            return None
        value_index = rng.randrange(n_values - 1)
        if value_index >= current_index:
            value_index += 1 # skip the current value

    if value_index == n_cells:
        return ReassignMove(truck, None, None)
    timeslot = solution.timeslots[value_index // len(solution.docks)]
    dock = solution.docks[value_index % len(solution.docks)]
    return ReassignMove(truck, timeslot, dock)


def generate_random_swap_move(solution: Solution, rng: random.Random, max_attempts: int = 10) -> Optional[SwapMove]:
    """Two distinct trucks with different assignments. None if none was found within max_attempts."""
    if len(solution.trucks) < 2:
        return None
    for _ in range(max_attempts):
        truck_a, truck_b = rng.sample(solution.trucks, 2)
        if truck_a.assignment != truck_b.assignment:
            return SwapMove(truck_a, truck_b)
    return None


def generate_random_move(solution: Solution, rng: random.Random, swap_move_probability: float = 0.3,
                         allow_unassigned: bool = True) -> Optional[Move]:
    if rng.random() < swap_move_probability:
        move = generate_random_swap_move(solution, rng)
        if move is not None:
            return move
    return generate_random_reassign_move(solution, rng, allow_unassigned)


def is_tabu(move: Move, tabu_list: Optional[deque]) -> bool:
    if not tabu_list:
        return False
    return any(key in tabu_list for key in move.tabu_keys())


def add_move_to_tabu_list(move: Move, tabu_list: deque) -> None:
    """
    Adds the reverse of the move to the tabu list.
    Call before doing the move, the reverse is read from the current truck fields.
    """
    for key in move.reverse_tabu_keys():
        tabu_list.append(key)


def generate_list_of_random_moves(solution: Solution, rng: random.Random, n_moves: int,
                                  swap_move_probability: float = 0.3, allow_unassigned: bool = True,
                                  tabu_list: deque = None, current_score: HardSoftScore = None,
                                  best_score: HardSoftScore = None) -> list[tuple[Move, HardSoftScore]]:
    """
    Sample n_moves random moves and evaluate them.
    Tabu moves are dropped unless they would produce a new best score (aspiration).
    """
    moves = []
    for _ in range(n_moves):
        move = generate_random_move(solution, rng, swap_move_probability, allow_unassigned)
        if move is None:
            continue
        delta = calculate_delta_score(solution, move)
        if is_tabu(move, tabu_list):
            meets_aspiration = (current_score is not None and best_score is not None
                                and current_score + delta < best_score)
            if not meets_aspiration:
                continue
        moves.append((move, delta))
    return moves


def find_best_sampled_move(solution: Solution, rng: random.Random, n_moves: int, **kwargs) -> tuple[Optional[Move], HardSoftScore]:
    """The lowest-delta move of a random sample. The first sampled move wins ties."""
    moves = generate_list_of_random_moves(solution, rng, n_moves, **kwargs)
    if not moves:
        return None, HardSoftScore.ZERO
    return min(moves, key=lambda move_and_delta: move_and_delta[1])
