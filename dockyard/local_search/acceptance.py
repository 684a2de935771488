import math
import random

from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.config import AcceptanceType, SolverConfig


def calculate_hard_weight(solution: Solution) -> int:
    """
    Weight of one hard violation when a score is collapsed into a single number.
    Rounded to a power of 10 for readability, and always larger than the worst possible soft total.
    """
    max_soft_violations = max(1, len(solution.trucks) * solution.unplanned_soft_weight)
    return 10 ** round(math.log10(max_soft_violations * 10))


class Acceptor:
    def is_accepted(self, current_score: HardSoftScore, new_score: HardSoftScore, iteration: int) -> bool:
        raise NotImplementedError

    def step_ended(self, current_score: HardSoftScore, iteration: int) -> None:
        """Called once per iteration, after the move was applied or dropped"""
        pass


class HillClimbingAcceptor(Acceptor):
    def is_accepted(self, current_score, new_score, iteration):
        return new_score <= current_score


class LateAcceptanceAcceptor(Acceptor):
    """
    Accepts a move if it is no worse than the current score, or no worse than
    the score the search had late_acceptance_size iterations ago.
    """

    def __init__(self, initial_score: HardSoftScore, late_acceptance_size: int):
        self.history = [initial_score] * late_acceptance_size

    def is_accepted(self, current_score, new_score, iteration):
        late_score = self.history[iteration % len(self.history)]
        return new_score <= current_score or new_score <= late_score

    def step_ended(self, current_score, iteration):
        self.history[iteration % len(self.history)] = current_score


class SimulatedAnnealingAcceptor(Acceptor):
    def __init__(self, rng: random.Random, hard_weight: int, start_temperature: float,
                 end_temperature: float, cooling_rate: float):
        self.rng = rng
        self.hard_weight = hard_weight
        self.start_temperature = start_temperature
        self.end_temperature = end_temperature
        self.cooling_rate = cooling_rate
        self.current_temperature = start_temperature

    def is_accepted(self, current_score, new_score, iteration):
        delta = (new_score - current_score).to_scalar(self.hard_weight)
        if delta <= 0:
            return True
        return self.rng.random() < math.exp(-delta / self.current_temperature)

    def step_ended(self, current_score, iteration):
        self.current_temperature *= self.cooling_rate
        # Reheat if temperature gets too low but we still have time
        if self.current_temperature < self.end_temperature:
            self.current_temperature = self.start_temperature


def build_acceptor(config: SolverConfig, solution: Solution, initial_score: HardSoftScore,
                   rng: random.Random) -> Acceptor:
    if config.acceptance == AcceptanceType.HILL_CLIMBING:
        return HillClimbingAcceptor()
    if config.acceptance == AcceptanceType.LATE_ACCEPTANCE:
        return LateAcceptanceAcceptor(initial_score, config.late_acceptance_size)
    if config.acceptance == AcceptanceType.SIMULATED_ANNEALING:
        return SimulatedAnnealingAcceptor(rng, calculate_hard_weight(solution), config.start_temperature,
                                          config.end_temperature, config.cooling_rate)
    raise ValueError(f"Unsupported acceptance type: {config.acceptance}")
