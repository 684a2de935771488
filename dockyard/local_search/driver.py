import logging
import random
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Optional

from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.config import SolverConfig
from dockyard.local_search.acceptance import build_acceptor
from dockyard.local_search.move_generator import find_best_sampled_move, add_move_to_tabu_list
from dockyard.local_search.rules_engine import calculate_full_score
from dockyard.local_search.solution_snapshot import SolutionSnapshot
from dockyard.util.search_logger import SearchLogger

logger = logging.getLogger(__name__)


@dataclass
class LocalSearchResult:
    best_score: HardSoftScore
    iterations: int
    moves_accepted: int
    time_spent: float
    best_score_history: list[tuple[int, HardSoftScore]] = field(default_factory=list) # (iteration, best score) at every improvement


def _is_terminated(config: SolverConfig, iteration: int, time_used: float, best_score: HardSoftScore) -> bool:
    if config.iteration_cap is not None and iteration >= config.iteration_cap:
        return True
    if config.time_budget is not None and time_used >= config.time_budget:
        return True
    if config.best_score_limit is not None and best_score <= config.best_score_limit:
        return True
    return False


def _assert_score(solution: Solution, incremental_score: HardSoftScore, move_description: str) -> None:
    full_score = calculate_full_score(solution)
    if full_score != incremental_score:
        raise ValueError(f"Score corruption after {move_description}: "
                         f"incremental score {incremental_score} != full score {full_score}")


def local_search(solution: Solution, config: SolverConfig, search_logger: Optional[SearchLogger] = None,
                 log_file_path: Optional[str] = None) -> LocalSearchResult:
    """
    Improve the solution in place until the time budget or iteration cap runs out.
    The best solution seen is written back into the solution before returning.
    """
    start_time = time.time()

    # Open log file if path is provided
    log_file = None
    if log_file_path:
        log_file = open(log_file_path, 'w')

    # Custom log function to write to both the logger and the file
    def log_output(message):
        logger.info(message)
        if log_file:
            log_file.write(message + "\n")
            log_file.flush()

    try:
        rng = random.Random(config.random_seed)

        current_score = calculate_full_score(solution)
        solution.score = current_score
        best_score = current_score
        best_solution_snapshot = SolutionSnapshot(solution, best_score)
        best_score_history = [(0, best_score)]

        acceptor = build_acceptor(config, solution, current_score, rng)
        tabu_list = deque(maxlen=config.tabu_tenure) if config.tabu_tenure > 0 else None

        log_output(f"Starting local search with parameters:")
        log_output(f"Acceptance: {config.acceptance}, time budget: {config.time_budget}s, "
                   f"iteration cap: {config.iteration_cap}, seed: {config.random_seed}")
        log_output(f"Move sample size: {config.move_sample_size}, swap probability: {config.swap_move_probability}, "
                   f"tabu tenure: {config.tabu_tenure}")
        log_output(f"Initial score: {current_score}")
        if search_logger is not None:
            search_logger.log_state(0, current_score, event_type="start")

        iteration = 0
        moves_accepted = 0
        time_used = 0.0

        while not _is_terminated(config, iteration, time_used, best_score):
            move, delta = find_best_sampled_move(
                solution, rng, config.move_sample_size,
                swap_move_probability=config.swap_move_probability,
                allow_unassigned=config.allow_unassigned,
                tabu_list=tabu_list,
                current_score=current_score,
                best_score=best_score,
            )

            if move is not None:
                new_score = current_score + delta
                if acceptor.is_accepted(current_score, new_score, iteration): # accept move
                    move_description = str(move)
                    if tabu_list is not None:
                        add_move_to_tabu_list(move, tabu_list)
                    move.apply(solution)
                    current_score = new_score
                    moves_accepted += 1

                    if config.full_assert:
                        _assert_score(solution, current_score, move_description)
                    if search_logger is not None:
                        search_logger.log_state(iteration + 1, current_score, move_description)

                    if current_score < best_score:
                        best_score = current_score
                        best_solution_snapshot = SolutionSnapshot(solution, best_score)
                        best_score_history.append((iteration + 1, best_score))

            acceptor.step_ended(current_score, iteration)
            iteration += 1
            time_used = time.time() - start_time

            if iteration % config.log_every_n_iterations == 0:
                log_output(f"Iteration: {iteration}, Time: {time_used:.1f}s, Accepted: {moves_accepted}/{iteration}, "
                           f"Score: {current_score}, Best: {best_score}")

        best_solution_snapshot.restore_solution(solution)
        time_used = time.time() - start_time

        log_output(f"Local search ended after {iteration} iterations in {time_used:.2f}s")
        log_output(f"Final score: {best_score}, unplanned trucks: {solution.n_unplanned}")
        if search_logger is not None:
            search_logger.log_state(iteration, best_score, event_type="end")

        return LocalSearchResult(
            best_score=best_score,
            iterations=iteration,
            moves_accepted=moves_accepted,
            time_spent=time_used,
            best_score_history=best_score_history,
        )
    finally:
        # Close log file if it was opened
        if log_file:
            log_file.close()


def run_local_search(solution: Solution, log_file_path: str = None, time_budget: float = 10.0) -> LocalSearchResult:
    """Local search with the default hyperparameters"""
    config = SolverConfig(time_budget=time_budget)
    return local_search(solution, config, log_file_path=log_file_path)
