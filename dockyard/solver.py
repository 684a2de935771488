import logging
import multiprocessing
import time
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional

from dockyard.base_model.solution import Solution
from dockyard.base_model.truck import Truck
from dockyard.base_model.score import HardSoftScore
from dockyard.config import SolverConfig
from dockyard.construction.first_fit import first_fit_decreasing
from dockyard.local_search.driver import local_search
from dockyard.local_search.rules_engine import calculate_full_score
from dockyard.local_search.solution_snapshot import SolutionSnapshot
from dockyard.util.search_logger import SearchLogger

logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    solution: Solution
    score: HardSoftScore
    unplanned_trucks: list[Truck]
    iterations: int = 0
    moves_accepted: int = 0
    time_spent: float = 0.0
    best_score_history: list[tuple[int, HardSoftScore]] = field(default_factory=list)
    worker_index: int = 0

    @property
    def is_feasible(self) -> bool:
        return self.score.is_feasible


def _configure_problem(problem: Solution, config: SolverConfig) -> None:
    problem.capacity_grouping = config.capacity_grouping
    problem.unplanned_soft_weight = config.unplanned_soft_weight
    problem.rebuild_indexes()


def _solve_single(problem: Solution, config: SolverConfig, search_logger: Optional[SearchLogger] = None,
                  log_file_path: Optional[str] = None) -> SolveResult:
    if config.construction_heuristic:
        first_fit_decreasing(problem, allow_unassigned=config.allow_unassigned)
        if search_logger is not None:
            search_logger.log_state(0, calculate_full_score(problem), event_type="construction")

    result = local_search(problem, config, search_logger=search_logger, log_file_path=log_file_path)

    return SolveResult(
        solution=problem,
        score=result.best_score,
        unplanned_trucks=problem.get_unplanned_trucks(),
        iterations=result.iterations,
        moves_accepted=result.moves_accepted,
        time_spent=result.time_spent,
        best_score_history=result.best_score_history,
    )


def worker_log_file_path(log_file_path: Optional[str], worker_index: int) -> Optional[str]:
    """Each parallel worker writes its own log file next to the requested one"""
    if not log_file_path:
        return None
    return f"{log_file_path}.worker{worker_index}"


def _run_worker(problem: Solution, config: SolverConfig, worker_index: int,
                log_file_path: Optional[str] = None) -> tuple[int, SolutionSnapshot, int, int, list]:
    """Solve an independent copy of the problem. Runs in a worker process."""
    worker_config = config.with_overrides(random_seed=config.random_seed + worker_index, n_workers=1)
    result = _solve_single(problem, worker_config, log_file_path=worker_log_file_path(log_file_path, worker_index))
    return (worker_index, SolutionSnapshot(problem, result.score), result.iterations, result.moves_accepted,
            result.best_score_history)


def _solve_parallel(problem: Solution, config: SolverConfig, log_file_path: Optional[str] = None) -> SolveResult:
    start_time = time.time()
    starmap_args = [(deepcopy(problem), config, worker_index, log_file_path)
                    for worker_index in range(config.n_workers)]

    with multiprocessing.Pool(config.n_workers) as pool:
        worker_results = pool.starmap(_run_worker, starmap_args)

    # merge in the coordinating process only, pairwise by (score, worker index)
    best_index, best_snapshot, _, _, best_history = worker_results[0]
    for worker_index, snapshot, _, _, history in worker_results[1:]:
        if (snapshot.score, worker_index) < (best_snapshot.score, best_index):
            best_index, best_snapshot, best_history = worker_index, snapshot, history

    best_snapshot.restore_solution(problem)
    logger.info(f"Best of {config.n_workers} workers: worker {best_index} with score {best_snapshot.score}")

    return SolveResult(
        solution=problem,
        score=best_snapshot.score,
        unplanned_trucks=problem.get_unplanned_trucks(),
        iterations=sum(result[2] for result in worker_results),
        moves_accepted=sum(result[3] for result in worker_results),
        time_spent=time.time() - start_time,
        best_score_history=best_history,
        worker_index=best_index,
    )


def solve(problem: Solution, config: SolverConfig = None, search_logger: Optional[SearchLogger] = None,
          log_file_path: Optional[str] = None) -> SolveResult:
    """
    Solve the problem in place and return the best solution found.

    The trucks of the problem are the ones that come back assigned. With zero
    timeslots or zero docks there is nothing to plan: every truck is left
    unassigned and the result is returned right away.

    With n_workers > 1 every worker writes its own log file (log_file_path with
    a .worker<i> suffix) and the best-score history is the winning worker's.
    A search logger lives in this process only, so it cannot be combined with
    parallel workers.
    """
    if config is None:
        config = SolverConfig()
    if config.n_workers > 1 and search_logger is not None:
        raise ValueError("A search logger cannot record parallel workers, use n_workers=1")
    _configure_problem(problem, config)

    if problem.is_empty_problem():
        logger.warning(f"Problem has {len(problem.timeslots)} timeslots and {len(problem.docks)} docks, nothing to plan")
        problem.unassign_all()
        problem.score = calculate_full_score(problem)
        return SolveResult(solution=problem, score=problem.score, unplanned_trucks=problem.get_unplanned_trucks())

    if config.n_workers > 1:
        return _solve_parallel(problem, config, log_file_path)
    return _solve_single(problem, config, search_logger, log_file_path)
