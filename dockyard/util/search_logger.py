import json
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from dockyard.base_model.score import HardSoftScore


@dataclass
class SearchState:
    """Represents a state in the search process"""
    iteration: int
    score: HardSoftScore
    best_score: HardSoftScore
    move: Optional[str]
    is_accepted: bool
    is_best: bool
    event_type: Optional[str] = None  # 'start', 'construction', 'end'


class SearchLogger:
    """Logger for capturing search states during local search"""

    def __init__(self, log_every_n_iterations: int = 1):
        self.states: List[SearchState] = []
        self.log_every_n_iterations = log_every_n_iterations
        self.best_score: Optional[HardSoftScore] = None

    def log_state(self,
                  iteration: int,
                  score: HardSoftScore,
                  move: Optional[str] = None,
                  is_accepted: bool = True,
                  event_type: Optional[str] = None):
        """Log a search state"""
        is_best = self.best_score is None or score < self.best_score

        # Only log every n iterations to avoid too much data,
        # but always log special events and best solutions
        if iteration % self.log_every_n_iterations != 0 and event_type is None and not is_best:
            return

        if is_best:
            self.best_score = score

        self.states.append(SearchState(
            iteration=iteration,
            score=score,
            best_score=self.best_score,
            move=move,
            is_accepted=is_accepted,
            is_best=is_best,
            event_type=event_type,
        ))

    def get_accepted_moves(self) -> List[str]:
        return [state.move for state in self.states if state.is_accepted and state.move is not None]

    def get_score_trajectory(self) -> np.ndarray:
        """(n, 2) array of the current (hard, soft) score at every logged state"""
        return np.array([[s.score.hard, s.score.soft] for s in self.states], dtype=np.int64).reshape(-1, 2)

    def get_best_score_trajectory(self) -> np.ndarray:
        """(n, 2) array of the best (hard, soft) score at every logged state"""
        return np.array([[s.best_score.hard, s.best_score.soft] for s in self.states], dtype=np.int64).reshape(-1, 2)

    def is_best_score_monotonic(self) -> bool:
        """True if the best score never got worse in (hard, soft) lexicographic order"""
        trajectory = self.get_best_score_trajectory()
        if len(trajectory) < 2:
            return True
        hard_diff = np.diff(trajectory[:, 0])
        soft_diff = np.diff(trajectory[:, 1])
        return bool(np.all((hard_diff < 0) | ((hard_diff == 0) & (soft_diff <= 0))))

    def plot_score_trajectory(self, output_path: str) -> None:
        """Plot current and best hard/soft score against iteration and save the figure"""
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        if not self.states:
            raise ValueError("No states logged!")

        iterations = np.array([s.iteration for s in self.states])
        current = self.get_score_trajectory()
        best = self.get_best_score_trajectory()

        fig, (ax_hard, ax_soft) = plt.subplots(2, 1, sharex=True, figsize=(10, 6))
        ax_hard.step(iterations, current[:, 0], where="post", alpha=0.5, label="current")
        ax_hard.step(iterations, best[:, 0], where="post", label="best")
        ax_hard.set_ylabel("hard")
        ax_hard.legend()
        ax_soft.step(iterations, current[:, 1], where="post", alpha=0.5, label="current")
        ax_soft.step(iterations, best[:, 1], where="post", label="best")
        ax_soft.set_ylabel("soft")
        ax_soft.set_xlabel("iteration")
        fig.tight_layout()
        fig.savefig(output_path)
        plt.close(fig)

    def save_log(self, filepath: str):
        """Save the log data to a JSON file"""
        data = []
        for state in self.states:
            data.append({
                'iteration': state.iteration,
                'score': str(state.score),
                'best_score': str(state.best_score),
                'move': state.move,
                'is_accepted': state.is_accepted,
                'is_best': state.is_best,
                'event_type': state.event_type
            })

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load_log(filepath: str) -> 'SearchLogger':
        """Load log data from a JSON file"""
        logger = SearchLogger()

        with open(filepath, 'r') as f:
            data = json.load(f)

        for item in data:
            state = SearchState(
                iteration=item['iteration'],
                score=HardSoftScore.parse(item['score']),
                best_score=HardSoftScore.parse(item['best_score']),
                move=item['move'],
                is_accepted=item['is_accepted'],
                is_best=item['is_best'],
                event_type=item.get('event_type')
            )
            logger.states.append(state)
            if logger.best_score is None or state.best_score < logger.best_score:
                logger.best_score = state.best_score

        return logger
