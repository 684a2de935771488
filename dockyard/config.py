from dataclasses import dataclass, fields, replace
from datetime import timedelta
from enum import Enum
from typing import Any, Optional, Union

from dockyard.base_model.score import HardSoftScore
from dockyard.base_model.capacity_grouping import CapacityGrouping


class AcceptanceType(Enum):
    HILL_CLIMBING = "hill_climbing"
    LATE_ACCEPTANCE = "late_acceptance"
    SIMULATED_ANNEALING = "simulated_annealing"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, acceptance_string: str) -> 'AcceptanceType':
        try:
            return cls(acceptance_string.lower().replace("-", "_"))
        except ValueError:
            raise ValueError(f"No acceptance type found for: {acceptance_string}")


# camelCase names accepted by from_dict
_KEY_ALIASES = {
    "timeBudget": "time_budget",
    "randomSeed": "random_seed",
    "iterationCap": "iteration_cap",
}


@dataclass(frozen=True)
class SolverConfig:
    """
    Everything a solve call needs to know besides the problem itself.
    Passed explicitly into each solve call, there is no global solver state.
    """
    time_budget: Optional[Union[float, timedelta]] = 10.0 # seconds
    random_seed: int = 13062025
    iteration_cap: Optional[int] = None
    best_score_limit: Optional[HardSoftScore] = None # stop as soon as the best score is at least this good

    acceptance: AcceptanceType = AcceptanceType.LATE_ACCEPTANCE
    late_acceptance_size: int = 400
    start_temperature: float = 50.0
    end_temperature: float = 0.5
    cooling_rate: float = 0.9995 # per iteration
    tabu_tenure: int = 0 # 0 disables the tabu list

    move_sample_size: int = 4 # moves evaluated per iteration, the best one is proposed
    swap_move_probability: float = 0.3

    allow_unassigned: bool = True
    unplanned_soft_weight: int = 1
    capacity_grouping: CapacityGrouping = CapacityGrouping.DOCK
    construction_heuristic: bool = True

    n_workers: int = 1
    full_assert: bool = False
    log_every_n_iterations: int = 1000

    def __post_init__(self):
        if isinstance(self.time_budget, timedelta):
            object.__setattr__(self, "time_budget", self.time_budget.total_seconds())
        if isinstance(self.acceptance, str):
            object.__setattr__(self, "acceptance", AcceptanceType.from_string(self.acceptance))
        if isinstance(self.capacity_grouping, str):
            object.__setattr__(self, "capacity_grouping", CapacityGrouping.from_string(self.capacity_grouping))
        if isinstance(self.best_score_limit, str):
            object.__setattr__(self, "best_score_limit", HardSoftScore.parse(self.best_score_limit))

        if self.time_budget is None and self.iteration_cap is None:
            raise ValueError("Either time_budget or iteration_cap must be set, the solver would never terminate.")
        if self.time_budget is not None and self.time_budget < 0:
            raise ValueError(f"time_budget must be non-negative, got {self.time_budget}")
        if self.iteration_cap is not None and self.iteration_cap < 0:
            raise ValueError(f"iteration_cap must be non-negative, got {self.iteration_cap}")
        if self.late_acceptance_size < 1:
            raise ValueError(f"late_acceptance_size must be at least 1, got {self.late_acceptance_size}")
        if self.start_temperature <= 0 or self.end_temperature <= 0:
            raise ValueError("Temperatures must be positive.")
        if not 0 < self.cooling_rate <= 1:
            raise ValueError(f"cooling_rate must be in (0, 1], got {self.cooling_rate}")
        if self.tabu_tenure < 0:
            raise ValueError(f"tabu_tenure must be non-negative, got {self.tabu_tenure}")
        if self.move_sample_size < 1:
            raise ValueError(f"move_sample_size must be at least 1, got {self.move_sample_size}")
        if not 0 <= self.swap_move_probability <= 1:
            raise ValueError(f"swap_move_probability must be in [0, 1], got {self.swap_move_probability}")
        if self.unplanned_soft_weight < 0:
            raise ValueError(f"unplanned_soft_weight must be non-negative, got {self.unplanned_soft_weight}")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {self.n_workers}")
        if self.log_every_n_iterations < 1:
            raise ValueError(f"log_every_n_iterations must be at least 1, got {self.log_every_n_iterations}")

    def with_overrides(self, **overrides: Any) -> 'SolverConfig':
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: dict) -> 'SolverConfig':
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown solver config key: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, HardSoftScore):
                value = str(value)
            data[f.name] = value
        return data
