import re
from dataclasses import dataclass

_SCORE_PATTERN = re.compile(r"^\s*(-?\d+)hard/(-?\d+)soft\s*$")


@dataclass(frozen=True, order=True)
class HardSoftScore:
    """
    Penalty score of a solution. Lower is better.

    Scores compare lexicographically on (hard, soft): any score with a lower
    hard value is better regardless of its soft value. A hard value of 0 means
    the solution is feasible. The same type is used for score deltas, where
    negative components are allowed.
    """
    hard: int = 0
    soft: int = 0

    def __add__(self, other: 'HardSoftScore') -> 'HardSoftScore':
        return HardSoftScore(self.hard + other.hard, self.soft + other.soft)

    def __sub__(self, other: 'HardSoftScore') -> 'HardSoftScore':
        return HardSoftScore(self.hard - other.hard, self.soft - other.soft)

    def __neg__(self) -> 'HardSoftScore':
        return HardSoftScore(-self.hard, -self.soft)

    @property
    def is_feasible(self) -> bool:
        return self.hard <= 0

    def to_scalar(self, hard_weight: int) -> int:
        """Collapse the score into one number. hard_weight must exceed any possible soft total."""
        return self.hard * hard_weight + self.soft

    def __str__(self):
        return f"{self.hard}hard/{self.soft}soft"

    @classmethod
    def parse(cls, score_string: str) -> 'HardSoftScore':
        match = _SCORE_PATTERN.match(score_string)
        if match is None:
            raise ValueError(f"Cannot parse score: {score_string}")
        return cls(int(match.group(1)), int(match.group(2)))


HardSoftScore.ZERO = HardSoftScore(0, 0)
