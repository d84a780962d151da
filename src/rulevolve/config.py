"""Run configuration for the evolutionary loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CHILD_RATIO = 10000
DEFAULT_MIN_POP = 10
DEFAULT_MAX_MUTATIONS = 5


@dataclass
class EvolutionConfig:
    """
    Population sizing and run length.

    Each generation grows the population to ``min_pop * (1 + child_ratio)``
    before truncating back to ``min_pop``.
    """

    generations: int
    child_ratio: int = DEFAULT_CHILD_RATIO
    min_pop: int = DEFAULT_MIN_POP
    max_mutations: int = DEFAULT_MAX_MUTATIONS
    jobs: Optional[int] = None
    seed_word: Optional[str] = None

    def validate(self) -> "EvolutionConfig":
        if self.generations < 0:
            raise ValueError("generations must be non-negative.")
        if self.child_ratio < 0:
            raise ValueError("child_ratio must be non-negative.")
        if self.min_pop < 1:
            raise ValueError("min_pop must be at least 1.")
        if self.max_mutations < 1:
            raise ValueError("max_mutations must be at least 1.")
        if self.jobs is not None and self.jobs < 1:
            raise ValueError("jobs must be at least 1 when given.")
        if self.seed_word is not None and not self.seed_word.strip():
            raise ValueError("seed_word must be non-empty when given.")
        return self

    @property
    def peak_population(self) -> int:
        return self.min_pop * (1 + self.child_ratio)


__all__ = [
    "DEFAULT_CHILD_RATIO",
    "DEFAULT_MIN_POP",
    "DEFAULT_MAX_MUTATIONS",
    "EvolutionConfig",
]
