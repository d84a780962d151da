"""Generational loop: reproduce, shuffle, evaluate, select, report."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .atoms import Atom
from .config import EvolutionConfig
from .mutation import Mutator
from .pool import EvaluationPool
from .tree import Node


@dataclass
class GenerationReport:
    """Summary of one finished generation."""

    generation: int
    best_score: int
    max_score: int
    delta: int
    candidates_per_second: float
    evaluated: int
    best: Node

    def format_line(self) -> str:
        return (
            f"Generation {self.generation:<4} | Best Score: {self.best_score:<10} | "
            f"Max Score: {self.max_score:<10} | Delta: {self.delta:<+10} | "
            f"Candidates/sec: {int(self.candidates_per_second):<10}"
        )

    @property
    def percent_of_max(self) -> float:
        if self.max_score <= 0:
            return 0.0
        return 100.0 * self.best_score / self.max_score


def seed_node(seed_word: Optional[str] = None) -> Node:
    """Generation-zero root: a one-word leaf, or an empty leaf."""
    if seed_word:
        return Node.leaf([Atom.word(seed_word.strip())])
    return Node.leaf()


class RuleEvolver:
    """Truncation-selection evolution of expression trees."""

    def __init__(
        self,
        pool: EvaluationPool,
        mutator: Mutator,
        config: EvolutionConfig,
        verbose: bool = True,
    ):
        self.pool = pool
        self.mutator = mutator
        self.config = config.validate()
        self.verbose = verbose
        self.population: List[Node] = [seed_node(config.seed_word)]
        self.scores = np.zeros(len(self.population), dtype=np.int64)
        self.generation = 0
        self.last_best_score = 0
        self.max_score = pool.max_possible_score()

    @property
    def best(self) -> Node:
        return self.population[0]

    def reproduce(self) -> None:
        children: List[Node] = []
        for parent in self.population:
            children.extend(
                self.mutator.reproduce(
                    parent, self.config.child_ratio, self.config.max_mutations
                )
            )
        self.population.extend(children)

    def shuffle(self) -> None:
        self.mutator.rng.shuffle(self.population)

    def evaluate(self) -> None:
        self.scores = self.pool.score_all(self.population)

    def select(self) -> None:
        """Keep the ``min_pop`` best; equal scores keep their shuffled order."""
        order = np.argsort(-self.scores, kind="stable")[: self.config.min_pop]
        self.population = [self.population[i] for i in order]
        self.scores = self.scores[order]

    def step(self) -> GenerationReport:
        self.reproduce()
        self.shuffle()

        start = time.perf_counter()
        self.evaluate()
        elapsed = time.perf_counter() - start
        evaluated = len(self.population)

        self.select()

        best_score = int(self.scores[0]) if len(self.scores) else 0
        report = GenerationReport(
            generation=self.generation,
            best_score=best_score,
            max_score=self.max_score,
            delta=best_score - self.last_best_score,
            candidates_per_second=evaluated / elapsed if elapsed > 0 else float(evaluated),
            evaluated=evaluated,
            best=self.best,
        )
        self.last_best_score = best_score
        self.generation += 1
        return report

    def evolve(
        self,
        generations: Optional[int] = None,
        progress_callback: Optional[Callable[[GenerationReport], None]] = None,
    ) -> Node:
        """
        Run every requested generation and return the best tree.

        There is no convergence check; ``progress_callback`` sees each report.
        """
        total = self.config.generations if generations is None else generations
        for _ in range(total):
            report = self.step()
            if self.verbose:
                print(report.format_line())
                print("Best rule:")
                for line in report.best.describe():
                    print(f"  {line}")
            if progress_callback:
                progress_callback(report)
        return self.best


__all__ = ["GenerationReport", "RuleEvolver", "seed_node"]
