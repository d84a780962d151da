"""Fitness scoring of expression trees against problem and clean corpora."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .compiler import compile_node
from .document import Document
from .enums import AtomKind, NodeKind
from .tree import Node


@dataclass(frozen=True)
class FitnessWeights:
    """
    Weights of the flat fitness formula::

        score = (problem_weight * problems_ok + clean_weight * clean_ok) * scale
                + max(0, bonus_cap - complexity)

    ``bonus_cap`` must stay below one document's worth of correctness.
    """

    problem_weight: int = 50
    clean_weight: int = 100
    scale: int = 25
    bonus_cap: int = 100
    structure_penalty: int = 2
    whitespace_cost: int = 0

    def __post_init__(self):
        if self.problem_weight <= 0 or self.clean_weight <= 0 or self.scale <= 0:
            raise ValueError("problem_weight, clean_weight and scale must be positive.")
        if self.bonus_cap < 0 or self.structure_penalty < 0 or self.whitespace_cost < 0:
            raise ValueError("bonus_cap, structure_penalty and whitespace_cost must be non-negative.")
        if self.bonus_cap >= self.unit:
            raise ValueError(
                f"bonus_cap ({self.bonus_cap}) must be smaller than the score of a "
                f"single correct document ({self.unit})."
            )

    @property
    def unit(self) -> int:
        """Smallest score change caused by one document's outcome."""
        return min(self.problem_weight, self.clean_weight) * self.scale


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-corpus outcome of one scoring pass."""

    problems_correct: int
    problems_total: int
    clean_correct: int
    clean_total: int
    complexity: int
    bonus: int
    score: int

    def summary(self) -> str:
        return (
            f"problems {self.problems_correct}/{self.problems_total}, "
            f"clean {self.clean_correct}/{self.clean_total}, "
            f"complexity {self.complexity}, score {self.score}"
        )


class FitnessEvaluator:
    """Scores trees against a fixed pair of corpora."""

    def __init__(
        self,
        problems: Sequence[Document],
        clean: Sequence[Document],
        weights: Optional[FitnessWeights] = None,
    ):
        self.problems = tuple(problems)
        self.clean = tuple(clean)
        self.weights = weights or FitnessWeights()

    def complexity(self, node: Node) -> int:
        """Atom costs over every leaf plus a fixed penalty per AND/OR node."""
        cost = 0
        for sub in node.walk():
            if sub.kind == NodeKind.LEAF:
                for atom in sub.atoms:
                    if atom.kind == AtomKind.WHITESPACE:
                        cost += self.weights.whitespace_cost
                    else:
                        cost += atom.complexity
            elif sub.kind in (NodeKind.AND, NodeKind.OR):
                cost += self.weights.structure_penalty
            else:
                raise ValueError(f"Unknown node kind {sub.kind!r}.")
        return cost

    def simplicity_bonus(self, node: Node) -> int:
        return max(0, self.weights.bonus_cap - self.complexity(node))

    def breakdown(self, node: Node) -> ScoreBreakdown:
        matcher = compile_node(node)

        # Two matches already rule out "exactly one".
        problems_ok = sum(
            1 for doc in self.problems if matcher.count_matches(doc, limit=2) == 1
        )
        # One match already rules out "none".
        clean_ok = sum(
            1 for doc in self.clean if matcher.count_matches(doc, limit=1) == 0
        )

        w = self.weights
        complexity = self.complexity(node)
        bonus = max(0, w.bonus_cap - complexity)
        correctness = w.problem_weight * problems_ok + w.clean_weight * clean_ok
        return ScoreBreakdown(
            problems_correct=problems_ok,
            problems_total=len(self.problems),
            clean_correct=clean_ok,
            clean_total=len(self.clean),
            complexity=complexity,
            bonus=bonus,
            score=correctness * w.scale + bonus,
        )

    def score(self, node: Node) -> int:
        return self.breakdown(node).score

    def score_many(self, nodes: Sequence[Node]) -> List[int]:
        return [self.score(node) for node in nodes]

    def max_possible_score(self) -> int:
        """Score of a perfect, zero-complexity rule. Used for reporting only."""
        w = self.weights
        correctness = w.problem_weight * len(self.problems) + w.clean_weight * len(self.clean)
        return correctness * w.scale + w.bonus_cap


def score(
    node: Node,
    problems: Sequence[Document],
    clean: Sequence[Document],
    weights: Optional[FitnessWeights] = None,
) -> int:
    """Score one tree against both corpora."""
    return FitnessEvaluator(problems, clean, weights).score(node)


def max_possible_score(
    problems: Sequence[Document],
    clean: Sequence[Document],
    weights: Optional[FitnessWeights] = None,
) -> int:
    return FitnessEvaluator(problems, clean, weights).max_possible_score()


__all__ = [
    "FitnessWeights",
    "ScoreBreakdown",
    "FitnessEvaluator",
    "score",
    "max_possible_score",
]
