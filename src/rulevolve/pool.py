"""Process pool that scores candidates in parallel."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Sequence

import numpy as np

from .document import Document
from .evaluator import FitnessEvaluator, FitnessWeights
from .tree import Node

logger = logging.getLogger(__name__)

# Per-process evaluator, installed once by the pool initializer.
_worker_evaluator: Optional[FitnessEvaluator] = None


def _init_worker(
    problems: Sequence[Document], clean: Sequence[Document], weights: FitnessWeights
) -> None:
    global _worker_evaluator
    _worker_evaluator = FitnessEvaluator(problems, clean, weights)


def _score_in_worker(node: Node) -> int:
    return _worker_evaluator.score(node)


class EvaluationPool:
    """
    Data-parallel scoring over a fixed-size worker pool.

    Workers get their own copy of the corpora at start-up and only exchange
    trees and integer scores with the coordinator. With one job, scoring runs
    in the calling process.
    """

    def __init__(self, evaluator: FitnessEvaluator, jobs: Optional[int] = None):
        if jobs is not None and jobs < 1:
            raise ValueError(f"Worker count must be at least 1, got {jobs}.")
        self.evaluator = evaluator
        self.jobs = jobs if jobs is not None else (os.cpu_count() or 1)
        self._executor: Optional[ProcessPoolExecutor] = None
        if self.jobs > 1:
            self._executor = ProcessPoolExecutor(
                max_workers=self.jobs,
                initializer=_init_worker,
                initargs=(evaluator.problems, evaluator.clean, evaluator.weights),
            )
        logger.info("Scoring with %d worker(s)", self.jobs)

    def score_all(self, nodes: Sequence[Node]) -> np.ndarray:
        """Return scores aligned with ``nodes``."""
        if self._executor is None:
            scores = [self.evaluator.score(node) for node in nodes]
        else:
            chunksize = max(1, len(nodes) // (self.jobs * 4))
            scores = list(self._executor.map(_score_in_worker, nodes, chunksize=chunksize))
        return np.asarray(scores, dtype=np.int64)

    def max_possible_score(self) -> int:
        return self.evaluator.max_possible_score()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown()
            self._executor = None

    def __enter__(self) -> "EvaluationPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["EvaluationPool"]
