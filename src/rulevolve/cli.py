"""Command-line entry point for rule synthesis runs."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_CHILD_RATIO,
    DEFAULT_MAX_MUTATIONS,
    DEFAULT_MIN_POP,
    EvolutionConfig,
)
from .document import DEFAULT_MODEL, LinguisticEngine, read_sentences
from .evaluator import FitnessEvaluator, FitnessWeights
from .evolver import RuleEvolver
from .mutation import Mutator
from .pool import EvaluationPool
from .words import WordPool

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulevolve",
        description="Evolve a pattern rule that flags problem sentences and spares clean ones.",
    )
    parser.add_argument("-c", "--child-ratio", type=int, default=DEFAULT_CHILD_RATIO,
                        help="children generated per survivor each generation")
    parser.add_argument("-m", "--min-pop", type=int, default=DEFAULT_MIN_POP,
                        help="population size kept after selection")
    parser.add_argument("--problem-file", required=True,
                        help="newline-separated sentences that should be flagged")
    parser.add_argument("--clean-file", required=True,
                        help="newline-separated sentences that should not be flagged")
    parser.add_argument("-g", "--generations", type=int, required=True,
                        help="number of generations to run")
    parser.add_argument("--max-mutations", type=int, default=DEFAULT_MAX_MUTATIONS,
                        help="maximum number of mutations applied to a child")
    parser.add_argument("-j", "--jobs", type=int, default=None,
                        help="worker processes for scoring (default: CPU count)")
    parser.add_argument("--seed", dest="seed_word", default=None,
                        help="start from a single-word rule instead of an empty one")
    parser.add_argument("-o", "--output", default=None,
                        help="write the best rule as JSON to this path")
    parser.add_argument("--model", default=DEFAULT_MODEL,
                        help="spaCy pipeline used for tokenizing and tagging")
    parser.add_argument("--word-file", default=None,
                        help="newline-separated vocabulary for word atoms")
    parser.add_argument("--rng-seed", type=int, default=None,
                        help="seed for the mutation random number generator")
    parser.add_argument("--problem-weight", type=int, default=FitnessWeights.problem_weight,
                        help="score weight of a correctly flagged problem sentence")
    parser.add_argument("--clean-weight", type=int, default=FitnessWeights.clean_weight,
                        help="score weight of a correctly unflagged clean sentence")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = EvolutionConfig(
            generations=args.generations,
            child_ratio=args.child_ratio,
            min_pop=args.min_pop,
            max_mutations=args.max_mutations,
            jobs=args.jobs,
            seed_word=args.seed_word,
        ).validate()
        weights = FitnessWeights(
            problem_weight=args.problem_weight, clean_weight=args.clean_weight
        )
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        problem_lines = read_sentences(args.problem_file)
        clean_lines = read_sentences(args.clean_file)
        extra_words = read_sentences(args.word_file) if args.word_file else []
    except OSError as exc:
        logger.error("Unable to read corpus: %s", exc)
        return 1

    engine = LinguisticEngine(model=args.model)
    problems = engine.tag_many(problem_lines)
    clean = engine.tag_many(clean_lines)
    logger.info("Loaded %d problem and %d clean documents", len(problems), len(clean))

    if extra_words:
        word_pool = WordPool(extra_words)
    else:
        word_pool = WordPool.from_documents(problems)
    logger.debug("Word pool holds %d words", len(word_pool))

    mutator = Mutator(word_pool, rng=random.Random(args.rng_seed))
    evaluator = FitnessEvaluator(problems, clean, weights)

    try:
        pool = EvaluationPool(evaluator, jobs=config.jobs)
    except (ValueError, OSError) as exc:
        logger.error("Unable to start worker pool: %s", exc)
        return 2

    with pool:
        evolver = RuleEvolver(pool, mutator, config)
        best = evolver.evolve()

    print(f"Final: {evaluator.breakdown(best).summary()}")
    print(best.to_json())

    if args.output:
        Path(args.output).write_text(best.to_json() + "\n", encoding="utf-8")
        logger.info("Wrote best rule to %s", args.output)
    return 0


__all__ = ["build_parser", "main"]
