"""Example workflows preserved for quick experimentation."""

from __future__ import annotations

import random
from typing import List, Optional

from .config import EvolutionConfig
from .document import Document
from .evaluator import FitnessEvaluator
from .evolver import GenerationReport, RuleEvolver
from .mutation import Mutator
from .pool import EvaluationPool
from .tree import Node
from .words import WordPool

# Hand-tagged so the demo runs without a trained spaCy pipeline.
TO_TOO_PROBLEMS: List[Document] = [
    Document.from_tagged([("I", "PRON"), ("need", "VERB"), ("too", "ADV"), ("finish", "VERB"),
                          ("this", "DET"), ("report", "NOUN", False), (".", "PUNCT")]),
    Document.from_tagged([("She", "PRON"), ("wants", "VERB"), ("too", "ADV"), ("leave", "VERB"),
                          ("early", "ADV", False), (".", "PUNCT")]),
    Document.from_tagged([("We", "PRON"), ("tried", "VERB"), ("too", "ADV"), ("help", "VERB", False),
                          (".", "PUNCT")]),
]

TO_TOO_CLEAN: List[Document] = [
    Document.from_tagged([("I", "PRON"), ("need", "VERB"), ("to", "PART"), ("finish", "VERB"),
                          ("this", "DET"), ("report", "NOUN", False), (".", "PUNCT")]),
    Document.from_tagged([("That", "PRON"), ("is", "AUX"), ("too", "ADV"), ("much", "ADJ", False),
                          (".", "PUNCT")]),
    Document.from_tagged([("He", "PRON"), ("came", "VERB"), ("too", "ADV", False), (".", "PUNCT")]),
    Document.from_tagged([("We", "PRON"), ("went", "VERB"), ("to", "ADP"), ("the", "DET"),
                          ("park", "NOUN", False), (".", "PUNCT")]),
]


def example_to_too_discovery(
    generations: int = 20,
    child_ratio: int = 200,
    min_pop: int = 10,
    rng_seed: Optional[int] = 42,
) -> Node:
    """Example: evolve a rule for "too" used in place of the infinitive "to"."""
    print("=== to/too Rule Discovery ===\n")

    evaluator = FitnessEvaluator(TO_TOO_PROBLEMS, TO_TOO_CLEAN)
    mutator = Mutator(WordPool.from_documents(TO_TOO_PROBLEMS), rng=random.Random(rng_seed))
    config = EvolutionConfig(
        generations=generations,
        child_ratio=child_ratio,
        min_pop=min_pop,
        jobs=1,
        seed_word="too",
    )

    def progress_callback(report: GenerationReport):
        if report.generation % 5 == 0:
            print(f"Generation {report.generation}: {report.percent_of_max:.1f}% of max")

    with EvaluationPool(evaluator, jobs=config.jobs) as pool:
        evolver = RuleEvolver(pool, mutator, config, verbose=False)
        best = evolver.evolve(progress_callback=progress_callback)

    print("\n=== Best Rule Found ===")
    print(evaluator.breakdown(best).summary())
    for line in best.describe():
        print(f"  {line}")
    return best


__all__ = ["TO_TOO_PROBLEMS", "TO_TOO_CLEAN", "example_to_too_discovery"]
