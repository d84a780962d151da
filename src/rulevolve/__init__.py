"""Evolutionary synthesis of grammar-checking pattern rules."""

from .enums import (
    UPOS,
    AtomKind,
    NodeKind,
    TokenKind,
    ALL_UPOS,
    BRANCH_KINDS,
    upos_from_label,
)
from .atoms import Atom, MINIMAL_TAG
from .tree import Node
from .document import (
    DEFAULT_MODEL,
    Document,
    LinguisticEngine,
    Token,
    load_pipeline,
    read_sentences,
)
from .words import WordPool
from .compiler import (
    Matcher,
    SequenceMatcher,
    AllMatcher,
    LongestMatcher,
    compile_node,
)
from .evaluator import (
    FitnessEvaluator,
    FitnessWeights,
    ScoreBreakdown,
    score,
    max_possible_score,
)
from .mutation import MutationRates, Mutator
from .config import EvolutionConfig
from .pool import EvaluationPool
from .evolver import GenerationReport, RuleEvolver, seed_node
from .demos import example_to_too_discovery

__all__ = [
    "UPOS",
    "AtomKind",
    "NodeKind",
    "TokenKind",
    "ALL_UPOS",
    "BRANCH_KINDS",
    "upos_from_label",
    "Atom",
    "MINIMAL_TAG",
    "Node",
    "DEFAULT_MODEL",
    "Document",
    "LinguisticEngine",
    "Token",
    "load_pipeline",
    "read_sentences",
    "WordPool",
    "Matcher",
    "SequenceMatcher",
    "AllMatcher",
    "LongestMatcher",
    "compile_node",
    "FitnessEvaluator",
    "FitnessWeights",
    "ScoreBreakdown",
    "score",
    "max_possible_score",
    "MutationRates",
    "Mutator",
    "EvolutionConfig",
    "EvaluationPool",
    "GenerationReport",
    "RuleEvolver",
    "seed_node",
    "example_to_too_discovery",
]
