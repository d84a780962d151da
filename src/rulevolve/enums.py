"""Enumerations for atoms, expression nodes, and grammatical categories."""

from enum import IntEnum
from typing import Dict, List


class UPOS(IntEnum):
    """Universal part-of-speech categories as integer indices."""

    ADJ = 0
    ADP = 1
    ADV = 2
    AUX = 3
    CCONJ = 4
    DET = 5
    INTJ = 6
    NOUN = 7
    NUM = 8
    PART = 9
    PRON = 10
    PROPN = 11
    PUNCT = 12
    SCONJ = 13
    SYM = 14
    VERB = 15
    X = 16


class AtomKind(IntEnum):
    """Kinds of matchable atoms inside a leaf sequence."""

    WORD = 0  # exact surface form
    TAGS = 1  # UPOS membership
    WHITESPACE = 2


class NodeKind(IntEnum):
    """Kinds of expression tree nodes."""

    LEAF = 0
    AND = 1
    OR = 2


class TokenKind(IntEnum):
    """Kinds of tokens produced by the linguistic engine."""

    WORD = 0
    PUNCTUATION = 1
    WHITESPACE = 2


ALL_UPOS: List[UPOS] = list(UPOS)

BRANCH_KINDS: List[NodeKind] = [NodeKind.AND, NodeKind.OR]

UPOS_BY_NAME: Dict[str, UPOS] = {tag.name: tag for tag in UPOS}


def upos_from_label(label: str) -> UPOS:
    """Map a tagger label such as ``"NOUN"`` to :class:`UPOS`, defaulting to ``X``."""
    return UPOS_BY_NAME.get(label.strip().upper(), UPOS.X)


__all__ = [
    "UPOS",
    "AtomKind",
    "NodeKind",
    "TokenKind",
    "ALL_UPOS",
    "BRANCH_KINDS",
    "UPOS_BY_NAME",
    "upos_from_label",
]
