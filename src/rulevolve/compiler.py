"""Lower expression trees into matchers that scan tokenized documents."""

from __future__ import annotations

from itertools import islice
from typing import Callable, Iterator, List, Optional, Tuple

from .atoms import Atom
from .document import Document, Token
from .enums import AtomKind, NodeKind
from .tree import Node

Span = Tuple[int, int]
TokenTest = Callable[[Token], bool]


class Matcher:
    """
    Compiled expression.

    ``run`` tries a match anchored at ``start`` and returns its end index or
    ``None``. ``iter_matches`` scans a whole document and restarts every call.
    """

    def run(self, document: Document, start: int) -> Optional[int]:
        raise NotImplementedError

    def iter_matches(self, document: Document) -> Iterator[Span]:
        """Yield non-overlapping ``(start, end)`` spans ordered by start."""
        cursor = 0
        length = len(document)
        while cursor < length:
            end = self.run(document, cursor)
            if end is None:
                cursor += 1
                continue
            yield cursor, end
            cursor = max(end, cursor + 1)

    def count_matches(self, document: Document, limit: Optional[int] = None) -> int:
        """Count matches, stopping the scan once ``limit`` have been seen."""
        return sum(1 for _ in islice(self.iter_matches(document), limit))


def _compile_atom(atom: Atom) -> TokenTest:
    if atom.kind == AtomKind.WORD:
        text = atom.text
        return lambda token: not token.is_whitespace and token.text == text
    if atom.kind == AtomKind.TAGS:
        tags = frozenset(atom.tags)
        return lambda token: not token.is_whitespace and token.pos in tags
    if atom.kind == AtomKind.WHITESPACE:
        return lambda token: token.is_whitespace
    raise ValueError(f"Unknown atom kind {atom.kind!r}.")


class SequenceMatcher(Matcher):
    """Consumes one token per atom, in order."""

    def __init__(self, tests: List[TokenTest]):
        self.tests = tests

    def run(self, document: Document, start: int) -> Optional[int]:
        end = start + len(self.tests)
        if end > len(document):
            return None
        tokens = document.tokens
        for offset, test in enumerate(self.tests):
            if not test(tokens[start + offset]):
                return None
        return end


class AllMatcher(Matcher):
    """Every child must match at the same start; the longest span is kept."""

    def __init__(self, children: List[Matcher]):
        self.children = children

    def run(self, document: Document, start: int) -> Optional[int]:
        best = start
        for child in self.children:
            end = child.run(document, start)
            if end is None:
                return None
            if end > best:
                best = end
        return best


class LongestMatcher(Matcher):
    """Longest child match wins; ties go to the earlier child."""

    def __init__(self, children: List[Matcher]):
        self.children = children

    def run(self, document: Document, start: int) -> Optional[int]:
        best: Optional[int] = None
        for child in self.children:
            end = child.run(document, start)
            if end is not None and (best is None or end > best):
                best = end
        return best


def compile_node(node: Node) -> Matcher:
    """Build a matcher for ``node``. Pure; the tree is not modified."""
    if node.kind == NodeKind.LEAF:
        return SequenceMatcher([_compile_atom(atom) for atom in node.atoms])
    if node.kind == NodeKind.AND:
        return AllMatcher([compile_node(child) for child in node.children])
    if node.kind == NodeKind.OR:
        return LongestMatcher([compile_node(child) for child in node.children])
    raise ValueError(f"Unknown node kind {node.kind!r}.")


__all__ = [
    "Span",
    "Matcher",
    "SequenceMatcher",
    "AllMatcher",
    "LongestMatcher",
    "compile_node",
]
