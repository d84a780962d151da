"""Stochastic structural mutation of expression trees."""

from __future__ import annotations

import random
from dataclasses import dataclass, fields
from typing import List, Optional, Tuple

from .atoms import Atom
from .enums import ALL_UPOS, BRANCH_KINDS, AtomKind, NodeKind
from .tree import Node
from .words import WordPool


@dataclass
class MutationRates:
    """Tunable probabilities for every mutation branch."""

    # Root level
    root_reset: float = 0.01
    root_grow: float = 0.02

    # Leaf level
    leaf_promote: float = 0.1
    leaf_tweak: float = 0.5
    leaf_delete: float = 0.1
    tag_drop: float = 0.5
    tag_add: float = 0.5

    # AND/OR level; whatever probability is left recurses into a child
    branch_flip: float = 0.05
    branch_shuffle: float = 0.05
    branch_insert: float = 0.05
    branch_remove: float = 0.05
    branch_collapse: float = 0.05
    branch_fuse: float = 0.05

    max_leaf_atoms: int = 3

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "max_leaf_atoms":
                if value < 1:
                    raise ValueError("max_leaf_atoms must be at least 1.")
            elif not 0.0 <= value <= 1.0:
                raise ValueError(f"{f.name} must be a probability, got {value}.")
        if self.root_reset + self.root_grow > 1.0:
            raise ValueError("root_reset + root_grow must not exceed 1.")
        if sum(p for _, p in self.branch_ops()) > 1.0:
            raise ValueError("Branch mutation probabilities must not exceed 1.")

    def branch_ops(self) -> List[Tuple[str, float]]:
        return [
            ("flip", self.branch_flip),
            ("shuffle", self.branch_shuffle),
            ("insert", self.branch_insert),
            ("remove", self.branch_remove),
            ("collapse", self.branch_collapse),
            ("fuse", self.branch_fuse),
        ]


class Mutator:
    """
    Applies random edits to expression trees.

    Every mutation returns the node that should occupy the mutated position,
    which is either the same object edited in place or a replacement.
    """

    def __init__(
        self,
        word_pool: Optional[WordPool] = None,
        rates: Optional[MutationRates] = None,
        rng: Optional[random.Random] = None,
    ):
        self.word_pool = word_pool or WordPool.default()
        self.rates = rates or MutationRates()
        self.rng = rng or random.Random()

    def random_atom(self) -> Atom:
        kind = self.rng.choice(list(AtomKind))
        if kind == AtomKind.TAGS:
            tags = list(ALL_UPOS)
            self.rng.shuffle(tags)
            return Atom.tag_set(tags[: self.rng.randint(1, len(tags))])
        if kind == AtomKind.WORD:
            return Atom.word(self.word_pool.choose(self.rng))
        return Atom.whitespace()

    def random_leaf(self) -> Node:
        count = self.rng.randint(1, self.rates.max_leaf_atoms)
        return Node.leaf([self.random_atom() for _ in range(count)])

    def mutate(self, node: Node) -> Node:
        """Apply one mutation to a root node and return the new root."""
        roll = self.rng.random()
        if roll < self.rates.root_reset:
            return self.random_leaf()
        if roll < self.rates.root_reset + self.rates.root_grow:
            return self._wrap(node)
        return self._mutate_node(node)

    def reproduce(self, parent: Node, count: int, max_mutations: int) -> List[Node]:
        """Clone ``parent`` ``count`` times, giving each clone 1..max_mutations edits."""
        if max_mutations < 1:
            raise ValueError("max_mutations must be at least 1.")
        children: List[Node] = []
        for _ in range(count):
            child = parent.copy()
            for _ in range(self.rng.randint(1, max_mutations)):
                child = self.mutate(child)
            children.append(child)
        return children

    def _mutate_node(self, node: Node) -> Node:
        if node.kind == NodeKind.LEAF:
            return self._mutate_leaf(node)
        if node.kind in (NodeKind.AND, NodeKind.OR):
            return self._mutate_branch(node)
        raise ValueError(f"Unknown node kind {node.kind!r}.")

    def _wrap(self, node: Node) -> Node:
        children = [node, self.random_leaf()]
        self.rng.shuffle(children)
        return Node.branch(self.rng.choice(BRANCH_KINDS), children)

    def _mutate_leaf(self, node: Node) -> Node:
        rates = self.rates
        if self.rng.random() < rates.leaf_promote:
            return self._wrap(node)

        if node.atoms and self.rng.random() < rates.leaf_tweak:
            self._tweak_atom(self.rng.choice(node.atoms))
        else:
            node.atoms.insert(self.rng.randint(0, len(node.atoms)), self.random_atom())

        if node.atoms and self.rng.random() < rates.leaf_delete:
            node.atoms.pop(self.rng.randrange(len(node.atoms)))
        return node

    def _tweak_atom(self, atom: Atom) -> None:
        if atom.kind == AtomKind.TAGS:
            if atom.tags and self.rng.random() < self.rates.tag_drop:
                atom.tags.pop(self.rng.randrange(len(atom.tags)))
            if not atom.tags or self.rng.random() < self.rates.tag_add:
                atom.tags.append(self.rng.choice(ALL_UPOS))
            atom.normalize()
        elif atom.kind == AtomKind.WORD:
            if len(atom.text) > 1:
                atom.text = atom.text[: self.rng.randint(1, len(atom.text) - 1)]
            else:
                atom.text = self.word_pool.choose(self.rng)

    def _pick_branch_op(self) -> str:
        roll = self.rng.random()
        for name, probability in self.rates.branch_ops():
            if roll < probability:
                return name
            roll -= probability
        return "recurse"

    def _mutate_branch(self, node: Node) -> Node:
        children = node.children
        if not children:
            children.append(self.random_leaf())
            return node

        op = self._pick_branch_op()
        if op == "flip":
            node.kind = NodeKind.OR if node.kind == NodeKind.AND else NodeKind.AND
        elif op == "shuffle":
            self.rng.shuffle(children)
        elif op == "insert":
            children.insert(self.rng.randint(0, len(children)), self.random_leaf())
        elif op == "remove" and len(children) >= 2:
            children.pop(self.rng.randrange(len(children)))
        elif op == "collapse" and len(children) == 1:
            return children[0]
        elif op == "fuse" and len(children) >= 2:
            i = self.rng.randrange(len(children) - 1)
            pair = Node.branch(self.rng.choice(BRANCH_KINDS), children[i : i + 2])
            children[i : i + 2] = [pair]
        else:
            i = self.rng.randrange(len(children))
            children[i] = self._mutate_node(children[i])
        return node


__all__ = ["MutationRates", "Mutator"]
