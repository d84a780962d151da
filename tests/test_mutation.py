"""Tests for the mutation operators."""

import random

import pytest

from rulevolve import (
    UPOS,
    Atom,
    AtomKind,
    MutationRates,
    Mutator,
    Node,
    NodeKind,
    WordPool,
    compile_node,
)

QUIET_ROOT = dict(root_reset=0.0, root_grow=0.0)
NO_BRANCH_OPS = dict(
    branch_flip=0.0,
    branch_shuffle=0.0,
    branch_insert=0.0,
    branch_remove=0.0,
    branch_collapse=0.0,
    branch_fuse=0.0,
)


def assert_well_formed(node):
    for sub in node.walk():
        if sub.kind == NodeKind.LEAF:
            assert sub.children == []
            for atom in sub.atoms:
                if atom.kind == AtomKind.WORD:
                    assert atom.text
                elif atom.kind == AtomKind.TAGS:
                    assert atom.tags
                    assert atom.tags == sorted(set(atom.tags))
        else:
            assert sub.kind in (NodeKind.AND, NodeKind.OR)
            assert sub.atoms == []


class TestClosure:
    @pytest.mark.parametrize("seed", range(40))
    def test_random_mutation_chains_always_compile(self, seed, problem_doc, clean_doc):
        mutator = Mutator(rng=random.Random(seed))
        seeds = [
            Node.leaf(),
            Node.leaf([Atom.word("too")]),
            Node.any_of([]),
            Node.all_of([Node.leaf([Atom.tag_set([UPOS.VERB])])]),
        ]
        tree = seeds[seed % len(seeds)]
        for _ in range(75):
            tree = mutator.mutate(tree)
            assert_well_formed(tree)
            matcher = compile_node(tree)
            for doc in (problem_doc, clean_doc):
                for start, end in matcher.iter_matches(doc):
                    assert 0 <= start <= end <= len(doc)


class TestReproduce:
    def test_produces_independent_children(self, rng):
        mutator = Mutator(rng=rng)
        parent = Node.leaf([Atom.word("too")])
        children = mutator.reproduce(parent, count=25, max_mutations=3)
        assert len(children) == 25
        assert parent == Node.leaf([Atom.word("too")])
        assert len({id(child) for child in children}) == 25
        for child in children:
            assert child is not parent
            for sub in child.walk():
                assert all(atom is not parent.atoms[0] for atom in sub.atoms)

    def test_zero_count(self, rng):
        assert Mutator(rng=rng).reproduce(Node.leaf(), count=0, max_mutations=2) == []

    def test_requires_at_least_one_mutation(self, rng):
        with pytest.raises(ValueError):
            Mutator(rng=rng).reproduce(Node.leaf(), count=1, max_mutations=0)


class TestRoot:
    def test_reset_replaces_tree_with_random_leaf(self, rng):
        mutator = Mutator(rates=MutationRates(root_reset=1.0, root_grow=0.0), rng=rng)
        tree = Node.all_of([Node.leaf(), Node.leaf()])
        result = mutator.mutate(tree)
        assert result.kind == NodeKind.LEAF
        assert 1 <= len(result.atoms) <= mutator.rates.max_leaf_atoms

    def test_grow_wraps_tree_with_sibling(self, rng):
        mutator = Mutator(rates=MutationRates(root_reset=0.0, root_grow=1.0), rng=rng)
        tree = Node.leaf([Atom.word("too")])
        result = mutator.mutate(tree)
        assert result.kind in (NodeKind.AND, NodeKind.OR)
        assert len(result.children) == 2
        assert any(child is tree for child in result.children)


class TestLeaf:
    def test_promotion_builds_two_child_branch(self, rng):
        rates = MutationRates(leaf_promote=1.0, **QUIET_ROOT)
        tree = Node.leaf([Atom.word("too")])
        result = Mutator(rates=rates, rng=rng).mutate(tree)
        assert result.kind in (NodeKind.AND, NodeKind.OR)
        assert any(child is tree for child in result.children)

    def test_word_tweak_truncates_to_prefix(self, rng):
        rates = MutationRates(leaf_promote=0.0, leaf_tweak=1.0, leaf_delete=0.0, **QUIET_ROOT)
        tree = Node.leaf([Atom.word("finish")])
        Mutator(rates=rates, rng=rng).mutate(tree)
        text = tree.atoms[0].text
        assert text and len(text) < len("finish")
        assert "finish".startswith(text)

    def test_single_letter_word_is_redrawn_from_pool(self, rng):
        rates = MutationRates(leaf_promote=0.0, leaf_tweak=1.0, leaf_delete=0.0, **QUIET_ROOT)
        pool = WordPool(["to"])
        tree = Node.leaf([Atom.word("a")])
        Mutator(pool, rates=rates, rng=rng).mutate(tree)
        assert tree.atoms[0].text == "to"

    def test_tag_tweak_never_empties_set(self, rng):
        rates = MutationRates(
            leaf_promote=0.0, leaf_tweak=1.0, leaf_delete=0.0,
            tag_drop=1.0, tag_add=0.0, **QUIET_ROOT
        )
        tree = Node.leaf([Atom.tag_set([UPOS.NOUN])])
        mutator = Mutator(rates=rates, rng=rng)
        for _ in range(20):
            mutator.mutate(tree)
            assert len(tree.atoms[0].tags) == 1

    def test_insert_grows_leaf(self, rng):
        rates = MutationRates(leaf_promote=0.0, leaf_tweak=0.0, leaf_delete=0.0, **QUIET_ROOT)
        tree = Node.leaf([Atom.word("too")])
        Mutator(rates=rates, rng=rng).mutate(tree)
        assert len(tree.atoms) == 2

    def test_delete_can_empty_leaf(self, rng):
        rates = MutationRates(leaf_promote=0.0, leaf_tweak=1.0, leaf_delete=1.0, **QUIET_ROOT)
        tree = Node.leaf([Atom.whitespace()])
        Mutator(rates=rates, rng=rng).mutate(tree)
        assert tree.atoms == []


class TestBranch:
    def mutator(self, rng, **ops):
        settings = dict(NO_BRANCH_OPS)
        settings.update(ops)
        return Mutator(rates=MutationRates(**QUIET_ROOT, **settings), rng=rng)

    def leaves(self, *words):
        return [Node.leaf([Atom.word(w)]) for w in words]

    def test_flip_swaps_kind(self, rng):
        tree = Node.all_of(self.leaves("a", "b"))
        result = self.mutator(rng, branch_flip=1.0).mutate(tree)
        assert result.kind == NodeKind.OR

    def test_collapse_replaces_singleton(self, rng):
        only = Node.leaf([Atom.word("too")])
        result = self.mutator(rng, branch_collapse=1.0).mutate(Node.any_of([only]))
        assert result is only

    def test_remove_drops_one_child(self, rng):
        tree = Node.any_of(self.leaves("a", "b", "c"))
        self.mutator(rng, branch_remove=1.0).mutate(tree)
        assert len(tree.children) == 2

    def test_insert_adds_leaf_child(self, rng):
        tree = Node.any_of(self.leaves("a"))
        self.mutator(rng, branch_insert=1.0).mutate(tree)
        assert len(tree.children) == 2

    def test_fuse_nests_adjacent_pair(self, rng):
        tree = Node.all_of(self.leaves("a", "b", "c"))
        self.mutator(rng, branch_fuse=1.0).mutate(tree)
        assert len(tree.children) == 2
        nested = [c for c in tree.children if c.kind != NodeKind.LEAF]
        assert len(nested) == 1 and len(nested[0].children) == 2

    def test_shuffle_keeps_children(self, rng):
        tree = Node.any_of(self.leaves("a", "b", "c", "d"))
        before = sorted(c.atoms[0].text for c in tree.children)
        self.mutator(rng, branch_shuffle=1.0).mutate(tree)
        assert sorted(c.atoms[0].text for c in tree.children) == before

    def test_empty_branch_receives_child(self, rng):
        tree = Node.all_of()
        self.mutator(rng).mutate(tree)
        assert len(tree.children) == 1

    def test_recurse_edits_a_child(self, rng):
        rates = dict(leaf_promote=0.0, leaf_tweak=0.0, leaf_delete=0.0)
        mutator = Mutator(rates=MutationRates(**QUIET_ROOT, **NO_BRANCH_OPS, **rates), rng=rng)
        tree = Node.any_of(self.leaves("a", "b"))
        mutator.mutate(tree)
        assert sorted(len(c.atoms) for c in tree.children) == [1, 2]


class TestRates:
    def test_probabilities_are_validated(self):
        with pytest.raises(ValueError):
            MutationRates(leaf_tweak=1.5)
        with pytest.raises(ValueError):
            MutationRates(branch_flip=0.6, branch_fuse=0.6)
        with pytest.raises(ValueError):
            MutationRates(max_leaf_atoms=0)


def test_random_atoms_cover_every_kind(rng):
    mutator = Mutator(rng=rng)
    kinds = {mutator.random_atom().kind for _ in range(200)}
    assert kinds == set(AtomKind)
