"""Shared fixtures: hand-tagged documents and a blank spaCy engine."""

import random

import pytest
import spacy

from rulevolve import Document, LinguisticEngine


def tagged(sentence: str, tags: str) -> Document:
    """Build a document from space-separated words and matching UPOS labels."""
    words = sentence.split()
    labels = tags.split()
    assert len(words) == len(labels)
    items = []
    for idx, (word, label) in enumerate(zip(words, labels)):
        next_is_punct = idx + 1 < len(labels) and labels[idx + 1] == "PUNCT"
        items.append((word, label, idx < len(words) - 1 and not next_is_punct))
    return Document.from_tagged(items)


@pytest.fixture
def problem_doc():
    return tagged("I need too finish this report .", "PRON VERB ADV VERB DET NOUN PUNCT")


@pytest.fixture
def clean_doc():
    return tagged("I need to finish this report .", "PRON VERB PART VERB DET NOUN PUNCT")


@pytest.fixture
def blank_engine():
    return LinguisticEngine(nlp=spacy.blank("en"))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_doc():
    return tagged
