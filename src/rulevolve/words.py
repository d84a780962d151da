"""Word pools that seed literal word atoms."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .document import Document
from .enums import TokenKind


class WordPool:
    """Vocabulary from which mutation draws word literals."""

    # Short function words behind most common confusions.
    DEFAULT_WORDS = [
        "a", "an", "the", "to", "too", "two", "of", "off", "in", "on",
        "it", "its", "it's", "is", "are", "was", "were", "be", "been",
        "their", "there", "they're", "your", "you're", "then", "than",
        "and", "or", "not", "no", "have", "has", "had", "do", "does",
        "this", "that", "these", "those", "for", "from", "with", "at",
    ]

    def __init__(self, words: Iterable[str] = ()):
        seen = set()
        self.words: List[str] = []
        for word in words:
            clean = word.strip()
            if clean and clean not in seen:
                seen.add(clean)
                self.words.append(clean)
        if not self.words:
            raise ValueError("A word pool needs at least one non-empty word.")

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: str) -> bool:
        return word in self.words

    def choose(self, rng: random.Random) -> str:
        return rng.choice(self.words)

    @classmethod
    def default(cls) -> "WordPool":
        return cls(cls.DEFAULT_WORDS)

    @classmethod
    def from_documents(
        cls, documents: Sequence[Document], extra: Iterable[str] = ()
    ) -> "WordPool":
        """Default words plus ``extra`` plus every word token in ``documents``."""
        words: List[str] = list(cls.DEFAULT_WORDS) + list(extra)
        for doc in documents:
            words.extend(t.text for t in doc.tokens if t.kind == TokenKind.WORD)
        return cls(words)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "WordPool":
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        return cls(lines)


__all__ = ["WordPool"]
