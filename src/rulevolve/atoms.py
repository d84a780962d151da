"""Atom representation: the smallest matchable unit of a leaf sequence."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Union

from .enums import UPOS, AtomKind, upos_from_label

# Used when a tag set would otherwise be empty.
MINIMAL_TAG = UPOS.X


@dataclass
class Atom:
    """
    Tagged atom value.

    ``text`` is only meaningful for WORD atoms and ``tags`` only for TAGS atoms.
    Tags are stored sorted and de-duplicated, and are never empty.
    """

    kind: AtomKind
    text: str = ""
    tags: List[UPOS] = field(default_factory=list)

    def __post_init__(self):
        self.kind = AtomKind(self.kind)
        if self.kind == AtomKind.WORD:
            if not self.text:
                raise ValueError("Word atoms require a non-empty literal.")
            self.tags = []
        elif self.kind == AtomKind.TAGS:
            self.text = ""
            self.normalize()
        else:
            self.text = ""
            self.tags = []

    @classmethod
    def word(cls, text: str) -> "Atom":
        return cls(AtomKind.WORD, text=text)

    @classmethod
    def tag_set(cls, tags: Iterable[Union[UPOS, int, str]]) -> "Atom":
        coerced = [upos_from_label(t) if isinstance(t, str) else UPOS(t) for t in tags]
        return cls(AtomKind.TAGS, tags=coerced)

    @classmethod
    def whitespace(cls) -> "Atom":
        return cls(AtomKind.WHITESPACE)

    def normalize(self) -> None:
        """Sort and de-duplicate tags, falling back to the minimal set when empty."""
        if self.kind != AtomKind.TAGS:
            return
        unique = sorted({UPOS(t) for t in self.tags})
        self.tags = unique or [MINIMAL_TAG]

    @property
    def complexity(self) -> int:
        """Structural cost of this atom, ignoring whitespace pricing."""
        if self.kind == AtomKind.TAGS:
            return len(self.tags)
        if self.kind == AtomKind.WORD:
            return 1
        return 0

    def copy(self) -> "Atom":
        """Create deep copy."""
        clone = Atom.__new__(Atom)
        clone.kind = self.kind
        clone.text = self.text
        clone.tags = list(self.tags)
        return clone

    def describe(self) -> str:
        if self.kind == AtomKind.WORD:
            return repr(self.text)
        if self.kind == AtomKind.TAGS:
            return "{" + "|".join(tag.name for tag in self.tags) + "}"
        return "_"

    def to_dict(self) -> Dict[str, Any]:
        if self.kind == AtomKind.WORD:
            return {"word": self.text}
        if self.kind == AtomKind.TAGS:
            return {"tags": [tag.name for tag in self.tags]}
        return {"whitespace": True}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Atom":
        if "word" in data:
            return cls.word(str(data["word"]))
        if "tags" in data:
            return cls.tag_set(data["tags"])
        if data.get("whitespace"):
            return cls.whitespace()
        raise ValueError(f"Unrecognised atom payload: {data!r}")


__all__ = ["Atom", "MINIMAL_TAG"]
