"""Tokenized documents and the spaCy-backed linguistic engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import spacy

from .enums import UPOS, TokenKind, upos_from_label

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "en_core_web_sm"


@dataclass(frozen=True)
class Token:
    """One scanned position: a word, a punctuation mark, or a whitespace run."""

    text: str
    kind: TokenKind
    pos: UPOS = UPOS.X

    @property
    def is_whitespace(self) -> bool:
        return self.kind == TokenKind.WHITESPACE


WHITESPACE_TOKEN = Token(" ", TokenKind.WHITESPACE, UPOS.X)


@dataclass(frozen=True)
class Document:
    """Immutable token sequence for one sentence. Safe to share across workers."""

    text: str
    tokens: Tuple[Token, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def span_text(self, start: int, end: int) -> str:
        return "".join(token.text for token in self.tokens[start:end])

    @classmethod
    def from_tagged(
        cls, items: Sequence[Union[Tuple[str, Any], Tuple[str, Any, bool]]]
    ) -> "Document":
        """
        Build a document from ``(text, pos)`` or ``(text, pos, space_after)`` items.

        Without an explicit flag a space follows every item except the last one.
        """
        tokens: List[Token] = []
        for idx, item in enumerate(items):
            text, pos = item[0], item[1]
            space_after = item[2] if len(item) > 2 else idx < len(items) - 1
            tag = upos_from_label(pos) if isinstance(pos, str) else UPOS(pos)
            kind = TokenKind.PUNCTUATION if tag == UPOS.PUNCT else TokenKind.WORD
            tokens.append(Token(text, kind, tag))
            if space_after:
                tokens.append(WHITESPACE_TOKEN)
        return cls("".join(t.text for t in tokens), tuple(tokens))


def load_pipeline(model: str = DEFAULT_MODEL):
    """Load a spaCy pipeline, downloading the package on first use."""
    try:
        return spacy.load(model)
    except OSError:
        logger.warning("spaCy model '%s' not installed; downloading it.", model)
        from spacy.cli import download

        download(model)
        return spacy.load(model)


class LinguisticEngine:
    """
    Tokenizes and tags sentences with spaCy and lowers them to :class:`Document`.

    Whitespace between spaCy tokens becomes explicit whitespace tokens so that
    whitespace atoms have a position to match.
    """

    def __init__(self, nlp: Optional[Any] = None, model: str = DEFAULT_MODEL):
        self.nlp = nlp if nlp is not None else load_pipeline(model)

    def tag(self, text: str) -> Document:
        return self._lower(self.nlp(text))

    def tag_many(self, texts: Iterable[str], batch_size: int = 256) -> List[Document]:
        return [self._lower(doc) for doc in self.nlp.pipe(texts, batch_size=batch_size)]

    @staticmethod
    def _lower(doc) -> Document:
        tokens: List[Token] = []
        for tok in doc:
            if tok.is_space:
                tokens.append(Token(tok.text, TokenKind.WHITESPACE, UPOS.X))
                continue
            tag = upos_from_label(tok.pos_ or "X")
            if tok.is_punct:
                tokens.append(Token(tok.text, TokenKind.PUNCTUATION, tag))
            else:
                tokens.append(Token(tok.text, TokenKind.WORD, tag))
            if tok.whitespace_:
                tokens.append(Token(tok.whitespace_, TokenKind.WHITESPACE, UPOS.X))
        return Document(doc.text, tuple(tokens))


def read_sentences(path: Union[str, Path]) -> List[str]:
    """Read one sentence per non-blank line. Raises ``OSError`` if unreadable."""
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


__all__ = [
    "DEFAULT_MODEL",
    "Token",
    "Document",
    "WHITESPACE_TOKEN",
    "LinguisticEngine",
    "load_pipeline",
    "read_sentences",
]
