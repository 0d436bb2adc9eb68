# tokenizer.py
"""
Word tokenizer for raw document text.

Tokens are lower-cased and punctuation-stripped according to a small,
configurable rule set. Tokenizing is pure: no file or network access and the
same text always yields the same tokens.
"""
from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

# everything that is not a word character, whitespace or an in-word apostrophe
PUNCT_RE = re.compile(r"[^\w\s']|_|(?<!\w)'|'(?!\w)")
NUMERIC_RE = re.compile(r"^[\d.,]+$")
WORD_RE = re.compile(r"\S+")


class TokenSequence:
    """Lazy, finite, restartable sequence of tokens for one document.

    Each call to ``iter()`` re-scans the text, so the sequence can be consumed
    any number of times.
    """

    __slots__ = ("_text", "_tokenizer")

    def __init__(self, text: str, tokenizer: "Tokenizer"):
        self._text = text
        self._tokenizer = tokenizer

    def __iter__(self) -> Iterator[str]:
        return self._tokenizer._scan(self._text)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def __eq__(self, other) -> bool:
        if isinstance(other, TokenSequence):
            return tuple(self) == tuple(other)
        if isinstance(other, (list, tuple)):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"TokenSequence({list(self)!r})"


class Tokenizer:
    """Split text into normalized word tokens.

    Args:
        lowercase: lower-case every token
        strip_punctuation: remove characters matched by ``punctuation_pattern``
        strip_numeric: drop tokens made only of digits (and ``.``/``,``)
        stopwords: tokens to drop, matched against the normalized token
        punctuation_pattern: regex overriding the default punctuation rule
    """

    def __init__(
        self,
        lowercase: bool = True,
        strip_punctuation: bool = True,
        strip_numeric: bool = False,
        stopwords: Optional[Iterable[str]] = None,
        punctuation_pattern: Optional[str] = None,
    ):
        self.lowercase = lowercase
        self.strip_punctuation = strip_punctuation
        self.strip_numeric = strip_numeric
        self.stopwords = frozenset(stopwords or ())
        self._punct_re = (
            re.compile(punctuation_pattern) if punctuation_pattern else PUNCT_RE
        )

    def tokenize(self, text: Optional[str]) -> TokenSequence:
        return TokenSequence("" if text is None else str(text), self)

    __call__ = tokenize

    def _scan(self, text: str) -> Iterator[str]:
        if self.lowercase:
            text = text.lower()
        if self.strip_punctuation:
            text = self._punct_re.sub(" ", text)
        for m in WORD_RE.finditer(text):
            tok = m.group(0)
            if self.strip_numeric and NUMERIC_RE.match(tok):
                continue
            if tok in self.stopwords:
                continue
            yield tok

    def __repr__(self) -> str:
        return (
            f"Tokenizer(lowercase={self.lowercase}, "
            f"strip_punctuation={self.strip_punctuation}, "
            f"strip_numeric={self.strip_numeric}, stopwords={len(self.stopwords)})"
        )


def tokenize_words(text: Optional[str], **rules) -> TokenSequence:
    """Tokenize ``text`` with a one-off :class:`Tokenizer` built from ``rules``."""
    return Tokenizer(**rules).tokenize(text)
