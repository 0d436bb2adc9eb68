# aggregator.py
"""
Collapse each document's token vectors into one fixed-length vector.

Tokens missing from the lookup table are dropped, not zero-padded, so ``mean``
divides by the number of matched tokens. A document with no matched tokens
becomes the zero vector: every input document yields exactly one row.
"""
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from .errors import EmptyInput
from .feature_matrix import DEFAULT_PREFIX, Document, FeatureMatrix
from .lookup_table import VectorLookupTable
from .tokenizer import Tokenizer

Reduction = Callable[[np.ndarray], np.ndarray]

# each reduction maps a (k, D) stack of matched vectors, k >= 1, to shape (D,)
REDUCTIONS: Dict[str, Reduction] = {
    "sum": lambda m: m.sum(axis=0),
    "mean": lambda m: m.mean(axis=0),
    "max": lambda m: m.max(axis=0),
    "min": lambda m: m.min(axis=0),
}


def register_reduction(name: str, fn: Reduction) -> None:
    """Make ``fn`` available as ``reduction=name``."""
    if not callable(fn):
        raise TypeError("reduction must be callable")
    REDUCTIONS[name] = fn


def _resolve_reduction(reduction: Union[str, Reduction]) -> Reduction:
    if callable(reduction):
        return reduction
    try:
        return REDUCTIONS[reduction]
    except KeyError:
        raise ValueError(
            f"unknown reduction {reduction!r}; choose from {sorted(REDUCTIONS)}"
        ) from None


def aggregate_tokens(
    tokens: Iterable[str],
    table: VectorLookupTable,
    reduction: Union[str, Reduction] = "sum",
) -> np.ndarray:
    """Reduce the vectors of the matched tokens to a single length-D vector."""
    fn = _resolve_reduction(reduction)
    matched = [v for v in (table.lookup(t) for t in tokens) if v is not None]
    if not matched:
        return np.zeros(table.dim)
    out = np.asarray(fn(np.vstack(matched)), dtype=np.float64)
    if out.shape != (table.dim,):
        raise ValueError(f"reduction returned shape {out.shape}, expected ({table.dim},)")
    return out


class Aggregator:
    """Tokenize documents and aggregate their word vectors.

    Args:
        table: shared, read-only vector lookup table
        tokenizer: defaults to ``Tokenizer()``
        reduction: ``sum`` (default), ``mean``, ``max``, ``min`` or a registered name
        keep_tokens: carry each document's token sequence in the output
        n_jobs: worker threads across documents; ``-1`` uses every CPU
        prefix: feature column prefix used by ``FeatureMatrix.to_frame``
    """

    def __init__(
        self,
        table: VectorLookupTable,
        tokenizer: Optional[Tokenizer] = None,
        reduction: Union[str, Reduction] = "sum",
        keep_tokens: bool = False,
        n_jobs: int = 1,
        prefix: str = DEFAULT_PREFIX,
    ):
        self.table = table
        self.tokenizer = tokenizer or Tokenizer()
        self.reduction = reduction
        self._fn = _resolve_reduction(reduction)
        self.keep_tokens = keep_tokens
        self.n_jobs = n_jobs
        self.prefix = prefix

    def _one(self, text: str) -> Tuple[np.ndarray, Optional[Tuple[str, ...]]]:
        seq = self.tokenizer.tokenize(text)
        vec = aggregate_tokens(seq, self.table, self._fn)
        return vec, (tuple(seq) if self.keep_tokens else None)

    def _workers(self, n_docs: int) -> int:
        cpu = os.cpu_count() or 1
        if self.n_jobs is None or self.n_jobs < 0:
            return max(1, min(cpu, n_docs))
        return max(1, min(self.n_jobs, n_docs))

    def transform(self, documents: Iterable[Union[Document, Tuple[str, Any]]]) -> FeatureMatrix:
        docs = [d if isinstance(d, Document) else Document(*d) for d in documents]
        if not docs:
            raise EmptyInput()

        texts = [d.text for d in docs]
        workers = self._workers(len(docs))
        logger.debug(
            "[aggregate] docs={} reduction={} workers={}",
            len(docs), getattr(self.reduction, "__name__", self.reduction), workers,
        )
        if workers == 1:
            results = [self._one(t) for t in texts]
        else:
            # map() yields in submission order and re-raises the first worker error
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(self._one, texts))

        vectors = np.vstack([r[0] for r in results])
        tokens = tuple(r[1] for r in results) if self.keep_tokens else None
        n_empty = int(np.sum(~vectors.any(axis=1)))
        if n_empty:
            logger.info("[aggregate] {} of {} documents aggregate to the zero vector", n_empty, len(docs))

        return FeatureMatrix(
            vectors=vectors,
            labels=tuple(d.label for d in docs),
            tokens=tokens,
            prefix=self.prefix,
        )

    def transform_texts(
        self, texts: Sequence[str], labels: Optional[Sequence[Any]] = None
    ) -> FeatureMatrix:
        if labels is None:
            labels = [None] * len(texts)
        elif len(labels) != len(texts):
            raise ValueError(f"{len(labels)} labels for {len(texts)} texts")
        return self.transform(Document(t, y) for t, y in zip(texts, labels))
