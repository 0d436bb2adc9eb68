# lookup_table.py
"""
Read-only token -> vector table (a pretrained embedding space).

The table is built once, from any iterable of ``(token, vector)`` pairs, and
shared by reference afterwards. All vectors have the same dimension D, fixed
by the first pair.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .errors import DimensionMismatch, EmptyInput


class VectorLookupTable:
    def __init__(self, pairs: Iterable[Tuple[str, Sequence[float]]]):
        index: Dict[str, int] = {}
        rows: List[np.ndarray] = []
        dim: Optional[int] = None
        n_dupes = 0

        for token, vector in pairs:
            vec = np.asarray(vector, dtype=np.float64).reshape(-1)
            if dim is None:
                if vec.shape[0] == 0:
                    raise ValueError(f"vector for token {token!r} is empty")
                dim = vec.shape[0]
            elif vec.shape[0] != dim:
                raise DimensionMismatch(str(token), dim, vec.shape[0])
            token = str(token)
            if token in index:
                # last occurrence wins
                rows[index[token]] = vec
                n_dupes += 1
            else:
                index[token] = len(rows)
                rows.append(vec)

        if dim is None:
            raise EmptyInput("vector source")
        if n_dupes:
            logger.debug("[lookup] {} duplicate tokens overwritten", n_dupes)

        matrix = np.vstack(rows)
        matrix.setflags(write=False)
        self._index = index
        self._matrix = matrix
        self._dim = int(dim)

    # ---------- construction helpers ----------
    @classmethod
    def from_keyed_vectors(cls, kv) -> "VectorLookupTable":
        """Build from a gensim ``KeyedVectors`` instance."""
        return cls((key, kv[key]) for key in kv.index_to_key)

    @classmethod
    def from_dict(cls, mapping: Dict[str, Sequence[float]]) -> "VectorLookupTable":
        return cls(mapping.items())

    # ---------- api ----------
    def lookup(self, token: str) -> Optional[np.ndarray]:
        """Exact, case-sensitive lookup. ``None`` when the token is absent."""
        i = self._index.get(token)
        if i is None:
            return None
        return self._matrix[i]

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def vocabulary(self) -> List[str]:
        return list(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, token) -> bool:
        return token in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __repr__(self) -> str:
        return f"VectorLookupTable(size={len(self)}, dim={self._dim})"


# ---------- loaders ----------
def _read_pairs(path: Path, delimiter: Optional[str], header: bool):
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        if header:
            next(f, None)
        for lineno, line in enumerate(f, 2 if header else 1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            parts = line.split(delimiter) if delimiter else line.split()
            token, values = parts[0], parts[1:]
            try:
                yield token, [float(x) for x in values]
            except ValueError as e:
                raise ValueError(f"{path}:{lineno}: non-numeric vector value") from e


def load_lookup_table(
    path, delimiter: Optional[str] = None, header: bool = False
) -> VectorLookupTable:
    """Read a GloVe-style text file: one ``token v1 .. vD`` entry per line.

    Dimension checking is left to :class:`VectorLookupTable`, so a ragged file
    fails with ``DimensionMismatch``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"vector file not found: {path}")
    logger.info("[lookup] loading vectors from {}", path)
    table = VectorLookupTable(_read_pairs(path, delimiter, header))
    logger.info("[lookup] loaded {} tokens, dim={}", len(table), table.dim)
    return table


def load_keyed_vectors(path, binary: bool = False, no_header: bool = True) -> VectorLookupTable:
    """Load word2vec/GloVe vectors through gensim."""
    from gensim.models import KeyedVectors

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"vector file not found: {path}")
    if path.suffix == ".kv":
        kv = KeyedVectors.load(str(path))
    else:
        kv = KeyedVectors.load_word2vec_format(str(path), binary=binary, no_header=no_header)
    logger.info("[lookup] gensim vectors {} -> {} tokens", path, len(kv.index_to_key))
    return VectorLookupTable.from_keyed_vectors(kv)
