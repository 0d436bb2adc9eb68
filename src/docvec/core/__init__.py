# Core feature pipeline: tokenize -> look up -> aggregate -> reduce

from .errors import DocvecError, DimensionMismatch, DegenerateColumn, EmptyInput
from .tokenizer import Tokenizer, TokenSequence, tokenize_words
from .lookup_table import VectorLookupTable, load_lookup_table, load_keyed_vectors
from .feature_matrix import Document, FeatureMatrix, ReducedFeatureMatrix
from .aggregator import Aggregator, aggregate_tokens, register_reduction, REDUCTIONS
from .reducer import DimensionalityReducer, standardize, reduce_features

__all__ = [
    "DocvecError",
    "DimensionMismatch",
    "DegenerateColumn",
    "EmptyInput",
    "Tokenizer",
    "TokenSequence",
    "tokenize_words",
    "VectorLookupTable",
    "load_lookup_table",
    "load_keyed_vectors",
    "Document",
    "FeatureMatrix",
    "ReducedFeatureMatrix",
    "Aggregator",
    "aggregate_tokens",
    "register_reduction",
    "REDUCTIONS",
    "DimensionalityReducer",
    "standardize",
    "reduce_features",
]
