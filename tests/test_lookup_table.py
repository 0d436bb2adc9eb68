# tests/test_lookup_table.py
import numpy as np
import pytest

from docvec.core.errors import DimensionMismatch, EmptyInput
from docvec.core.lookup_table import VectorLookupTable, load_keyed_vectors, load_lookup_table


def test_lookup_hits_and_misses(toy_table):
    assert toy_table.dim == 2
    assert len(toy_table) == 3
    np.testing.assert_array_equal(toy_table.lookup("good"), [1.0, 0.0])
    assert toy_table.lookup("xyz") is None


def test_lookup_is_case_sensitive_and_exact(toy_table):
    assert toy_table.lookup("Good") is None
    assert toy_table.lookup("goo") is None
    assert "good" in toy_table
    assert "GOOD" not in toy_table


def test_dimension_mismatch_aborts_construction():
    with pytest.raises(DimensionMismatch) as exc:
        VectorLookupTable([("a", [1, 2]), ("b", [1, 2]), ("c", [1, 2, 3])])
    assert exc.value.token == "c"
    assert exc.value.expected == 2
    assert exc.value.actual == 3


def test_empty_source_raises():
    with pytest.raises(EmptyInput):
        VectorLookupTable([])


def test_vectors_are_read_only(toy_table):
    v = toy_table.lookup("day")
    assert not v.flags.writeable
    with pytest.raises(ValueError):
        v[0] = 5.0


def test_duplicate_token_last_wins():
    t = VectorLookupTable([("a", [1, 1]), ("a", [2, 2])])
    assert len(t) == 1
    np.testing.assert_array_equal(t.lookup("a"), [2.0, 2.0])


def test_load_glove_style_file(tmp_path):
    p = tmp_path / "vecs.txt"
    p.write_text("good 1 0\nbad -1 0\n\nday 0 1\n", encoding="utf-8")
    t = load_lookup_table(p)
    assert t.dim == 2
    assert sorted(t.vocabulary) == ["bad", "day", "good"]
    np.testing.assert_array_equal(t.lookup("bad"), [-1.0, 0.0])


def test_load_delimited_file_with_header(tmp_path):
    p = tmp_path / "vecs.csv"
    p.write_text("token,d1,d2\ngood,1,0\nday,0,1\n", encoding="utf-8")
    t = load_lookup_table(p, delimiter=",", header=True)
    assert len(t) == 2
    np.testing.assert_array_equal(t.lookup("day"), [0.0, 1.0])


def test_ragged_file_fails_with_dimension_mismatch(tmp_path):
    p = tmp_path / "vecs.txt"
    p.write_text("good 1 0\nbad -1 0 3\n", encoding="utf-8")
    with pytest.raises(DimensionMismatch):
        load_lookup_table(p)


def test_non_numeric_value_and_missing_file(tmp_path):
    p = tmp_path / "vecs.txt"
    p.write_text("good 1 x\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_lookup_table(p)
    with pytest.raises(FileNotFoundError):
        load_lookup_table(tmp_path / "nope.txt")


def test_from_gensim_keyed_vectors(tmp_path):
    from gensim.models import KeyedVectors

    kv = KeyedVectors(vector_size=2)
    kv.add_vectors(["good", "day"], np.array([[1, 0], [0, 1]], dtype=np.float32))
    t = VectorLookupTable.from_keyed_vectors(kv)
    assert t.dim == 2
    np.testing.assert_allclose(t.lookup("day"), [0.0, 1.0])

    kv_path = tmp_path / "w.kv"
    kv.save(str(kv_path))
    t2 = load_keyed_vectors(kv_path)
    assert sorted(t2.vocabulary) == ["day", "good"]


def test_load_keyed_vectors_from_headerless_text(tmp_path):
    p = tmp_path / "glove.txt"
    p.write_text("good 1 0\nday 0 1\n", encoding="utf-8")
    t = load_keyed_vectors(p)
    np.testing.assert_allclose(t.lookup("good"), [1.0, 0.0])
