# test/test_resolver.py
import math

import numpy as np
import pytest

from telemplot.core import Dataset, DatasetRegistry, PathRef, resolve, to_number
from telemplot.core import DatasetNotFound


class TestPathRef:
    def test_splits_on_first_dot_only(self):
        ref = PathRef.parse("0.TimeOfUpdate")
        assert ref.dataset == "0"
        assert ref.column == "TimeOfUpdate"
        assert ref.index == 0

        nested = PathRef.parse("2.gps.lat")
        assert nested.index == 2
        assert nested.column == "gps.lat"  # literal key, not a nested path
        assert str(nested) == "2.gps.lat"

    def test_non_integer_index(self):
        assert PathRef.parse("x.col").index is None
        assert PathRef.parse("-1.col").index is None
        assert PathRef.parse(".col").index is None
        assert PathRef.parse("1.5.col").index == 1

    def test_no_dot(self):
        ref = PathRef.parse("3")
        assert ref.index == 3
        assert ref.column == ""


class TestToNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("0.1", 0.1),
            (" 42 ", 42.0),
            ("1e3", 1000.0),
            ("-2.5", -2.5),
            ("0x10", 16.0),
            ("0b101", 5.0),
            (7, 7.0),
            (True, 1.0),
            (np.float32(2.5), 2.5),
            (b"3", 3.0),
        ],
    )
    def test_numeric(self, raw, expected):
        assert to_number(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "abc", "nan", "inf", "1_000", "1,5", "-0x10", "+0x10", "0x1_0", "0b12", object()])
    def test_not_a_number(self, raw):
        assert math.isnan(to_number(raw))

    @pytest.mark.parametrize("raw", ["", "   ", "\t"])
    def test_blank_reads_as_zero(self, raw):
        assert to_number(raw) == 0.0

    def test_spelled_out_infinity(self):
        assert to_number("Infinity") == math.inf
        assert to_number("-Infinity") == -math.inf


def test_resolve_length_and_order(registry):
    t = resolve("0.TimeOfUpdate", registry)
    v = resolve("0.SteeringWheelAngle", registry)

    assert isinstance(t, np.ndarray)
    assert t.dtype == np.float64
    assert np.allclose(t, [0.0, 1.0])
    assert np.allclose(v, [0.1, 0.2])


def test_resolve_missing_column_gives_nan_per_row(registry):
    out = resolve("0.cdgSpeed_x", registry)
    assert out.shape == (2,)
    assert np.isnan(out).all()


def test_resolve_partial_column():
    ds = Dataset(columns=["a"], rows=[{"a": "1"}, {}, {"a": "oops"}, {"a": "4"}])
    out = resolve("0.a", DatasetRegistry().append(ds))
    assert out[0] == 1.0
    assert np.isnan(out[1])
    assert np.isnan(out[2])
    assert out[3] == 4.0


def test_resolve_empty_dataset():
    out = resolve("0.a", DatasetRegistry().append(Dataset(columns=["a"])))
    assert out.shape == (0,)


@pytest.mark.parametrize("ref, index", [("1.TimeOfUpdate", "1"), ("x.TimeOfUpdate", "x"), ("-1.a", "-1")])
def test_resolve_missing_dataset(registry, ref, index):
    with pytest.raises(DatasetNotFound) as info:
        resolve(ref, registry)

    err = info.value
    assert err.ref == ref
    assert err.index == index
    assert str(err) == f"Unable to access {ref} because dataset {index} is not available!"


def test_resolve_accepts_parsed_ref(registry):
    out = resolve(PathRef(dataset="0", column="SteeringWheelAngle"), registry)
    assert np.allclose(out, [0.1, 0.2])


def test_resolve_blank_cell_is_zero_and_absent_cell_is_nan():
    ds = Dataset(columns=["a"], rows=[{"a": ""}, {"a": "2"}, {}])
    out = resolve("0.a", DatasetRegistry().append(ds))
    assert out[0] == 0.0
    assert out[1] == 2.0
    assert np.isnan(out[2])


@pytest.mark.parametrize("ref, shown", [(None, "undefined"), (5, "5")])
def test_resolve_non_string_reference(registry, ref, shown):
    with pytest.raises(DatasetNotFound) as info:
        resolve(ref, registry)
    assert str(info.value) == f"Unable to access {shown} because dataset {shown} is not available!"
