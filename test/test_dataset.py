# test/test_dataset.py
import pytest

from telemplot.core import Dataset, DatasetRegistry, RowError
from telemplot.core import InvalidDataset, DatasetNotFound


def _ds(name: str, columns, rows) -> Dataset:
    return Dataset(source_name=name, columns=columns, rows=rows)


def test_dataset_freezes_columns_and_rows():
    rows = [{"a": "1"}, {"a": "2"}]
    ds = _ds("x.csv", ["a"], rows)

    assert ds.columns == ("a",)
    assert isinstance(ds.rows, tuple)
    assert len(ds) == 2
    assert ds.n_rows == 2

    rows.append({"a": "3"})
    assert ds.n_rows == 2  # later edits of the input list do not leak in


def test_dataset_rejects_bad_inputs():
    with pytest.raises(InvalidDataset):
        Dataset(columns="abc")
    with pytest.raises(InvalidDataset):
        Dataset(columns=["a", 1])  # type: ignore[list-item]
    with pytest.raises(InvalidDataset):
        Dataset(columns=["a"], rows=[["1"]])  # type: ignore[list-item]
    with pytest.raises(InvalidDataset):
        Dataset(source_name=3)  # type: ignore[arg-type]


def test_dataset_keeps_parse_errors():
    err = RowError(code="TooFewFields", message="Too few fields", row=1)
    ds = Dataset(columns=["a"], rows=[{"a": "1"}], parse_errors=[err])
    assert ds.degraded
    assert ds.parse_errors == (err,)
    assert not Dataset().degraded


def test_registry_append_returns_new_registry():
    empty = DatasetRegistry()
    ds = _ds("a.csv", ["t"], [{"t": "0"}])

    one = empty.append(ds)
    assert len(empty) == 0
    assert len(one) == 1
    assert one[0] is ds
    assert 0 in one
    assert 1 not in one
    assert -1 not in one

    two = one.append(ds)
    assert len(one) == 1
    assert list(two) == [ds, ds]


def test_registry_missing_index_raises_keyerror():
    reg = DatasetRegistry()
    with pytest.raises(DatasetNotFound):
        _ = reg[0]
    with pytest.raises(KeyError):
        _ = reg[3]


def test_registry_rejects_non_dataset():
    with pytest.raises(InvalidDataset):
        DatasetRegistry(datasets=[{"rows": []}])  # type: ignore[list-item]
    with pytest.raises(InvalidDataset):
        DatasetRegistry().append("nope")  # type: ignore[arg-type]


def test_registry_fields_and_filter():
    ds = _ds("a.csv", ["TimeOfUpdate", "cdgSpeed_x", "cdgSpeed_y", "SteeringWheelAngle"], [])
    reg = DatasetRegistry().append(ds)

    assert reg.fields(0) == ["TimeOfUpdate", "cdgSpeed_x", "cdgSpeed_y", "SteeringWheelAngle"]
    assert reg.filter_fields(0, "SPEED") == ["cdgSpeed_x", "cdgSpeed_y"]
    assert reg.filter_fields(0, "") == reg.fields(0)
    assert reg.filter_fields(0, "zzz") == []

    with pytest.raises(DatasetNotFound):
        reg.fields(1)
