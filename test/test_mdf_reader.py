# test/test_mdf_reader.py
import io

import numpy as np
import pandas as pd
import pytest

from telemplot.core import FileParseError
from telemplot.io import load as load_module
from telemplot.io import mdf_reader
from telemplot.io.load import load_dataset, load_source
from telemplot.io.mdf_reader import TIME_COLUMN, AsammdfTableReader, parse_mdf


class _FakeMDF:
    """Stands in for asammdf.MDF: context manager exposing to_dataframe()."""

    calls: list[dict] = []
    frame = pd.DataFrame(
        {"eng_spd": np.array([800.0, 805.0, 810.0]), "torque": np.array([10.0, 12.5, 11.0])},
        index=pd.Index([0.0, 0.1, 0.2], name="timestamps"),
    )

    def __init__(self, path):
        if path.endswith("broken.mf4"):
            raise OSError("not an MDF file")
        self.path = path
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def to_dataframe(self, channels=None, raster=None, time_from_zero=True):
        type(self).calls.append({"channels": channels, "raster": raster, "time_from_zero": time_from_zero})
        frame = self.frame
        if channels is not None:
            frame = frame[channels]
        return frame


@pytest.fixture
def fake_mdf(monkeypatch):
    _FakeMDF.calls = []
    monkeypatch.setattr(mdf_reader, "MDF", _FakeMDF)
    return _FakeMDF


class TestAsammdfTableReader:
    """Tabular view over an MDF measurement."""

    def test_rows_on_common_time_base(self, fake_mdf, tmp_path):
        result = AsammdfTableReader(tmp_path / "run.mf4").read()

        assert result.meta.fields == [TIME_COLUMN, "eng_spd", "torque"]
        assert len(result.data) == 3
        assert result.data[1] == {TIME_COLUMN: 0.1, "eng_spd": 805.0, "torque": 12.5}
        assert result.errors == []
        assert fake_mdf.calls[-1]["time_from_zero"] is False

    def test_channel_selection_and_raster(self, fake_mdf, tmp_path):
        result = AsammdfTableReader(tmp_path / "run.mf4", raster=0.5).read(["torque"])

        assert result.meta.fields == [TIME_COLUMN, "torque"]
        assert fake_mdf.calls[-1]["channels"] == ["torque"]
        assert fake_mdf.calls[-1]["raster"] == 0.5

    def test_open_failure_is_a_file_error(self, fake_mdf, tmp_path):
        with pytest.raises(FileParseError) as info:
            AsammdfTableReader(tmp_path / "broken.mf4").read()
        assert info.value.source_name == "broken.mf4"
        assert "not an MDF file" in info.value.reason


def test_parse_mdf_needs_a_path(fake_mdf):
    with pytest.raises(FileParseError):
        parse_mdf(io.BytesIO(b"MDF     4.10"))


def test_mdf_rows_resolve_to_numbers(fake_mdf, tmp_path):
    from telemplot.core import DatasetRegistry, resolve

    ds = load_dataset(tmp_path / "run.mf4")
    reg = DatasetRegistry().append(ds)

    assert ds.source_name == "run.mf4"
    assert np.allclose(resolve(f"0.{TIME_COLUMN}", reg), [0.0, 0.1, 0.2])
    assert np.allclose(resolve("0.eng_spd", reg), [800.0, 805.0, 810.0])


def test_load_source_dispatches_by_suffix(monkeypatch, tmp_path):
    seen = []
    monkeypatch.setattr(load_module, "parse_mdf", lambda src, **kw: seen.append(("mdf", src)) or "mdf")
    monkeypatch.setattr(load_module, "parse_csv", lambda src, **kw: seen.append(("csv", src)) or "csv")

    assert load_source(tmp_path / "a.MF4") == "mdf"
    assert load_source(tmp_path / "a.mdf") == "mdf"
    assert load_source(tmp_path / "a.csv") == "csv"
    assert load_source(io.StringIO("a\n1\n")) == "csv"
    assert [kind for kind, _ in seen] == ["mdf", "mdf", "csv", "csv"]
