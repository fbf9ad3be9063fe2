from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable

from asammdf import MDF  # pivotal dependency for MDF file handling
from asammdf.blocks.utils import MdfException

from telemplot.core import FileParseError

from .parsed import ParseMeta, ParseResult

logger = logging.getLogger(__name__)

TIME_COLUMN = "timestamps"


class AsammdfTableReader:
    """Tabular view of an MDF measurement using asammdf.MDF.

    Every channel becomes a column; all channels are brought onto one
    common time base (asammdf's raster resampling) so that each row is one
    sample instant, with the time stamp in the ``TIME_COLUMN`` field.
    """

    def __init__(self, path: str | os.PathLike, *, raster: float | None = None):
        self.path = Path(path)
        self.raster = raster

    def read(self, channels: Iterable[str] | None = None) -> ParseResult:
        """Load the measurement (optionally only `channels`) into rows.

        Raises FileParseError when asammdf cannot open or convert the file.
        """
        try:
            with MDF(str(self.path)) as mdf:
                frame = mdf.to_dataframe(
                    channels=list(channels) if channels is not None else None,
                    raster=self.raster,
                    time_from_zero=False,
                )
        except (OSError, ValueError, KeyError, MdfException) as e:
            raise FileParseError(self.path.name, str(e)) from e

        names = [str(c) for c in frame.columns]
        result = ParseResult(meta=ParseMeta(fields=[TIME_COLUMN, *names]))
        for t, values in zip(frame.index, frame.itertuples(index=False, name=None)):
            row: dict[str, Any] = {TIME_COLUMN: float(t)}
            row.update(zip(names, values))
            result.data.append(row)

        logger.debug(
            "read %s: %d sample(s), %d channel(s)", self.path.name, len(result.data), len(names)
        )
        return result


def parse_mdf(
    source: str | os.PathLike,
    *,
    header: bool = True,
    skip_empty_lines: bool = True,
) -> ParseResult:
    """Parsing-collaborator entry point for MDF files.

    `header` and `skip_empty_lines` only apply to text sources; they are
    accepted so MDF and CSV parsers share one call signature.
    """
    if not isinstance(source, (str, os.PathLike)):
        raise FileParseError(
            getattr(source, "name", None), "MDF sources must be given as file paths"
        )
    return AsammdfTableReader(source).read()
