# src/adapters/csv_headline_repository.py

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from src.domain.errors import DataUnavailable
from src.entities.headline import Headline
from src.interfaces.headline_repository import HeadlineRepository

logger = logging.getLogger(__name__)


class CsvHeadlineRepository(HeadlineRepository):
    """
    Reads a delimited headline corpus (one headline per row).

    Expected layout (column names configurable):
      Date,News
      2016-07-01,"A 117-year-old woman in Mexico City finally received her birth certificate"
    """

    def __init__(
        self,
        path: str | Path,
        date_column: str = "Date",
        text_column: str = "News",
        delimiter: str = ",",
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path)
        self.date_column = date_column
        self.text_column = text_column
        self.delimiter = delimiter
        self.encoding = encoding

    def _read_frame(self) -> pd.DataFrame:
        if not self.path.is_file():
            raise DataUnavailable(f"Headline file not found: {self.path.resolve()}")

        try:
            df = pd.read_csv(
                self.path,
                sep=self.delimiter,
                encoding=self.encoding,
                dtype={self.text_column: "string"},
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DataUnavailable(f"Malformed headline file {self.path}: {e}") from e

        missing = {self.date_column, self.text_column} - set(df.columns)
        if missing:
            raise DataUnavailable(
                f"Headline file {self.path} is missing columns: {sorted(missing)}"
            )
        return df

    def load_headlines(self) -> list[Headline]:
        df = self._read_frame()

        # offsets are folded into UTC; naive values are taken as UTC already
        try:
            days = pd.to_datetime(df[self.date_column], errors="coerce", utc=True)
        except (ValueError, TypeError) as e:
            raise DataUnavailable(f"Headline file {self.path} has malformed dates: {e}") from e

        invalid = int(days.isna().sum())
        if invalid:
            raise DataUnavailable(
                f"Headline file {self.path} has {invalid} row(s) with unparseable dates"
            )

        texts = df[self.text_column].fillna("")
        headlines = [
            Headline(day=day, text=str(text))
            for day, text in zip(days.dt.date, texts)
        ]

        logger.info(
            "Headlines loaded",
            extra={
                "path": str(self.path),
                "rows": len(headlines),
                "days": len({h.day for h in headlines}),
            },
        )
        return headlines
