# tests/unit/adapters/repositories/test_csv_headline_repository.py

from datetime import date
from pathlib import Path

import pytest

from src.adapters import csv_headline_repository as repository_module
from src.adapters.csv_headline_repository import CsvHeadlineRepository
from src.domain.errors import DataUnavailable
from src.entities.headline import Headline


def _write(tmp_path: Path, content: str, name: str = "news.csv") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_load_headlines_reads_date_and_text(tmp_path):
    path = _write(
        tmp_path,
        'Date,News\n'
        '2016-07-01,"Good news, everyone"\n'
        '2016-07-01,Markets fall\n'
        '2016-06-30,Quiet day\n',
    )

    headlines = CsvHeadlineRepository(path).load_headlines()

    assert headlines == [
        Headline(day=date(2016, 7, 1), text="Good news, everyone"),
        Headline(day=date(2016, 7, 1), text="Markets fall"),
        Headline(day=date(2016, 6, 30), text="Quiet day"),
    ]


def test_missing_text_becomes_empty_string(tmp_path):
    path = _write(tmp_path, "Date,News\n2016-07-01,\n")

    headlines = CsvHeadlineRepository(path).load_headlines()

    assert headlines == [Headline(day=date(2016, 7, 1), text="")]


def test_custom_columns_and_delimiter(tmp_path):
    path = _write(tmp_path, "day;headline\n2016-07-01;Strong gains\n")

    repo = CsvHeadlineRepository(path, date_column="day", text_column="headline", delimiter=";")

    assert repo.load_headlines() == [Headline(day=date(2016, 7, 1), text="Strong gains")]


def test_numeric_looking_text_is_kept_as_string(tmp_path):
    path = _write(tmp_path, "Date,News\n2016-07-01,2016\n")

    assert CsvHeadlineRepository(path).load_headlines()[0].text == "2016"


def test_missing_file_raises_data_unavailable(tmp_path):
    with pytest.raises(DataUnavailable):
        CsvHeadlineRepository(tmp_path / "absent.csv").load_headlines()


def test_missing_columns_raise_data_unavailable(tmp_path):
    path = _write(tmp_path, "Date,Title\n2016-07-01,x\n")

    with pytest.raises(DataUnavailable):
        CsvHeadlineRepository(path).load_headlines()


def test_empty_file_raises_data_unavailable(tmp_path):
    path = _write(tmp_path, "")

    with pytest.raises(DataUnavailable):
        CsvHeadlineRepository(path).load_headlines()


def test_unparseable_dates_raise_data_unavailable(tmp_path):
    path = _write(tmp_path, "Date,News\nnot-a-date,x\n2016-07-01,y\n")

    with pytest.raises(DataUnavailable):
        CsvHeadlineRepository(path).load_headlines()


def test_mixed_utc_offsets_are_converted_to_utc_dates(tmp_path):
    path = _write(
        tmp_path,
        "Date,News\n"
        "2016-07-01T23:30:00-05:00,Late session\n"
        "2016-07-02T01:00:00+02:00,Early session\n",
    )

    headlines = CsvHeadlineRepository(path).load_headlines()

    assert headlines == [
        Headline(day=date(2016, 7, 2), text="Late session"),
        Headline(day=date(2016, 7, 1), text="Early session"),
    ]


def test_date_parser_value_error_raises_data_unavailable(tmp_path, monkeypatch):
    path = _write(tmp_path, "Date,News\n2016-07-01,x\n")

    def _raise(*args, **kwargs):
        raise ValueError("Mixed timezones detected")

    monkeypatch.setattr(repository_module.pd, "to_datetime", _raise)

    with pytest.raises(DataUnavailable):
        CsvHeadlineRepository(path).load_headlines()
