# tests/unit/domain/services/test_volatility_aligner.py

from datetime import date

import pytest

from src.domain.errors import AlignmentDrift
from src.domain.services.volatility_aligner import AlignmentMode, VolatilityAligner
from src.entities.merged_record import MergedRecord
from src.entities.volatility_estimate import VolatilityEstimate


def _record(day: int, score: int | None, ret: float | None = 0.01) -> MergedRecord:
    return MergedRecord(day=date(2016, 7, day), close=100.0 + day, score=score, log_return=ret)


def _estimates(*days: int) -> list[VolatilityEstimate]:
    # sigma encodes the day so tests can tell which estimate landed where
    return [VolatilityEstimate(day=date(2016, 7, d), conditional_std_dev=d / 1000) for d in days]


@pytest.fixture
def records() -> list[MergedRecord]:
    # day 1 has no return; days 2 and 4 have no sentiment
    return [
        _record(1, 3, ret=None),
        _record(2, None),
        _record(3, -1),
        _record(4, None),
        _record(5, 0),
    ]


def test_restrict_excludes_null_sentiment_days(records):
    restricted = VolatilityAligner.restrict_to_sentiment_days(records)

    assert [r.day.day for r in restricted] == [1, 3, 5]


def test_positional_attach_truncates_by_count_and_reports_drift(records):
    aligner = VolatilityAligner(mode=AlignmentMode.POSITIONAL)

    overlay, report = aligner.attach(records, _estimates(2, 3, 4, 5))

    # i-th sentiment day receives the i-th estimate, regardless of its date
    assert [r.day.day for r in overlay] == [1, 3, 5]
    assert [r.conditional_std_dev for r in overlay] == [0.002, 0.003, 0.004]
    assert report.restricted_rows == 3
    assert report.estimate_rows == 4
    assert report.misaligned_rows == 2  # day 1 got day 2, day 5 got day 4
    assert report.drifted is True


def test_positional_attach_pads_with_none_when_estimates_run_out():
    records = [_record(d, 1) for d in range(1, 5)]
    aligner = VolatilityAligner(mode="positional")

    overlay, report = aligner.attach(records, _estimates(1, 2))

    assert [r.conditional_std_dev for r in overlay] == [0.001, 0.002, None, None]
    assert report.unmatched_rows == 2
    assert report.misaligned_rows == 0


def test_positional_attach_without_drift_when_dates_line_up():
    records = [_record(d, 1) for d in (2, 3)]

    _, report = VolatilityAligner().attach(records, _estimates(2, 3, 4))

    assert report.drifted is False


def test_fail_on_drift_raises(records):
    aligner = VolatilityAligner(mode=AlignmentMode.POSITIONAL, fail_on_drift=True)

    with pytest.raises(AlignmentDrift) as exc_info:
        aligner.attach(records, _estimates(2, 3, 4, 5))

    assert exc_info.value.misaligned_rows == 2
    assert exc_info.value.restricted_rows == 3


def test_date_attach_joins_on_day(records):
    aligner = VolatilityAligner(mode=AlignmentMode.DATE, fail_on_drift=True)

    overlay, report = aligner.attach(records, _estimates(2, 3, 4, 5))

    # day 1 has no return and therefore no estimate
    assert [r.conditional_std_dev for r in overlay] == [None, 0.003, 0.005]
    assert report.misaligned_rows == 0
    assert report.unmatched_rows == 1


def test_overlay_keeps_score_and_return(records):
    overlay, _ = VolatilityAligner(mode="date").attach(records, _estimates(3))

    assert overlay[1].score == -1
    assert overlay[1].log_return == pytest.approx(0.01)
    assert overlay[0].log_return is None


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        VolatilityAligner(mode="nearest")
