from datetime import datetime, timedelta, timezone

import pytest

from core.exceptions import InvalidWindow
from core.services.scheduling import TimeWindow, first_overlap

T10 = datetime(2030, 1, 7, 10, 0, tzinfo=timezone.utc)


def at(minute_offset: int, duration: int) -> TimeWindow:
    return TimeWindow.of(T10 + timedelta(minutes=minute_offset), duration)


def test_partial_overlap_is_detected_both_ways():
    a, b = at(0, 30), at(15, 30)
    assert a.overlaps(b)
    assert b.overlaps(a)


def test_shared_boundary_is_not_an_overlap():
    a, b = at(0, 30), at(30, 30)
    assert not a.overlaps(b)
    assert not b.overlaps(a)


def test_containment_is_an_overlap():
    assert at(0, 120).overlaps(at(30, 15))
    assert at(30, 15).overlaps(at(0, 120))


def test_end_is_start_plus_duration():
    assert at(0, 45).end == T10 + timedelta(minutes=45)


@pytest.mark.parametrize('duration', [0, -15])
def test_non_positive_duration_is_rejected(duration):
    with pytest.raises(InvalidWindow):
        TimeWindow.of(T10, duration)


def test_missing_start_is_rejected():
    with pytest.raises(InvalidWindow):
        TimeWindow.of(None, 30)


def test_first_overlap_returns_clashing_key():
    booked = [('early', at(-60, 30)), ('clash', at(20, 30)), ('later', at(25, 10))]
    assert first_overlap(at(0, 30), booked) == 'clash'


def test_first_overlap_none_when_free():
    booked = [('before', at(-30, 30)), ('after', at(30, 30))]
    assert first_overlap(at(0, 30), booked) is None
