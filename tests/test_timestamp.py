import time

from layerlog.timestamp import TimeStamp, start_time


def test_explicit_fields():
    ts = TimeStamp(5, 2500)
    assert ts.seconds == 5
    assert ts.microseconds == 2500
    assert ts.milliseconds() == 2


def test_default_microseconds():
    assert TimeStamp(7).microseconds == 0
    assert TimeStamp(7).milliseconds() == 0


def test_now_matches_clock():
    before = time.time()
    ts = TimeStamp.now()
    after = time.time()
    assert 0 <= ts.microseconds < 1_000_000
    value = ts.seconds + ts.microseconds / 1e6
    assert before - 0.001 <= value <= after + 0.001


def test_milliseconds_is_microseconds_div_1000():
    ts = TimeStamp.now()
    assert ts.milliseconds() == ts.microseconds // 1000


def test_start_time_is_fixed_and_earlier():
    first = start_time()
    assert start_time() is first
    assert first <= TimeStamp.now()