#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Time-indexed series and the heart rate merge.

"""
import pytest

from ttbinio import ttbin
from ttbinio.ttbin import _protocol
from ttbinio.ttbin._assembly import (
    MergeTarget, SIGNAL_LOST, TimeIndexedAssembler, TimeSeries)
from ttbinio.ttbin.test import streams
from ttbinio.ttbin.test.streams import T0
from ttbinio._util.exceptions import ResourceLimitExceededError


def decode(*records, **kwargs):
    return ttbin.decode(streams.header() + b''.join(records), **kwargs)


def test_run_with_heart_rate():
    lengths = {
        _protocol.TAG_POSITION: 29,
        _protocol.TAG_HEART_RATE: 7,
        _protocol.TAG_SUMMARY: 12,
    }
    data = (streams.header(lengths)
            + streams.summary(0, 1000.0, 599, 120, lengths=lengths)
            + streams.position(T0, 51.5007292, -0.1246254, lengths=lengths)
            + streams.position(T0 + 5, 51.5010852, -0.1241321,
                               lengths=lengths)
            + streams.heart_rate(T0 + 5, 140, lengths=lengths))
    activity = ttbin.decode(data)

    assert activity.activity is ttbin.Activity.RUNNING
    assert activity.has_heart_rate

    positions = activity.position_records
    assert len(positions) == 6
    assert positions[0].latitude == pytest.approx(51.5007292)
    assert positions[0].longitude == pytest.approx(-0.1246254)
    assert positions[5].latitude == pytest.approx(51.5010852)
    assert positions[5].longitude == pytest.approx(-0.1241321)
    assert positions[5].timestamp == T0 + 5
    assert positions[5].heart_rate == 140
    assert positions[0].heart_rate is None

    for empty in positions[1:5]:
        assert empty.is_empty
        assert empty == ttbin.PositionRecord()
        assert empty.latitude == 0 and empty.timestamp == 0


def test_position_scaling():
    activity = decode(streams.position(
        T0, 52.0, -1.0, heading=9000, speed=345, calories=12,
        inc_distance=2.5, cum_distance=100.0, cycles=3))
    record, = activity.position_records

    assert record.heading == 90.0
    assert record.speed == 3.45
    assert record.elevation == 0.0
    assert record.calories == 12
    assert record.inc_distance == 2.5
    assert record.cum_distance == 100.0
    assert record.cycles == 3


def test_signal_lost_after_first_fix():
    activity = decode(streams.position(T0, 52.0, -1.0),
                      streams.position(SIGNAL_LOST, 10.0, 10.0))

    assert len(activity.position_records) == 1
    assert activity.position_records[0].latitude == pytest.approx(52.0)


def test_signal_lost_before_first_fix():
    # The lost-fix sample must not become the baseline.
    activity = decode(streams.position(SIGNAL_LOST, 10.0, 10.0),
                      streams.position(T0, 52.0, -1.0),
                      streams.position(T0 + 1, 52.1, -1.0))

    assert len(activity.position_records) == 2
    assert activity.position_records[0].timestamp == T0


def test_each_series_has_its_own_baseline():
    activity = decode(streams.swim(T0 + 100, 25.0, 10, 1, 5),
                      streams.treadmill(T0, 3.0, 1, 4),
                      streams.swim(T0 + 103, 50.0, 11, 2, 9),
                      streams.treadmill(T0 + 2, 6.0, 2, 8))

    swims = activity.swim_records
    assert len(swims) == 4
    assert swims[3] == ttbin.SwimRecord(
        timestamp=T0 + 103, total_distance=50.0, strokes=11,
        completed_laps=2, total_calories=9)
    assert swims[1].is_empty and swims[2].is_empty

    treads = activity.treadmill_records
    assert len(treads) == 3
    assert treads[2].steps == 8
    assert treads[2].distance == 6.0


def test_same_second_overwrites():
    activity = decode(streams.position(T0, 52.0, -1.0, speed=100),
                      streams.position(T0, 53.0, -2.0, speed=200))

    record, = activity.position_records
    assert record.latitude == pytest.approx(53.0)
    assert record.speed == 2.0


def test_sample_before_baseline_is_dropped():
    activity = decode(streams.position(T0 + 10, 52.0, -1.0),
                      streams.position(T0 + 5, 53.0, -2.0))
    assert len(activity.position_records) == 1
    assert activity.position_records[0].timestamp == T0 + 10


def test_heart_rate_without_somewhere_to_go():
    activity = decode(streams.heart_rate(T0, 120),
                      streams.heart_rate(T0 + 1, 121))

    assert activity.has_heart_rate
    assert activity.position_records == []
    assert activity.treadmill_records == []


def test_heart_rate_into_treadmill():
    activity = decode(streams.treadmill(T0, 3.0, 1, 4),
                      streams.heart_rate(T0, 120),
                      streams.heart_rate(T0 + 3, 125))

    treads = activity.treadmill_records
    assert len(treads) == 4
    assert treads[0].heart_rate == 120
    assert treads[0].steps == 4
    # Filled from the heart rate alone, so the time is derived.
    assert treads[3].heart_rate == 125
    assert treads[3].timestamp == T0 + 3
    assert treads[3].steps == 0
    assert treads[1].is_empty


def test_heart_rate_with_its_own_clock():
    # Heart rate in local time, GPS in UTC: the clocks don't overlap, so
    # the first heart rate sample lines up with the first position.
    local = T0 + 3600
    activity = decode(streams.position(T0, 52.0, -1.0),
                      streams.position(T0 + 1, 52.0, -1.0),
                      streams.heart_rate(local, 100),
                      streams.heart_rate(local + 2, 102))

    positions = activity.position_records
    assert len(positions) == 3
    assert [rec.heart_rate for rec in positions] == [100, None, 102]
    assert positions[0].timestamp == T0     # untouched
    assert positions[2].timestamp == T0 + 2


def test_merge_target_is_latched():
    activity = ttbin.ActivityFile()
    assembler = TimeIndexedAssembler(activity)
    assert assembler.merge_target is MergeTarget.NONE

    assembler.add_swim(T0, total_distance=25.0)
    assert assembler.merge_target is MergeTarget.NONE

    assembler.add_treadmill(T0, distance=1.0)
    assembler.add_position(T0, latitude=1.0)
    assert assembler.merge_target is MergeTarget.TREADMILL

    assembler.add_heart_rate(T0, 99)
    assert activity.treadmill_records[0].heart_rate == 99
    assert activity.position_records[0].heart_rate is None


def test_series_growth_is_capped():
    data = [streams.position(T0, 52.0, -1.0),
            streams.position(T0 + 1000, 52.0, -1.0)]

    assert len(decode(*data, max_series_length=1001).position_records) == 1001
    with pytest.raises(ResourceLimitExceededError) as excinfo:
        decode(*data, max_series_length=1000)
    assert excinfo.value.index == 1000


def test_wild_heart_rate_is_capped_too():
    data = [streams.treadmill(T0, 3.0, 1, 4),
            streams.heart_rate(T0, 120),
            streams.heart_rate(0xFFFFFFF0, 125)]
    with pytest.raises(ResourceLimitExceededError):
        decode(*data)


def test_time_series_grow():
    records = []
    series = TimeSeries('swim', ttbin.SwimRecord, records, max_length=10)
    assert not series.covers(T0)

    series.place(T0 + 2, strokes=1)
    series.place(T0 + 4, strokes=3)

    assert len(series) == len(records) == 3
    assert series.baseline == T0 + 2
    assert series.covers(T0 + 4) and not series.covers(T0 + 5)

    filler = series.slot(6)
    assert filler.is_empty
    assert len(records) == 7


def test_heart_rate_before_position_survives():
    activity = decode(streams.position(T0, 52.0, -1.0),
                      streams.heart_rate(T0, 120),
                      streams.heart_rate(T0 + 1, 121),
                      streams.position(T0 + 1, 52.1, -1.1, speed=250))

    record = activity.position_records[1]
    assert record.heart_rate == 121
    assert record.latitude == pytest.approx(52.1)
    assert record.speed == 2.5
    assert record.timestamp == T0 + 1


def test_heart_rate_before_treadmill_survives():
    activity = decode(streams.treadmill(T0, 3.0, 1, 4),
                      streams.heart_rate(T0, 120),
                      streams.heart_rate(T0 + 1, 121),
                      streams.treadmill(T0 + 1, 6.0, 2, 8))

    assert activity.treadmill_records[1] == ttbin.TreadmillRecord(
        timestamp=T0 + 1, distance=6.0, calories=2, steps=8, heart_rate=121)


def test_heart_rate_keeps_populated_timestamp():
    # Heart rate on its own (local) clock lands on a slot that already
    # holds a fix; the fix's own fields and time stay as written.
    local = T0 + 3600
    activity = decode(streams.position(T0, 52.0, -1.0),
                      streams.position(T0 + 1, 52.1, -1.1, speed=300),
                      streams.heart_rate(local + 10, 100),
                      streams.heart_rate(local + 11, 101))

    record = activity.position_records[1]
    assert record.heart_rate == 101
    assert record.timestamp == T0 + 1
    assert record.latitude == pytest.approx(52.1)
    assert record.speed == 3.0
    assert activity.position_records[0].heart_rate == 100
    assert activity.position_records[0].timestamp == T0
