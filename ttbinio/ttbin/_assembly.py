#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reassemble time series samples into sparse, second-by-second arrays.

Position, treadmill and swim samples each carry an absolute device
timestamp. The first timestamp seen for a series becomes its baseline, and
every sample of that series is stored at ``timestamp - baseline``. Gaps are
filled with zero-valued records so that, for every series,
``len(records) == highest index written + 1``.

Heart rate samples never get a series of their own. They are folded into
whichever of the position or treadmill series received data first (the
"merge target").

"""
from enum import Enum
import logging

from ttbinio.ttbin._records import PositionRecord, SwimRecord, TreadmillRecord
from ttbinio._util.exceptions import ResourceLimitExceededError


logger = logging.getLogger(__name__)

SIGNAL_LOST = 0xFFFFFFFF    # position timestamp written when GPS fix is lost

MAX_SERIES_LENGTH = 7 * 24 * 60 * 60   # a week of 1 Hz samples


class MergeTarget(Enum):
    NONE = 'none'
    POSITION = 'position'
    TREADMILL = 'treadmill'


class TimeSeries:
    """A sparse array of records keyed by seconds since the first sample.

    Attributes
    ----------
    records : list
        The backing list, shared with the `ActivityFile` being built.
    record_cls : type
        Used to create zero-valued filler records.
    baseline : int or None
        Timestamp of the first sample, ``None`` until one arrives.
    max_length : int
        Growing the list beyond this many records raises
        `ResourceLimitExceededError`.
    """
    __slots__ = ('name', 'records', 'record_cls', 'baseline', 'max_length')

    def __init__(self, name, record_cls, records, *, max_length):
        self.name = name
        self.record_cls = record_cls
        self.records = records
        self.baseline = None
        self.max_length = max_length

    def __len__(self):
        return len(self.records)

    def covers(self, timestamp):
        """Does `timestamp` fall inside the span recorded so far?"""
        if self.baseline is None:
            return False
        return self.baseline <= timestamp < self.baseline + len(self.records)

    def place(self, timestamp, **fields):
        """Store a new record for `timestamp`, replacing any previous one.

        A heart rate already merged into the slot is carried over, since it
        isn't part of the sample itself.

        Returns the stored record, or ``None`` if the sample predates the
        baseline and had to be dropped.
        """
        if self.baseline is None:
            self.baseline = timestamp

        index = timestamp - self.baseline
        if index < 0:
            logger.warning('dropping %s sample %d s before the series start',
                           self.name, -index)
            return None

        self.grow(index)
        record = self.record_cls(timestamp=timestamp, **fields)
        merged = getattr(self.records[index], 'heart_rate', None)
        if merged is not None:
            record.heart_rate = merged
        self.records[index] = record
        return record

    def slot(self, index):
        """The record at `index`, growing the series if necessary."""
        self.grow(index)
        return self.records[index]

    def grow(self, index):
        """Make sure `index` is addressable, zero-filling any new slots."""
        if index >= self.max_length:
            raise ResourceLimitExceededError(index, self.max_length)

        missing = index + 1 - len(self.records)
        if missing > 0:
            self.records.extend(self.record_cls() for _ in range(missing))


class TimeIndexedAssembler:
    """Route time series samples into an `ActivityFile` under construction.

    Parameters
    ----------
    activity_file : ActivityFile
        Its position, treadmill and swim lists are filled in place.
    max_series_length : int, optional
        Ceiling on the length of any one series.
    """

    def __init__(self, activity_file, *, max_series_length=MAX_SERIES_LENGTH):
        self.activity_file = activity_file

        def series(name, record_cls):
            records = getattr(activity_file, name + '_records')
            return TimeSeries(name, record_cls, records,
                              max_length=max_series_length)

        self.positions = series('position', PositionRecord)
        self.treadmill = series('treadmill', TreadmillRecord)
        self.swim = series('swim', SwimRecord)

        self.heart_rate_baseline = None
        self.merge_target = MergeTarget.NONE

    def add_position(self, timestamp, **fields):
        if timestamp == SIGNAL_LOST:
            logger.debug('GPS signal lost; position sample dropped')
            return
        if self.positions.place(timestamp, **fields) is not None:
            self._latch(MergeTarget.POSITION)

    def add_treadmill(self, timestamp, **fields):
        if self.treadmill.place(timestamp, **fields) is not None:
            self._latch(MergeTarget.TREADMILL)

    def add_swim(self, timestamp, **fields):
        self.swim.place(timestamp, **fields)

    def add_heart_rate(self, timestamp, heart_rate):
        """Merge a heart rate sample into the merge target, if there is one.

        The heart rate clock has its own baseline, set by the first heart
        rate sample. When that first sample lands inside the span already
        recorded by the merge target, both clocks are taken to be the same
        and the target's baseline is adopted instead.
        """
        self.activity_file.has_heart_rate = True
        target = self.target_series

        if self.heart_rate_baseline is None:
            # A first sample inside the target's span shares its clock, so
            # it belongs at the same offset (T0 + 5 -> slot 5), not slot 0.
            if target is not None and target.covers(timestamp):
                self.heart_rate_baseline = target.baseline
            else:
                self.heart_rate_baseline = timestamp

        if target is None:
            logger.debug('no position or treadmill data yet; '
                         'heart rate sample dropped')
            return

        index = timestamp - self.heart_rate_baseline
        if index < 0:
            logger.warning('dropping heart rate sample %d s before the '
                           'series start', -index)
            return

        record = target.slot(index)
        if not record.timestamp:   # unpopulated slot
            record.timestamp = target.baseline + index
        record.heart_rate = heart_rate

    @property
    def target_series(self):
        return {MergeTarget.POSITION: self.positions,
                MergeTarget.TREADMILL: self.treadmill,
                }.get(self.merge_target)

    def _latch(self, target):
        if self.merge_target is MergeTarget.NONE:
            logger.debug('heart rate will be merged into %s data',
                         target.value)
            self.merge_target = target
