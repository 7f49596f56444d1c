#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The decoded representation of a TTBIN file.

Every record class here is a plain container with ``__slots__``. Records
that live in a sparse, time-indexed series (position, treadmill and swim)
must be constructable with no arguments: an unpopulated slot in one of
those series is a zero-valued record, not ``None``.

"""
from datetime import datetime, timedelta
from enum import IntEnum


DATETIME_1970 = datetime(year=1970, month=1, day=1)


def device_time(seconds):
    """Raw device seconds --> naive datetime."""
    return DATETIME_1970 + timedelta(seconds=seconds)


class Activity(IntEnum):
    RUNNING = 0
    CYCLING = 1
    SWIMMING = 2
    TREADMILL = 7
    FREESTYLE = 8
    UNKNOWN = -1

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Status(IntEnum):
    READY = 0
    ACTIVE = 1
    PAUSED = 2
    STOPPED = 3


def to_status(code):
    """Unrecognised status codes are kept as plain integers."""
    try:
        return Status(code)
    except ValueError:
        return code


class Record:
    """Base class; attribute defaults are zero unless stated otherwise."""
    __slots__ = ()
    _defaults = {}

    def __init__(self, **kwargs):
        for name in self.__slots__:
            value = kwargs.pop(name, self._defaults.get(name, 0))
            setattr(self, name, value)
        if kwargs:
            raise TypeError('unexpected fields: %s' % ', '.join(kwargs))

    def __iter__(self):
        for name in self.__slots__:
            yield name, getattr(self, name)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __repr__(self):
        fields = ', '.join('%s=%r' % item for item in self)
        return '%s(%s)' % (type(self).__name__, fields)

    def update(self, **kwargs):
        for name, value in kwargs.items():
            setattr(self, name, value)

    @property
    def is_empty(self):
        """True for a slot that no sample has been written to."""
        return self == type(self)()


class StatusRecord(Record):
    __slots__ = ('status', 'activity', 'timestamp')

    @property
    def time(self):
        return device_time(self.timestamp)


class PositionRecord(Record):
    __slots__ = ('latitude', 'longitude', 'elevation', 'heading', 'speed',
                 'timestamp', 'calories', 'inc_distance', 'cum_distance',
                 'cycles', 'heart_rate')
    _defaults = {'heart_rate': None}   # only present once merged in


class TreadmillRecord(Record):
    __slots__ = ('timestamp', 'distance', 'calories', 'steps', 'heart_rate')
    _defaults = {'heart_rate': None}


class SwimRecord(Record):
    __slots__ = ('timestamp', 'total_distance', 'strokes', 'completed_laps',
                 'total_calories')


class LapRecord(Record):
    __slots__ = ('total_time', 'total_distance', 'total_calories')


class ActivityFile:
    """Everything decoded from one TTBIN file.

    Attributes
    ----------
    file_version, product_id : int
        Taken from the file header.
    firmware_version : bytes
        Four raw version bytes; see `firmware` for a readable version.
    timestamp : int
        Creation time of the file, in device-local seconds.
    activity : Activity
        From the summary record (``Activity.UNKNOWN`` until one is seen).
    total_distance, duration, total_calories : float, int, int
        Also from the summary record. `duration` is stored as written by
        the device.
    has_heart_rate : bool
        True if any heart rate record was present in the file.
    status_records, lap_records : list
        In stream order.
    position_records, treadmill_records, swim_records : list
        Sparse series, indexed by seconds since the first sample of each.
    """
    __slots__ = ('file_version', 'firmware_version', 'product_id',
                 'timestamp', 'activity', 'total_distance', 'duration',
                 'total_calories', 'has_heart_rate', 'status_records',
                 'position_records', 'treadmill_records', 'swim_records',
                 'lap_records')

    def __init__(self):
        self.file_version = 0
        self.firmware_version = bytes(4)
        self.product_id = 0
        self.timestamp = 0
        self.activity = Activity.UNKNOWN
        self.total_distance = 0.0
        self.duration = 0
        self.total_calories = 0
        self.has_heart_rate = False
        self.status_records = []
        self.position_records = []
        self.treadmill_records = []
        self.swim_records = []
        self.lap_records = []

    def __eq__(self, other):
        if not isinstance(other, ActivityFile):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name in self.__slots__)

    def __repr__(self):
        return ('<ActivityFile %s %s, %d positions, %d laps>'
                % (self.activity.name.lower(), self.start.isoformat(),
                   len(self.position_records), len(self.lap_records)))

    @property
    def start(self):
        return device_time(self.timestamp)

    @property
    def firmware(self):
        return '.'.join(str(b) for b in self.firmware_version)

    def coordinates(self):
        """(latitude, longitude) pairs, in position array order."""
        return [(rec.latitude, rec.longitude)
                for rec in self.position_records]

    def set_elevations(self, elevations):
        """Assign elevations to position records by array position.

        Surplus values are ignored; records beyond the end of `elevations`
        are left untouched. Returns the number of records updated.
        """
        count = 0
        for record, elevation in zip(self.position_records, elevations):
            record.elevation = elevation
            count += 1
        return count
