#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Translate the `_protocol` module functionality to be consistent with
this package's API.

"""
from math import nan

import pytz

from ttbinio.ttbin._protocol import TAG_FILE_HEADER, decode
from ttbinio.ttbin._records import device_time
from ttbinio._types import ActivityData, special_columns
from ttbinio._util import drydoc, exceptions


# Meaningless without a GPS fix.
FIX_FIELDS = ('latitude', 'longitude', 'speed', 'heading')

COLUMN_SPECS = {
    'position': {
        'cum_distance': special_columns.Distance,
        'calories': special_columns.Calories,
        'elevation': special_columns.Altitude,
        'heading': special_columns.Heading,
        'heart_rate': special_columns.HeartRate,
        'latitude': special_columns.Latitude,
        'longitude': special_columns.Longitude,
        'speed': special_columns.Speed,
    },
    'treadmill': {
        'calories': special_columns.Calories,
        'distance': special_columns.Distance,
        'heart_rate': special_columns.HeartRate,
        'steps': special_columns.Steps,
    },
    'swim': {
        'strokes': special_columns.Strokes,
        'total_calories': special_columns.Calories,
        'total_distance': special_columns.Distance,
    },
}


def read_ttbin(file_path, **kwargs):
    """Read and decode a TTBIN file; `kwargs` are passed to `decode`."""
    with open(file_path, 'rb') as reader:
        data = reader.read()

    if data[:1] != bytes([TAG_FILE_HEADER]):
        raise exceptions.InvalidFileError('ttbin')

    return decode(data, **kwargs)


def active_series(activity_file):
    """Name and records of the first non-empty time series."""
    for name in COLUMN_SPECS:
        records = getattr(activity_file, name + '_records')
        if records:
            return name, records
    return None, []


def sample_rows(name, records):
    """Populated slots as dicts.

    Position slots filled only by a heart rate sample have no fix; their
    coordinates are NaN rather than (0, 0).
    """
    for record in records:
        if record.is_empty:
            continue
        row = dict(record)
        if name == 'position' and not (row['latitude'] or row['longitude']):
            row.update((field, nan) for field in FIX_FIELDS)
        yield row


@drydoc.gen_records
def gen_records(file_path):
    yield from sample_rows(*active_series(read_ttbin(file_path)))


def read_and_format(file_path, *, tz_str=None):
    activity_file = read_ttbin(file_path)
    name, records = active_series(activity_file)

    data = ActivityData.from_records(list(sample_rows(name, records)))

    if 'timestamp' not in data:    # nothing recorded
        data._finish_up(column_spec={})
        return data

    timestamps = data.pop('timestamp')
    tstart = device_time(int(timestamps.iloc[0]))

    # Only GPS time is UTC; everything else is already local.
    if name == 'position' and tz_str is not None:
        tstart += pytz.timezone(tz_str).utcoffset(tstart)

    data._finish_up(column_spec=COLUMN_SPECS[name],
                    start=tstart,
                    timeoffsets=(timestamps - timestamps.iloc[0]).values)

    return data
