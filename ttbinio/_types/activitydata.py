#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import numpy as np
from pandas import Series, Timedelta, TimedeltaIndex, to_timedelta

from ttbinio import tools
from ttbinio._util import exceptions
from ttbinio._types import (
    DataFrameSubclass, new_column_sugar, special_columns)


class ActivityData(DataFrameSubclass):
    _metadata = ['start']

    def __getitem__(self, key):
        """Create the illusion of Series subclasses in the DataFrame."""
        item = super().__getitem__(key)
        try:
            return special_columns.REGISTRY[key](item)
        except (KeyError, TypeError):   # not special, or not hashable
            return item

    @property
    def time(self):   # makes accessing the index more readable
        if isinstance(self.index, TimedeltaIndex):
            return self.index
        else:
            # because recursion problems with super().__getattr__()
            raise AttributeError('index is not TimedeltaIndex')

    def recording_time(self, samplingfreq=1):
        """Time spent recording, ignoring gaps in the data."""
        dummy = Series(1, index=self.index)   # important: is filled!
        resampled = dummy.resample('%ds' % samplingfreq).mean()
        recording = np.logical_not(
            np.isnan(resampled.values))[1:]   # shorten for indexing diffs
        timediffs = np.diff(resampled.index.total_seconds())
        time_sec = timediffs[recording].sum()
        return Timedelta(seconds=time_sec)

    @new_column_sugar(needs=('lon', 'lat'), name='dists_m')
    def haversine(self, **kwargs):
        lon, lat = (self[ax].radians.values for ax in ('lon', 'lat'))
        return tools.haversine(lon, lat, **kwargs)

    @new_column_sugar(needs=('lon', 'lat'), name='bearing_deg')
    def bearing(self, **kwargs):
        lon, lat = (self[ax].radians.values for ax in ('lon', 'lat'))
        return tools.bearing(lon, lat, **kwargs)

    # Private methods
    # ---------------
    def _finish_up(self, *, column_spec, start=None, timeoffsets=None):
        """A pseudo-init method, used internally.

        `timeoffsets` are whole seconds since `start`.
        """
        for old_key, column_cls in column_spec.items():
            try:
                old_column = self.pop(old_key)  # no default
            except KeyError:
                continue

            new = column_cls(old_column)
            self[new.colname] = new

        self.start = start
        if timeoffsets is not None:
            self.index = TimedeltaIndex(
                to_timedelta(np.asarray(timeoffsets), unit='s'), name='time')

        # No point hanging on to completely empty columns!
        self.dropna(axis=1, how='all', inplace=True)

    def _try_get(self, key):
        """Try and get a required column from the data."""
        try:
            return self[key]
        except KeyError as e:
            raise exceptions.RequiredColumnError(key) from e
