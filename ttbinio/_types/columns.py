#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import numpy as np
from pandas import Timedelta

from ttbinio._types.base import SeriesSubclass, series_property


REGISTRY = {}    # grows at import-time via the below metaclass


class SpecialRegistrar(type):
    def __init__(cls, name, bases, namespace):
        if 'colname' in namespace:
            REGISTRY[cls.colname] = cls
        super().__init__(name, bases, namespace)


class SpecialColumn(SeriesSubclass, metaclass=SpecialRegistrar):
    # colname and base_unit are class attributes; nothing to propagate.
    _metadata = []

    def __init__(self, data=None, *args, **kwargs):
        super().__init__(data, *args, **kwargs)
        self.name = type(self).colname


# ----------------------------------------------------------
# NOTE: subclasses should follow the structure...
#   + classmethods (i.e. alternative constructors; private!)
#   + general methods
#   + properties
# ----------------------------------------------------------


class Altitude(SpecialColumn):
    colname = 'alt'
    base_unit = 'm'

    @property
    def ascent(self):
        deltas = self.diff()
        return type(self)(np.where(deltas > 0, deltas, 0), index=self.index)

    @series_property
    def ft(self):
        """ metres --> feet """
        return self * 3.28084


class Calories(SpecialColumn):
    colname = 'cal'
    base_unit = 'kcal'


class Distance(SpecialColumn):
    colname = 'dist'
    base_unit = 'm'

    @series_property
    def km(self):
        """ metres --> kilometres """
        return self / 1000

    @series_property
    def miles(self):
        """ metres --> miles """
        return self / 1000 * 0.621371


class Heading(SpecialColumn):
    colname = 'heading'
    base_unit = 'degrees'

    @series_property
    def radians(self):
        """ degrees --> radians """
        return np.radians(self)


class HeartRate(SpecialColumn):
    colname = 'hr'
    base_unit = 'bpm'


class LonLat(SpecialColumn):
    base_unit = 'degrees'

    @series_property
    def radians(self):
        """ degrees --> radians """
        return np.radians(self)


class Longitude(LonLat):
    colname = 'lon'


class Latitude(LonLat):
    colname = 'lat'


class Pace(SpecialColumn):
    colname = 'pace'
    base_unit = 'sec/m'

    @series_property
    def min_per_km(self):
        return self * 1000

    @series_property
    def min_per_mile(self):
        return self * 1000 / 1.61


class Speed(SpecialColumn):
    colname = 'speed'
    base_unit = 'm/s'

    def to_pace(self):
        tds = (1 / self).apply(Timedelta, args=('s',))
        return Pace(tds)

    @series_property
    def kph(self):
        """ metres/second --> kilometres/hour """
        return self * 60**2 / 1000

    @property
    def mph(self):
        """ metres/second --> miles/hour """
        return self.kph / 1.61    # self.kph is already a Series


class Steps(SpecialColumn):
    colname = 'steps'
    base_unit = '#'


class Strokes(SpecialColumn):
    colname = 'strokes'
    base_unit = '#'
