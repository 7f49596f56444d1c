#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from functools import wraps

from pandas import DataFrame, Series

from ttbinio._util import exceptions


__all__ = ('DataFrameSubclass', 'SeriesSubclass',  # using * import elsewhere
           'series_property', 'new_column_sugar')


class _Subclassed:
    """Keep pandas operations returning our own types."""
    _metadata = []

    @property
    def _constructor(self):
        return self.__class__

    def __finalize__(self, other, method=None, **kwargs):
        """Propagate metadata from other to self."""
        for name in self._metadata:
            object.__setattr__(self, name, getattr(other, name, None))
        return self


class DataFrameSubclass(_Subclassed, DataFrame):
    pass


class SeriesSubclass(_Subclassed, Series):
    pass


class series_property:
    """A simple descriptor that emulates property, but returns a Series."""
    def __init__(self, fget):
        self.fget = fget
        self.__doc__ = fget.__doc__

    def __get__(self, obj, objtype=None):
        if obj is None:     # looked up on the class
            return self
        return Series(self.fget(obj))


def new_column_sugar(needs: tuple, name=None):
    """Decorator for certain methods of ActivityData that create new columns
    using the special column types.

    Raises `RequiredColumnError` if a column named in `needs` is missing.
    """
    def real_decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            missing = [need for need in needs if need not in self]
            if missing:
                raise exceptions.RequiredColumnError(missing[0])
            return Series(func(self, *args, **kwargs),
                          index=self.index, name=name)
        return wrapper
    return real_decorator
