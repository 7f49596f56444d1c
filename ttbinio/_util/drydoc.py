#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Avoid repeating documentation. A bit hacky but it will do.

"""


def gen_records(func):
    """Generator function for iterating over individual file records.

    "Records" are dictionary objects representing a single "sample" of data;
    i.e. a row in a tabular representation. Note this can be passed to
    the `from_records` constructor method of `pandas.DataFrame`s.
    """
    func.__doc__ = gen_records.__doc__
    return func
