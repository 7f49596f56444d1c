#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
General tools that complement the API.

"""
import numpy as np


EARTH_RADIUS = 6371e3   # metres

FILENAME_PREFIXES = {   # by Activity name
    'RUNNING': 'Running',
    'CYCLING': 'Cycling',
    'SWIMMING': 'Pool_swim',
    'TREADMILL': 'Treadmill',
    'FREESTYLE': 'Freestyle',
}


def haversine(lon, lat, *, fill=0):
    """Great-circle distances between two points on a sphere.

    Parameters
    ----------
    lon, lat: numpy arrays or lists
        Positional coordinates in *radians*.
    fill: scalar
        An appropriate missing value for the start.

    Returns
    -------
    numpy array
        Distance(s) between adjacent points in metres.

    Examples
    --------
        >>> dist = haversine(np.radians([-77.037852, -77.043934]),
        ...                  np.radians([38.898556, 38.897147]))
        >>> '{:.1f} metres'.format(dist[-1])  # ignoring the leading zero
        '549.2 metres'

    References
    ----------
    https://rosettacode.org/wiki/Haversine_formula#Python
    http://www.movable-type.co.uk/scripts/latlong.html
    """
    lon, lat = np.asarray(lon), np.asarray(lat)   # check
    dlon, dlat = np.diff(lon), np.diff(lat)

    a = (np.sin(dlat / 2)**2
         + np.cos(lat[:-1])
         * np.cos(lat[1:])
         * np.sin(dlon / 2)**2)

    c = 2 * np.arcsin(np.sqrt(a)) * EARTH_RADIUS

    return np.concatenate(([fill], c))


def bearing(lon, lat, *, fill=np.nan):
    """Initial bearing between adjacent positional coordinates.

    Handy for checking the heading recorded by the watch.

    Parameters
    ----------
    lon, lat: numpy arrays or lists
        Positional coordinates in *radians*.
    fill: scalar
        An appropriate missing value for the start.

    Returns
    -------
    numpy array
        Direction of travel in decimal degrees (N = 0, E = 90).

    References
    ----------
    http://www.movable-type.co.uk/scripts/latlong.html
    """
    lon, lat = np.asarray(lon), np.asarray(lat)   # check

    raw_bearing = np.arctan2(
        np.sin(np.diff(lon)) * np.cos(lat[1:]),
        np.cos(lat[:-1]) * np.sin(lat[1:]) -
        np.sin(lat[:-1]) * np.cos(lat[1:]) * np.cos(np.diff(lon)))

    bearing = (np.degrees(raw_bearing) + 360) % 360

    return np.concatenate(([fill], bearing))


def create_filename(activity_file, ext):
    """A display filename like ``Running_07-45-03.gpx``.

    Built from the activity kind and the file's local creation time.
    """
    prefix = FILENAME_PREFIXES.get(activity_file.activity.name, 'Unknown')
    return '{}_{:%H-%M-%S}.{}'.format(prefix, activity_file.start, ext)
