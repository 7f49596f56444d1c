#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fill in position elevations from TomTom's digital elevation model service.

The watch doesn't record elevation. The service takes a plain text list of
``[ lat, lon ]`` pairs and answers with a same-length array of elevations
in metres.

"""
import json
import logging

import requests

from ttbinio._util.exceptions import ElevationDownloadError


logger = logging.getLogger(__name__)

ELEVATION_URL = 'https://mysports.tomtom.com/tyne/dem/fixmodel'
ELEVATION_TIMEOUT = 60   # seconds

HEADERS = {
    'Content-Type': 'text/plain',
    'User-Agent': 'TomTom',
}


def format_coordinates(coordinates):
    """Build the request body for a sequence of (lat, lon) pairs."""
    rows = ',\n'.join('   [ %f, %f ]' % pair for pair in coordinates)
    return '[\n%s\n]\n' % rows if rows else '[\n]\n'


def parse_elevations(text):
    """The response is a flat JSON array of numbers."""
    try:
        values = json.loads(text)
    except ValueError as e:
        raise ElevationDownloadError('malformed elevation response') from e

    if not isinstance(values, list):
        raise ElevationDownloadError('expected an array of elevations')
    try:
        return [float(value) for value in values]
    except (TypeError, ValueError) as e:
        raise ElevationDownloadError('non-numeric elevation value') from e


def download_elevation(activity_file, *, url=ELEVATION_URL, session=None,
                       timeout=ELEVATION_TIMEOUT):
    """Download elevations for every position record, updating them in place.

    Parameters
    ----------
    activity_file : ActivityFile
        Decoded file; only its position records are touched.
    url : str, optional
        Elevation service endpoint.
    session : requests.Session, optional
        Anything with a compatible ``post`` method. A fresh session is used
        if not given.
    timeout : float, optional
        Seconds to wait for the service.

    Returns
    -------
    int
        The number of position records that received an elevation.

    Raises
    ------
    ElevationDownloadError
        If the request fails or the response can't be understood.
    """
    coordinates = activity_file.coordinates()
    if not coordinates:
        return 0

    body = format_coordinates(coordinates)
    poster = session if session is not None else requests.Session()

    try:
        response = poster.post(url, data=body.encode('ascii'),
                               headers=HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ElevationDownloadError(
            'unable to download elevation data: %s' % e) from e
    finally:
        if session is None:
            poster.close()

    elevations = parse_elevations(response.text)
    if len(elevations) != len(coordinates):
        logger.warning('asked for %d elevations but got %d',
                       len(coordinates), len(elevations))

    return activity_file.set_elevations(elevations)
