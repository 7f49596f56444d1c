#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
parse is installed as an executable console_script with this package.

"""
from argparse import ArgumentParser
import logging
import sys

from pandas import DataFrame

from ttbinio import tools, ttbin
from ttbinio.ttbin._elevation import ELEVATION_URL
from ttbinio.ttbin._reading import active_series, sample_rows
from ttbinio._util.exceptions import ElevationDownloadError, TTBinError


logger = logging.getLogger('ttbinio')


def parse(argv=None):

    # Argument handling
    parser = ArgumentParser(description='decode a TomTom ttbin file')

    parser.add_argument('input',
                        type=str,
                        help='raw file to read')
    parser.add_argument('--output',
                        type=str,
                        metavar='filename',
                        default=None,
                        help='optional; file to write to')
    parser.add_argument('--elevation',
                        action='store_true',
                        help='download elevation data for the positions')
    parser.add_argument('--elevation-url',
                        type=str,
                        default=ELEVATION_URL,
                        help='optional; elevation service to use')
    parser.add_argument('--max-samples',
                        type=int,
                        default=ttbin.MAX_SERIES_LENGTH,
                        help='optional; longest time series to accept')
    parser.add_argument('--name',
                        type=str,
                        metavar='ext',
                        default=None,
                        help='just print a descriptive filename with this '
                             'extension')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='log what the decoder is doing')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    # Script begins
    try:
        activity_file = ttbin.read_ttbin(
            args.input, max_series_length=args.max_samples)
    except (OSError, TTBinError) as e:
        logger.error('%s: %s', args.input, e)
        return 1

    if args.name is not None:
        print(tools.create_filename(activity_file, args.name))
        return 0

    if args.elevation:
        try:
            count = ttbin.download_elevation(activity_file,
                                             url=args.elevation_url)
        except ElevationDownloadError as e:
            logger.warning('%s; continuing without elevation', e)
        else:
            logger.info('elevation added to %d positions', count)

    data = to_frame(activity_file)
    if args.output is None:
        print(data.to_csv(index=False, na_rep='NA'))
    else:
        data.to_csv(args.output, index=False, na_rep='NA', encoding='utf-8')

    return 0


def to_frame(activity_file):
    """Flat table of the populated samples of the active series."""
    return DataFrame.from_records(
        list(sample_rows(*active_series(activity_file))))


if __name__ == '__main__':
    sys.exit(parse())
