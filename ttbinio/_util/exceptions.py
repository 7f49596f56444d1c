#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions for this package.

"""


class TTBinError(Exception):
    """Base exception."""
    _default_message = ''

    def __init__(self, message=None):
        super().__init__(message if message else self._default_message)


class InvalidFileError(TTBinError):
    def __init__(self, fmt='ttbin'):
        determiner = 'an' if fmt[0] in 'aeiou' else 'a'  # grammar
        message = "this doesn't look like %s %s file!" % (determiner, fmt)
        super().__init__(message)


class RequiredColumnError(TTBinError):
    def __init__(self, column, cls=None):
        if cls is None:
            message = '{!r} column not found'.format(column)
        else:
            message = '{!r} column should be of type {!s}'.format(column, cls)
        super().__init__(message)


# Exceptions raised while decoding a record stream
# ------------------------------------------------
class StreamError(TTBinError):
    """Something is wrong at a particular place in the byte stream."""

    def __init__(self, message=None, *, offset=None, tag=None):
        self.offset, self.tag = offset, tag
        message = message or self._default_message
        if tag is not None:
            message += ' (tag 0x%02x)' % tag
        if offset is not None:
            message += ' at byte %d' % offset
        super().__init__(message)


class MalformedStreamError(StreamError):
    _default_message = 'malformed record stream'


class TruncatedRecordError(StreamError):
    _default_message = 'record runs past the end of the data'


class ResourceLimitExceededError(TTBinError):
    def __init__(self, index, limit):
        self.index, self.limit = index, limit
        message = ('sample index %d exceeds the series limit of %d'
                   % (index, limit))
        super().__init__(message)


# Exceptions specific to elevation downloads
# ------------------------------------------
class ElevationDownloadError(TTBinError):
    _default_message = 'unable to download elevation data'
