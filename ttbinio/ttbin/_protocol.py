#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Implement the TTBIN record stream.

A TTBIN file is a sequence of records, each introduced by a one byte tag.
The first record is always the file header, which (besides some version
information) declares the total length of every other record kind that may
follow:

    ======  ===================  ==========================================
    Bytes   Field                Description
    ======  ===================  ==========================================
      1     tag                  0x20
      1     file_version
      4     firmware_version     One byte per version component
      2     product_id
      4     timestamp            Device-local seconds since 1970
     105    (reserved)
      1     length_count         Number of (tag, length) pairs to follow
     3*n    record lengths       uint8 tag, uint16 length (tag included)
    ======  ===================  ==========================================

Everything is little endian and packed. Every other record is skipped using
its declared length, which is what lets newer firmware add record kinds
without breaking older readers.

"""
import logging
from struct import calcsize, pack, unpack, unpack_from

from ttbinio.ttbin._assembly import MAX_SERIES_LENGTH, TimeIndexedAssembler
from ttbinio.ttbin._records import (
    Activity, ActivityFile, LapRecord, StatusRecord, to_status)
from ttbinio._util.exceptions import (
    MalformedStreamError, TruncatedRecordError)


logger = logging.getLogger(__name__)

TAG_FILE_HEADER = 0x20
TAG_STATUS = 0x21
TAG_POSITION = 0x22
TAG_HEART_RATE = 0x25
TAG_SUMMARY = 0x27
TAG_LAP = 0x2f
TAG_TREADMILL = 0x32
TAG_SWIM = 0x34

RECORD_LENGTH_FMT = '<BH'


class RecordLayout:
    """A fixed, packed record body (the tag byte is not included)."""
    __slots__ = ('name', 'fmt', 'fields', 'size')

    def __init__(self, name, fmt, fields):
        self.name = name
        self.fmt = fmt
        self.fields = fields
        self.size = calcsize(fmt)

    def unpack(self, body):
        return dict(zip(self.fields, unpack_from(self.fmt, body)))


FILE_HEADER = RecordLayout(
    'file header', '<B4sHI105xB',
    ('file_version', 'firmware_version', 'product_id', 'timestamp',
     'length_count'))

SUMMARY = RecordLayout(
    'summary', '<BfIH', ('activity', 'distance', 'duration', 'calories'))

STATUS = RecordLayout(
    'status', '<BBI', ('status', 'activity', 'timestamp'))

POSITION = RecordLayout(
    'position', '<iiHHIHffB',
    ('latitude',        # degrees * 1e7
     'longitude',       # degrees * 1e7
     'heading',         # degrees * 100, N = 0, E = 9000
     'speed',           # m/s * 100
     'timestamp',       # GPS time (UTC)
     'calories',
     'inc_distance',    # metres
     'cum_distance',    # metres
     'cycles'))         # steps/strokes/revolutions

HEART_RATE = RecordLayout(
    'heart rate', '<BxI', ('heart_rate', 'timestamp'))

LAP = RecordLayout(
    'lap', '<IfH', ('total_time', 'total_distance', 'total_calories'))

TREADMILL = RecordLayout(
    'treadmill', '<IfHIxx', ('timestamp', 'distance', 'calories', 'steps'))

SWIM = RecordLayout(
    'swim', '<IfxxIIH',
    ('timestamp', 'total_distance', 'strokes', 'completed_laps',
     'total_calories'))


class RecordLengths:
    """The total on-disk length of each record kind, keyed by tag."""
    __slots__ = ('_lengths',)

    def __init__(self, pairs=()):
        self._lengths = {}
        for tag, length in pairs:
            self._lengths[tag] = length     # last one wins

    @classmethod
    def from_bytes(cls, raw):
        size = calcsize(RECORD_LENGTH_FMT)
        return cls(unpack_from(RECORD_LENGTH_FMT, raw, offset)
                   for offset in range(0, len(raw) - size + 1, size))

    def to_bytes(self):
        return b''.join(pack(RECORD_LENGTH_FMT, tag, length)
                        for tag, length in self)

    def lookup(self, tag):
        """Declared length for `tag`, or ``None`` if it was not declared."""
        return self._lengths.get(tag)

    def __contains__(self, tag):
        return tag in self._lengths

    def __iter__(self):
        return iter(self._lengths.items())

    def __len__(self):
        return len(self._lengths)

    def __eq__(self, other):
        if not isinstance(other, RecordLengths):
            return NotImplemented
        return self._lengths == other._lengths

    def __repr__(self):
        pairs = ', '.join('0x%02x: %d' % item for item in self)
        return 'RecordLengths({%s})' % pairs


class ByteStream:
    """A read cursor over an immutable, in-memory buffer."""
    __slots__ = ('data', 'offset')

    def __init__(self, data):
        self.data = bytes(data)
        self.offset = 0

    @property
    def bytes_left(self):
        return len(self.data) - self.offset

    def read(self, size, *, tag=None):
        """Consume `size` bytes, refusing to run past the end."""
        if size > self.bytes_left:
            raise TruncatedRecordError(offset=self.offset, tag=tag)
        start = self.offset
        self.offset += size
        return self.data[start:self.offset]

    def read_tag(self):
        tag, = unpack('<B', self.read(1))
        return tag


class DecodeState:
    """Everything that changes while a buffer is being decoded."""
    __slots__ = ('stream', 'lengths', 'activity_file', 'assembler')

    def __init__(self, data, *, max_series_length=MAX_SERIES_LENGTH):
        self.stream = ByteStream(data)
        self.lengths = None     # set by the file header
        self.activity_file = ActivityFile()
        self.assembler = TimeIndexedAssembler(
            self.activity_file, max_series_length=max_series_length)


def read_file_header(state, tag_offset):
    """Read the file header and its record length table.

    The header is the only record whose size does not come from the table.
    """
    if state.lengths is not None:
        raise MalformedStreamError('file header out of position',
                                   offset=tag_offset, tag=TAG_FILE_HEADER)

    stream = state.stream
    header = FILE_HEADER.unpack(
        stream.read(FILE_HEADER.size, tag=TAG_FILE_HEADER))

    count = header.pop('length_count')
    raw_lengths = stream.read(count * calcsize(RECORD_LENGTH_FMT),
                              tag=TAG_FILE_HEADER)
    state.lengths = RecordLengths.from_bytes(raw_lengths)
    logger.debug('record lengths: %r', state.lengths)

    activity_file = state.activity_file
    for name, value in header.items():
        setattr(activity_file, name, value)


def read_record(state, tag, tag_offset):
    """Decode one (non-header) record and move past it."""
    length = state.lengths.lookup(tag)
    if length is None or length < 1:
        raise MalformedStreamError('no length declared for record',
                                   offset=tag_offset, tag=tag)

    body = state.stream.read(length - 1, tag=tag)  # tag already consumed

    try:
        layout, handler = RECORD_HANDLERS[tag]
    except KeyError:
        logger.debug('skipping unknown record 0x%02x (%d bytes)', tag, length)
        return

    if len(body) < layout.size:
        raise MalformedStreamError(
            '%s record declared shorter than %d bytes'
            % (layout.name, layout.size + 1), offset=tag_offset, tag=tag)

    handler(state, layout.unpack(body))


# Record handlers
# ---------------
def handle_summary(state, fields):
    activity_file = state.activity_file
    activity_file.activity = Activity(fields['activity'])
    activity_file.total_distance = fields['distance']
    activity_file.duration = fields['duration']    # as written; see DESIGN.md
    activity_file.total_calories = fields['calories']


def handle_status(state, fields):
    state.activity_file.status_records.append(StatusRecord(
        status=to_status(fields['status']),
        activity=Activity(fields['activity']),
        timestamp=fields['timestamp']))


def handle_position(state, fields):
    fields.update(latitude=fields['latitude'] / 1e7,
                  longitude=fields['longitude'] / 1e7,
                  heading=fields['heading'] / 100,
                  speed=fields['speed'] / 100,
                  elevation=0.0)   # filled in later, if at all
    state.assembler.add_position(fields.pop('timestamp'), **fields)


def handle_heart_rate(state, fields):
    state.assembler.add_heart_rate(fields['timestamp'], fields['heart_rate'])


def handle_lap(state, fields):
    state.activity_file.lap_records.append(LapRecord(**fields))


def handle_treadmill(state, fields):
    state.assembler.add_treadmill(fields.pop('timestamp'), **fields)


def handle_swim(state, fields):
    state.assembler.add_swim(fields.pop('timestamp'), **fields)


RECORD_HANDLERS = {
    TAG_STATUS: (STATUS, handle_status),
    TAG_POSITION: (POSITION, handle_position),
    TAG_HEART_RATE: (HEART_RATE, handle_heart_rate),
    TAG_SUMMARY: (SUMMARY, handle_summary),
    TAG_LAP: (LAP, handle_lap),
    TAG_TREADMILL: (TREADMILL, handle_treadmill),
    TAG_SWIM: (SWIM, handle_swim),
}


def decode(data, *, max_series_length=MAX_SERIES_LENGTH):
    """Decode a complete TTBIN file held in memory.

    Parameters
    ----------
    data : bytes-like
        The whole file.
    max_series_length : int, optional
        Refuse to build any time series longer than this.

    Returns
    -------
    ActivityFile

    Raises
    ------
    MalformedStreamError
        If the stream doesn't start with a file header, has a second one,
        or contains a record whose length was never declared.
    TruncatedRecordError
        If the data ends part way through a record.
    ResourceLimitExceededError
        If a timestamp implies a series longer than `max_series_length`.
    """
    state = DecodeState(data, max_series_length=max_series_length)
    stream = state.stream

    while stream.bytes_left:
        tag_offset = stream.offset
        tag = stream.read_tag()

        if tag == TAG_FILE_HEADER:
            read_file_header(state, tag_offset)
        elif state.lengths is None:
            raise MalformedStreamError('stream does not start with a header',
                                       offset=tag_offset, tag=tag)
        else:
            read_record(state, tag, tag_offset)

    if state.lengths is None:
        raise MalformedStreamError('empty stream')

    return state.activity_file
