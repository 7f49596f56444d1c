#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build TTBIN byte streams for the tests.

"""
from struct import pack

from ttbinio.ttbin._protocol import (
    TAG_FILE_HEADER, TAG_HEART_RATE, TAG_LAP, TAG_POSITION, TAG_STATUS,
    TAG_SUMMARY, TAG_SWIM, TAG_TREADMILL)


T0 = 1420113600   # 2015-01-01 12:00:00

# Position records are one byte longer than the fields we know about,
# just like on a real watch.
LENGTHS = {
    TAG_STATUS: 7,
    TAG_POSITION: 29,
    TAG_HEART_RATE: 7,
    TAG_SUMMARY: 12,
    TAG_LAP: 11,
    TAG_TREADMILL: 17,
    TAG_SWIM: 21,
}


def header(lengths=LENGTHS, *, file_version=7, firmware=b'\x01\x08\x2e\x00',
           product_id=1001, timestamp=T0):
    raw = pack('<BB4sHI105xB', TAG_FILE_HEADER, file_version, firmware,
               product_id, timestamp, len(lengths))
    return raw + b''.join(pack('<BH', tag, length)
                          for tag, length in lengths.items())


def record(tag, body, lengths=LENGTHS):
    """Tag + body, zero padded to the declared length."""
    return bytes([tag]) + body.ljust(lengths[tag] - 1, b'\x00')


def summary(activity, distance, duration, calories, **kwargs):
    body = pack('<BfIH', activity, distance, duration, calories)
    return record(TAG_SUMMARY, body, **kwargs)


def status(state, activity, timestamp, **kwargs):
    return record(TAG_STATUS, pack('<BBI', state, activity, timestamp),
                  **kwargs)


def position(timestamp, lat, lon, *, heading=0, speed=0, calories=0,
             inc_distance=0.0, cum_distance=0.0, cycles=0, **kwargs):
    body = pack('<iiHHIHffB', round(lat * 1e7), round(lon * 1e7),
                heading, speed, timestamp, calories, inc_distance,
                cum_distance, cycles)
    return record(TAG_POSITION, body, **kwargs)


def heart_rate(timestamp, bpm, **kwargs):
    return record(TAG_HEART_RATE, pack('<BxI', bpm, timestamp), **kwargs)


def lap(total_time, total_distance, total_calories, **kwargs):
    body = pack('<IfH', total_time, total_distance, total_calories)
    return record(TAG_LAP, body, **kwargs)


def treadmill(timestamp, distance, calories, steps, **kwargs):
    body = pack('<IfHIxx', timestamp, distance, calories, steps)
    return record(TAG_TREADMILL, body, **kwargs)


def swim(timestamp, total_distance, strokes, completed_laps, total_calories,
         **kwargs):
    body = pack('<IfxxIIH', timestamp, total_distance, strokes,
                completed_laps, total_calories)
    return record(TAG_SWIM, body, **kwargs)
