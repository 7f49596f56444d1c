"""
Decode the binary activity files (*.ttbin) recorded by TomTom GPS watches.

The file layout isn't published. What's implemented here follows the
community reverse engineering effort behind the `ttwatch` tools [1]_.

``decode`` turns the bytes of a file into an `ActivityFile`; ``read``
gives the usual `ActivityData` frame of the recorded time series.


.. [1] https://github.com/ryanbinns/ttwatch

"""
from ttbinio.ttbin._protocol import decode, RecordLengths
from ttbinio.ttbin._assembly import MergeTarget, MAX_SERIES_LENGTH
from ttbinio.ttbin._records import (
    Activity, ActivityFile, LapRecord, PositionRecord, Status, StatusRecord,
    SwimRecord, TreadmillRecord)
from ttbinio.ttbin._elevation import download_elevation
from ttbinio.ttbin._reading import read_and_format as read
from ttbinio.ttbin._reading import gen_records, read_ttbin
