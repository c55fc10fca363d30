"""
NTP style 64-bit timestamps: 32-bit seconds since 1900-01-01T00:00:00Z plus a 32-bit fraction of a second.

The frame header carries them big-endian with the seconds word first,
the payloads carry them little-endian with the fraction word first.
"""
import ctypes
from datetime import datetime, timedelta, timezone
from typing import Any, Type, TypeVar

import numpy as np

from .structure import StructureMixin

NTP_EPOCH = datetime(1900, 1, 1, tzinfo=timezone.utc)
NTP_EPOCH_NS = np.datetime64("1900-01-01T00:00:00", "ns")
FRACTION_SCALE = 2 ** 32
NANOSECONDS_PER_SECOND = 10 ** 9
MAX_SECONDS = 2 ** 32 - 1

_NT = TypeVar("_NT", bound="NtpTimeMixin")


def fraction_to_nanoseconds(fraction: int) -> int:
    """
    round(fraction * 1e9 / 2**32) without going through floats.
    capped below one second so that a later seconds value is always a later time.
    """
    nanoseconds = (fraction * NANOSECONDS_PER_SECOND + FRACTION_SCALE // 2) // FRACTION_SCALE
    return min(nanoseconds, NANOSECONDS_PER_SECOND - 1)


def nanoseconds_to_fraction(nanoseconds: int) -> int:
    fraction = (nanoseconds * FRACTION_SCALE + NANOSECONDS_PER_SECOND // 2) // NANOSECONDS_PER_SECOND
    return min(fraction, FRACTION_SCALE - 1)


class NtpTimeMixin(StructureMixin):
    seconds: int
    fraction: int

    @property
    def nanoseconds(self) -> int:
        return fraction_to_nanoseconds(self.fraction)

    def to_datetime64(self) -> np.datetime64:
        return NTP_EPOCH_NS + np.timedelta64(self.seconds, "s") + np.timedelta64(self.nanoseconds, "ns")

    def to_datetime(self) -> datetime:
        """
        timezone aware datetime, only precise to the microsecond
        """
        return NTP_EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanoseconds // 1000)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seconds": self.seconds,
            "fraction": self.fraction,
            "time": str(self.to_datetime64()),
        }

    @classmethod
    def from_datetime(cls: Type[_NT], dt: datetime) -> _NT:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        diff = dt - NTP_EPOCH
        seconds = diff.days * 86400 + diff.seconds
        if not 0 <= seconds <= MAX_SECONDS:
            raise ValueError(f"{dt.isoformat()} is out of the NTP era 0")
        return cls(seconds=seconds, fraction=nanoseconds_to_fraction(diff.microseconds * 1000))

    @classmethod
    def now(cls: Type[_NT]) -> _NT:
        return cls.from_datetime(datetime.now(timezone.utc))


class NtpTime(NtpTimeMixin, ctypes.BigEndianStructure):
    _fields_ = [
        ('seconds', ctypes.c_uint32),
        ('fraction', ctypes.c_uint32),
    ]

    seconds: int
    fraction: int


class LittleEndianNtpTime(NtpTimeMixin, ctypes.LittleEndianStructure):
    _fields_ = [
        ('fraction', ctypes.c_uint32),
        ('seconds', ctypes.c_uint32),
    ]

    fraction: int
    seconds: int
