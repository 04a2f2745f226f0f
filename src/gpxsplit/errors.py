from __future__ import annotations


class GpxError(ValueError):
    pass


class NoTrkptError(GpxError):
    pass


# Reserved: time is currently required on every trackpoint.
class NoTimeError(GpxError):
    pass


class InvalidDatetimeError(GpxError):
    pass


class InvalidTrkptError(GpxError):
    pass


# Reserved: elapsed_seconds takes the absolute difference instead.
class SecondTimeBeforeFirstError(GpxError):
    pass
