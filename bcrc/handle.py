# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Handles that own a CRC engine.

A handle is the object the users of the package hold. It owns exactly one
engine, selects the processed part of the input with 1-based positions and
refuses to work after it has been destroyed:

    >>> crc = bcrc.crc16()
    >>> hex(crc(b'xx123456789', 3))
    '0xbb3d'
    >>> hex(crc.reset().process(b'1234').process(b'56789').checksum())
    '0xbb3d'
"""

from .engine import BytesLike, Crc, as_octets
from .errors import DestroyedHandleError
from .params import CrcParameters


def _relative_position(pos: int, length: int) -> int:
    # negative means back from the end: -1 is the last byte
    if pos < 0:
        pos += length + 1
    return pos if pos >= 0 else 0


def select_range(data: BytesLike, start: int = 1, end: int = -1) -> memoryview:
    """ Returns the bytes from position start to end (both inclusive) without
    copying. Positions are 1-based, negative positions count back from the end
    of the data. Out of range positions are clamped and the result is empty if
    start > end. """
    view = as_octets(data)
    length = len(view)
    start = max(_relative_position(start, length), 1)
    end = min(_relative_position(end, length), length)
    if start > end:
        return view[0:0]
    return view[start-1:end]


class CrcHandle:
    """ Exclusive owner of a CRC engine.

    reset() and process() return the handle itself so calls can be chained.
    Calling the handle is the short form of reset().process().checksum().
    After destroy() every method raises DestroyedHandleError, including a
    second destroy(). """

    def __init__(self, crc: Crc):
        self._crc = crc

    def _engine(self) -> Crc:
        if self._crc is None:
            raise DestroyedHandleError('crc state has been destroyed')
        return self._crc

    @property
    def destroyed(self) -> bool:
        return self._crc is None

    @property
    def params(self) -> CrcParameters:
        return self._engine().params

    def reset(self) -> 'CrcHandle':
        self._engine().reset()
        return self

    def process(self, data: BytesLike, start: int = 1, end: int = -1) -> 'CrcHandle':
        crc = self._engine()
        crc.process_bytes(select_range(data, start, end))
        return self

    def checksum(self) -> int:
        """ The current checksum. It is possible to keep calling process()
        after this. """
        return self._engine().checksum()

    def __call__(self, data: BytesLike, start: int = 1, end: int = -1) -> int:
        return self.reset().process(data, start, end).checksum()

    def destroy(self) -> None:
        self._engine()
        self._crc = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self._crc is not None:
            self.destroy()

    def __repr__(self):
        if self._crc is None:
            return '<CrcHandle destroyed>'
        return '<CrcHandle {!r}>'.format(self._crc)
