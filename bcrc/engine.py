# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
CRC engines.

BasicCrc can calculate any CRC described by CrcParameters with the bit-serial
algorithm: every input byte takes 8 shift/XOR iterations. OptimalCrc produces
exactly the same checksums with one table lookup per byte. Both implement the
Crc interface so callers don't have to care which one they are holding.

    >>> crc = create_standard('crc32')
    >>> hex(crc.compute(b'123456789'))
    '0xcbf43926'
"""

import abc
import functools
import typing

from .bits import reverse_bits, reversed_int8_bits
from .catalogue import lookup
from .params import CrcParameters

BytesLike = typing.Union[bytes, bytearray, memoryview]


def as_octets(data: BytesLike) -> memoryview:
    """ A flat view of the bytes of any bytes-like object, without copying.
    Multi-byte items (e.g. array('H')) are split into their bytes. """
    view = memoryview(data)
    if view.ndim != 1 or view.format != 'B':
        view = view.cast('B')
    return view


def _msb_first_byte(crc: int, poly: int, width: int) -> int:
    """ Shifts the 8 most significant bits out of an unreflected register. """
    mask, top = (1 << width) - 1, 1 << (width - 1)
    for _ in range(8):
        crc = ((crc << 1) & mask) ^ poly if crc & top else crc << 1
    return crc


def _lsb_first_byte(crc: int, ref_poly: int) -> int:
    """ Shifts the 8 least significant bits out of a reflected register. """
    for _ in range(8):
        crc = (crc >> 1) ^ ref_poly if crc & 1 else crc >> 1
    return crc


@functools.lru_cache(maxsize=None)
def crc_table(params: CrcParameters) -> typing.Tuple[int, ...]:
    """ The 256-entry lookup table of the algorithm. Entry i is the register
    after processing byte i from a zero register. Algorithms with refin=true
    get a table for a reflected (LSB-first) register. The result is cached so
    engines with the same parameters share one table. """
    if params.refin:
        ref_poly = reverse_bits(params.poly, params.width)
        return tuple(_lsb_first_byte(i, ref_poly) for i in range(256))
    shift = params.width - 8
    return tuple(_msb_first_byte(i << shift, params.poly, params.width)
                 for i in range(256))


class Crc(abc.ABC):
    """ The common interface of the CRC engines.

    process_bytes() can be called any number of times, the data accumulates
    until the next reset(). checksum() doesn't modify the state so it can be
    called in between. """

    def __init__(self, params: CrcParameters):
        # hand-made tuples get the same width check and masking
        self.params = params.masked()
        self.reset()

    @abc.abstractmethod
    def reset(self) -> None:
        """ Restores the initial register value. """
        raise NotImplementedError

    @abc.abstractmethod
    def process_bytes(self, data: BytesLike) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def checksum(self) -> int:
        """ The CRC of the data processed since the last reset. """
        raise NotImplementedError

    def compute(self, data: BytesLike) -> int:
        self.reset()
        self.process_bytes(data)
        return self.checksum()

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.params)


class BasicCrc(Crc):
    """ Bit-serial CRC with an unreflected (MSB-first) register. Input bytes
    are reflected one by one if refin is set, the register is reflected in
    checksum() if refout is set. """

    def reset(self):
        self._crc = self.params.init

    def process_bytes(self, data):
        p = self.params
        shift = p.width - 8
        crc = self._crc
        for b in as_octets(data):
            b = reversed_int8_bits[b] if p.refin else b
            crc = _msb_first_byte(crc ^ (b << shift), p.poly, p.width)
        self._crc = crc

    def checksum(self):
        p = self.params
        crc = reverse_bits(self._crc, p.width) if p.refout else self._crc
        return crc ^ p.xorout


class OptimalCrc(Crc):
    """ Table-driven CRC. With refin=true the register is kept reflected,
    which means the input bytes don't have to be reversed, and the init value
    is reflected once at reset. """

    def __init__(self, params: CrcParameters):
        self._table = crc_table(params.masked())
        super().__init__(params)

    def reset(self):
        p = self.params
        self._crc = reverse_bits(p.init, p.width) if p.refin else p.init

    def process_bytes(self, data):
        t = self._table
        crc = self._crc
        if self.params.refin:
            for b in as_octets(data):
                crc = t[(crc ^ b) & 0xff] ^ (crc >> 8)
        else:
            shift, mask = self.params.width - 8, self.params.mask
            for b in as_octets(data):
                crc = t[(crc >> shift) ^ b] ^ ((crc << 8) & mask)
        self._crc = crc

    def checksum(self):
        p = self.params
        # the register is reflected iff refin, the output has to be iff refout
        crc = reverse_bits(self._crc, p.width) if p.refin != p.refout else self._crc
        return crc ^ p.xorout


def create_generic(width: int, polynomial: int, initial: int = 0,
                   xor_out: int = 0, reflect_input: bool = False,
                   reflect_output: bool = False) -> Crc:
    """ Creates a bit-serial engine for a custom CRC algorithm.
    Raises UnsupportedWidthError if width isn't 8, 16, 24 or 32. """
    return BasicCrc(CrcParameters.create(width, polynomial, initial, xor_out,
                                         reflect_input, reflect_output))


def create_standard(name: str) -> Crc:
    """ Creates a table-driven engine for a named algorithm: crc16, ccitt,
    xmodem, crc32 or a name/alias of the RevEng CRC catalogue. """
    return OptimalCrc(lookup(name).params)


def residue_const(crc: Crc, dataword: bytes = b'') -> int:
    """ Using the residue constant is one way to check for errors.

    This forms a valid codeword by calculating the CRC of the dataword and
    appending the CRC to that dataword in the correct bit and byte order. The
    codeword is what the sender transmits through a channel. After receiving
    all bytes of an uncorrupted codeword the register of the receiver holds the
    residue constant, which is the checksum without the xorout step. The
    dataword can be anything including the empty string, the result is the
    same. The engine is left holding the state of the codeword. """
    p = crc.params
    value = crc.compute(dataword)
    if p.refin != p.refout:
        value = reverse_bits(value, p.width)
    codeword = bytes(dataword) + value.to_bytes(p.width // 8,
                                                'little' if p.refin else 'big')
    return crc.compute(codeword) ^ p.xorout
