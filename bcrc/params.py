# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
CRC algorithm parameters.

The parameter names follow the online CRC catalogue of the CRC RevEng project:
https://reveng.sourceforge.io/crc-catalogue/all.htm

    width  -> number of bits in the CRC register
    poly   -> truncated generator polynomial (without the implicit top bit)
    init   -> register value before the first input byte
    xorout -> value XORed into the final register to get the checksum
    refin  -> input bytes are processed least significant bit first
    refout -> the final register is reflected before the xorout step

The init and poly values describe an unreflected MSB-first register, exactly
like the catalogue does.
"""

import operator
from dataclasses import astuple, dataclass

from .errors import CatalogueFormatError, UnsupportedWidthError

SUPPORTED_WIDTHS = (8, 16, 24, 32)


@dataclass(frozen=True)
class CrcParameters:
    width: int
    poly: int
    init: int = 0
    xorout: int = 0
    refin: bool = False
    refout: bool = False

    @classmethod
    def create(cls, width: int, poly: int, init: int = 0, xorout: int = 0,
               refin: bool = False, refout: bool = False) -> 'CrcParameters':
        """ Validates the width and truncates poly, init and xorout to width
        bits. Out of range values aren't errors, they are silently masked. """
        try:
            width = operator.index(width)
        except TypeError:
            raise UnsupportedWidthError(width) from None
        if width not in SUPPORTED_WIDTHS:
            raise UnsupportedWidthError(width)
        mask = (1 << width) - 1
        return cls(width, poly & mask, init & mask, xorout & mask,
                   bool(refin), bool(refout))

    def masked(self) -> 'CrcParameters':
        """ The same parameters after the width check and masking of create(). """
        return self.create(*astuple(self))

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def __str__(self):
        return ('width={} poly=0x{:0{w}x} init=0x{:0{w}x} refin={} refout={} '
                'xorout=0x{:0{w}x}'.format(
                    self.width, self.poly, self.init, str(self.refin).lower(),
                    str(self.refout).lower(), self.xorout,
                    w=(self.width+3)//4))


_FIELDS = {'width', 'poly', 'init', 'refin', 'refout', 'xorout', 'check',
           'residue', 'name', 'alias'}


def parse_crc_params(line: str) -> dict:
    """ Parses a line of the RevEng catalogue format, for example:

        width=16 poly=0x1021 init=0xffff refin=false refout=false xorout=0x0000 check=0x29b1 residue=0x0000 name="CRC-16/IBM-3740"

    Returns a dict with 'params' (CrcParameters), 'check', 'residue', 'name'
    and 'alias' keys. Only width and poly are mandatory. """
    try:
        m = dict(field.split('=', 1) for field in line.split())
    except ValueError:
        raise CatalogueFormatError('expected key=value fields: %r' % line) from None
    if 'width' not in m or 'poly' not in m:
        raise CatalogueFormatError('the required "width" or "poly" field is missing')
    invalid = set(m.keys()) - _FIELDS
    if invalid:
        raise CatalogueFormatError('invalid parameters: ' + ', '.join(sorted(invalid)))
    def unquote(s):
        return s[1:-1] if s.startswith('"') and s.endswith('"') else s
    def to_bool(s):
        if s.lower() not in ('true', 'false'):
            raise CatalogueFormatError('invalid bool value: %r' % s)
        return s.lower() == 'true'
    def to_int(key, default='0'):
        try:
            return int(m.get(key, default), 0)
        except ValueError:
            raise CatalogueFormatError('invalid %s value: %r' % (key, m[key])) from None
    params = CrcParameters.create(
        to_int('width'), to_int('poly'), to_int('init'), to_int('xorout'),
        to_bool(m.get('refin', 'false')), to_bool(m.get('refout', 'false')))
    return {
        'params': params,
        'check': to_int('check'),
        'residue': to_int('residue'),
        'name': unquote(m.get('name', 'CUSTOM')),
        'alias': tuple(s for s in unquote(m.get('alias', '')).split(',') if s),
    }
