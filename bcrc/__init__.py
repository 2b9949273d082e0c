# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Parametric CRC calculator for 8, 16, 24 and 32 bit CRCs.

new() creates a CRC with custom parameters computed bit by bit. The builtin
algorithms (crc16, ccitt, xmodem, crc32 and the algorithms of the RevEng CRC
catalogue) use table-driven implementations that give the same results faster.

    import bcrc

    crc = bcrc.crc32()
    crc.process(b'1234').process(b'56789')
    assert crc.checksum() == 0xcbf43926

    custom = bcrc.new(16, 0x1021, initial=0xffff)
    assert custom(b'123456789') == bcrc.ccitt()(b'123456789')

The relationship between the RevEng catalogue's parameter names and the
arguments of new():

    Width  -> width
    Poly   -> polynomial
    Init   -> initial
    XorOut -> xor_out
    RefIn  -> reflect_input
    RefOut -> reflect_output
"""

from .bits import reverse_bits, reversed_int8_bits
from .catalogue import (
    CRC_CATALOGUE,
    CRC_PARAMS,
    STANDARD_ALGORITHMS,
    STANDARD_CATALOGUE,
    CatalogueEntry,
    lookup,
)
from .engine import (
    BasicCrc,
    Crc,
    OptimalCrc,
    crc_table,
    create_generic,
    create_standard,
    residue_const,
)
from .errors import (
    CatalogueFormatError,
    CrcError,
    DestroyedHandleError,
    UnknownAlgorithmError,
    UnsupportedWidthError,
)
from .handle import CrcHandle, select_range
from .params import SUPPORTED_WIDTHS, CrcParameters, parse_crc_params

__version__ = "0.1.0"


def new(width: int, polynomial: int, initial: int = 0, xor_out: int = 0,
        reflect_input: bool = False, reflect_output: bool = False) -> CrcHandle:
    """ A handle to a custom CRC. Raises UnsupportedWidthError if width isn't
    8, 16, 24 or 32. """
    return CrcHandle(create_generic(width, polynomial, initial, xor_out,
                                    reflect_input, reflect_output))


def standard(name: str) -> CrcHandle:
    return CrcHandle(create_standard(name))


def crc16() -> CrcHandle:
    """ Optimal implementation of new(16, 0x8005, 0, 0, True, True). """
    return standard('crc16')


def ccitt() -> CrcHandle:
    """ Optimal implementation of new(16, 0x1021, 0xFFFF, 0, False, False). """
    return standard('ccitt')


def xmodem() -> CrcHandle:
    """ Optimal implementation of new(16, 0x8408, 0, 0, True, True). """
    return standard('xmodem')


def crc32() -> CrcHandle:
    """ Optimal implementation of
    new(32, 0x04C11DB7, 0xFFFFFFFF, 0xFFFFFFFF, True, True). """
    return standard('crc32')


__all__ = [
    # Parameters
    "SUPPORTED_WIDTHS",
    "CrcParameters",
    "parse_crc_params",
    # Bit reflection
    "reverse_bits",
    "reversed_int8_bits",
    # Catalogue
    "CRC_CATALOGUE",
    "CRC_PARAMS",
    "STANDARD_ALGORITHMS",
    "STANDARD_CATALOGUE",
    "CatalogueEntry",
    "lookup",
    # Engines
    "Crc",
    "BasicCrc",
    "OptimalCrc",
    "crc_table",
    "create_generic",
    "create_standard",
    "residue_const",
    # Handles
    "CrcHandle",
    "select_range",
    "new",
    "standard",
    "crc16",
    "ccitt",
    "xmodem",
    "crc32",
    # Errors
    "CrcError",
    "UnsupportedWidthError",
    "DestroyedHandleError",
    "UnknownAlgorithmError",
    "CatalogueFormatError",
]
