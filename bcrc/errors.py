# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Exceptions raised by the bcrc package.
"""


class CrcError(Exception):
    """Base exception for CRC errors."""
    pass


class UnsupportedWidthError(CrcError, ValueError):
    """The requested CRC width isn't 8, 16, 24 or 32 bits."""

    def __init__(self, width):
        super().__init__('unsupported crc bit width: %r' % (width,))
        self.width = width


class DestroyedHandleError(CrcError):
    """An operation was attempted on a CRC handle that has been destroyed."""
    pass


class UnknownAlgorithmError(CrcError, LookupError):
    """The name doesn't match any algorithm of the catalogue."""

    def __init__(self, name):
        super().__init__('invalid CRC algorithm name: %r' % (name,))
        self.name = name


class CatalogueFormatError(CrcError, ValueError):
    """A line of CRC parameters can't be parsed."""
    pass
