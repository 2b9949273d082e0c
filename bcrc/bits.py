# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Bit reflection helpers shared by the CRC engines.
"""


def reverse_bits(value: int, width: int) -> int:
    """ Returns the lowest `width` bits of `value` in reverse order.
    Bits above `width` are ignored. """
    value &= (1 << width) - 1
    return int('{v:0{w}b}'.format(v=value, w=width)[::-1], 2)


reversed_int8_bits = tuple(reverse_bits(i, 8) for i in range(256))
