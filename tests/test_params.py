# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor

"""Tests for CRC parameters and the catalogue line parser."""

import pytest

from bcrc.errors import CatalogueFormatError, CrcError, UnsupportedWidthError
from bcrc.params import SUPPORTED_WIDTHS, CrcParameters, parse_crc_params


class TestCrcParameters:
    """Tests for CrcParameters.create."""

    def test_defaults(self):
        p = CrcParameters.create(16, 0x1021)
        assert p == CrcParameters(16, 0x1021, 0, 0, False, False)

    @pytest.mark.parametrize("width", SUPPORTED_WIDTHS)
    def test_supported_widths(self, width):
        assert CrcParameters.create(width, 0x07).width == width

    @pytest.mark.parametrize("width", [0, 1, 7, 12, 15, 17, 31, 33, 64])
    def test_unsupported_width(self, width):
        with pytest.raises(UnsupportedWidthError) as exc_info:
            CrcParameters.create(width, 0x07)
        assert exc_info.value.width == width
        assert "unsupported crc bit width" in str(exc_info.value)

    @pytest.mark.parametrize("width", [16.0, "16", None, 16.5])
    def test_non_integer_width(self, width):
        """Widths that only compare equal to a supported one are rejected."""
        with pytest.raises(UnsupportedWidthError):
            CrcParameters.create(width, 0x1021)

    def test_unsupported_width_is_value_error(self):
        with pytest.raises(ValueError):
            CrcParameters.create(12, 0x80F)
        assert issubclass(UnsupportedWidthError, CrcError)

    def test_values_masked_to_width(self):
        """Oversized values are truncated, not rejected."""
        p = CrcParameters.create(16, 0x18005, 0xABCDFFFF, 0x1230000, True, True)
        assert p.poly == 0x8005
        assert p.init == 0xFFFF
        assert p.xorout == 0x0000

    def test_negative_values_masked(self):
        p = CrcParameters.create(8, -1, -1, -2)
        assert (p.poly, p.init, p.xorout) == (0xFF, 0xFF, 0xFE)

    def test_flags_normalized_to_bool(self):
        p = CrcParameters.create(8, 0x07, refin=1, refout=0)
        assert p.refin is True
        assert p.refout is False

    def test_mask(self):
        assert CrcParameters.create(24, 0x864CFB).mask == 0xFFFFFF

    def test_hashable_and_immutable(self):
        p = CrcParameters.create(32, 0x04C11DB7)
        assert {p: 1}[CrcParameters.create(32, 0x104C11DB7)] == 1
        with pytest.raises(AttributeError):
            p.width = 16

    def test_str_uses_catalogue_format(self):
        p = CrcParameters.create(16, 0x1021, 0xFFFF)
        assert str(p) == ('width=16 poly=0x1021 init=0xffff refin=false '
                          'refout=false xorout=0x0000')


class TestParseCrcParams:
    """Tests for parse_crc_params."""

    def test_full_line(self):
        m = parse_crc_params(
            'width=16 poly=0x1021 init=0x0000 refin=false refout=false '
            'xorout=0x0000 check=0x31c3 residue=0x0000 name="CRC-16/XMODEM" '
            'alias="XMODEM,ZMODEM"')
        assert m['params'] == CrcParameters(16, 0x1021, 0, 0, False, False)
        assert m['check'] == 0x31C3
        assert m['residue'] == 0
        assert m['name'] == 'CRC-16/XMODEM'
        assert m['alias'] == ('XMODEM', 'ZMODEM')

    def test_optional_fields_default(self):
        m = parse_crc_params('width=8 poly=7')
        assert m['params'] == CrcParameters(8, 0x07)
        assert m['name'] == 'CUSTOM'
        assert m['alias'] == ()

    def test_bools_ignore_case(self):
        m = parse_crc_params('width=8 poly=0x31 refin=TRUE refout=True')
        assert m['params'].refin and m['params'].refout

    @pytest.mark.parametrize("line", [
        'poly=0x1021',
        'width=16',
        'width=16 poly=0x1021 colour=red',
        'width=16 poly=0x1021 refin=maybe',
        'width=16 poly=banana',
        'width=16 poly',
    ])
    def test_invalid_lines(self, line):
        with pytest.raises(CatalogueFormatError):
            parse_crc_params(line)

    def test_unsupported_width(self):
        with pytest.raises(UnsupportedWidthError):
            parse_crc_params('width=12 poly=0x80f')
