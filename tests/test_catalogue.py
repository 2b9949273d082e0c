# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor

"""Tests for the algorithm catalogue."""

import pytest

from bcrc.catalogue import (
    CRC_CATALOGUE,
    CRC_PARAMS,
    STANDARD_ALGORITHMS,
    STANDARD_CATALOGUE,
    lookup,
)
from bcrc.errors import UnknownAlgorithmError
from bcrc.params import SUPPORTED_WIDTHS, CrcParameters


class TestStandardAlgorithms:
    """The four algorithms with dedicated factories."""

    def test_names(self):
        assert sorted(STANDARD_ALGORITHMS) == ["ccitt", "crc16", "crc32", "xmodem"]

    def test_parameters(self):
        assert STANDARD_ALGORITHMS["crc16"] == CrcParameters(16, 0x8005, 0x0000, 0x0000, True, True)
        assert STANDARD_ALGORITHMS["ccitt"] == CrcParameters(16, 0x1021, 0xFFFF, 0x0000, False, False)
        assert STANDARD_ALGORITHMS["xmodem"] == CrcParameters(16, 0x8408, 0x0000, 0x0000, True, True)
        assert STANDARD_ALGORITHMS["crc32"] == CrcParameters(
            32, 0x04C11DB7, 0xFFFFFFFF, 0xFFFFFFFF, True, True)

    def test_standard_catalogue_entries(self):
        assert [e.name for e in STANDARD_CATALOGUE] == ["crc16", "ccitt", "xmodem", "crc32"]


class TestRevEngCatalogue:
    """The RevEng catalogue entries."""

    def test_only_supported_widths(self):
        assert CRC_CATALOGUE
        assert all(e.params.width in SUPPORTED_WIDTHS for e in CRC_CATALOGUE)

    def test_names_unique(self):
        names = [e.name for e in CRC_CATALOGUE]
        assert len(names) == len(set(names))

    def test_entries_are_frozen(self):
        """Entries returned by lookup can't be changed by the caller."""
        entry = lookup("crc32")
        with pytest.raises(AttributeError):
            entry.params = CrcParameters(16, 0x1021)
        assert isinstance(entry.alias, tuple)
        assert lookup("crc32").params == STANDARD_ALGORITHMS["crc32"]

    def test_aliases_indexed(self):
        assert CRC_PARAMS["CRC-32"].name == "CRC-32/ISO-HDLC"
        assert CRC_PARAMS["CRC-16/CCITT-FALSE"].name == "CRC-16/IBM-3740"
        assert CRC_PARAMS["MODBUS"].name == "CRC-16/MODBUS"


class TestLookup:
    """Tests for lookup."""

    def test_standard_name(self):
        assert lookup("crc32").params == STANDARD_ALGORITHMS["crc32"]

    def test_ignores_case_and_whitespace(self):
        assert lookup(" CCITT ").name == "ccitt"
        assert lookup("crc-16/modbus").name == "CRC-16/MODBUS"

    def test_standard_names_win_over_aliases(self):
        """XMODEM is also an alias of CRC-16/XMODEM in the RevEng catalogue."""
        assert lookup("XMODEM").params == STANDARD_ALGORITHMS["xmodem"]
        assert lookup("CRC-16/XMODEM").params == CrcParameters(16, 0x1021)

    def test_same_parameters_under_both_names(self):
        assert lookup("crc16").params == lookup("CRC-16/ARC").params
        assert lookup("ccitt").params == lookup("CRC-16/IBM-3740").params

    def test_unknown_name(self):
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            lookup("CRC-12/DECT")
        assert exc_info.value.name == "CRC-12/DECT"

    def test_unknown_name_is_lookup_error(self):
        with pytest.raises(LookupError):
            lookup("nope")
