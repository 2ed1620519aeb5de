"""
Tests for the HackInt bounded integer.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from hack_assembler.hack_int import (
    HackInt, HackIntError, HackIntParseError, HackIntRangeError, HACK_INT_MAX,
)


class TestConstruction:
    def test_bounds_round_trip(self):
        for v in (0, 1, 16, 255, 16384, 24576, HACK_INT_MAX):
            assert int(HackInt.try_new(v)) == v

    def test_full_range_round_trips(self):
        assert all(int(HackInt(v)) == v for v in range(HACK_INT_MAX + 1))

    def test_just_above_max_rejected(self):
        with pytest.raises(HackIntRangeError, match="32768"):
            HackInt.try_new(32768)

    def test_negative_rejected(self):
        with pytest.raises(HackIntRangeError):
            HackInt(-1)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError):
            HackInt("5")
        with pytest.raises(TypeError):
            HackInt(True)

    def test_immutable(self):
        h = HackInt(7)
        with pytest.raises(AttributeError):
            h.value = 8

    def test_ordering_and_hash(self):
        assert HackInt(3) < HackInt(4)
        assert HackInt(5) == HackInt(5)
        assert len({HackInt(1), HackInt(1), HackInt(2)}) == 2

    def test_usable_as_index(self):
        assert format(HackInt(10), "016b") == "0000000000001010"
        assert [0, 1, 2][HackInt(2)] == 2

    def test_format_specs_apply_to_value(self):
        assert f"{HackInt(255):04x}" == "00ff"
        assert f"{HackInt(16):>5}" == "   16"
        assert format(HackInt(7)) == "7"


class TestParse:
    def test_decimal(self):
        assert int(HackInt.parse("0")) == 0
        assert int(HackInt.parse("32767")) == 32767
        assert int(HackInt.parse("007")) == 7

    def test_out_of_range_is_range_error(self):
        with pytest.raises(HackIntRangeError):
            HackInt.parse("32768")
        with pytest.raises(HackIntRangeError):
            HackInt.parse("99999999999999999999")

    def test_malformed_is_parse_error(self):
        for text in ("", "abc", "12a", "-1", "+5", " 5", "1.0", "0x10", "²"):
            with pytest.raises(HackIntParseError):
                HackInt.parse(text)

    def test_errors_share_base(self):
        assert issubclass(HackIntParseError, HackIntError)
        assert issubclass(HackIntRangeError, HackIntError)
        assert not issubclass(HackIntParseError, HackIntRangeError)


class TestSuccessor:
    def test_increments(self):
        assert HackInt(16).successor() == HackInt(17)

    def test_stops_at_max(self):
        with pytest.raises(HackIntRangeError):
            HackInt(HACK_INT_MAX).successor()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
