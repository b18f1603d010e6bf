"""Tests for sentence classification and the decode entry point."""

import pytest

from nmea_bridge.nmea import Fix, SentenceKind, classify, decode
from tests.helpers import GGA_FIX, RMC_ACTIVE, make_gga, make_rmc


class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize("talker", ["GP", "GN", "GL", "GA", "BD"])
    def test_any_talker_rmc(self, talker):
        assert classify(f"${talker}RMC,123519,A") is SentenceKind.POSITION_VELOCITY

    def test_gga(self):
        assert classify(GGA_FIX) is SentenceKind.POSITION_QUALITY

    def test_surrounding_whitespace(self):
        assert classify("  " + RMC_ACTIVE + "\r\n") is SentenceKind.POSITION_VELOCITY

    @pytest.mark.parametrize(
        "line",
        [
            "$GPGSV,3,1,11,03,03,111,00",
            "$GPVTG,054.7,T,034.4,M,005.5,N,010.2,K",
            "GPRMC,123519,A",
            "$GPRMCX,123519,A",
            "$gprmc,123519,A",
            "",
            "$",
        ],
    )
    def test_other_lines_unclassified(self, line):
        assert classify(line) is None


class TestDecode:
    """Tests for decode function."""

    def test_unknown_sentence_returns_previous(self):
        previous = Fix(valid=True, latitude_degrees=1.0)

        assert decode("$GPGSV,3,1,11,03,03,111,00*74", previous) is previous

    @pytest.mark.parametrize("line", ["", "   ", "garbage", "$GPRMC", "$GPGGA,,,,"])
    def test_junk_returns_previous(self, line):
        previous = Fix()

        assert decode(line, previous) is previous

    def test_does_not_mutate_previous(self):
        previous = Fix()

        decode(RMC_ACTIVE, previous)

        assert previous == Fix()

    def test_rmc_then_gga_accumulates(self):
        fix = decode(RMC_ACTIVE, Fix())
        fix = decode(GGA_FIX, fix)

        assert fix.speed_knots == pytest.approx(22.4)
        assert fix.altitude_meters == pytest.approx(545.4)
        assert fix.num_satellites == 8
        assert fix.last_sentence == GGA_FIX

    def test_missing_checksum_accepted_by_default(self):
        line = RMC_ACTIVE.split("*")[0]

        assert decode(line, Fix()).valid is True

    def test_bad_checksum_accepted_by_default(self):
        line = RMC_ACTIVE[:-2] + "00"

        assert decode(line, Fix()).valid is True

    def test_bad_checksum_rejected_when_verifying(self):
        previous = Fix()
        line = RMC_ACTIVE[:-2] + "00"

        assert decode(line, previous, verify_checksum=True) is previous

    def test_missing_checksum_rejected_when_verifying(self):
        previous = Fix()
        line = RMC_ACTIVE.split("*")[0]

        assert decode(line, previous, verify_checksum=True) is previous

    def test_good_checksum_accepted_when_verifying(self):
        assert decode(make_gga(), Fix(), verify_checksum=True).valid is True

    def test_trailing_line_ending_not_recorded(self):
        fix = decode(RMC_ACTIVE + "\r\n", Fix())

        assert fix.last_sentence == RMC_ACTIVE

    def test_malformed_field_does_not_leak_partial_values(self):
        previous = decode(RMC_ACTIVE, Fix())

        fix = decode(make_rmc(lat="4900.000", course="north"), previous)

        assert fix is previous
        assert fix.latitude_degrees == pytest.approx(48.1173)

    def test_hemisphere_field_invalid(self):
        previous = Fix()

        assert decode(make_gga(ns="X"), previous) is previous
