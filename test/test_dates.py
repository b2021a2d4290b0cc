"""Tests for UTC/local timestamp normalization."""

import sys
import unittest
from pathlib import Path

from dateutil import tz

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ScrapbookSearch.core.dates import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    date_local_to_utc,
    date_utc_to_local,
    local_zone,
)

_PLUS_8 = tz.tzoffset(None, 8 * 3600)
_MINUS_5 = tz.tzoffset(None, -5 * 3600)


class TestDateUtcToLocal(unittest.TestCase):
    def test_positive_offset(self) -> None:
        self.assertEqual(date_utc_to_local("20200101000000000", _PLUS_8), "20200101080000000")

    def test_negative_offset_crosses_year(self) -> None:
        self.assertEqual(date_utc_to_local("20200101020000000", _MINUS_5), "20191231210000000")

    def test_milliseconds_are_kept(self) -> None:
        self.assertEqual(date_utc_to_local("20200615123456789", tz.UTC), "20200615123456789")

    def test_zero_month_and_day_are_clamped(self) -> None:
        self.assertEqual(date_utc_to_local("20200000000000000", tz.UTC), "20200101000000000")

    def test_out_of_range_fields_overflow(self) -> None:
        self.assertEqual(date_utc_to_local("20201300000000000", tz.UTC), "20210101000000000")
        self.assertEqual(date_utc_to_local("20200131250000000", tz.UTC), "20200201010000000")

    def test_unrepresentable_instants_saturate(self) -> None:
        self.assertEqual(date_utc_to_local("00000101000000000", _MINUS_5), MIN_TIMESTAMP)
        self.assertEqual(date_utc_to_local("99999999999999999", tz.UTC), MAX_TIMESTAMP)

    def test_rejects_wrong_width(self) -> None:
        with self.assertRaises(ValueError):
            date_utc_to_local("2020", tz.UTC)
        with self.assertRaises(ValueError):
            date_utc_to_local("2020010100000000a", tz.UTC)

    def test_round_trip(self) -> None:
        for zone in (_PLUS_8, _MINUS_5, tz.UTC):
            for value in ("20200615123456789", "19991231235959999", "20240229000000001"):
                with self.subTest(zone=zone, value=value):
                    self.assertEqual(date_local_to_utc(date_utc_to_local(value, zone), zone), value)

    def test_round_trip_of_clamped_input(self) -> None:
        local = date_utc_to_local("20200000000000000", _PLUS_8)
        self.assertEqual(date_local_to_utc(local, _PLUS_8), "20200101000000000")


class TestLocalZone(unittest.TestCase):
    def test_named_zone(self) -> None:
        self.assertIsNotNone(local_zone("UTC"))

    def test_unknown_zone(self) -> None:
        with self.assertRaises(ValueError):
            local_zone("Nowhere/Invalid")

    def test_empty_name_is_system_zone(self) -> None:
        self.assertIsInstance(local_zone(None), tz.tzlocal)


if __name__ == "__main__":
    unittest.main()
