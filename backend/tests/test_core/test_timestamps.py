"""Tests for UTC timestamp helpers."""

from datetime import datetime, timedelta, timezone

from vulnreport.core import ensure_utc, parse_timestamp


class TestEnsureUtc:
    def test_none(self):
        assert ensure_utc(None) is None

    def test_naive_becomes_utc(self):
        result = ensure_utc(datetime(2024, 1, 1, 10, 0))
        assert result.tzinfo == timezone.utc
        assert result.hour == 10

    def test_aware_unchanged(self):
        dt = datetime(2024, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
        assert ensure_utc(dt) is dt


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset(self):
        assert parse_timestamp("2024-03-01T12:00:00+02:00") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_naive(self):
        assert parse_timestamp("2024-03-01T10:00:00").tzinfo == timezone.utc

    def test_mixed_values_compare(self):
        assert parse_timestamp("2024-03-01T10:00:00") < parse_timestamp("2024-03-01T11:00:00+00:00")
