"""Tests for normalizer utility functions."""

import logging

import pytest

from vulnreport.models.finding import CweInfo, Severity
from vulnreport.services.normalizers.utils import (
    first_score,
    remove_html_tags,
    transform_cwe,
    transform_severity,
)


class TestTransformSeverity:
    @pytest.mark.parametrize("raw", ["LOW", "warning", "Informational", "unknown"])
    def test_low_vocabulary(self, raw):
        assert transform_severity(raw) == Severity.LOW

    @pytest.mark.parametrize("raw", ["MODERATE", "medium", "Medium"])
    def test_medium_vocabulary(self, raw):
        assert transform_severity(raw) == Severity.MEDIUM

    def test_high(self):
        assert transform_severity("High") == Severity.HIGH

    def test_critical(self):
        assert transform_severity("critical") == Severity.CRITICAL

    def test_idempotent(self):
        for severity in Severity:
            assert transform_severity(transform_severity(severity.value).value) == severity

    def test_unknown_value_returns_none(self):
        assert transform_severity("BANANA") is None

    def test_error_is_not_recognized(self):
        """ERROR is not part of any mapped vocabulary."""
        assert transform_severity("ERROR") is None

    def test_none_returns_none(self):
        assert transform_severity(None) is None

    def test_unknown_value_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            transform_severity("Negligible")
        assert "Unknown severity: Negligible" in caplog.text


class TestTransformCwe:
    def test_none_returns_empty(self):
        assert transform_cwe(None) == CweInfo()

    def test_empty_string_returns_empty(self):
        assert transform_cwe("") == CweInfo()

    def test_empty_list_returns_empty(self):
        assert transform_cwe([]) == CweInfo()

    @pytest.mark.parametrize("raw", [0, -1, "0", "-1", [-1]])
    def test_non_positive_returns_all_null(self, raw):
        cwe = transform_cwe(raw)
        assert cwe.short is None
        assert cwe.description is None
        assert cwe.likelihood_of_exploit is None
        assert cwe.observed_examples is None

    @pytest.mark.parametrize("raw", [1, 79, 693, 1321])
    def test_number_formatted(self, raw):
        assert transform_cwe(raw).short == f"CWE-{raw}"

    def test_numeric_string_formatted(self):
        assert transform_cwe("693").short == "CWE-693"

    @pytest.mark.parametrize("raw", ["79.0", " 79 ", "79.9", 79.0, [" 79.0"]])
    def test_decimal_input_uses_integer_part(self, raw):
        assert transform_cwe(raw).short == "CWE-79"

    @pytest.mark.parametrize("raw", ["-1.0", "0.0", ".5"])
    def test_non_positive_decimal_returns_all_null(self, raw):
        assert transform_cwe(raw) == CweInfo()

    def test_non_finite_string_not_numeric(self):
        assert transform_cwe("nan").short == "nan"

    def test_list_uses_first_element(self):
        assert transform_cwe(["CWE-787", "CWE-122"]).short == "CWE-787"

    def test_separator_splits_short_and_description(self):
        cwe = transform_cwe("CWE-327: Use of a Broken or Risky Cryptographic Algorithm")
        assert cwe.short == "CWE-327"
        assert cwe.description == "Use of a Broken or Risky Cryptographic Algorithm"
        assert cwe.likelihood_of_exploit is None

    def test_separator_with_bare_number(self):
        cwe = transform_cwe(["79: Cross-site Scripting"])
        assert cwe.short == "79"
        assert cwe.description == "Cross-site Scripting"

    def test_separator_skips_catalog(self, cwe_catalog):
        cwe = transform_cwe("CWE-89: SQL Injection", cwe_catalog)
        assert cwe.description == "SQL Injection"
        assert cwe.likelihood_of_exploit is None

    def test_catalog_hit_enriches(self, cwe_catalog):
        cwe = transform_cwe(89, cwe_catalog)
        assert cwe.short == "CWE-89"
        assert "SQL Injection" in cwe.description
        assert cwe.likelihood_of_exploit == "High"
        assert cwe.observed_examples == ["CVE-2021-42258"]
        assert cwe.consequences == ["Confidentiality: Read Application Data"]

    def test_catalog_miss_keeps_short_only(self, cwe_catalog):
        cwe = transform_cwe("CWE-917", cwe_catalog)
        assert cwe == CweInfo(short="CWE-917")

    def test_without_catalog_keeps_short_only(self):
        assert transform_cwe("CWE-89") == CweInfo(short="CWE-89")


class TestRemoveHtmlTags:
    def test_strips_tags(self):
        assert remove_html_tags("<b>bold</b> text") == "bold text"

    def test_strips_nested_tags(self):
        assert remove_html_tags("<p>See <a href='x'>here</a></p>") == "See here"

    def test_plain_text_unchanged(self):
        assert remove_html_tags("no tags") == "no tags"

    def test_empty_returns_false(self):
        assert remove_html_tags("") is False

    def test_none_returns_false(self):
        assert remove_html_tags(None) is False

    def test_non_string_converted(self):
        assert remove_html_tags(42) == "42"


class TestFirstScore:
    def test_prefers_first_candidate(self):
        assert first_score({"score": 9.8}, {"score": 7.5}) == 9.8

    def test_falls_back_when_missing(self):
        assert first_score(None, {"score": 7.5}) == 7.5

    def test_zero_falls_through(self):
        assert first_score({"score": 0}, {"score": 4.3}) == 4.3

    def test_none_when_no_score(self):
        assert first_score(None, {}) is None

    def test_custom_key(self):
        assert first_score({"V3Score": 7.8}, key="V3Score") == 7.8
