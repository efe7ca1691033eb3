"""
Unit tests for RegistrationNumberExtractor and the IČO checksum.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from leadminer.extractor.registration import CHECKSUM_WEIGHTS, RegistrationNumberExtractor, is_valid_checksum


def _reference_check_digit(prefix: str) -> int:
    remainder = sum(int(d) * w for d, w in zip(prefix, CHECKSUM_WEIGHTS)) % 11
    return {0: 1, 1: 0}.get(remainder, 11 - remainder)


@pytest.mark.unit
class TestChecksum:
    """Test the modulo 11 validator."""

    @pytest.mark.parametrize("value", ["25596641", "27082440"])
    def test_valid_numbers(self, value):
        assert is_valid_checksum(value)

    @pytest.mark.parametrize(
        "value",
        ["12345678", "25596642", "1234567", "123456789", "2559664a", "", "２５５９６６４１", None, 25596641],
    )
    def test_invalid_values_never_raise(self, value):
        assert is_valid_checksum(value) is False

    @given(st.text(alphabet="0123456789", min_size=7, max_size=7))
    @settings(max_examples=200)
    def test_exactly_one_check_digit_is_valid(self, prefix):
        valid = [d for d in "0123456789" if is_valid_checksum(prefix + d)]
        assert valid == [str(_reference_check_digit(prefix))]

    @given(st.text(max_size=12))
    def test_arbitrary_text_returns_bool(self, value):
        assert isinstance(is_valid_checksum(value), bool)


@pytest.mark.unit
class TestRegistrationNumberExtractor:
    """Test cases for RegistrationNumberExtractor."""

    def setup_method(self):
        self.extractor = RegistrationNumberExtractor()

    def test_empty_html(self):
        assert self.extractor.extract("") == []
        assert self.extractor.extract_single("") is None

    def test_labelled_valid_number(self):
        assert self.extractor.extract("<p>IČO: 25596641</p>") == ["25596641"]

    def test_invalid_checksum_is_rejected(self):
        assert self.extractor.extract("<p>IČO: 12345678</p>") == []

    @pytest.mark.parametrize(
        "html",
        [
            "<p>IČ: 25596641</p>",
            "<p>ICO 25596641</p>",
            "<p>IČ 25596641</p>",
            "<p>Identifikační číslo: 25596641</p>",
            "<p>Company ID: 25596641</p>",
            "<p>Registration number: 25596641</p>",
            "<p>IČO&nbsp;25596641</p>",
        ],
    )
    def test_label_variants(self, html):
        assert self.extractor.extract_single(html) == "25596641"

    def test_label_in_separate_element(self):
        html = "<footer><strong>IČO:</strong> 25596641</footer>"
        assert self.extractor.extract(html) == ["25596641"]

    def test_vat_number_is_not_a_registration_number(self):
        assert self.extractor.extract("<p>DIČ: CZ25596641</p>") == []

    def test_unlabelled_number_is_ignored(self):
        assert self.extractor.extract("<p>Objednávka 25596641</p>") == []

    def test_first_valid_candidate_wins(self):
        html = "<p>IČO: 12345678</p><p>IČ 27082440</p><p>IČO: 25596641</p>"
        assert self.extractor.extract(html) == ["27082440"]
